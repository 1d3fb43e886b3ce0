"""Team entity shared by tournaments, matches and sweepstakes."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.config import ConfigDict


class Team(BaseModel):
    """A tournament team; identity is ``id``.

    Matches parsed from CSV carry id-only placeholders until the tournament
    enriches them with the full record.
    """

    id: str
    name: str = ""
    image_url: str = ""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
