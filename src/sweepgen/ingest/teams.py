"""Load the authoritative team list for a tournament from JSON."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from pydantic import BaseModel, Field, ValidationError

from sweepgen.errors import DuplicateError, EmptyValueError, ErrorSink, MultiError, StructuralError
from sweepgen.models import Team

from .sources import BytesSource, bytes_from_file


logger = logging.getLogger(__name__)


class TeamsDocument(BaseModel):
    teams: List[Team] = Field(default_factory=list)


def validate_team(team: Team, errs: ErrorSink) -> None:
    if not team.id:
        errs.add(EmptyValueError("id"))
    if not team.name:
        errs.add(EmptyValueError("name"))
    if not team.image_url:
        errs.add(EmptyValueError("image url"))


def validate_teams(teams: Sequence[Team]) -> List[Team]:
    """Check required fields and id uniqueness; raises :class:`MultiError`."""

    errs = MultiError()
    seen: set[str] = set()
    for idx, team in enumerate(teams):
        scope = errs.with_prefix(f"index {idx}")
        validate_team(team, scope)
        if team.id in seen:
            scope.add(DuplicateError(f"id '{team.id}'"))
        seen.add(team.id)
    errs.raise_for_errors()
    return list(teams)


class TeamsJSONLoader:
    """Loads ``{"teams": [...]}`` documents."""

    def __init__(self, source: BytesSource):
        self.source = source

    def load_teams(self) -> List[Team]:
        raw = self.source()
        try:
            document = TeamsDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise StructuralError(f"cannot parse team collection: {exc}") from exc
        logger.debug("Loaded %d teams", len(document.teams))
        return validate_teams(document.teams)


def load_teams_json(path: Path) -> List[Team]:
    return TeamsJSONLoader(bytes_from_file(path)).load_teams()
