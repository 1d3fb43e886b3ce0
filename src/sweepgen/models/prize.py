"""Prize results handed to the rendering layer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class OutrightPrize(BaseModel):
    name: str
    participant_display: str
    image_url: str = ""


class Rank(BaseModel):
    position: Optional[int] = None
    image_url: str = ""
    participant_display: str
    value_text: str


class RankedPrize(BaseModel):
    name: str
    rankings: List[Rank] = Field(default_factory=list)
