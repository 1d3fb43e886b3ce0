"""Load sweepstake manifests and check participants cover the tournament."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from sweepgen.audit import TeamsAudit
from sweepgen.errors import (
    DuplicateError,
    EmptyValueError,
    ErrorSink,
    MultiError,
    NotFoundError,
    StructuralError,
    ValidationIssue,
)
from sweepgen.ingest.sources import BytesSource
from sweepgen.models import Participant, PrizeSettings, Sweepstake, Tournament
from sweepgen.tournament import tournament_by_id


logger = logging.getLogger(__name__)


class SweepstakeEntry(BaseModel):
    """One element of the ``sweepstakes`` manifest array."""

    id: str = ""
    name: str = ""
    image_url: str = ""
    tournament_id: str = ""
    participants: List[Participant] = Field(default_factory=list)
    prizes: PrizeSettings = Field(default_factory=PrizeSettings)
    build: bool = False


class SweepstakesDocument(BaseModel):
    sweepstakes: List[SweepstakeEntry] = Field(default_factory=list)


class SweepstakesJSONLoader:
    def __init__(self, source: Optional[BytesSource], tournaments: Sequence[Tournament]):
        self.source = source
        self.tournaments = list(tournaments or [])

    def load_sweepstakes(self) -> List[Sweepstake]:
        if not self.tournaments:
            raise EmptyValueError("tournaments")
        if self.source is None:
            raise EmptyValueError("source")

        raw = self.source()
        try:
            document = SweepstakesDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise StructuralError(f"cannot parse sweepstakes: {exc}") from exc

        if not document.sweepstakes:
            raise StructuralError("no sweepstakes found in source data")

        collection: List[Sweepstake] = []
        for idx, entry in enumerate(document.sweepstakes):
            tournament = tournament_by_id(self.tournaments, entry.tournament_id.strip())
            if tournament is None:
                raise NotFoundError(
                    f"sweepstake index {idx}: tournament id '{entry.tournament_id}'"
                )
            collection.append(
                Sweepstake(
                    id=entry.id,
                    name=entry.name,
                    image_url=entry.image_url,
                    tournament=tournament,
                    participants=entry.participants,
                    prizes=entry.prizes,
                    build=entry.build,
                )
            )

        logger.debug("Loaded %d sweepstakes", len(collection))
        return validate_sweepstakes(collection)


def validate_sweepstake(sweepstake: Sweepstake, errs: ErrorSink) -> None:
    """Check required fields and that participants claim each team exactly once."""

    if not sweepstake.id:
        errs.add(EmptyValueError("id"))
    if not sweepstake.name:
        errs.add(EmptyValueError("name"))
    if not sweepstake.image_url:
        errs.add(EmptyValueError("image url"))

    if sweepstake.tournament is None:
        errs.add(EmptyValueError("tournament"))
        return

    audit = TeamsAudit(sweepstake.tournament.teams)
    for idx, participant in enumerate(sweepstake.participants):
        scope = errs.with_prefix(f"participant index {idx}")
        if not audit.ack(sweepstake.tournament.team_by_id(participant.team_id)):
            scope.add(ValidationIssue(f"unrecognised participant team id: {participant.team_id}"))

    audit.validate_exactly_once(errs)


def validate_sweepstakes(sweepstakes: Sequence[Sweepstake]) -> List[Sweepstake]:
    errs = MultiError()
    seen: set[str] = set()
    for sweepstake in sweepstakes:
        if sweepstake.id in seen:
            errs.with_prefix(f"id '{sweepstake.id}'").add(DuplicateError())
        seen.add(sweepstake.id)
        validate_sweepstake(sweepstake, errs)
    errs.raise_for_errors()
    return list(sweepstakes)


def sweepstake_by_id(sweepstakes: Sequence[Optional[Sweepstake]], sweepstake_id: str) -> Optional[Sweepstake]:
    for sweepstake in sweepstakes:
        if sweepstake is not None and sweepstake.id == sweepstake_id:
            return sweepstake
    return None
