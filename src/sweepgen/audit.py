"""Per-team occurrence counting used to check coverage rules."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sweepgen.errors import ErrorSink, ValidationIssue
from sweepgen.models import Team


class TeamsAudit:
    """Counts acknowledgements of each known team during a single pass.

    Counters are seeded at zero for every team in ``teams`` (first occurrence
    of an id wins) and only known ids can be acknowledged. Reported messages
    are sorted so output does not depend on counter order.
    """

    def __init__(self, teams: Iterable[Optional[Team]]):
        self._counts: Dict[str, int] = {}
        for team in teams:
            if team is not None:
                self._counts.setdefault(team.id, 0)

    def ack(self, team: Optional[Team]) -> bool:
        if team is None or not team.id or team.id not in self._counts:
            return False
        self._counts[team.id] += 1
        return True

    def set(self, team_id: str, count: int) -> bool:
        if team_id not in self._counts:
            return False
        self._counts[team_id] = count
        return True

    def count(self, team_id: str) -> int:
        return self._counts.get(team_id, 0)

    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    def validate_exactly_once(self, errs: ErrorSink, label: str = "team") -> None:
        messages = [
            f"{label} id '{team_id}', count = {count}"
            for team_id, count in self._counts.items()
            if count != 1
        ]
        _report_sorted(messages, errs)

    def validate_at_least_once(self, errs: ErrorSink) -> None:
        messages = [
            f"team id '{team_id}': count {count}"
            for team_id, count in self._counts.items()
            if count < 1
        ]
        _report_sorted(messages, errs)


def _report_sorted(messages: List[str], errs: ErrorSink) -> None:
    for message in sorted(messages):
        errs.add(ValidationIssue(message))
