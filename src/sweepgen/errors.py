"""Error taxonomy and the aggregating error sink used by every validator."""

from __future__ import annotations

from typing import Iterator, List, Optional, Type, Union


class SweepstakeError(Exception):
    """Base class for all sweepgen failures."""


class EmptyValueError(SweepstakeError):
    """A required value is missing or blank."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field}: is empty")


class DuplicateError(SweepstakeError):
    """An identifier collides with one seen earlier in the same collection."""

    def __init__(self, subject: Optional[str] = None):
        self.subject = subject
        super().__init__(f"{subject}: is duplicate" if subject else "is duplicate")


class NotFoundError(SweepstakeError):
    """A reference points at an entity that does not exist."""

    def __init__(self, subject: str):
        self.subject = subject
        super().__init__(f"{subject}: not found")


class ValidationIssue(SweepstakeError):
    """A single rule violation described by a plain message."""


class StructuralError(SweepstakeError):
    """Input does not have the expected shape; never aggregated."""


class SourceError(SweepstakeError):
    """Raw bytes could not be acquired from a file or URL."""


class PrefixedError(SweepstakeError):
    """Wraps another error with the scope it was reported from."""

    def __init__(self, prefix: str, cause: BaseException):
        self.prefix = prefix
        self.cause = cause
        super().__init__(f"{prefix}: {cause}")
        self.__cause__ = cause


class MultiError(SweepstakeError):
    """Ordered collection of independent validation failures.

    Errors are added through :meth:`add` (directly or via a scope returned by
    :meth:`with_prefix`). An empty aggregate is never a failure: call
    :meth:`raise_for_errors` at the end of a pass to raise only when something
    was reported.
    """

    def __init__(self, errors: Optional[List[BaseException]] = None):
        super().__init__()
        self.errors: List[BaseException] = [err for err in (errors or []) if err is not None]

    def add(self, err: Optional[BaseException]) -> None:
        if err is not None:
            self.errors.append(err)

    def is_empty(self) -> bool:
        return not self.errors

    def with_prefix(self, prefix: str) -> "ErrorScope":
        return ErrorScope(self, prefix)

    def raise_for_errors(self) -> None:
        if self.errors:
            raise self

    def messages(self) -> List[str]:
        return [str(err) for err in self.errors]

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __str__(self) -> str:
        count = len(self.errors)
        if count == 0:
            return "0 errors"
        header = "1 error:" if count == 1 else f"{count} errors:"
        lines = [f"- {message}" for message in self.messages() if message]
        return "\n".join([header, *lines])


class ErrorScope:
    """View onto a :class:`MultiError` that prefixes everything added through it.

    Scopes nest left to right and share the underlying error list, so
    ``errs.with_prefix("match 3").with_prefix("home")`` reports
    ``"match 3: home: <message>"``.
    """

    def __init__(self, sink: MultiError, prefix: str):
        self._sink = sink
        self.prefix = prefix

    def add(self, err: Optional[BaseException]) -> None:
        if err is None:
            return
        if self.prefix:
            err = PrefixedError(self.prefix, err)
        self._sink.add(err)

    def is_empty(self) -> bool:
        return self._sink.is_empty()

    def with_prefix(self, prefix: str) -> "ErrorScope":
        if not self.prefix:
            return ErrorScope(self._sink, prefix)
        if not prefix:
            return ErrorScope(self._sink, self.prefix)
        return ErrorScope(self._sink, f"{self.prefix}: {prefix}")


ErrorSink = Union[MultiError, ErrorScope]


def caused_by(err: Optional[BaseException], cls: Type[BaseException]) -> bool:
    """Return True when ``err`` or anything it wraps or aggregates is a ``cls``."""

    if err is None:
        return False
    if isinstance(err, cls):
        return True
    if isinstance(err, MultiError):
        return any(caused_by(child, cls) for child in err.errors)
    if isinstance(err, PrefixedError):
        return caused_by(err.cause, cls)
    return caused_by(err.__cause__, cls)


__all__ = [
    "DuplicateError",
    "EmptyValueError",
    "ErrorScope",
    "ErrorSink",
    "MultiError",
    "NotFoundError",
    "PrefixedError",
    "SourceError",
    "StructuralError",
    "SweepstakeError",
    "ValidationIssue",
    "caused_by",
]
