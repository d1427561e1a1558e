"""Structured diagnostics reported while encoding or decoding.

Malformed subelements, clamped values and policy corrections never abort a
call. They are collected in a :class:`DiagnosticLog` and handed back to the
caller with the result, which decides what to do with them. Every entry is
also written to the module logger.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

logger = logging.getLogger(__name__)


class DiagnosticKind(str, enum.Enum):
    """Category of a reported anomaly."""

    MALFORMED_INPUT = "malformed-input"
    RANGE_VIOLATION = "range-violation"
    POLICY_INCONSISTENCY = "policy-inconsistency"
    UNKNOWN_SUBELEMENT = "unknown-subelement"
    CONSUMER_INCOMPATIBILITY = "consumer-incompatibility"


class Severity(str, enum.Enum):
    """How serious a diagnostic is.

    ERROR means data was skipped or clamped, WARNING means the input was
    accepted but deviates from the standard, ADVISORY is informational.
    """

    ERROR = "error"
    WARNING = "warning"
    ADVISORY = "advisory"


@dataclass(frozen=True)
class Diagnostic:
    """A single reported anomaly.

    Attributes:
        kind: Category of the anomaly
        severity: How serious it is
        message: Human readable description
        context: Machine readable details (subelement ID, offset, field, value)
    """

    kind: DiagnosticKind
    severity: Severity
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.severity.value.upper()}: {self.message}"


class DiagnosticLog:
    """Collects diagnostics for one encode or decode call.

    Example:
        >>> log = DiagnosticLog()
        >>> _ = log.report(DiagnosticKind.RANGE_VIOLATION, "code 40 > 34", code=40)
        >>> len(log)
        1
    """

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        **context: Any,
    ) -> Diagnostic:
        """Record a diagnostic and log it.

        Args:
            kind: Category of the anomaly
            message: Human readable description
            severity: How serious it is (default ERROR)
            **context: Extra details stored on the entry

        Returns:
            The recorded Diagnostic
        """
        entry = Diagnostic(kind=kind, severity=severity, message=message, context=context)
        self._entries.append(entry)
        level = logging.INFO if severity is Severity.ADVISORY else logging.WARNING
        logger.log(level, "%s [%s]", message, kind.value)
        return entry

    def warn(self, kind: DiagnosticKind, message: str, **context: Any) -> Diagnostic:
        return self.report(kind, message, severity=Severity.WARNING, **context)

    def advise(self, kind: DiagnosticKind, message: str, **context: Any) -> Diagnostic:
        return self.report(kind, message, severity=Severity.ADVISORY, **context)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the entries of one kind, in report order."""
        return [entry for entry in self._entries if entry.kind is kind]

    def kinds(self) -> set[DiagnosticKind]:
        return {entry.kind for entry in self._entries}

    @property
    def entries(self) -> list[Diagnostic]:
        return list(self._entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
