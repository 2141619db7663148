"""
Result records produced by accessibility rules.

A rule reports each finding as a ResultRecord. Records carry no identity
beyond their content; the order in which rules emit them is the order a
user sees them in.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Status(Enum):
    """Severity of a result record."""

    ERROR = "Error"
    WARNING = "Warning"
    SUCCESS = "Success"
    INFO = "Info"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResultRecord:
    """A single finding reported by a rule.

    Attributes:
        status: Severity of the finding
        message: Complete, human-readable sentence describing it
    """

    status: Status
    message: str

    @classmethod
    def error(cls, message: str) -> "ResultRecord":
        return cls(Status.ERROR, message)

    @classmethod
    def warning(cls, message: str) -> "ResultRecord":
        return cls(Status.WARNING, message)

    @classmethod
    def success(cls, message: str) -> "ResultRecord":
        return cls(Status.SUCCESS, message)

    @classmethod
    def info(cls, message: str) -> "ResultRecord":
        return cls(Status.INFO, message)

    def to_dict(self) -> dict[str, str]:
        """Convert to the plain ``{"status", "message"}`` shape hosts display."""
        return {"status": self.status.value, "message": self.message}

    def __str__(self) -> str:
        return f"{self.status.value}: {self.message}"


def record_from_mapping(data: Mapping[str, Any]) -> ResultRecord:
    """Build a ResultRecord from a ``{"status", "message"}`` mapping.

    Raises:
        ValueError: If the status is not one of Error, Warning, Success, Info
    """
    status = data.get("status")
    try:
        parsed = status if isinstance(status, Status) else Status(status)
    except ValueError:
        valid = tuple(s.value for s in Status)
        raise ValueError(f"status must be one of {valid}, got {status!r}") from None
    return ResultRecord(parsed, str(data.get("message", "")))
