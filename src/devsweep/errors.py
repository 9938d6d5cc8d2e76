"""Domain error taxonomy carried by failed results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Closed set of failure causes."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INVALID_OPERATION = "INVALID_OPERATION"


@dataclass(frozen=True)
class DomainError:
    """Immutable code + message pair describing an expected failure."""

    code: ErrorCode
    message: str

    @classmethod
    def validation(cls, message: str) -> DomainError:
        """Malformed input to a constructor."""
        return cls(ErrorCode.VALIDATION, message)

    @classmethod
    def not_found(cls, entity: str, identifier: str) -> DomainError:
        """Lookup miss for ``entity`` keyed by ``identifier``."""
        return cls(ErrorCode.NOT_FOUND, f"{entity} with ID {identifier} not found")

    @classmethod
    def invalid_operation(cls, message: str) -> DomainError:
        """Operation attempted against a value in an incompatible state."""
        return cls(ErrorCode.INVALID_OPERATION, message)

    def is_validation_error(self) -> bool:
        return self.code is ErrorCode.VALIDATION

    def is_not_found_error(self) -> bool:
        return self.code is ErrorCode.NOT_FOUND

    def is_invalid_operation_error(self) -> bool:
        return self.code is ErrorCode.INVALID_OPERATION

    def message_contains(self, text: str) -> bool:
        """Case-insensitive substring check on the message."""
        return text.casefold() in self.message.casefold()

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
