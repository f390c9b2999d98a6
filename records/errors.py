"""
Error values returned by record validators and mutations
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import Grade


class ErrorCode(Enum):
    # Referenced id is absent from its collection
    NOT_FOUND = "NOT_FOUND"

    # Duplicate grade for a pair, or deletion blocked by dependent records
    CONFLICT = "CONFLICT"


@dataclass
class RecordError:
    """
    Validation failure reported back to the caller instead of being raised

    Attributes:
        code: Machine-readable error category
        message: Human-readable explanation
        existing_grade: Snapshot of the conflicting grade, when there is one
    """
    code: ErrorCode
    message: str
    existing_grade: Optional[Grade] = None

    @classmethod
    def not_found(cls, message: str) -> "RecordError":
        return cls(code=ErrorCode.NOT_FOUND, message=message)

    @classmethod
    def conflict(cls, message: str, existing_grade: Optional[Grade] = None) -> "RecordError":
        return cls(code=ErrorCode.CONFLICT, message=message, existing_grade=existing_grade)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
