"""Uniform handler result shared by every tool and resource"""

from dataclasses import dataclass
from enum import Enum


class ResultKind(Enum):
    """Outcome of a single tool/resource call"""
    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"   # informational, e.g. no ANT record for an undername


@dataclass(frozen=True)
class OperationResult:
    """Text payload plus the kind of outcome it describes"""
    kind: ResultKind
    text: str

    @property
    def ok(self) -> bool:
        return self.kind is ResultKind.SUCCESS

    @property
    def status(self) -> str:
        return self.kind.value

    @classmethod
    def success(cls, text: str) -> "OperationResult":
        return cls(ResultKind.SUCCESS, text)

    @classmethod
    def error(cls, text: str) -> "OperationResult":
        return cls(ResultKind.ERROR, text)

    @classmethod
    def not_found(cls, text: str) -> "OperationResult":
        return cls(ResultKind.NOT_FOUND, text)
