from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class ErrorKind(Enum):
    SYNTAX = auto()
    UNBOUND = auto()
    ARITHMETIC = auto()


class CalcError(Exception):
    """Raised inside a pipeline stage; turned into ``Err`` at the line boundary."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.SYNTAX,
                 position: Optional[int] = None):
        super().__init__(f"col {position}: {message}" if position is not None else message)
        self.kind = kind
        self.position = position


@dataclass(frozen=True)
class Ok:
    value: float


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str = ""


Outcome = Union[Ok, Err]


def as_outcome(exc: CalcError) -> Err:
    return Err(exc.kind, str(exc))
