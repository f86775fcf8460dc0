from .config import DEFAULT_CONFIG, EngineConfig
from .engine import Line, calculate, evaluate_line
from .environment import Environment
from .errors import CalcError, Err, ErrorKind, Ok

PROGRAM_VERSION = "0.1.0"

__all__ = [
    "PROGRAM_VERSION",
    "CalcError",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "Environment",
    "Err",
    "ErrorKind",
    "Line",
    "Ok",
    "calculate",
    "evaluate_line",
]
