from typing import Dict, List

from .errors import CalcError, ErrorKind


class Environment:
    """Variable table of one evaluation pass (name -> float).

    Created empty at the start of a pass and dropped at its end. Only a
    successful assignment line binds; there is no removal, a second
    assignment overwrites.
    """

    def __init__(self):
        self._values: Dict[str, float] = {}

    def bind(self, name: str, value: float) -> None:
        self._values[name] = float(value)

    def lookup(self, name: str) -> float:
        try:
            return self._values[name]
        except KeyError:
            raise CalcError(f"unbound identifier {name!r}", ErrorKind.UNBOUND) from None

    def names(self) -> List[str]:
        return list(self._values)

    def __contains__(self, name) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Environment({self._values!r})"
