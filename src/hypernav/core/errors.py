from enum import IntEnum


class FaultKind(IntEnum):
    """Codes passed as the first argument of an error handler."""

    TRANSPORT = 1
    STATUS = 11
    DECODE = 21


class HypernavError(Exception):
    """Base class for errors raised by hypernav itself."""


class UnknownOperationError(HypernavError, KeyError):
    """Raised when a name is not a registered operation of a live resource."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No operation named {self.name!r}"


def ignore_fault(kind: int, payload: object) -> None:
    return None
