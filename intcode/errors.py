"""
Exceptions raised by the Intcode decoder, machine and loader.
"""

from typing import Optional


class IntcodeError(Exception):
    """Base class for every Intcode failure."""


class DecodeError(IntcodeError, ValueError):
    """An instruction word (or its parameters) could not be decoded."""

    def __init__(self, message: str, value: Optional[int] = None):
        super().__init__(message)
        self.value = value


class InvalidOpcodeError(DecodeError):
    """The low two digits of an instruction word name no known opcode."""


class InvalidModeError(DecodeError):
    """A parameter mode digit is not 0, 1 or 2."""


class InvalidWriteTargetError(DecodeError):
    """An immediate-mode parameter was used as a destination; value is the operand."""


class InvalidAddressError(IntcodeError, IndexError):
    """A memory access resolved to a negative address."""

    def __init__(self, address: int):
        super().__init__(f"Invalid memory address: {address}")
        self.address = address


class MachineDeadlockError(IntcodeError, RuntimeError):
    """A strict run suspended waiting for input that will never arrive."""


class ResultOverflowError(IntcodeError, OverflowError):
    """A sweep result does not fit in the int64 result grid."""


class ProgramFormatError(IntcodeError, ValueError):
    """Program text is not a comma-separated list of integers."""
