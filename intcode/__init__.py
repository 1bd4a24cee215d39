"""
Intcode - A complete Intcode virtual machine.

This package provides the instruction decoder, the machine that executes
Intcode programs, and the loaders and drivers built on top of it.
"""

from .errors import (
    IntcodeError,
    DecodeError,
    InvalidOpcodeError,
    InvalidModeError,
    InvalidWriteTargetError,
    InvalidAddressError,
    MachineDeadlockError,
    ResultOverflowError,
    ProgramFormatError,
)
from .instruction import (
    Instruction,
    OpCode,
    AddressMode,
    Value,
    decode,
    disassemble,
)
from .machine import Machine, Memory, StepStatus
from .loader import parse_program, load_program
from .search import SearchConfig, sweep, find_matches, find_noun_verb

__all__ = [
    "IntcodeError",
    "DecodeError",
    "InvalidOpcodeError",
    "InvalidModeError",
    "InvalidWriteTargetError",
    "InvalidAddressError",
    "MachineDeadlockError",
    "ResultOverflowError",
    "ProgramFormatError",
    "Instruction",
    "OpCode",
    "AddressMode",
    "Value",
    "decode",
    "disassemble",
    "Machine",
    "Memory",
    "StepStatus",
    "parse_program",
    "load_program",
    "SearchConfig",
    "sweep",
    "find_matches",
    "find_noun_verb",
]
