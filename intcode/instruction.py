"""
Intcode Instruction Set and Decoder

Decodes a raw instruction word plus the parameter words that follow it
into a typed Instruction, and renders programs as instruction listings.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import (
    DecodeError,
    InvalidModeError,
    InvalidOpcodeError,
    InvalidWriteTargetError,
)


class OpCode(Enum):
    """Intcode operation codes."""
    ADD = 1                   # dst := x + y
    MULTIPLY = 2              # dst := x * y
    INPUT = 3                 # dst := next queued input
    OUTPUT = 4                # emit value
    JUMP_IF_TRUE = 5          # pointer := target if test != 0
    JUMP_IF_FALSE = 6         # pointer := target if test == 0
    LESS_THAN = 7             # dst := 1 if x < y else 0
    EQUALS = 8                # dst := 1 if x == y else 0
    ADJUST_RELATIVE_BASE = 9  # relative_base += offset
    HALT = 99                 # stop execution

    @property
    def mnemonic(self) -> str:
        return _OPCODE_TABLE[self][0]

    @property
    def param_count(self) -> int:
        """Number of parameter words following the instruction word."""
        return _OPCODE_TABLE[self][1]

    @property
    def write_index(self) -> Optional[int]:
        """Index of the destination parameter, or None if nothing is written."""
        return _OPCODE_TABLE[self][2]


# opcode -> (mnemonic, parameter count, write target index)
_OPCODE_TABLE: Dict[OpCode, Tuple[str, int, Optional[int]]] = {
    OpCode.ADD: ("ADD", 3, 2),
    OpCode.MULTIPLY: ("MUL", 3, 2),
    OpCode.INPUT: ("INP", 1, 0),
    OpCode.OUTPUT: ("OUT", 1, None),
    OpCode.JUMP_IF_TRUE: ("JNZ", 2, None),
    OpCode.JUMP_IF_FALSE: ("JZ", 2, None),
    OpCode.LESS_THAN: ("LT", 3, 2),
    OpCode.EQUALS: ("EQ", 3, 2),
    OpCode.ADJUST_RELATIVE_BASE: ("ARB", 1, None),
    OpCode.HALT: ("HLT", 0, None),
}

MAX_PARAMS = max(count for _, count, _ in _OPCODE_TABLE.values())


class AddressMode(Enum):
    """Parameter addressing modes, keyed by their mode digit."""
    POSITION = 0   # value stored at address
    IMMEDIATE = 1  # literal value
    RELATIVE = 2   # value stored at relative_base + offset


@dataclass(frozen=True)
class Value:
    """An instruction operand tagged with its addressing mode."""
    mode: AddressMode
    raw: int

    @classmethod
    def position(cls, address: int) -> "Value":
        return cls(AddressMode.POSITION, address)

    @classmethod
    def immediate(cls, value: int) -> "Value":
        return cls(AddressMode.IMMEDIATE, value)

    @classmethod
    def relative(cls, offset: int) -> "Value":
        return cls(AddressMode.RELATIVE, offset)

    def address(self, relative_base: int) -> int:
        """
        Resolve this operand to the memory address it refers to.

        Raises:
            InvalidWriteTargetError: for immediate operands, which name no cell
        """
        if self.mode == AddressMode.POSITION:
            return self.raw
        if self.mode == AddressMode.RELATIVE:
            return relative_base + self.raw
        raise InvalidWriteTargetError(
            f"Immediate operand {self.raw} has no memory address", self.raw
        )

    def __str__(self) -> str:
        if self.mode == AddressMode.IMMEDIATE:
            return f"#{self.raw}"
        if self.mode == AddressMode.RELATIVE:
            return f"rb{self.raw:+d}"
        return str(self.raw)


@dataclass(frozen=True)
class Instruction:
    """A single decoded Intcode instruction."""
    opcode: OpCode
    operands: Tuple[Value, ...] = ()

    @property
    def size(self) -> int:
        """Words occupied in memory, instruction word included."""
        return 1 + self.opcode.param_count

    @property
    def write_target(self) -> Optional[Value]:
        index = self.opcode.write_index
        if index is None:
            return None
        return self.operands[index]

    def __str__(self) -> str:
        """Convert instruction to a listing line."""
        if not self.operands:
            return self.opcode.mnemonic
        return f"{self.opcode.mnemonic} " + ", ".join(str(op) for op in self.operands)


def _parse_mode(digit: int, opcode_and_modes: int) -> AddressMode:
    """Parse a single mode digit."""
    try:
        return AddressMode(digit)
    except ValueError:
        raise InvalidModeError(
            f"Invalid parameter mode {digit} in instruction {opcode_and_modes}",
            digit,
        ) from None


def opcode_of(opcode_and_modes: int) -> OpCode:
    """
    Extract the opcode from an instruction word.

    Raises:
        InvalidOpcodeError: unknown or negative instruction word
    """
    if opcode_and_modes < 0:
        raise InvalidOpcodeError(
            f"Invalid instruction {opcode_and_modes}", opcode_and_modes
        )
    try:
        return OpCode(opcode_and_modes % 100)
    except ValueError:
        raise InvalidOpcodeError(
            f"Invalid opcode {opcode_and_modes % 100} in instruction {opcode_and_modes}",
            opcode_and_modes,
        ) from None


def decode(opcode_and_modes: int, params: Sequence[int]) -> Instruction:
    """
    Decode an instruction word and its parameter words.

    The two lowest decimal digits of ``opcode_and_modes`` select the opcode;
    each digit above them is the mode of the corresponding parameter, lowest
    first. Missing digits mean position mode. Only the parameters the opcode
    consumes are examined, so surplus words in ``params`` are ignored.

    Args:
        opcode_and_modes: The instruction word
        params: The words following it in memory

    Returns:
        The decoded Instruction

    Raises:
        InvalidOpcodeError: unknown or negative instruction word
        InvalidModeError: a mode digit other than 0, 1 or 2
        InvalidWriteTargetError: immediate mode on a destination parameter
        DecodeError: fewer parameter words than the opcode needs
    """
    opcode = opcode_of(opcode_and_modes)
    count = opcode.param_count
    if len(params) < count:
        raise DecodeError(
            f"{opcode.name} needs {count} parameters, got {len(params)}",
            opcode_and_modes,
        )

    operands = []
    modes = opcode_and_modes // 100
    for index in range(count):
        mode = _parse_mode(modes % 10, opcode_and_modes)
        modes //= 10

        if index == opcode.write_index and mode == AddressMode.IMMEDIATE:
            raise InvalidWriteTargetError(
                f"{opcode.name} cannot write to immediate operand {params[index]}",
                params[index],
            )

        operands.append(Value(mode, params[index]))

    return Instruction(opcode=opcode, operands=tuple(operands))


def disassemble(program: Sequence[int], start: int = 0) -> List[str]:
    """
    Render a program as an instruction listing.

    Words that do not decode are listed as DATA and skipped one at a time,
    so code and data interleave without aborting the listing.
    """
    words = list(program)
    lines = []
    address = start

    while address < len(words):
        word = words[address]
        try:
            instr = decode(word, words[address + 1:address + 1 + MAX_PARAMS])
        except DecodeError:
            lines.append(f"{address}: DATA {word}")
            address += 1
            continue

        lines.append(f"{address}: {instr}")
        address += instr.size

    return lines
