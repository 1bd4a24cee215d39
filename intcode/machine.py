"""
Intcode Machine

The virtual machine that executes Intcode programs.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence
from collections import deque
import logging

from .errors import InvalidAddressError, InvalidOpcodeError, MachineDeadlockError
from .instruction import AddressMode, Instruction, OpCode, Value, decode, opcode_of

logger = logging.getLogger(__name__)


class StepStatus(Enum):
    """Outcome of a single decode-execute cycle."""
    CONTINUED = "continued"            # executed one instruction
    HALTED = "halted"                  # reached (or already past) HALT
    AWAITING_INPUT = "awaiting_input"  # INPUT with an empty queue


class Memory:
    """
    Zero-indexed word memory that grows on touch.

    Reading or writing past the end extends the memory with zeros;
    negative addresses are rejected.
    """

    def __init__(self, program: Sequence[int] = ()):
        self.cells: List[int] = list(program)

    def _ensure(self, address: int):
        """Grow memory so that address is in bounds."""
        if address < 0:
            raise InvalidAddressError(address)
        if address >= len(self.cells):
            self.cells.extend([0] * (address + 1 - len(self.cells)))

    def read(self, address: int) -> int:
        self._ensure(address)
        return self.cells[address]

    def write(self, address: int, value: int):
        self._ensure(address)
        self.cells[address] = value

    def snapshot(self) -> List[int]:
        """Copy of the current memory contents."""
        return list(self.cells)

    def __len__(self) -> int:
        return len(self.cells)


class Machine:
    """
    Intcode virtual machine.

    Owns its memory, instruction pointer, relative base and I/O queues.
    A machine is driven by one caller at a time; independent machines
    share no state and can be wired together by moving values from one
    machine's outputs to another's inputs.

    Usage:
        machine = Machine([3, 0, 4, 0, 99])
        machine.run()                 # StepStatus.AWAITING_INPUT
        machine.push_input(7)
        machine.run()                 # StepStatus.HALTED
        machine.drain_output()        # [7]
    """

    def __init__(self, program: Sequence[int], inputs: Optional[Iterable[int]] = None):
        """
        Initialize the machine.

        Args:
            program: Intcode words; memory starts as a copy of them
            inputs: Optional values to pre-seed the input queue
        """
        self.program: List[int] = list(program)
        self.memory = Memory(self.program)

        self.instruction_pointer: int = 0
        self.relative_base: int = 0
        self.inputs: deque = deque(inputs if inputs is not None else ())
        self.outputs: List[int] = []
        self.halted: bool = False

        # Instructions executed since construction or reset
        self.steps: int = 0

    # Memory access

    def read_memory(self, address: int) -> int:
        """Read a word, growing memory if the address is past the end."""
        return self.memory.read(address)

    def write_memory(self, address: int, value: int):
        """Write a word, growing memory if the address is past the end."""
        self.memory.write(address, value)

    # I/O

    def push_input(self, value: int):
        """Queue a value for the next INPUT instruction."""
        self.inputs.append(value)

    def extend_input(self, values: Iterable[int]):
        """Queue several values, in order."""
        self.inputs.extend(values)

    def read_outputs(self) -> List[int]:
        """Values emitted so far, without clearing them."""
        return list(self.outputs)

    def drain_output(self) -> List[int]:
        """Values emitted so far; the output log is cleared."""
        outputs = self.outputs
        self.outputs = []
        return outputs

    # Execution

    def _load(self, value: Value) -> int:
        """Resolve a read operand to a word."""
        if value.mode == AddressMode.IMMEDIATE:
            return value.raw
        return self.memory.read(value.address(self.relative_base))

    def _store(self, target: Value, result: int):
        """Write a result through a destination operand."""
        self.memory.write(target.address(self.relative_base), result)

    def _jump_target(self, value: Value) -> int:
        """Resolve a jump operand, rejecting targets outside memory."""
        target = self._load(value)
        if target < 0:
            raise InvalidAddressError(target)
        return target

    def _fetch(self) -> Instruction:
        """Decode the instruction at the instruction pointer."""
        pc = self.instruction_pointer
        word = self.memory.read(pc)
        count = opcode_of(word).param_count
        params = [self.memory.read(pc + 1 + i) for i in range(count)]
        return decode(word, params)

    def step(self) -> StepStatus:
        """
        Execute one instruction.

        Returns:
            CONTINUED after executing an instruction, HALTED once the
            machine has halted, or AWAITING_INPUT if an INPUT instruction
            found the queue empty. In the last case the pointer stays on
            the INPUT instruction so it is retried on the next call.
        """
        if self.halted:
            return StepStatus.HALTED

        pc = self.instruction_pointer
        instr = self._fetch()
        args = instr.operands
        next_pc = pc + instr.size

        logger.debug("%d: %s", pc, instr)

        if instr.opcode == OpCode.ADD:
            self._store(args[2], self._load(args[0]) + self._load(args[1]))

        elif instr.opcode == OpCode.MULTIPLY:
            self._store(args[2], self._load(args[0]) * self._load(args[1]))

        elif instr.opcode == OpCode.INPUT:
            if not self.inputs:
                logger.debug("Awaiting input at %d", pc)
                return StepStatus.AWAITING_INPUT
            # Consume only once the write has succeeded
            self._store(args[0], self.inputs[0])
            self.inputs.popleft()

        elif instr.opcode == OpCode.OUTPUT:
            self.outputs.append(self._load(args[0]))

        elif instr.opcode == OpCode.JUMP_IF_TRUE:
            if self._load(args[0]) != 0:
                next_pc = self._jump_target(args[1])

        elif instr.opcode == OpCode.JUMP_IF_FALSE:
            if self._load(args[0]) == 0:
                next_pc = self._jump_target(args[1])

        elif instr.opcode == OpCode.LESS_THAN:
            self._store(args[2], int(self._load(args[0]) < self._load(args[1])))

        elif instr.opcode == OpCode.EQUALS:
            self._store(args[2], int(self._load(args[0]) == self._load(args[1])))

        elif instr.opcode == OpCode.ADJUST_RELATIVE_BASE:
            self.relative_base += self._load(args[0])

        elif instr.opcode == OpCode.HALT:
            self.halted = True
            logger.debug("Halted at %d after %d steps", pc, self.steps + 1)

        else:
            raise InvalidOpcodeError(f"Unhandled opcode {instr.opcode}", instr.opcode.value)

        self.instruction_pointer = next_pc
        self.steps += 1

        return StepStatus.HALTED if self.halted else StepStatus.CONTINUED

    def run(self, strict: bool = False) -> StepStatus:
        """
        Run until the machine halts or needs input.

        Args:
            strict: Raise instead of returning when the machine suspends
                waiting for input

        Returns:
            HALTED or AWAITING_INPUT

        Raises:
            MachineDeadlockError: strict run suspended on an empty input queue
        """
        while True:
            status = self.step()
            if status == StepStatus.CONTINUED:
                continue

            if status == StepStatus.AWAITING_INPUT and strict:
                raise MachineDeadlockError(
                    f"Machine needs input at {self.instruction_pointer} "
                    f"and none was supplied"
                )
            return status

    def get_stats(self) -> Dict[str, Any]:
        """Snapshot of execution counters and register state."""
        return {
            "steps": self.steps,
            "instruction_pointer": self.instruction_pointer,
            "relative_base": self.relative_base,
            "memory_size": len(self.memory),
            "halted": self.halted,
            "pending_inputs": len(self.inputs),
            "outputs": len(self.outputs),
        }

    def reset(self):
        """Reset the machine to the program it was built from."""
        self.memory = Memory(self.program)
        self.instruction_pointer = 0
        self.relative_base = 0
        self.inputs = deque()
        self.outputs = []
        self.halted = False
        self.steps = 0
