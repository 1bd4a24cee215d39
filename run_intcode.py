#!/usr/bin/env python3
"""
Intcode - Program Runner

Run, inspect and search Intcode programs from the command line.

Usage:
    # Run a program, feeding it inputs
    python run_intcode.py program.txt --input 1 --input 5

    # Poke memory before running and read it back afterwards
    python run_intcode.py program.txt --set 1=12 --set 2=2 --dump 0

    # Feed input from the terminal whenever the program asks for it
    python run_intcode.py program.txt --interactive

    # Find the noun/verb pair that leaves 19690720 at address 0
    python run_intcode.py program.txt --search 19690720 --plot sweep.png
"""

import argparse
import logging
import sys
import os
from typing import List, Optional, Sequence, Tuple

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from intcode.errors import IntcodeError
from intcode.instruction import disassemble
from intcode.loader import load_program
from intcode.machine import Machine, StepStatus
from intcode.search import SearchConfig, find_matches, find_noun_verb, sweep

logger = logging.getLogger("run_intcode")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_SUSPENDED = 2


def parse_poke(text: str) -> Tuple[int, int]:
    """Parse an ADDR=VALUE memory assignment."""
    address, sep, value = text.partition("=")
    try:
        if not sep:
            raise ValueError(text)
        return int(address), int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected ADDR=VALUE, got {text!r}"
        ) from None


def _prompt_input() -> Optional[int]:
    """Read one integer from the terminal, or None at end of input."""
    while True:
        try:
            line = input("input> ")
        except EOFError:
            return None
        try:
            return int(line.strip())
        except ValueError:
            print(f"Not an integer: {line.strip()!r}")


def run_program(
    program: Sequence[int],
    inputs: Sequence[int] = (),
    pokes: Sequence[Tuple[int, int]] = (),
    dump_addresses: Sequence[int] = (0,),
    interactive: bool = False,
) -> int:
    """
    Run a program and print its outputs.

    Returns:
        Process exit code
    """
    machine = Machine(program, inputs)
    for address, value in pokes:
        machine.write_memory(address, value)

    status = machine.run()
    while status == StepStatus.AWAITING_INPUT and interactive:
        for value in machine.drain_output():
            print(value)

        value = _prompt_input()
        if value is None:
            break
        machine.push_input(value)
        status = machine.run()

    for value in machine.drain_output():
        print(value)

    if status == StepStatus.AWAITING_INPUT:
        print(f"Suspended: waiting for input at {machine.instruction_pointer}")
        return EXIT_SUSPENDED

    for address in dump_addresses:
        print(f"[{address}] = {machine.read_memory(address)}")

    logger.info("Halted after %d steps", machine.steps)
    return EXIT_OK


def run_search(
    program: Sequence[int],
    target: int,
    plot_path: Optional[str] = None,
) -> int:
    """
    Search for the noun/verb pair producing target and print 100 * noun + verb.

    Returns:
        Process exit code
    """
    config = SearchConfig(target=target)

    if plot_path:
        # The heatmap needs the whole grid
        from visualize import plot_sweep_heatmap

        grid = sweep(program, config)
        plot_sweep_heatmap(grid, config, save_path=plot_path)
        matches = find_matches(grid, config)
        pair = matches[0] if matches else None
    else:
        pair = find_noun_verb(program, config)

    if pair is None:
        print(f"No noun/verb pair produces {target}")
        return EXIT_ERROR

    noun, verb = pair
    print(f"noun={noun} verb={verb}")
    print(100 * noun + verb)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Intcode - Program Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_intcode.py day2.txt --set 1=12 --set 2=2
  python run_intcode.py day5.txt --input 5
  python run_intcode.py day9.txt --interactive
  python run_intcode.py day2.txt --search 19690720
        """
    )

    parser.add_argument(
        "program",
        type=str,
        help="Path to a comma-separated Intcode program",
    )

    parser.add_argument(
        "--input", "-i",
        type=int,
        action="append",
        default=[],
        help="Queue an input value (repeatable)",
    )

    parser.add_argument(
        "--set",
        type=parse_poke,
        action="append",
        default=[],
        metavar="ADDR=VALUE",
        help="Write VALUE to memory address ADDR before running (repeatable)",
    )

    parser.add_argument(
        "--dump",
        type=int,
        action="append",
        metavar="ADDR",
        help="Print memory address ADDR after halting (default: 0)",
    )

    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for input on the terminal when the program needs it",
    )

    parser.add_argument(
        "--disassemble",
        action="store_true",
        help="Print an instruction listing and exit",
    )

    parser.add_argument(
        "--search",
        type=int,
        nargs="?",
        const=SearchConfig.target,
        help=f"Find the noun/verb pair producing TARGET (default: {SearchConfig.target})",
    )

    parser.add_argument(
        "--plot",
        type=str,
        help="With --search, save a heatmap of the sweep to this path",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every executed instruction",
    )

    args = parser.parse_args(argv)

    if args.plot and args.search is None:
        parser.error("--plot requires --search")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        program = load_program(args.program)

        if args.disassemble:
            for line in disassemble(program):
                print(line)
            return EXIT_OK

        if args.search is not None:
            return run_search(program, args.search, args.plot)

        return run_program(
            program,
            inputs=args.input,
            pokes=args.set,
            dump_addresses=args.dump or [0],
            interactive=args.interactive,
        )

    except OSError as e:
        print(f"Cannot read {args.program}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except IntcodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
