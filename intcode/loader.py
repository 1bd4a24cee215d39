"""
Program loading from the comma-separated text form.
"""

from pathlib import Path
from typing import List, Union

from .errors import ProgramFormatError


def parse_program(source: str) -> List[int]:
    """
    Parse comma-separated Intcode text into a list of words.

    Whitespace around words (including newlines) and a trailing comma
    are ignored.
    """
    tokens = [token.strip() for token in source.strip().split(",")]
    if tokens and tokens[-1] == "":
        tokens.pop()

    if not tokens:
        raise ProgramFormatError("Program is empty")

    program = []
    for index, token in enumerate(tokens):
        try:
            program.append(int(token))
        except ValueError:
            raise ProgramFormatError(
                f"Invalid word {token!r} at index {index}"
            ) from None

    return program


def load_program(path: Union[str, Path]) -> List[int]:
    """Read and parse a program file."""
    return parse_program(Path(path).read_text())
