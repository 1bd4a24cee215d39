"""
Noun/Verb Parameter Sweep

Runs a program once per (noun, verb) pair, with the noun and verb poked
into memory before the run, and records the value left at the result
address. Every run uses its own Machine, so runs share no state.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np

from .errors import ResultOverflowError
from .machine import Machine

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration for a noun/verb sweep."""

    nouns: range = field(default_factory=lambda: range(100))
    verbs: range = field(default_factory=lambda: range(100))

    # Where the parameters go and where the answer is read
    noun_address: int = 1
    verb_address: int = 2
    result_address: int = 0

    target: int = 19690720


def run_with_parameters(
    program: Sequence[int],
    noun: int,
    verb: int,
    config: Optional[SearchConfig] = None,
) -> int:
    """
    Run a fresh machine with noun and verb poked in.

    Returns:
        The word at the result address once the machine halts
    """
    config = config or SearchConfig()

    machine = Machine(program)
    machine.write_memory(config.noun_address, noun)
    machine.write_memory(config.verb_address, verb)
    machine.run(strict=True)

    return machine.read_memory(config.result_address)


def sweep(program: Sequence[int], config: Optional[SearchConfig] = None) -> np.ndarray:
    """
    Run every (noun, verb) pair.

    Returns:
        int64 grid of results indexed [noun_index, verb_index]
    """
    config = config or SearchConfig()

    grid = np.zeros((len(config.nouns), len(config.verbs)), dtype=np.int64)
    for i, noun in enumerate(config.nouns):
        for j, verb in enumerate(config.verbs):
            result = run_with_parameters(program, noun, verb, config)
            try:
                grid[i, j] = result
            except OverflowError:
                raise ResultOverflowError(
                    f"noun={noun} verb={verb} produced {result}, "
                    f"which does not fit in int64"
                ) from None

    logger.info("Swept %d noun/verb pairs", grid.size)
    return grid


def find_matches(grid: np.ndarray, config: Optional[SearchConfig] = None) -> List[Tuple[int, int]]:
    """All (noun, verb) pairs in a sweep grid that produced the target."""
    config = config or SearchConfig()

    return [
        (config.nouns[i], config.verbs[j])
        for i, j in np.argwhere(grid == config.target)
    ]


def find_noun_verb(
    program: Sequence[int],
    config: Optional[SearchConfig] = None,
) -> Optional[Tuple[int, int]]:
    """
    Find the first (noun, verb) pair that produces the target.

    Nouns are scanned in order, verbs within each noun; the scan stops
    at the first match.
    """
    config = config or SearchConfig()

    for noun in config.nouns:
        for verb in config.verbs:
            if run_with_parameters(program, noun, verb, config) == config.target:
                logger.info("noun=%d verb=%d produces %d", noun, verb, config.target)
                return noun, verb

    logger.info("No noun/verb pair produces %d", config.target)
    return None
