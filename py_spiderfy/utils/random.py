"""
Random number generation utilities.

The synthesizer only needs an object with a ``random()`` method returning a
float in [0, 1). By default that is a module-wide, unseeded NumPy generator;
tests and reproducible fixtures swap it with ``set_random_seed`` or pass
their own source directly.
"""

from typing import Optional, Protocol

import numpy as np

# Global generator instance
_rng: Optional[np.random.Generator] = None


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


def set_random_seed(seed: Optional[int]) -> None:
    """
    Reset the module-wide generator.

    Args:
        seed: Integer seed, or None to go back to OS entropy
    """
    global _rng
    _rng = np.random.default_rng(seed)


def get_rng() -> np.random.Generator:
    """
    Get the current module-wide generator, creating an unseeded one on first use.

    Returns:
        numpy Generator instance
    """
    global _rng
    if _rng is None:
        _rng = np.random.default_rng()
    return _rng
