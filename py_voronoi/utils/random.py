"""
Random number sources for seed generation.

Nothing in py_voronoi touches process-wide random state: callers build a
NumPy Generator here and pass it explicitly to whatever consumes randomness.
"""

import hashlib
from typing import Optional, Union

import numpy as np


def make_rng(seed: Optional[Union[str, int]] = None) -> np.random.Generator:
    """
    Create an independent random number generator.

    Args:
        seed: String or integer seed for reproducible output, or None to
            draw fresh entropy from the OS

    Returns:
        NumPy Generator instance
    """
    if isinstance(seed, str):
        # Digest the whole string so distinct strings never share entropy
        digest = hashlib.sha256(seed.encode("utf-8")).digest()
        return np.random.default_rng(int.from_bytes(digest, "little"))
    return np.random.default_rng(seed)
