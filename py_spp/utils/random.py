"""
Random source helpers.

Generation never draws from a module-level generator. Each call resolves
its seed once and owns the resulting AleaPRNG for its whole lifetime.
"""

import uuid
from typing import Optional, Union

from ..core.alea_prng import AleaPRNG

Seed = Union[str, int]


def resolve_seed(seed: Optional[Seed] = None) -> str:
    """
    Normalize a caller seed, inventing one when none was supplied.

    Args:
        seed: Seed string or number, or None for a fresh random seed

    Returns:
        Seed string suitable for reporting back to the caller
    """
    if seed is None or seed == "":
        return str(uuid.uuid4())[:8]
    return str(seed)


def create_prng(seed: Optional[Seed] = None) -> AleaPRNG:
    """
    Build a PRNG owned by a single generation call.

    Args:
        seed: Seed string or number; a random seed is chosen when omitted

    Returns:
        AleaPRNG instance seeded from the resolved seed
    """
    return AleaPRNG(resolve_seed(seed))
