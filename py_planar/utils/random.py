"""
Random source resolution.

Graph construction never touches a global generator: callers pass either
a ready random source or a seed, and this module turns that into the
object the engine draws from.
"""

import uuid
from typing import Any, Optional, Tuple

from ..core.alea_prng import AleaPRNG


def new_seed() -> str:
    """Fresh short seed string for callers that did not supply one."""
    return str(uuid.uuid4())[:8]


def resolve_rng(rng: Optional[Any] = None, seed: Optional[str] = None) -> Tuple[Any, Optional[str]]:
    """
    Pick the random source for one graph build.

    An explicit rng wins; otherwise an Alea generator is seeded from seed,
    or from a freshly generated seed when none is given.

    Args:
        rng: Object exposing random() and shuffle(), or None
        seed: Seed string, or None

    Returns:
        Tuple of (random source, seed used or None when rng was injected)
    """
    if rng is not None:
        return rng, seed

    if seed is None:
        seed = new_seed()

    return AleaPRNG(seed), seed
