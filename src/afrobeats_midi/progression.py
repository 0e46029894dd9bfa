"""Afrobeats progression templates and their mapping onto a chord pool."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .theory import TheoryResolutionError

__all__ = [
    "PROGRESSION_TEMPLATES",
    "choose_template",
    "select_progression",
]

# Scale degrees, 1-indexed.
PROGRESSION_TEMPLATES = {
    "I-V-vi-IV": (1, 5, 6, 4),
    "vi-IV-I-V": (6, 4, 1, 5),
    "ii-V-I-I": (2, 5, 1, 1),
    "I-IV-V-IV": (1, 4, 5, 4),
    "IV-I-V-vi": (4, 1, 5, 6),
    "vi-V-IV-V": (6, 5, 4, 5),
    "I-vi-IV-V": (1, 6, 4, 5),
}

logger = logging.getLogger(__name__)

_POOL_SIZE = 7


def choose_template(rng: np.random.Generator | None = None) -> Tuple[int, ...]:
    """Pick one template uniformly from :data:`PROGRESSION_TEMPLATES`."""

    rng = rng if rng is not None else np.random.default_rng()
    names = list(PROGRESSION_TEMPLATES)
    name = names[int(rng.integers(len(names)))]
    logger.debug("Chose progression template %s", name)
    return PROGRESSION_TEMPLATES[name]


def select_progression(
    chord_pool: Sequence[str],
    rng: np.random.Generator | None = None,
) -> List[str]:
    """Return four chord symbols following a randomly chosen template."""

    if len(chord_pool) != _POOL_SIZE:
        raise TheoryResolutionError("Could not generate chords for the provided scale.")

    template = choose_template(rng)
    return [chord_pool[degree - 1] for degree in template]
