"""Snake pick-order generation."""

import logging
import random
from typing import List, Optional, Sequence

from src.draft_room.config import ROUNDS

logger = logging.getLogger(__name__)


def generate_snake_order(
    team_ids: Sequence[str],
    rounds: int = ROUNDS,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Build the full pick sequence for a snake draft.

    The teams are shuffled once; even rounds (0-based) use that order and
    odd rounds use its exact reverse.

    Args:
        team_ids: IDs of the teams taking part. Their stored order is ignored.
        rounds: Number of rounds.
        rng: Random source. Pass a seeded ``random.Random`` for reproducible
            orders; defaults to the system random source.

    Returns:
        List of team IDs of length ``rounds * len(team_ids)``.
    """
    rng = rng or random.SystemRandom()
    shuffled = rng.sample(list(team_ids), len(team_ids))
    reversed_order = shuffled[::-1]

    order: List[str] = []
    for round_index in range(rounds):
        if round_index % 2 == 0:
            order.extend(shuffled)
        else:
            order.extend(reversed_order)

    logger.debug("Generated snake order for %d teams: %s", len(shuffled), shuffled)
    return order
