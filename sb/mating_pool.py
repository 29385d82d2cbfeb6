import math
import logging
from typing import List, Sequence, Tuple

from sb.errors import ConfigurationError, EmptyMatingPoolError, SingletonMatingPoolError
from sb.randomizer import Randomizer
from sb.types import ScoredIndividual

logger = logging.getLogger(__name__)

def multiplicity(fitness: float, pool_size_factor: int) -> int:
    """how many copies of an individual with this fitness go into the mating pool."""
    if fitness <= 0:
        return 0
    # round first so products like 0.3 * 10 = 3.0000000000000004 don't gain a copy
    return max(1, math.ceil(round(fitness * pool_size_factor, 9)))

def build_mating_pool(scored_population: Sequence[ScoredIndividual], pool_size_factor: int) -> List[str]:
    """ Resamples the population into a mating pool biased toward fitter individuals. Each individual
    appears ceil(fitness * pool_size_factor) times, so anything with a nonzero fitness appears at least
    once and anything with fitness 0 is left out.

    Args:
        'scored_population' (Sequence[ScoredIndividual]): the current population with fitnesses.

        'pool_size_factor' (int): copies per unit of fitness. Higher means stronger selection pressure.

    Returns:
        List[str]: the pool. It always holds at least two distinct individuals, which is what
        `pick_parents` needs to terminate.

    Raises:
        EmptyMatingPoolError: every individual had fitness 0.

        SingletonMatingPoolError: only one distinct individual made it into the pool.
    """
    if pool_size_factor < 1:
        raise ConfigurationError(f"mating pool factor must be a positive integer, got {pool_size_factor}")

    mating_pool = []
    distinct = set()
    for scored in scored_population:
        copies = multiplicity(scored.fitness, pool_size_factor)
        if copies:
            mating_pool.extend([scored.individual] * copies)
            distinct.add(scored.individual)

    if not mating_pool:
        raise EmptyMatingPoolError(f"all {len(scored_population)} individuals have fitness 0, the mating pool is empty")
    if len(distinct) < 2:
        raise SingletonMatingPoolError(f"the mating pool only holds copies of {mating_pool[0]!r}, no two different parents can be drawn")

    logger.debug(f"built mating pool of {len(mating_pool)} from {len(distinct)} distinct individuals")
    return mating_pool

def pick_parents(rng: Randomizer, mating_pool: Sequence[str]) -> Tuple[str, str]:
    """ Draws two parents uniformly from the mating pool. The second parent is redrawn
    until it differs from the first by value, so an individual never mates with a copy of itself.

    Raises:
        EmptyMatingPoolError: the pool is empty.

        SingletonMatingPoolError: every entry of the pool is the same value.
    """
    if not mating_pool:
        raise EmptyMatingPoolError("cannot pick parents from an empty mating pool")
    first = mating_pool[0]
    if all(individual == first for individual in mating_pool):
        raise SingletonMatingPoolError(f"the mating pool only holds copies of {first!r}, no two different parents can be drawn")

    a = rng.choice(mating_pool)
    b = rng.choice(mating_pool)
    while b == a:
        b = rng.choice(mating_pool)

    return a, b
