from typing import Iterable, List, Sequence

from sb.errors import ConfigurationError, LengthMismatchError
from sb.types import ScoredIndividual

def fitness(target: str, individual: str) -> float:
    """ The fraction of positions where the individual matches the target (normalised Hamming similarity).
    1.0 is an exact match, 0.0 means no position matches.

    Raises:
        LengthMismatchError: the individual and target differ in length.
    """
    if len(individual) != len(target):
        raise LengthMismatchError(f"cannot score {individual!r} (length {len(individual)}) against a target of length {len(target)}")

    matching = sum(1 for t, g in zip(target, individual) if t == g)
    return matching / len(target)

def score_population(target: str, population: Iterable[str]) -> List[ScoredIndividual]:
    """scores every individual, keeping population order."""
    return [ScoredIndividual(individual=individual, fitness=fitness(target, individual)) for individual in population]

def average_fitness(target: str, population: Sequence[str]) -> float:
    return sum(fitness(target, individual) for individual in population) / len(population)

def top(target: str, population: Sequence[str], k: int) -> List[str]:
    """ The k fittest distinct individuals, best first.

    Sorting is stable, so among equally fit individuals the one that appears first in the population
    comes first. Duplicates are dropped by value after sorting.
    """
    if k < 1:
        raise ConfigurationError(f"top needs k of at least 1, got {k}")

    ranked = sorted(population, key=lambda individual: -fitness(target, individual))
    # dict keeps insertion order, which dedupes without losing the ranking
    return list(dict.fromkeys(ranked))[:k]
