import logging
import time
from typing import Optional

from sb.alphabet import PRINTABLE
from sb.errors import ConfigurationError
from sb.fitness import fitness, score_population, average_fitness, top
from sb.mating_pool import build_mating_pool, pick_parents
from sb.mutation_operators import generate, reproduce, mutate
from sb.randomizer import Randomizer
from sb.types import GenerationState, RenderSummary, ScoredIndividual

logger = logging.getLogger(__name__)

def _validate(target: str, population_size: int, mating_pool_factor: int, mutation_rate: float, alphabet: str):
    if not target:
        raise ConfigurationError("the target must not be empty")
    stray = sorted(set(target) - set(alphabet))
    if stray:
        raise ConfigurationError(f"target {target!r} has characters outside the alphabet: {''.join(stray)!r}")
    # a single individual can never find a partner that differs from itself
    if population_size < 2:
        raise ConfigurationError(f"population size must be at least 2, got {population_size}")
    if mating_pool_factor < 1:
        raise ConfigurationError(f"mating pool factor must be a positive integer, got {mating_pool_factor}")
    if not 0.0 <= mutation_rate <= 1.0:
        raise ConfigurationError(f"mutation rate must be within [0, 1], got {mutation_rate}")

def new_state(target: str, population_size: int = 200, mating_pool_factor: int = 200, mutation_rate: float = 0.01,
              rng: Optional[Randomizer] = None, alphabet: str = PRINTABLE) -> GenerationState:
    """creates generation 0: the target, the parameters, and a randomly generated population.

    Args:
        'target' (str): the string to evolve toward. Must be non-empty, drawn from `alphabet`, and no longer than it.

        'population_size' (int): individuals per generation, at least 2.

        'mating_pool_factor' (int): copies per unit of fitness in the mating pool.

        'mutation_rate' (float): per-character replacement probability in [0, 1].

        'rng' (Randomizer): where the random population comes from. An unseeded one is created if omitted.

    Raises:
        ConfigurationError: any of the above does not hold.
    """
    _validate(target, population_size, mating_pool_factor, mutation_rate, alphabet)
    rng = rng or Randomizer()

    population = tuple(generate(len(target), rng, alphabet) for _ in range(population_size))
    logger.info(f"created population of {population_size} for a target of length {len(target)}")

    return GenerationState(
        target=target,
        population=population,
        generation=0,
        mating_pool_factor=mating_pool_factor,
        mutation_rate=mutation_rate,
        alphabet=alphabet,
    )

def advance(state: GenerationState, rng: Randomizer) -> GenerationState:
    """ Breeds the next generation. Scores the population, builds the mating pool from the scores,
    then fills each child slot by picking two different parents from the pool, crossing them and
    mutating the child.

    Returns:
        GenerationState: a new state with the generation counter incremented. `state` is left as is.

    Raises:
        EmptyMatingPoolError, SingletonMatingPoolError: the population has lost all fitness or all diversity.
    """
    scored = score_population(state.target, state.population)
    mating_pool = build_mating_pool(scored, state.mating_pool_factor)

    children = []
    for _ in range(state.population_size):
        a, b = pick_parents(rng, mating_pool)
        child = reproduce(rng, a, b)
        children.append(mutate(rng, child, state.mutation_rate, state.alphabet))

    logger.debug(f"generation {state.generation + 1}: bred {len(children)} children from a pool of {len(mating_pool)}")

    return state.model_copy(update={
        'population': tuple(children),
        'generation': state.generation + 1,
    })

def summarize(state: GenerationState, k: int = 10) -> RenderSummary:
    """ Derives the display snapshot of a generation. Fitness is recomputed here rather than carried
    over from `advance`, so summarizing never depends on or changes how the state was bred.
    """
    best = max(state.population, key=lambda individual: fitness(state.target, individual))

    return RenderSummary(
        best_individual=best,
        generation=state.generation,
        average_fitness=average_fitness(state.target, state.population),
        population_size=state.population_size,
        mutation_rate=state.mutation_rate,
        top_k=top(state.target, state.population, k),
    )

def run_for_n(n: int, state: GenerationState, rng: Randomizer) -> GenerationState:
    """ Runs the genetic algorithm for n generations.
    """
    start_time = time.time()
    for _ in range(n):
        state = advance(state, rng)

    end_time = time.time()
    logger.info(f"Done {n} generations, now at generation {state.generation}. {end_time - start_time:.3f}s")
    return state

class Driver:
    """ Owns the live generation and the randomizer handle threaded through every draw.

    Attributes:
        'state' (GenerationState): the current generation. Replaced, never mutated, on every advance.

        'rng' (Randomizer): the only randomizer used for this run.
    """

    def __init__(self, target: str, population_size: int = 200, mating_pool_factor: int = 200,
                 mutation_rate: float = 0.01, alphabet: str = PRINTABLE,
                 seed: Optional[int] = None, rng: Optional[Randomizer] = None):
        self.rng = rng or Randomizer(seed)
        self.state = new_state(target, population_size, mating_pool_factor, mutation_rate, self.rng, alphabet)

    def advance(self) -> GenerationState:
        self.state = advance(self.state, self.rng)
        return self.state

    def run_for_n(self, n: int) -> GenerationState:
        self.state = run_for_n(n, self.state, self.rng)
        return self.state

    def summary(self, k: int = 10) -> RenderSummary:
        return summarize(self.state, k)

__all__ = [
    'Driver',
    'GenerationState',
    'RenderSummary',
    'ScoredIndividual',
    'Randomizer',
    'new_state',
    'advance',
    'summarize',
    'run_for_n',
    'generate',
    'fitness',
    'build_mating_pool',
    'pick_parents',
    'reproduce',
    'mutate',
]
