import pydantic
from typing import List, Tuple

from sb.alphabet import PRINTABLE

class ScoredIndividual(pydantic.BaseModel):
    """ An individual paired with its fitness against the target.

    Attributes:
        'individual': the candidate string.

        'fitness': fraction of positions matching the target, in [0, 1].
    """
    model_config = pydantic.ConfigDict(frozen=True)

    individual: str
    fitness: float = pydantic.Field(ge=0.0, le=1.0)

class GenerationState(pydantic.BaseModel):
    """ Everything needed to breed the next generation. Frozen: advancing a generation builds a new
    GenerationState and leaves this one untouched, so two generations can always be compared side by side.

    Attributes:
        'target' (str): the string being evolved toward. Never changes during a run.

        'population' (Tuple[str, ...]): the individuals of this generation, all of the target's length.

        'generation' (int): how many generations came before this one.

        'mating_pool_factor' (int): copies per unit of fitness in the mating pool.

        'mutation_rate' (float): per-character probability of random replacement.

        'alphabet' (str): characters individuals are drawn from.
    """
    model_config = pydantic.ConfigDict(frozen=True)

    target: str = pydantic.Field(min_length=1)
    population: Tuple[str, ...] = pydantic.Field(min_length=2)
    generation: int = pydantic.Field(default=0, ge=0)
    mating_pool_factor: int = pydantic.Field(default=200, ge=1)
    mutation_rate: float = pydantic.Field(default=0.01, ge=0.0, le=1.0)
    alphabet: str = PRINTABLE

    @pydantic.model_validator(mode='after')
    def _check_lengths(self) -> 'GenerationState':
        for individual in self.population:
            if len(individual) != len(self.target):
                raise ValueError(f"individual {individual!r} has length {len(individual)}, target has length {len(self.target)}")
        return self

    @property
    def population_size(self) -> int:
        return len(self.population)

class RenderSummary(pydantic.BaseModel):
    """ Read-only snapshot of a generation, shaped for display.

    Attributes:
        'best_individual': the fittest individual, first one wins ties.

        'generation': the generation counter.

        'average_fitness': mean fitness of the population.

        'population_size': number of individuals.

        'mutation_rate': the configured mutation rate.

        'top_k': the fittest distinct individuals, best first.
    """
    model_config = pydantic.ConfigDict(frozen=True)

    best_individual: str
    generation: int
    average_fitness: float
    population_size: int
    mutation_rate: float
    top_k: List[str]
