import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar('T')

class Randomizer:
    """ The single source of randomness for the breeder. Every operator that draws takes one of these
    explicitly, so a run is reproducible whenever the randomizer is seeded.

    Attributes:
        'seed' (Optional[int]): the seed given at construction, None for an OS-seeded generator.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def choice(self, items: Sequence[T]) -> T:
        """uniformly pick one item."""
        return self._random.choice(items)

    def sample(self, items: Sequence[T], k: int) -> List[T]:
        """pick k items without replacement."""
        return self._random.sample(items, k)

    def shuffle(self, items: List[T]) -> List[T]:
        """shuffles in place and returns the same list for convenience."""
        self._random.shuffle(items)
        return items

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """pick one item with probability proportional to its weight."""
        return self._random.choices(items, weights=weights, k=1)[0]

    def chance(self, probability: float) -> bool:
        """returns True with the given probability. 0.0 is never, 1.0 is always."""
        return self._random.random() < probability

    def __repr__(self) -> str:
        return f"Randomizer(seed={self.seed!r})"
