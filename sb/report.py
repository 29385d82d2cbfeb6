from typing import Dict, List

import numpy as np
import pandas as pd

from sb.fitness import fitness
from sb.types import GenerationState

def _fitnesses(state: GenerationState) -> np.ndarray:
    return np.array([fitness(state.target, individual) for individual in state.population])

def fitness_histogram(state: GenerationState, bins: int = 10) -> Dict[str, int]:
    """ Counts individuals per fitness bucket over [0, 1].

    Returns:
        Dict[str, int]: bucket lower bound (two decimals) -> count. Every bucket is present, empty ones count 0.
        The last bucket is closed, so an exact match lands in it.
    """
    counts, edges = np.histogram(_fitnesses(state), bins=bins, range=(0.0, 1.0))
    return {f"{edge:.2f}": int(count) for edge, count in zip(edges[:-1], counts)}

def population_frame(state: GenerationState) -> pd.DataFrame:
    """the population as a table of individual and fitness, fittest first. Ties keep population order."""
    frame = pd.DataFrame({
        'individual': list(state.population),
        'fitness': _fitnesses(state),
    })
    return frame.sort_values('fitness', ascending=False, kind='stable').reset_index(drop=True)

class FitnessHistory:
    """ Collects average and best fitness generation by generation, for charting a run.
    """

    def __init__(self):
        self.rows: List[Dict[str, float]] = []

    def record(self, state: GenerationState):
        fitnesses = _fitnesses(state)
        self.rows.append({
            'generation': state.generation,
            'average': float(fitnesses.mean()),
            'best': float(fitnesses.max()),
        })

    def frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=['generation', 'average', 'best']).set_index('generation')

    def __len__(self) -> int:
        return len(self.rows)
