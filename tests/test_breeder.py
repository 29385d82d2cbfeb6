"""Generation driver tests: initialization, advancing, summarizing."""

import pydantic
import pytest

from sb import Driver, GenerationState, advance, new_state, run_for_n, summarize
from sb.alphabet import LOWERCASE
from sb.errors import (
    AlphabetExhaustedError,
    ConfigurationError,
    EmptyMatingPoolError,
    InvariantViolation,
    SingletonMatingPoolError,
)
from sb.randomizer import Randomizer


@pytest.fixture
def state():
    return new_state("hello", population_size=200, mating_pool_factor=20, mutation_rate=0.05,
                     rng=Randomizer(7), alphabet=LOWERCASE)


def lowercase_state(target, population, **kwargs):
    return GenerationState(target=target, population=tuple(population), alphabet=LOWERCASE, **kwargs)


class TestNewState:
    """Tests for new_state()."""

    def test_initial_generation(self, state):
        assert state.generation == 0
        assert state.target == "hello"
        assert state.population_size == 200
        assert all(len(individual) == 5 for individual in state.population)
        assert all(set(individual) <= set(LOWERCASE) for individual in state.population)

    def test_empty_target(self):
        with pytest.raises(ConfigurationError):
            new_state("", rng=Randomizer(0))

    def test_population_of_one(self):
        """A lone individual can never find a different partner, so it's rejected up front."""
        with pytest.raises(ConfigurationError):
            new_state("cat", population_size=1, rng=Randomizer(0))

    @pytest.mark.parametrize("rate", [-0.01, 1.01])
    def test_mutation_rate_out_of_range(self, rate):
        with pytest.raises(ConfigurationError):
            new_state("cat", mutation_rate=rate, rng=Randomizer(0))

    def test_non_positive_factor(self):
        with pytest.raises(ConfigurationError):
            new_state("cat", mating_pool_factor=0, rng=Randomizer(0))

    def test_target_outside_alphabet(self):
        with pytest.raises(ConfigurationError):
            new_state("Cat", alphabet=LOWERCASE, rng=Randomizer(0))

    def test_target_longer_than_alphabet(self):
        with pytest.raises(AlphabetExhaustedError):
            new_state(LOWERCASE + "a", alphabet=LOWERCASE, rng=Randomizer(0))


class TestGenerationState:
    """Tests for the GenerationState model itself."""

    def test_frozen(self, state):
        with pytest.raises(pydantic.ValidationError):
            state.generation = 5

    def test_individual_length_checked(self):
        with pytest.raises(pydantic.ValidationError):
            lowercase_state("ab", ["ab", "abc"])


class TestAdvance:
    """Tests for advance()."""

    def test_population_size_kept(self, state):
        rng = Randomizer(1)
        for _ in range(10):
            next_state = advance(state, rng)
            assert next_state.population_size == state.population_size
            state = next_state

    def test_new_state_each_generation(self, state):
        """The previous state is left exactly as it was."""
        before = state.model_copy()

        next_state = advance(state, Randomizer(1))

        assert next_state is not state
        assert next_state.generation == 1
        assert state == before
        assert next_state.target == state.target
        assert next_state.mating_pool_factor == state.mating_pool_factor
        assert next_state.mutation_rate == state.mutation_rate

    def test_children_keep_target_length(self, state):
        next_state = advance(state, Randomizer(2))

        assert all(len(individual) == len(state.target) for individual in next_state.population)

    def test_seeded_runs_repeat(self):
        """With the same seed, two runs breed identical generations."""
        a = Driver("hello", population_size=200, mating_pool_factor=10, alphabet=LOWERCASE, seed=99)
        b = Driver("hello", population_size=200, mating_pool_factor=10, alphabet=LOWERCASE, seed=99)

        assert a.state == b.state
        assert a.run_for_n(5) == b.run_for_n(5)

    def test_all_zero_fitness(self):
        with pytest.raises(EmptyMatingPoolError):
            advance(lowercase_state("ab", ["xx", "yy"]), Randomizer(0))

    def test_single_distinct_parent(self):
        """Only one value with nonzero fitness fails instead of looping forever."""
        with pytest.raises(SingletonMatingPoolError):
            advance(lowercase_state("ab", ["aa", "aa", "xx"]), Randomizer(0))

    def test_no_mutation_no_novel_characters(self):
        """Without mutation, every child character comes from some parent at that position."""
        population = ["ax", "xb", "yb", "ay"]
        state = lowercase_state("ab", population, mutation_rate=0.0)

        next_state = advance(state, Randomizer(4))

        for individual in next_state.population:
            assert individual[0] in {p[0] for p in population}
            assert individual[1] in {p[1] for p in population}


class TestSummarize:
    """Tests for summarize()."""

    def test_fields(self):
        state = lowercase_state("ab", ["ax", "ab", "xx", "ab", "xb"], generation=3, mutation_rate=0.02)

        summary = summarize(state)

        assert summary.best_individual == "ab"
        assert summary.generation == 3
        assert summary.average_fitness == pytest.approx(0.6)
        assert summary.population_size == 5
        assert summary.mutation_rate == 0.02
        assert summary.top_k == ["ab", "ax", "xb", "xx"]

    def test_best_tie_goes_to_first(self):
        assert summarize(lowercase_state("ab", ["xb", "ax", "xx"])).best_individual == "xb"

    def test_top_k_limit(self):
        state = lowercase_state("ab", ["ax", "ab", "xx", "ab", "xb"])

        assert summarize(state, k=2).top_k == ["ab", "ax"]

    def test_top_k_unique(self, state):
        summary = summarize(state, k=10)

        assert len(summary.top_k) == len(set(summary.top_k))
        assert len(summary.top_k) == min(10, len(set(state.population)))

    def test_non_positive_k(self, state):
        with pytest.raises(ConfigurationError):
            summarize(state, k=-1)

    def test_idempotent(self, state):
        """Summarizing twice gives the same answer and leaves the state alone."""
        before = state.model_copy()

        first = summarize(state)
        second = summarize(state)

        assert first == second
        assert first.average_fitness == second.average_fitness
        assert first.best_individual == second.best_individual
        assert state == before


class TestDriver:
    """Tests for the stateful Driver."""

    def test_advance_replaces_state(self):
        driver = Driver("hello", population_size=200, mating_pool_factor=20, alphabet=LOWERCASE, seed=3)
        first = driver.state

        returned = driver.advance()

        assert returned is driver.state
        assert driver.state is not first
        assert driver.state.generation == 1
        assert first.generation == 0

    def test_summary(self):
        driver = Driver("hello", population_size=200, mating_pool_factor=20, alphabet=LOWERCASE, seed=3)

        assert driver.summary(k=3) == summarize(driver.state, 3)

    def test_run_for_n(self):
        state = new_state("hello", population_size=200, mating_pool_factor=20, rng=Randomizer(8), alphabet=LOWERCASE)

        assert run_for_n(4, state, Randomizer(8)).generation == 4


# every individual shares at least one character with "cat", and each position of "cat" is present somewhere
CAT_POPULATION = ("cxx", "xax", "xxt", "cax", "xat") * 10


def average_fitness_trajectory(seed, generations):
    rng = Randomizer(seed)
    state = lowercase_state("cat", CAT_POPULATION, mating_pool_factor=50, mutation_rate=0.0)
    averages = [summarize(state).average_fitness]
    for _ in range(generations):
        try:
            state = advance(state, rng)
        except InvariantViolation:
            # the population collapsed onto one value and can't change any further
            pass
        averages.append(summarize(state).average_fitness)
    return averages


class TestConvergence:
    """End to end: evolving toward "cat" without mutation."""

    def test_average_fitness_rises_across_seeded_runs(self):
        runs = [average_fitness_trajectory(seed, 15) for seed in range(20)]

        start = sum(run[0] for run in runs) / len(runs)
        middle = sum(run[5] for run in runs) / len(runs)
        end = sum(run[-1] for run in runs) / len(runs)

        assert start < middle <= end + 0.05
        assert start < end

    def test_population_size_constant(self):
        rng = Randomizer(11)
        state = lowercase_state("cat", CAT_POPULATION, mating_pool_factor=50, mutation_rate=0.0)

        for _ in range(3):
            state = advance(state, rng)
            assert state.population_size == len(CAT_POPULATION)

    def test_generated_cat_population_improves(self):
        """Started from new_state("cat", 50, 50, 0.0) on lowercase letters, seeded runs improve on average."""
        starts, ends = [], []
        for seed in range(20):
            rng = Randomizer(seed)
            state = new_state("cat", population_size=50, mating_pool_factor=50, mutation_rate=0.0,
                              rng=rng, alphabet=LOWERCASE)
            starts.append(summarize(state).average_fitness)
            for _ in range(20):
                try:
                    state = advance(state, rng)
                except InvariantViolation:
                    # no fitness or no diversity left to breed from
                    break
            ends.append(summarize(state).average_fitness)

        assert sum(ends) / len(ends) > sum(starts) / len(starts)
