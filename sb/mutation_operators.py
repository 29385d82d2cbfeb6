from sb.alphabet import PRINTABLE
from sb.errors import AlphabetExhaustedError, ConfigurationError, LengthMismatchError
from sb.randomizer import Randomizer

def generate(length: int, rng: Randomizer, alphabet: str = PRINTABLE) -> str:
    """ Generates a random individual: `length` distinct characters sampled from the alphabet without
    replacement, then shuffled.

    Raises:
        AlphabetExhaustedError: `length` is larger than the alphabet.
    """
    if length < 1:
        raise ConfigurationError(f"cannot generate an individual of length {length}")
    if length > len(alphabet):
        raise AlphabetExhaustedError(f"cannot draw {length} distinct characters from an alphabet of {len(alphabet)}")

    characters = rng.sample(alphabet, length)
    rng.shuffle(characters)
    return ''.join(characters)

def reproduce(rng: Randomizer, parent_a: str, parent_b: str) -> str:
    """ Uniform crossover. Every position of the child independently takes the character of one parent
    or the other with equal probability.

    Returns:
        str: the child, same length as the parents.
    """
    if len(parent_a) != len(parent_b):
        raise LengthMismatchError(f"cannot cross {parent_a!r} with {parent_b!r}, lengths differ")

    return ''.join(rng.choice((a, b)) for a, b in zip(parent_a, parent_b))

def mutate(rng: Randomizer, individual: str, mutation_rate: float, alphabet: str = PRINTABLE) -> str:
    """ Replaces each character, with probability `mutation_rate`, by a random character of the alphabet.
    The replacement may happen to equal the original.

    Returns:
        str: the mutated individual. The input is never modified.
    """
    if not 0.0 <= mutation_rate <= 1.0:
        raise ConfigurationError(f"mutation rate must be within [0, 1], got {mutation_rate}")

    return ''.join(rng.choice(alphabet) if rng.chance(mutation_rate) else c for c in individual)
