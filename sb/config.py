import os
import argparse
from typing import List, Literal, Optional

import pydantic

from sb.alphabet import ALPHABETS

ENV_PREFIX = 'SB_'

class Config(pydantic.BaseModel):
    """ Run configuration, as parsed from the command line and environment.

    Attributes:
        'target': the string to evolve toward.

        'population': individuals per generation.

        'mating_pool_factor': copies per unit of fitness in the mating pool.

        'mutation_rate': per-character replacement probability.

        'alphabet': name of the character set individuals are drawn from.

        'top': how many distinct individuals to display.

        'seed': seed for a reproducible run, None for a fresh one each time.

        'tick': milliseconds to wait for a key press between generations.

        'generations': stop after this many generations, None to run until quit.

        'log_level': logging level name.
    """
    target: str = pydantic.Field(min_length=1)
    population: int = pydantic.Field(default=200, ge=2)
    mating_pool_factor: int = pydantic.Field(default=200, ge=1)
    mutation_rate: float = pydantic.Field(default=0.01, ge=0.0, le=1.0)
    alphabet: Literal['printable', 'lowercase'] = 'printable'
    top: int = pydantic.Field(default=10, ge=1)
    seed: Optional[int] = None
    tick: int = pydantic.Field(default=10, ge=0)
    generations: Optional[int] = pydantic.Field(default=None, ge=1)
    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR'] = 'INFO'

    @pydantic.model_validator(mode='after')
    def _target_fits_alphabet(self) -> 'Config':
        characters = ALPHABETS[self.alphabet]
        stray = sorted(set(self.target) - set(characters))
        if stray:
            raise ValueError(f"target has characters outside the {self.alphabet} alphabet: {''.join(stray)!r}")
        if len(self.target) > len(characters):
            raise ValueError(f"target is longer than the {self.alphabet} alphabet ({len(characters)} characters)")
        return self

def _env(name: str, default=None):
    return os.environ.get(ENV_PREFIX + name.upper(), default)

def build_parser() -> argparse.ArgumentParser:
    """ Every option defaults to its SB_<OPTION> environment variable when set (SB_POPULATION, SB_MUTATION_RATE, ...),
    so call `load_dotenv()` before building the parser to pick up a .env file.
    """
    parser = argparse.ArgumentParser(description='Evolve a population of random strings toward a target string.')
    parser.add_argument('target', help='the string to search for')
    parser.add_argument('-p', '--population', type=int, default=_env('population', 200), help='population size in each generation')
    parser.add_argument('-f', '--mating-pool-factor', type=int, default=_env('mating_pool_factor', 200), help='factor by which to multiply fitness when building the mating pool')
    parser.add_argument('-m', '--mutation-rate', type=float, default=_env('mutation_rate', 0.01), help='per-character rate of random mutations')
    parser.add_argument('-a', '--alphabet', choices=sorted(ALPHABETS), default=_env('alphabet', 'printable'))
    parser.add_argument('-k', '--top', type=int, default=_env('top', 10), help='number of distinct top individuals to show')
    parser.add_argument('-s', '--seed', type=int, default=_env('seed'), help='seed for a reproducible run')
    parser.add_argument('-t', '--tick', type=int, default=_env('tick', 10), help='milliseconds to wait for a key press each generation')
    parser.add_argument('-g', '--generations', type=int, default=_env('generations'), help='stop after this many generations')
    parser.add_argument('--log-level', type=str.upper, default=_env('log_level', 'INFO'))
    return parser

def parse_config(argv: Optional[List[str]] = None) -> Config:
    """parses the command line into a validated Config. Raises pydantic.ValidationError on bad values."""
    args = vars(build_parser().parse_args(argv))
    return Config(**args)
