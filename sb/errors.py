class BreederError(Exception):
    """ Base class for every error raised by the breeder."""


class ConfigurationError(BreederError, ValueError):
    """ A parameter handed to the breeder can never produce a valid run.
    
    Raised at initialization (or by an operator called with a bad parameter), never clamped.
    """


class AlphabetExhaustedError(ConfigurationError):
    """ Asked to generate an individual with more distinct characters than the alphabet has."""


class InvariantViolation(BreederError, RuntimeError):
    """ The population reached a state the algorithm cannot continue from."""


class LengthMismatchError(InvariantViolation):
    pass


class EmptyMatingPoolError(InvariantViolation):
    """ Every individual scored 0, so nothing made it into the mating pool."""


class SingletonMatingPoolError(InvariantViolation):
    """ The mating pool holds fewer than two distinct values, so no pair of different parents exists."""
