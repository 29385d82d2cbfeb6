from typing import Dict

from sb.errors import ConfigurationError

# ' ' through '~', 95 characters
PRINTABLE = ''.join(chr(c) for c in range(ord(' '), ord('~') + 1))
LOWERCASE = ''.join(chr(c) for c in range(ord('a'), ord('z') + 1))

ALPHABETS: Dict[str, str] = {
    'printable': PRINTABLE,
    'lowercase': LOWERCASE,
}

def get_alphabet(name: str) -> str:
    """looks up an alphabet by its configuration name ('printable' or 'lowercase')."""
    try:
        return ALPHABETS[name]
    except KeyError:
        raise ConfigurationError(f"unknown alphabet {name!r}, expected one of {sorted(ALPHABETS)}") from None
