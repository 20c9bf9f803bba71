# shortlink/core/randoms.py
import secrets
import string

DEFAULT_ALPHABET = string.ascii_letters
LOWERCASE = string.ascii_lowercase


def generate_random(length: int, alphabet: str = DEFAULT_ALPHABET) -> str:
    """Draw ``length`` characters from ``alphabet`` using a CSPRNG."""
    if length < 0:
        raise ValueError("length must be >= 0")
    if not alphabet:
        raise ValueError("alphabet must not be empty")
    return "".join(secrets.choice(alphabet) for _ in range(length))
