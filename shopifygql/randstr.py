"""Random alphanumeric strings."""

import random
import string

CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits

_rng = random.Random()


def string_with_charset(length, charset):
    """Return ``length`` characters drawn at random from ``charset``."""
    if length < 0:
        raise ValueError("length must not be negative")
    if not charset:
        raise ValueError("charset must not be empty")
    return "".join(_rng.choices(charset, k=length))


def random_string(length):
    """Return ``length`` random ASCII letters and digits."""
    return string_with_charset(length, CHARSET)