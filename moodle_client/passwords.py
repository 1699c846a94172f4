"""
Random password generation for account resets.
"""

import secrets
import string

_ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits


def random_string(size: int) -> str:
    """Random letters and digits."""
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(size))


def random_letter() -> str:
    """Random uppercase letter from A to Y."""
    return secrets.choice(string.ascii_uppercase[:-1])


def random_password() -> str:
    """Password shaped like ``abcdE-3fGh1x``: mixed case, a digit and a dash."""
    return "{}{}-{}{}{}".format(
        random_string(4),
        random_letter(),
        secrets.randbelow(9),
        random_string(4),
        random_letter().lower(),
    )
