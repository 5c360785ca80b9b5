"""Opaque record identifiers"""

import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def new_id() -> str:
    """Random part followed by the current time in ms, both base-36.

    Unique with overwhelming probability; not meant as a secret.
    """
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(11))
    return random_part + _base36(int(time.time() * 1000))
