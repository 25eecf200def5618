import hashlib

from typing import Callable, Optional

from speccheck.ed25519 import Scalar


def deterministic_random_bytes(num_bytes: int, purpose: Optional[str] = None, counter: Optional[int] = None) -> bytes:
    if purpose is None:
        purpose = "__undefined_purpose__"

    if counter is None:
        val = purpose.encode()
    else:
        val = purpose.encode() + b" || " + str(counter).encode()

    return hashlib.shake_256(val).digest(num_bytes)


def deterministic_random_scalar(purpose: Optional[str] = None, counter: Optional[int] = None) -> Scalar:
    purpose = "__scalar__ || " + (purpose or "")
    return Scalar.reduce(deterministic_random_bytes(64, purpose, counter))


def find_message(purpose: str, accept: Callable[[bytes], bool], limit: int, size: int = 32) -> Optional[bytes]:
    """ return the first message derived from purpose (counter 0, 1, ...) for which accept holds
        None is returned if no such message exists within the first limit candidates
    """
    for counter in range(limit):
        message = deterministic_random_bytes(size, purpose, counter)
        if accept(message):
            return message
    return None
