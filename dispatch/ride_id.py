import base64
import secrets
from typing import Callable

RIDE_ID_BYTES = 16

def generate_ride_id(random_bytes: Callable[[int], bytes] = secrets.token_bytes) -> str:
    """
    128 random bits, base64url encoded without padding.
    `random_bytes` is injectable so tests can pin the sequence.
    """
    raw = random_bytes(RIDE_ID_BYTES)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
