"""Random booking codes and payment transaction ids."""

import random
import secrets
import string
from datetime import datetime


def _epoch_millis(now: datetime) -> int:
    return int(now.timestamp() * 1000)


class RandomBookingCodeGenerator:
    """``TL`` + last 8 digits of the epoch milliseconds + 4 random uppercase letters."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.SystemRandom()

    def next_code(self, now: datetime) -> str:
        digits = str(_epoch_millis(now))[-8:].zfill(8)
        letters = "".join(self._rng.choice(string.ascii_uppercase) for _ in range(4))
        return f"TL{digits}{letters}"


class RandomTransactionIdGenerator:
    """``TXN`` + last 8 digits of the epoch milliseconds + 6 uppercase hex digits."""

    def next_transaction_id(self, now: datetime) -> str:
        digits = str(_epoch_millis(now))[-8:].zfill(8)
        return f"TXN{digits}{secrets.token_hex(3).upper()}"
