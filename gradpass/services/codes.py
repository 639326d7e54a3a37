"""Redemption code derivation.

Codes are 12 characters over ``0-9A-Z``. They are derived with HMAC-SHA256
keyed by ``Settings.code_secret`` so that a door validator cannot guess a code
from the issuer name and an approximate issuance time. The generator makes no
uniqueness promise: the store's unique index on ``tickets.code`` does.
"""
import hashlib
import hmac
import re
from typing import Optional

from gradpass.config import get_settings

CODE_LENGTH = 12
CODE_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
CODE_PATTERN = re.compile(r"^[A-Z0-9]{12}$")

_CODE_SPACE = len(CODE_ALPHABET) ** CODE_LENGTH


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(CODE_ALPHABET[remainder])
    return "".join(reversed(digits)) or "0"


def is_valid_code_format(code: str) -> bool:
    return bool(CODE_PATTERN.match(code))


def normalize_code(raw: str) -> str:
    """Trim surrounding whitespace and upper-case a code typed at the door."""
    return raw.strip().upper()


class CodeGenerator:
    def __init__(self, secret: Optional[str] = None):
        if secret is None:
            secret = get_settings().code_secret
        if not secret:
            raise ValueError("Code secret must not be empty")
        self._key = secret.encode("utf-8")

    def generate(self, issuer_name: str, timestamp_millis: int) -> str:
        """
        Derive the redemption code for an issuer at a point in time.
        The same (issuer_name, timestamp_millis) pair always yields the same code.
        """
        if not issuer_name:
            raise ValueError("Issuer name must not be empty")

        message = f"{issuer_name}-{int(timestamp_millis)}".encode("utf-8")
        digest = hmac.new(self._key, message, hashlib.sha256).digest()

        # Reducing modulo 36**12 keeps every position uniform before padding
        value = int.from_bytes(digest, "big") % _CODE_SPACE
        return _to_base36(value).rjust(CODE_LENGTH, "0")
