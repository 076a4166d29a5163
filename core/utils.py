from base64 import b64encode
from datetime import UTC, date, datetime, time
from decimal import Decimal
import math
import re
from typing import Any
from uuid import UUID

from passlib.context import CryptContext
from pydantic import JsonValue


_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def utc_now():
    return datetime.now(UTC)


def is_sql_identifier(name: str) -> bool:
    """True for `name` or `schema.name` made of letters, digits and underscores."""
    return bool(_IDENTIFIER_PATTERN.fullmatch(name))


def to_json_value(value: Any) -> JsonValue:
    """Normalize a value read from a database driver into a JSON-compatible one.

    NaN and infinities have no JSON form and become None.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return b64encode(bytes(value)).decode()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, dict):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json_value(item) for item in value]

    return str(value)


class CryptographyHelper:
    """Collection of helper methods for handling password cryptography."""

    _hash_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    @classmethod
    def hash_password(cls, password: str):
        return cls._hash_context.hash(password)

    @classmethod
    def verify_password(cls, plain_password, hashed_password):
        return cls._hash_context.verify(plain_password, hashed_password)
