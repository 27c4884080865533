"""Record ID generator.

Generates short, opaque, creation-ordered IDs: 12 hex digits of the current
Unix time in milliseconds followed by 8 random hex digits.
"""

import re
import secrets
import time


class IdGenerator:
    """Generator for time-prefixed record IDs.

    The millisecond prefix keeps IDs sortable by creation time, and the
    random suffix keeps IDs created in the same millisecond apart.

    Example IDs: 019a0b1c2d3e4f5a6b7c, 019a0b1c2d3f00ff12ab
    """

    PATTERN = re.compile(r"^[0-9a-f]{20}$")

    TIMESTAMP_DIGITS = 12
    RANDOM_BYTES = 4

    @classmethod
    def generate(cls) -> str:
        """Generate a new ID.

        Returns:
            A 20-character lowercase hexadecimal string.
        """
        millis = time.time_ns() // 1_000_000
        return f"{millis:0{cls.TIMESTAMP_DIGITS}x}{secrets.token_hex(cls.RANDOM_BYTES)}"

    @classmethod
    def validate(cls, value: str) -> bool:
        """Check that a value has the generated ID format.

        Examples:
            >>> IdGenerator.validate("019a0b1c2d3e4f5a6b7c")
            True
            >>> IdGenerator.validate("1700000000000")
            False
        """
        if not isinstance(value, str):
            return False
        return bool(cls.PATTERN.match(value))

    @classmethod
    def timestamp_ms(cls, value: str) -> int:
        """Recover the creation time (Unix milliseconds) embedded in an ID.

        Raises:
            ValueError: If the value is not a generated ID.
        """
        if not cls.validate(value):
            raise ValueError(f"Not a generated ID: {value!r}")
        return int(value[: cls.TIMESTAMP_DIGITS], 16)
