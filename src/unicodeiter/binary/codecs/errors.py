from __future__ import annotations
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_CODE_POINT = "invalid_code_point"
    MISPLACED_SURROGATE = "misplaced_surrogate"
    INVALID_UTF8_SEQUENCE = "invalid_utf8_sequence"


class TranscodeError(ValueError):
    """A malformed unit met while a decode was forced. Nothing is substituted."""
    kind: ErrorKind

    def __init__(self, message: str, *, value: int | None = None, offset: int | None = None):
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)
        self.value = value
        self.offset = offset


class InvalidCodePoint(TranscodeError):
    kind = ErrorKind.INVALID_CODE_POINT

    def __init__(self, value: int, target: str, *, offset: int | None = None):
        super().__init__(
            f"Invalid UTF-32 code point U+{value:04X} encountered while trying to encode {target} sequence",
            value=value, offset=offset,
        )


class MisplacedSurrogate(TranscodeError):
    kind = ErrorKind.MISPLACED_SURROGATE

    def __init__(self, value: int, *, offset: int | None = None):
        super().__init__(
            f"Misplaced UTF-16 surrogate U+{value:04X} encountered while trying to decode UTF-32 sequence",
            value=value, offset=offset,
        )


class InvalidUtf8Sequence(TranscodeError):
    kind = ErrorKind.INVALID_UTF8_SEQUENCE

    def __init__(self, reason: str = "", *, value: int | None = None, offset: int | None = None):
        msg = "Invalid UTF-8 sequence encountered while trying to decode UTF-32 character"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, value=value, offset=offset)
