"""
Exception classes for id3reader.

This module defines all custom exceptions used throughout the package.
Each exception carries a human-readable message plus a ``details``
dictionary with the values that caused it, so callers can react
programmatically instead of parsing message strings.

Exception Hierarchy:
    ID3ReaderError (base)
        ConfigError - Configuration file issues
        TagError - Fatal to a decode, no tag is produced
            HeaderInvalid - Bad magic or unsupported major version
            UnsupportedFeature - Unsynchronisation/extended header/experimental bit set
            MalformedInteger - Synchsafe byte with its high bit set
            ShortRead - Stream ended before an expected byte count
        AccessError - Local to a single accessor call on a decoded tag
            DecodeFailure - Unknown text encoding or truncated BOM
            FrameNotFound - Queried frame identifier is absent
            PictureNotFound - No APIC frame with an accepted picture type
"""


class ID3ReaderError(Exception):
    """
    Base exception for all id3reader errors.

    Attributes:
        message: Human-readable error description.
        details: Dictionary with additional context (e.g. expected and
                 actual byte values, the frame identifier queried).

    Example:
        try:
            tag = read_tag(stream)
        except ID3ReaderError as e:
            logger.error(f"Could not read tag: {e.message}")
            logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(ID3ReaderError):
    """
    Raised when there's an issue with the configuration file or environment.

    Example:
        raise ConfigError(
            "'reader.cover_types' must be a list of integers",
            details={'field': 'reader.cover_types'}
        )
    """
    pass


class TagError(ID3ReaderError):
    """
    Base class for errors that abort a decode.

    When one of these is raised no ID3Tag is returned.
    """
    pass


class HeaderInvalid(TagError):
    """
    Raised when the 10-byte tag header is not a supported ID3v2 header.

    Common causes:
        - The stream does not start with "ID3" (no tag, or a v1-only file)
        - The major version is 2 (ID3v2.2) or anything other than 3 or 4

    Example:
        raise HeaderInvalid(
            "Unsupported ID3v2 major version 2",
            details={'expected': (3, 4), 'actual': 2}
        )
    """

    def __init__(self, message: str, expected=None, actual=None) -> None:
        super().__init__(message, {"expected": expected, "actual": actual})
        self.expected = expected
        self.actual = actual


class UnsupportedFeature(TagError):
    """
    Raised when the tag header announces a feature that is not implemented.

    The header flags byte is checked for unsynchronisation, an extended
    header and the experimental indicator. Every flag that was set is
    listed in ``features``.
    """

    def __init__(self, features: list[str]) -> None:
        message = f"Tag uses unsupported features: {', '.join(features)}"
        super().__init__(message, {"features": list(features)})
        self.features = list(features)


class MalformedInteger(TagError):
    """
    Raised when four bytes cannot be decoded as an integer.

    For synchsafe integers every byte must have its high bit clear.
    """

    def __init__(self, message: str, data: bytes) -> None:
        super().__init__(message, {"data": bytes(data)})
        self.data = bytes(data)


class ShortRead(TagError):
    """
    Raised when the stream ends before the expected number of bytes.

    During frame iteration a short read normally ends the scan silently.
    It is only raised there when the reader runs in strict mode.
    """

    def __init__(self, expected: int, actual: int, what: str = "data") -> None:
        message = f"Short read of {what}: expected {expected} bytes, got {actual}"
        super().__init__(message, {"expected": expected, "actual": actual, "what": what})
        self.expected = expected
        self.actual = actual


class AccessError(ID3ReaderError):
    """
    Base class for errors raised by the accessor methods of ID3Tag.

    These errors never invalidate the tag; other accessors keep working.
    """
    pass


class DecodeFailure(AccessError):
    """
    Raised when a text payload cannot be decoded.

    Common causes:
        - Encoding byte outside 0..3
        - UTF-16 (encoding 1) payload too short to hold a byte-order mark
        - Byte-order mark that is neither FE FF nor FF FE
    """

    def __init__(self, message: str, encoding: int | None = None) -> None:
        super().__init__(message, {"encoding": encoding})
        self.encoding = encoding


class FrameNotFound(AccessError):
    """Raised when no usable frame with the requested identifier exists."""

    def __init__(self, frame_id: str) -> None:
        super().__init__(f"No such frame {frame_id} found in the tag", {"frame_id": frame_id})
        self.frame_id = frame_id


class PictureNotFound(AccessError):
    """Raised when no APIC frame carries an accepted picture type."""

    def __init__(self, accepted_types) -> None:
        accepted = tuple(int(t) for t in accepted_types)
        super().__init__(
            f"No cover picture found (accepted picture types: {accepted})",
            {"accepted_types": accepted}
        )
        self.accepted_types = accepted
