# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes and status values for gainmapxmp

This module defines the error taxonomy shared by the XMP decoder,
the XMP encoder and the bounded buffer writers. Exceptions carry a
structured ErrorInfo so callers that prefer status values over
exceptions can still inspect the error code and detail text.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from enum import Enum


# Detail strings are bounded, like a fixed-size status message field
MAX_DETAIL_LENGTH = 256


class ErrorCode(Enum):
    """Status classes reported by codec operations."""
    OK = 0
    ERROR = 1  # Size/format violations, missing or malformed attributes
    UNKNOWN_ERROR = 2  # Tokenizer reported a structural error
    INVALID_PARAM = 3
    MEM_ERROR = 4  # Destination buffer too small
    UNSUPPORTED_FEATURE = 5


@dataclass(frozen=True)
class ErrorInfo:
    """Structured status value: error code plus an optional detail string."""
    error_code: ErrorCode = ErrorCode.OK
    detail: str = ""

    def __post_init__(self):
        if len(self.detail) > MAX_DETAIL_LENGTH:
            object.__setattr__(self, 'detail', self.detail[:MAX_DETAIL_LENGTH])

    @property
    def has_detail(self) -> bool:
        return bool(self.detail)

    @property
    def ok(self) -> bool:
        return self.error_code == ErrorCode.OK


NO_ERROR = ErrorInfo()


class GainMapError(Exception):
    """
    Base exception for all gainmapxmp errors.

    All gainmapxmp exceptions inherit from this class, allowing
    catch-all error handling for any decode or encode failure.
    """
    error_code = ErrorCode.ERROR

    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)

    @property
    def error_info(self) -> ErrorInfo:
        """Structured form of this error."""
        return ErrorInfo(self.error_code, self.message)


class MetadataReadError(GainMapError):
    """
    Raised when gain map metadata cannot be decoded from an XMP block.
    """
    pass


class XMPFormatError(MetadataReadError):
    """
    Raised when the XMP block framing is invalid.

    This exception is raised when:
    - The block is shorter than the namespace header
    - The namespace header does not match
    - Nothing resembling XML remains after trimming wrappers and padding
    """
    pass


class XMPSyntaxError(MetadataReadError):
    """
    Raised when the XML tokenizer reports a structural error.
    """
    error_code = ErrorCode.UNKNOWN_ERROR


class MissingAttributeError(MetadataReadError):
    """
    Raised when a required gain map attribute is absent.
    """

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"xml parse error, could not find attribute {attribute}")


class MalformedAttributeError(MetadataReadError):
    """
    Raised when an attribute is present but its value cannot be coerced.

    A malformed value is treated as corrupt input and never replaced
    by the attribute's default.
    """

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"xml parse error, unable to parse attribute {attribute}")


class UnsupportedFeatureError(MetadataReadError):
    """
    Raised when the metadata describes a mode this codec does not handle.
    """
    error_code = ErrorCode.UNSUPPORTED_FEATURE


class MetadataWriteError(GainMapError):
    """
    Raised when gain map metadata cannot be serialized.

    This exception is raised when:
    - A boost or capacity value is not positive (no base-2 logarithm)
    - The XMP payload is too large for a single APP1 segment
    """
    pass
