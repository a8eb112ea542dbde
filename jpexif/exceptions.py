# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for jpexif

This module defines the exceptions raised while decoding Exif data.
Every fatal decoding condition is a MetadataReadError subclass so callers
can catch the whole family at once; recoverable conditions never raise and
are reported as warnings on the decoded document instead.

Copyright 2025 DNAi inc.
"""

from typing import Optional


class JpExifError(Exception):
    """
    Base exception for all jpexif errors.
    
    All jpexif exceptions inherit from this class, allowing
    catch-all error handling for any jpexif-related errors.
    """
    def __init__(self, message: str = "", offset: Optional[int] = None):
        """
        Initialize the exception with an optional error message.
        
        Args:
            message: Descriptive error message explaining what went wrong
            offset: Byte offset the error was detected at, if known
        """
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset 0x{offset:X})"
        super().__init__(message)


class MetadataReadError(JpExifError):
    """
    Raised when Exif metadata cannot be read.
    
    This exception is raised when:
    - The file cannot be opened
    - The container or TIFF structure cannot be parsed
    """
    pass


class SegmentNotFoundError(MetadataReadError):
    """
    Raised when the JPEG framing does not lead to an APP1 segment.
    
    This exception is raised when:
    - The stream does not begin with a start-of-image marker
    - A segment marker does not carry the 0xFF prefix
    - The segment following start-of-image is not APP1
    """
    pass


class SignatureMismatchError(MetadataReadError):
    """Raised when the APP1 payload does not start with "Exif\\0\\0"."""
    pass


class UnsupportedFormatError(MetadataReadError):
    """
    Raised when the TIFF header is not recognized.
    
    This exception is raised when:
    - The byte-order marker is neither "II" nor "MM"
    - The TIFF magic number is not 42
    """
    pass


class TruncatedError(MetadataReadError):
    """
    Raised when a fixed-size structural field runs past the end of the data.
    
    Segment headers, the TIFF header, directory counts, tag entries and
    next-directory links are all structural; a missing byte in any of them
    aborts the decode.
    """
    pass


class OutOfBoundsError(TruncatedError):
    """Raised by ByteReader when a read or peek exceeds the buffer."""
    pass


class MalformedError(MetadataReadError):
    """
    Raised when the structure is self-inconsistent.
    
    This exception is raised when:
    - A directory link points backward into already-consumed bytes
    - A segment declares a length shorter than its own length field
    """
    pass
