# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG segment scanner

This module walks the marker/length framing at the start of a JPEG stream
and extracts the APP1 payload that carries Exif data.

Exif-writing tools place APP1 immediately after the start-of-image marker,
and only that position is checked: a JPEG whose first segment is APP0
(JFIF) or anything else is reported as having no Exif segment.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from typing import BinaryIO, NamedTuple

from jpexif.exceptions import MalformedError, SegmentNotFoundError, TruncatedError

logger = logging.getLogger(__name__)

# JPEG markers
SOI_MARKER = 0xFFD8  # Start of image
EOI_MARKER = 0xFFD9  # End of image
APP1_MARKER = 0xFFE1  # Application segment 1 (Exif)


class SegmentHeader(NamedTuple):
    """Marker code and payload length of one JPEG segment"""
    marker: int
    data_length: int


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    position = stream.tell() if stream.seekable() else None
    data = stream.read(size)
    if len(data) != size:
        raise TruncatedError(f"Unexpected end of stream while reading {what}", position)
    return data


def read_segment_header(stream: BinaryIO) -> SegmentHeader:
    """
    Read one segment header from a JPEG stream.
    
    Start-of-image and end-of-image are bare markers; every other segment
    has a big-endian length that counts its own two bytes.
    
    Args:
        stream: Binary stream positioned at a marker
        
    Returns:
        SegmentHeader with the payload length (declared length - 2)
        
    Raises:
        SegmentNotFoundError: If the marker lacks the 0xFF prefix
        MalformedError: If the declared length is smaller than 2
        TruncatedError: If the stream ends inside the header
    """
    marker = struct.unpack('>H', _read_exact(stream, 2, "segment marker"))[0]
    if marker in (SOI_MARKER, EOI_MARKER):
        return SegmentHeader(marker, 0)
    if marker & 0xFF00 != 0xFF00:
        raise SegmentNotFoundError(f"JPEG marker not found (read 0x{marker:04X})")
    
    length = struct.unpack('>H', _read_exact(stream, 2, "segment length"))[0]
    if length < 2:
        raise MalformedError(f"Segment 0x{marker:04X} declares invalid length {length}")
    return SegmentHeader(marker, length - 2)


def read_app1_segment(stream: BinaryIO) -> bytes:
    """
    Extract the APP1 payload from a JPEG stream.
    
    The stream is consumed once from its current position: a start-of-image
    marker must come first, immediately followed by the APP1 segment.
    
    Args:
        stream: Binary stream positioned at the start of the JPEG data
        
    Returns:
        The APP1 payload (starting with the "Exif\\0\\0" identifier for
        Exif-bearing files)
        
    Raises:
        SegmentNotFoundError: If SOI or APP1 is missing
        TruncatedError: If the stream ends before the payload is complete
    """
    header = read_segment_header(stream)
    if header.marker != SOI_MARKER:
        raise SegmentNotFoundError("Start-of-image marker not found")
    
    header = read_segment_header(stream)
    if header.marker != APP1_MARKER:
        raise SegmentNotFoundError(
            f"APP1 segment not found after start-of-image (found 0x{header.marker:04X})"
        )
    
    logger.debug("APP1 segment found, %d byte payload", header.data_length)
    return _read_exact(stream, header.data_length, "APP1 payload")
