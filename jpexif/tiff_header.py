# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF header resolution

This module validates the "Exif\\0\\0" identifier at the start of an APP1
payload and reads the TIFF header behind it: the byte-order marker and the
magic number 42. All offsets found later in the Exif data are relative to
the first byte of this header.

Copyright 2025 DNAi inc.
"""

import logging
from typing import NamedTuple

from jpexif.byte_reader import BufferType, ByteOrder, ByteReader
from jpexif.exceptions import (
    OutOfBoundsError,
    SignatureMismatchError,
    TruncatedError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

EXIF_IDENTIFIER = b'Exif\x00\x00'
TIFF_MAGIC = 0x002A

# Byte-order markers as they appear on disk
_BYTE_ORDER_MARKERS = {
    b'II': ByteOrder.LITTLE_ENDIAN,  # Intel
    b'MM': ByteOrder.BIG_ENDIAN,  # Motorola
}


class TiffHeader(NamedTuple):
    """
    Resolved TIFF header.
    
    reader covers the TIFF structure only (offset 0 = "II"/"MM") and its
    cursor is left on the link to the first IFD.
    """
    byte_order: ByteOrder
    reader: ByteReader


def resolve_tiff_header(payload: BufferType) -> TiffHeader:
    """
    Validate the Exif identifier and parse the TIFF header.
    
    Args:
        payload: APP1 segment payload
        
    Returns:
        TiffHeader with the byte order and a TIFF-relative reader
        
    Raises:
        SignatureMismatchError: If the payload does not start with "Exif\\0\\0"
        UnsupportedFormatError: If the byte order or magic number is wrong
        TruncatedError: If the header is cut short
    """
    segment = ByteReader(payload)
    if segment.available() < len(EXIF_IDENTIFIER) or \
            segment.read_bytes(len(EXIF_IDENTIFIER)) != EXIF_IDENTIFIER:
        raise SignatureMismatchError("Exif identifier not found in APP1 segment")
    
    reader = segment.sub_reader(segment.cursor)
    try:
        marker = reader.read_bytes(2)
        byte_order = _BYTE_ORDER_MARKERS.get(marker)
        if byte_order is None:
            raise UnsupportedFormatError(f"Invalid TIFF byte order marker {marker!r}", 0)
        
        magic = reader.read(2, byte_order)
    except OutOfBoundsError as e:
        raise TruncatedError("TIFF header is truncated", e.offset) from e
    
    if magic != TIFF_MAGIC:
        raise UnsupportedFormatError(f"Unsupported TIFF magic number 0x{magic:04X}", 2)
    
    logger.debug("TIFF header: %s, %d bytes", byte_order.name, len(reader))
    return TiffHeader(byte_order, reader)
