# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD (Image File Directory) decoder

An IFD is a 2-byte entry count, that many 12-byte tag entries, and a 4-byte
link to the next IFD. Each entry stores its value in one of two places:

- values of 4 bytes or less live in the entry's own value field
- larger values live elsewhere, and the value field holds their offset
  from the start of the TIFF header

Values are kept as raw bytes; no tag-specific interpretation is done here.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, List, NamedTuple, Optional, Tuple

from jpexif.byte_reader import ByteOrder, ByteReader
from jpexif.exceptions import OutOfBoundsError, TruncatedError

logger = logging.getLogger(__name__)

TAG_ENTRY_SIZE = 12
NEXT_IFD_LINK_SIZE = 4
INLINE_VALUE_SIZE = 4


class TagType(IntEnum):
    """EXIF tag data types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    UNDEFINED = 7
    SLONG = 9
    SRATIONAL = 10


# EXIF tag element sizes in bytes
TAG_SIZES = MappingProxyType({
    TagType.BYTE: 1,
    TagType.ASCII: 1,
    TagType.SHORT: 2,
    TagType.LONG: 4,
    TagType.RATIONAL: 8,
    TagType.UNDEFINED: 1,
    TagType.SLONG: 4,
    TagType.SRATIONAL: 8,
})

# struct formats for unpacking normalized (little-endian) element data
_VALUE_FORMATS = MappingProxyType({
    TagType.SHORT: '<H',
    TagType.LONG: '<I',
    TagType.RATIONAL: '<II',
    TagType.SLONG: '<i',
    TagType.SRATIONAL: '<ii',
})

_WORD_FORMATS = MappingProxyType({
    2: '<H',
    4: '<I',
})

INTEGER_TYPES = frozenset((TagType.SHORT, TagType.LONG))


class TagEntry(NamedTuple):
    """One 12-byte IFD entry as stored on disk"""
    tag_id: int
    type_code: int
    count: int
    value_or_offset: int


@dataclass(frozen=True)
class TagValue:
    """
    Decoded value of one tag.
    
    data holds exactly count * element size bytes. Multi-byte elements are
    stored little-endian whatever the file's byte order, so the same value
    read from an "II" file and an "MM" file compares equal.
    """
    type: TagType
    count: int
    data: bytes
    
    @property
    def type_code(self) -> int:
        """Numeric EXIF type code"""
        return int(self.type)
    
    def values(self) -> Tuple:
        """
        Unpack the elements.
        
        Returns:
            Tuple of integers, or of (numerator, denominator) pairs for
            RATIONAL and SRATIONAL. BYTE, ASCII and UNDEFINED give one
            integer per byte.
        """
        fmt = _VALUE_FORMATS.get(self.type)
        if fmt is None:
            return tuple(self.data)
        if len(fmt) == 2:
            return tuple(v[0] for v in struct.iter_unpack(fmt, self.data))
        return tuple(struct.iter_unpack(fmt, self.data))
    
    def first_integer(self) -> Optional[int]:
        """First element of a SHORT or LONG value, or None for other types"""
        if self.type not in INTEGER_TYPES or self.count < 1:
            return None
        return self.values()[0]


Directory = Dict[int, TagValue]


def record_warning(warnings: List[str], message: str) -> None:
    """Log a recoverable problem and add it to the warnings collector."""
    logger.warning(message)
    warnings.append(message)


def read_tag_entry(reader: ByteReader, byte_order: ByteOrder) -> TagEntry:
    """Read one 12-byte entry at the cursor."""
    tag_id = reader.read(2, byte_order)
    type_code = reader.read(2, byte_order)
    count = reader.read(4, byte_order)
    value_or_offset = reader.read(4, byte_order)
    return TagEntry(tag_id, type_code, count, value_or_offset)


def _read_elements(
    reader: ByteReader,
    offset: int,
    count: int,
    element_size: int,
    byte_order: ByteOrder
) -> bytes:
    """
    Copy count elements starting at offset, normalizing each to little-endian.
    
    Single bytes are copied verbatim. 8-byte elements (rationals) are two
    4-byte words, each reassembled on its own.
    """
    total_size = count * element_size
    if element_size == 1:
        return reader.peek_bytes(offset, total_size)
    
    word_size = min(element_size, 4)
    word_format = _WORD_FORMATS[word_size]
    data = bytearray(total_size)
    for position in range(0, total_size, word_size):
        word = reader.peek(offset + position, word_size, byte_order)
        struct.pack_into(word_format, data, position, word)
    return bytes(data)


def decode_tag_value(
    reader: ByteReader,
    entry: TagEntry,
    byte_order: ByteOrder,
    warnings: List[str]
) -> Optional[TagValue]:
    """
    Decode the value of an entry that was just read from reader.
    
    The reader's cursor must sit right after the entry: inline values are
    re-read from the entry's value field at cursor - 4. The integer in
    entry.value_or_offset cannot be used for them because several small
    elements may be packed into those 4 bytes, each in file byte order.
    
    Args:
        reader: TIFF-relative reader, cursor just past the entry
        entry: The entry to decode
        byte_order: Byte order of the TIFF structure
        warnings: Collector for recoverable problems
        
    Returns:
        TagValue, or None if the entry has to be skipped (unknown type or
        value out of range)
    """
    try:
        tag_type = TagType(entry.type_code)
    except ValueError:
        record_warning(warnings, f"Skipped tag 0x{entry.tag_id:04X}: unsupported type {entry.type_code}")
        return None
    
    element_size = TAG_SIZES[tag_type]
    total_size = entry.count * element_size
    
    if total_size <= INLINE_VALUE_SIZE:
        offset = reader.cursor - INLINE_VALUE_SIZE
    else:
        offset = entry.value_or_offset
        if reader.available(offset) < total_size:
            record_warning(
                warnings,
                f"Skipped tag 0x{entry.tag_id:04X}: {total_size} byte value at "
                f"offset 0x{offset:X} is out of range"
            )
            return None
    
    data = _read_elements(reader, offset, entry.count, element_size, byte_order)
    return TagValue(tag_type, entry.count, data)


def decode_directory(
    reader: ByteReader,
    byte_order: ByteOrder,
    warnings: List[str]
) -> Tuple[Directory, int]:
    """
    Decode the IFD at the reader's cursor.
    
    Args:
        reader: TIFF-relative reader positioned at the entry count
        byte_order: Byte order of the TIFF structure
        warnings: Collector for recoverable problems (skipped tags)
        
    Returns:
        Tuple of (directory, next IFD offset). The offset is 0 when no IFD
        follows. On return the cursor is just past the link.
        
    Raises:
        TruncatedError: If the count, the entries or the link do not fit
    """
    start = reader.cursor
    try:
        num_entries = reader.read(2, byte_order)
    except OutOfBoundsError as e:
        raise TruncatedError("IFD entry count is truncated", start) from e
    
    required = num_entries * TAG_ENTRY_SIZE + NEXT_IFD_LINK_SIZE
    if reader.available() < required:
        raise TruncatedError(
            f"IFD declares {num_entries} entries ({required} bytes) but only "
            f"{reader.available()} bytes remain",
            start,
        )
    
    logger.debug("IFD at 0x%X: %d entries", start, num_entries)
    directory: Directory = {}
    for _ in range(num_entries):
        entry = read_tag_entry(reader, byte_order)
        value = decode_tag_value(reader, entry, byte_order, warnings)
        if value is not None:
            # Duplicate ids: last one wins
            directory[entry.tag_id] = value
    
    next_offset = reader.read(NEXT_IFD_LINK_SIZE, byte_order)
    return directory, next_offset
