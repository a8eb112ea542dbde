# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF document reader

This module assembles an ExifDocument from a JPEG file:

1. The APP1 segment is taken from the JPEG framing
2. The TIFF header behind the "Exif\\0\\0" identifier gives the byte order
3. The chain of top-level IFDs (IFD0, IFD1, ...) is decoded
4. The Exif and GPS sub-IFDs are followed from IFD0
5. The JPEG thumbnail is cut out using the IFD1 offset/length tags

Problems with the framing, the header or the IFD chain are fatal. Problems
with a single tag, a sub-IFD or the thumbnail only drop that part and are
recorded in ExifDocument.warnings.

Copyright 2025 DNAi inc.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, List, Mapping, Tuple, Union

from jpexif.byte_reader import BufferType, ByteOrder, ByteReader
from jpexif.exceptions import (
    MalformedError,
    MetadataReadError,
    OutOfBoundsError,
    TruncatedError,
)
from jpexif.exif_tags import (
    EXIF_IFD_POINTER,
    GPS_IFD_POINTER,
    JPEG_INTERCHANGE_FORMAT,
    JPEG_INTERCHANGE_FORMAT_LENGTH,
    POINTER_TAG_NAMES,
)
from jpexif.ifd_decoder import (
    NEXT_IFD_LINK_SIZE,
    Directory,
    TagValue,
    decode_directory,
    record_warning,
)
from jpexif.jpeg_segments import read_app1_segment
from jpexif.tiff_header import resolve_tiff_header

logger = logging.getLogger(__name__)

# Smallest possible IFD: entry count + next-IFD link
MIN_IFD_SIZE = 2 + NEXT_IFD_LINK_SIZE


@dataclass(frozen=True)
class ExifDocument:
    """
    Decoded Exif data.

    Directories are read-only mappings from tag id to TagValue.

    Attributes:
        directories: Top-level IFDs in file order (IFD0, IFD1, ...)
        exif: Exif sub-IFD (empty if absent)
        gps: GPS sub-IFD (empty if absent)
        thumbnail: JPEG thumbnail bytes from IFD1 (empty if absent)
        warnings: Recoverable problems met while decoding
    """
    directories: Tuple[Mapping[int, TagValue], ...] = ()
    exif: Mapping[int, TagValue] = field(default_factory=lambda: MappingProxyType({}))
    gps: Mapping[int, TagValue] = field(default_factory=lambda: MappingProxyType({}))
    thumbnail: bytes = b''
    warnings: Tuple[str, ...] = ()


def _read_link(reader: ByteReader, byte_order: ByteOrder) -> int:
    try:
        return reader.read(NEXT_IFD_LINK_SIZE, byte_order)
    except OutOfBoundsError as e:
        raise TruncatedError("IFD link is truncated", e.offset) from e


def _read_directory_chain(
    reader: ByteReader,
    byte_order: ByteOrder,
    warnings: List[str]
) -> List[Directory]:
    """
    Follow the IFD links from the TIFF header until a 0 link.

    A link must not point before the position it was read from. This also
    guarantees the walk terminates.
    """
    directories: List[Directory] = []
    next_offset = _read_link(reader, byte_order)
    while next_offset != 0:
        if next_offset < reader.cursor:
            raise MalformedError(
                f"IFD{len(directories)} link 0x{next_offset:X} points backward",
                reader.cursor - NEXT_IFD_LINK_SIZE,
            )
        if reader.available(next_offset) < MIN_IFD_SIZE:
            raise TruncatedError(f"IFD{len(directories)} lies outside the Exif data", next_offset)

        reader.move_to(next_offset)
        directory, next_offset = decode_directory(reader, byte_order, warnings)
        directories.append(directory)

    logger.debug("Decoded %d top-level IFD(s)", len(directories))
    return directories


def _read_sub_directory(
    reader: ByteReader,
    byte_order: ByteOrder,
    ifd0: Directory,
    pointer_tag: int,
    warnings: List[str]
) -> Directory:
    """Decode the sub-IFD referenced by pointer_tag in IFD0, or return {}."""
    pointer = ifd0.get(pointer_tag)
    if pointer is None:
        return {}

    name = POINTER_TAG_NAMES[pointer_tag]
    offset = pointer.first_integer()
    if offset is None:
        record_warning(warnings, f"Ignored {name}: type {pointer.type_code} is not an offset")
        return {}
    if reader.available(offset) < MIN_IFD_SIZE:
        record_warning(warnings, f"Ignored {name}: offset 0x{offset:X} is out of range")
        return {}

    reader.move_to(offset)
    try:
        directory, _ = decode_directory(reader, byte_order, warnings)
    except TruncatedError as e:
        record_warning(warnings, f"Ignored {name}: {e}")
        return {}
    return directory


def _read_thumbnail(reader: ByteReader, ifd1: Directory, warnings: List[str]) -> bytes:
    """Cut out the JPEG thumbnail referenced by IFD1, or return b''."""
    offset_tag = ifd1.get(JPEG_INTERCHANGE_FORMAT)
    length_tag = ifd1.get(JPEG_INTERCHANGE_FORMAT_LENGTH)
    if offset_tag is None or length_tag is None:
        return b''

    offset = offset_tag.first_integer()
    length = length_tag.first_integer()
    if offset is None or length is None:
        record_warning(warnings, "Ignored thumbnail: offset/length tags are not integers")
        return b''
    if reader.available(offset) < length:
        record_warning(warnings, f"Ignored thumbnail: {length} bytes at offset 0x{offset:X} are out of range")
        return b''
    return reader.peek_bytes(offset, length)


def read_exif_from_app1_segment(payload: BufferType) -> ExifDocument:
    """
    Decode Exif data from an APP1 payload.

    Use this when the APP1 segment has already been extracted from the
    JPEG stream.

    Args:
        payload: APP1 payload starting with "Exif\\0\\0"

    Returns:
        ExifDocument owning copies of every value; payload can be discarded

    Raises:
        MetadataReadError: If the Exif structure cannot be decoded
    """
    header = resolve_tiff_header(payload)
    reader = header.reader
    byte_order = header.byte_order
    warnings: List[str] = []

    directories = _read_directory_chain(reader, byte_order, warnings)

    exif: Directory = {}
    gps: Directory = {}
    if len(directories) >= 1:
        exif = _read_sub_directory(reader, byte_order, directories[0], EXIF_IFD_POINTER, warnings)
        gps = _read_sub_directory(reader, byte_order, directories[0], GPS_IFD_POINTER, warnings)

    thumbnail = b''
    if len(directories) >= 2:
        thumbnail = _read_thumbnail(reader, directories[1], warnings)

    return ExifDocument(
        directories=tuple(MappingProxyType(ifd) for ifd in directories),
        exif=MappingProxyType(exif),
        gps=MappingProxyType(gps),
        thumbnail=thumbnail,
        warnings=tuple(warnings),
    )


def read_exif_from_stream(stream: BinaryIO) -> ExifDocument:
    """
    Decode Exif data from a JPEG stream.

    The stream is read once from its current position and is not closed.

    Raises:
        MetadataReadError: If the stream holds no decodable Exif data
    """
    return read_exif_from_app1_segment(read_app1_segment(stream))


def read_exif_from_bytes(data: BufferType) -> ExifDocument:
    """Decode Exif data from JPEG file contents held in memory."""
    return read_exif_from_stream(io.BytesIO(data))


def read_exif(file_path: Union[str, Path]) -> ExifDocument:
    """
    Decode Exif data from a JPEG file.

    Args:
        file_path: Path to the JPEG file

    Returns:
        The decoded ExifDocument

    Raises:
        MetadataReadError: If the file cannot be opened or decoded
    """
    try:
        f = open(file_path, 'rb')
    except OSError as e:
        raise MetadataReadError(f"Unable to open the file: {file_path}") from e
    with f:
        try:
            return read_exif_from_stream(f)
        except OSError as e:
            raise MetadataReadError(f"Unable to read the file: {file_path}") from e
