"""Builders for synthetic Exif data used across the tests."""

import struct
from typing import List, Tuple, Union

EXIF_IDENTIFIER = b'Exif\x00\x00'

# 4-byte JPEG thumbnail stand-in (SOI + EOI)
THUMBNAIL = b'\xff\xd8\xff\xd9'

Entry = Tuple[int, int, int, Union[int, bytes]]


def byte_order_marker(order: str) -> bytes:
    return b'II' if order == '<' else b'MM'


def ifd_size(num_entries: int) -> int:
    return 2 + num_entries * 12 + 4


def pack_ifd(entries: List[Entry], next_offset: int = 0, order: str = '<') -> bytes:
    """
    Pack an IFD.

    Each entry is (tag_id, type_code, count, value_field). An int value_field
    is packed as a 4-byte offset/value in order; bytes are used as the raw
    value field, left-justified and padded to 4 bytes.
    """
    data = struct.pack(f'{order}H', len(entries))
    for tag_id, type_code, count, value_field in entries:
        if isinstance(value_field, int):
            value_field = struct.pack(f'{order}I', value_field)
        data += struct.pack(f'{order}HHI', tag_id, type_code, count)
        data += value_field.ljust(4, b'\x00')
    return data + struct.pack(f'{order}I', next_offset)


def tiff_header(order: str = '<', first_ifd_offset: int = 8) -> bytes:
    return byte_order_marker(order) + struct.pack(f'{order}HI', 42, first_ifd_offset)


def app1_payload(tiff: bytes) -> bytes:
    return EXIF_IDENTIFIER + tiff


def jpeg_file(payload: bytes, trailer: bytes = b'\xff\xd9') -> bytes:
    """Wrap an APP1 payload in SOI + APP1 framing."""
    return b'\xff\xd8\xff\xe1' + struct.pack('>H', len(payload) + 2) + payload + trailer


def single_short_tiff(order: str = '<', value: int = 42) -> bytes:
    """TIFF with one IFD holding ImageWidth (0x0100) as an inline SHORT."""
    return tiff_header(order) + pack_ifd(
        [(0x0100, 3, 1, struct.pack(f'{order}H', value))], 0, order
    )


def build_sample_tiff(order: str = '<') -> bytes:
    """
    TIFF structure shaped like a camera file.

    IFD0: Make (ASCII, by offset), Orientation (SHORT, inline), Exif and
          GPS pointers; links to IFD1
    Exif: ExposureTime 1/250 (RATIONAL, by offset), ExifVersion "0230"
          (UNDEFINED, inline)
    GPS:  GPSVersionID 2.3.0.0 (BYTE, inline)
    IFD1: thumbnail offset and length
    """
    make = b'Canon\x00'
    ifd0_offset = 8
    make_offset = ifd0_offset + ifd_size(4)
    exif_offset = make_offset + len(make)
    rational_offset = exif_offset + ifd_size(2)
    gps_offset = rational_offset + 8
    ifd1_offset = gps_offset + ifd_size(1)
    thumbnail_offset = ifd1_offset + ifd_size(2)

    ifd0 = pack_ifd([
        (0x010F, 2, len(make), make_offset),
        (0x0112, 3, 1, struct.pack(f'{order}H', 6)),
        (0x8769, 4, 1, exif_offset),
        (0x8825, 4, 1, gps_offset),
    ], ifd1_offset, order)
    exif = pack_ifd([
        (0x829A, 5, 1, rational_offset),
        (0x9000, 7, 4, b'0230'),
    ], 0, order)
    rational = struct.pack(f'{order}II', 1, 250)
    gps = pack_ifd([(0x0000, 1, 4, b'\x02\x03\x00\x00')], 0, order)
    ifd1 = pack_ifd([
        (0x0201, 4, 1, thumbnail_offset),
        (0x0202, 4, 1, len(THUMBNAIL)),
    ], 0, order)

    return tiff_header(order, ifd0_offset) + ifd0 + make + exif + rational + gps + ifd1 + THUMBNAIL
