# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
jpexif - Exif metadata decoder for JPEG files

Reads the Exif APP1 segment of a JPEG file and decodes its TIFF directory
structure (IFD0, IFD1, the Exif and GPS sub-IFDs and the embedded
thumbnail) into raw, typed tag values. No tag is named or interpreted.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from jpexif.byte_reader import ByteOrder, ByteReader
from jpexif.core import JpExif
from jpexif.exceptions import (
    JpExifError,
    MalformedError,
    MetadataReadError,
    OutOfBoundsError,
    SegmentNotFoundError,
    SignatureMismatchError,
    TruncatedError,
    UnsupportedFormatError,
)
from jpexif.exif_reader import (
    ExifDocument,
    read_exif,
    read_exif_from_app1_segment,
    read_exif_from_bytes,
    read_exif_from_stream,
)
from jpexif.ifd_decoder import Directory, TagType, TagValue
from jpexif.json_output import document_to_dict, to_html, to_json

__all__ = [
    "JpExif",
    "ByteOrder",
    "ByteReader",
    "ExifDocument",
    "Directory",
    "TagType",
    "TagValue",
    "read_exif",
    "read_exif_from_app1_segment",
    "read_exif_from_bytes",
    "read_exif_from_stream",
    "document_to_dict",
    "to_json",
    "to_html",
    "JpExifError",
    "MetadataReadError",
    "SegmentNotFoundError",
    "SignatureMismatchError",
    "UnsupportedFormatError",
    "TruncatedError",
    "OutOfBoundsError",
    "MalformedError",
]
