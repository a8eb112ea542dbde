# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Well-known EXIF tag ids

Only the tags that link parts of the Exif structure together are listed;
the decoder does not name or interpret any other tag.

Copyright 2025 DNAi inc.
"""

# IFD0 pointers to sub-IFDs
EXIF_IFD_POINTER = 0x8769  # ExifOffset
GPS_IFD_POINTER = 0x8825  # GPSInfo

# IFD1 thumbnail location
JPEG_INTERCHANGE_FORMAT = 0x0201  # ThumbnailOffset
JPEG_INTERCHANGE_FORMAT_LENGTH = 0x0202  # ThumbnailLength

POINTER_TAG_NAMES = {
    EXIF_IFD_POINTER: "ExifOffset",
    GPS_IFD_POINTER: "GPSInfo",
    JPEG_INTERCHANGE_FORMAT: "ThumbnailOffset",
    JPEG_INTERCHANGE_FORMAT_LENGTH: "ThumbnailLength",
}
