# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JSON and HTML rendering of decoded Exif data

Layout of the rendered document:

    {
      "ifd": [{"0100": {"type": "3", "data": "2a,00"}, ...}, ...],
      "exif": {...},
      "gps": {...},
      "thumbnail": "ff,d8,..."
    }

Tag ids are 4-digit lowercase hex, "type" is the numeric EXIF type code and
"data" is the value bytes as comma-separated hex octets.

Copyright 2025 DNAi inc.
"""

import json
from typing import Any, Dict, Mapping

from jpexif.exif_reader import ExifDocument
from jpexif.ifd_decoder import TagValue


def format_bytes(data: bytes) -> str:
    """Format bytes as comma-separated lowercase hex octets"""
    return ','.join(f'{b:02x}' for b in data)


def tag_value_to_dict(value: TagValue) -> Dict[str, str]:
    return {
        'type': str(value.type_code),
        'data': format_bytes(value.data),
    }


def directory_to_dict(directory: Mapping[int, TagValue], sort_tags: bool = True) -> Dict[str, Any]:
    """
    Convert a directory to a JSON-ready dictionary.

    Args:
        directory: Decoded IFD
        sort_tags: Order tags by id instead of file order

    Returns:
        Dictionary keyed by hex tag id
    """
    tag_ids = sorted(directory) if sort_tags else list(directory)
    return {f'{tag_id:04x}': tag_value_to_dict(directory[tag_id]) for tag_id in tag_ids}


def document_to_dict(document: ExifDocument, sort_tags: bool = True) -> Dict[str, Any]:
    """
    Convert an ExifDocument to a JSON-ready dictionary.

    Top-level IFDs keep their file order. Warnings are not part of the output.
    """
    return {
        'ifd': [directory_to_dict(ifd, sort_tags) for ifd in document.directories],
        'exif': directory_to_dict(document.exif, sort_tags),
        'gps': directory_to_dict(document.gps, sort_tags),
        'thumbnail': format_bytes(document.thumbnail),
    }


def to_json(document: ExifDocument, indent: int = 2, sort_tags: bool = True) -> str:
    """Render an ExifDocument as a JSON string."""
    return json.dumps(document_to_dict(document, sort_tags), indent=indent)


def to_html(document: ExifDocument, indent: int = 2, sort_tags: bool = True) -> str:
    """
    Render an ExifDocument as an HTML page.

    The page embeds the JSON document as a script variable and prints it
    inside a <pre> block.
    """
    data = to_json(document, indent, sort_tags)
    lines = [
        "<!DOCTYPE html><html><body><script>",
        f"var exif = {data}",
        "document.write('<pre>')",
        "document.write(JSON.stringify(exif, null, 2))",
        "document.write('</pre>')",
        "</script></body></html>",
    ]
    return "\n".join(lines)
