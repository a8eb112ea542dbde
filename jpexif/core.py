# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core JpExif class

This module provides the main API for reading Exif metadata from JPEG
files and exporting it as JSON or HTML.

Copyright 2025 DNAi inc.
"""

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jpexif.exceptions import JpExifError
from jpexif.exif_reader import ExifDocument, read_exif, read_exif_from_bytes
from jpexif.json_output import to_html, to_json


class JpExif:
    """
    Main class for reading Exif metadata from JPEG files.

    The file is decoded once, on the first call to read(); later calls
    return the same document.

    Example:
        >>> with JpExif('image.jpg') as exif:
        ...     exif.set_option('OutputFormat', 'html')
        ...     page = exif.export()
    """

    OUTPUT_FORMATS = ('json', 'html')

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        file_data: Optional[bytes] = None
    ):
        """
        Initialize the reader.

        Args:
            file_path: Path to the JPEG file
            file_data: JPEG file contents (alternative to file_path)

        Raises:
            ValueError: If neither or both sources are given
        """
        if (file_path is None) == (file_data is None):
            raise ValueError("Exactly one of file_path or file_data must be provided")

        self.file_path = Path(file_path) if file_path is not None else None
        self.file_data = file_data
        self.options: Dict[str, Any] = {}
        self._document: Optional[ExifDocument] = None
        self._initialize_default_options()

    def __enter__(self) -> 'JpExif':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._document = None

    @staticmethod
    def available_options() -> Dict[str, Dict[str, Any]]:
        """
        Describe the supported options.

        Returns:
            Dictionary mapping option names to their description, type and
            default value
        """
        return {
            'Indent': {
                'description': 'Number of spaces used to indent JSON output',
                'type': 'int',
                'default': 2,
            },
            'SortTags': {
                'description': 'Order tags by id in the output instead of file order',
                'type': 'bool',
                'default': True,
            },
            'OutputFormat': {
                'description': 'Format produced by export() (json, html)',
                'type': 'str',
                'default': 'json',
            },
            'ExtractThumbnail': {
                'description': 'Keep the IFD1 thumbnail in the decoded document',
                'type': 'bool',
                'default': True,
            },
        }

    def _initialize_default_options(self) -> None:
        for option_name, option_info in self.available_options().items():
            self.options[option_name] = option_info['default']

    def set_option(self, option_name: str, value: Any) -> None:
        """
        Set an option value.

        Args:
            option_name: Name of the option (e.g., 'Indent', 'OutputFormat')
            value: Value to set; strings are converted for bool and int options

        Raises:
            ValueError: If the option is unknown or the value is invalid
        """
        available = self.available_options()
        if option_name not in available:
            raise ValueError(f"Unknown option: {option_name}. Use available_options() to see valid options.")

        expected_type = available[option_name]['type']
        if expected_type == 'bool' and not isinstance(value, bool):
            if isinstance(value, str):
                value = value.lower() in ('true', '1', 'yes', 'on')
            else:
                value = bool(value)
        elif expected_type == 'int' and not isinstance(value, int):
            try:
                value = int(value)
            except (ValueError, TypeError):
                raise ValueError(f"Option {option_name} requires int value, got {type(value).__name__}")
        elif expected_type == 'str':
            value = str(value).lower()

        if option_name == 'OutputFormat' and value not in self.OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {value}")

        if option_name == 'ExtractThumbnail':
            self._document = None
        self.options[option_name] = value

    def get_option(self, option_name: str, default: Any = None) -> Any:
        """Get an option value, or default if it is not set."""
        return self.options.get(option_name, default)

    def read(self) -> ExifDocument:
        """
        Decode the Exif data.

        Returns:
            The decoded ExifDocument

        Raises:
            MetadataReadError: If the file cannot be read or decoded
        """
        if self._document is None:
            if self.file_path is not None:
                document = read_exif(self.file_path)
            else:
                document = read_exif_from_bytes(self.file_data)

            if not self.get_option('ExtractThumbnail', True):
                document = replace(document, thumbnail=b'')
            self._document = document
        return self._document

    def export(self) -> str:
        """
        Render the decoded Exif data in the configured OutputFormat.

        Raises:
            MetadataReadError: If the file cannot be read or decoded
        """
        document = self.read()
        indent = self.get_option('Indent', 2)
        sort_tags = self.get_option('SortTags', True)
        if self.get_option('OutputFormat') == 'html':
            return to_html(document, indent, sort_tags)
        return to_json(document, indent, sort_tags)

    def save_thumbnail(self, output_path: Union[str, Path]) -> bool:
        """
        Write the IFD1 thumbnail to a file.

        Returns:
            True if a thumbnail was written, False if the file has none

        Raises:
            MetadataReadError: If the file cannot be decoded
            JpExifError: If the thumbnail file cannot be written
        """
        thumbnail = self.read().thumbnail
        if not thumbnail:
            return False
        try:
            with open(output_path, 'wb') as f:
                f.write(thumbnail)
        except OSError as e:
            raise JpExifError(f"Unable to write thumbnail to {output_path}") from e
        return True
