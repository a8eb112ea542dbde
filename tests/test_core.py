"""
Unit tests for the core module.
"""

import json

import pytest

from jpexif.core import JpExif
from jpexif.exceptions import SignatureMismatchError
from tests.helpers import THUMBNAIL, app1_payload, build_sample_tiff, jpeg_file


@pytest.fixture
def jpeg_data():
    return jpeg_file(app1_payload(build_sample_tiff()))


@pytest.fixture
def jpeg_path(tmp_path, jpeg_data):
    path = tmp_path / 'photo.jpg'
    path.write_bytes(jpeg_data)
    return path


class TestOptions:
    """Tests for the option table."""

    def test_requires_exactly_one_source(self, jpeg_data):
        """Test that a file path or file data must be given, not both."""
        with pytest.raises(ValueError):
            JpExif()
        with pytest.raises(ValueError):
            JpExif('photo.jpg', jpeg_data)

    def test_default_options(self, jpeg_data):
        """Test that every option starts at its documented default."""
        exif = JpExif(file_data=jpeg_data)
        for name, info in JpExif.available_options().items():
            assert exif.get_option(name) == info['default']

    def test_set_option_converts_values(self, jpeg_data):
        """Test conversion of string values for int, bool and str options."""
        exif = JpExif(file_data=jpeg_data)
        exif.set_option('Indent', '4')
        exif.set_option('SortTags', 'no')
        exif.set_option('OutputFormat', 'HTML')

        assert exif.get_option('Indent') == 4
        assert exif.get_option('SortTags') is False
        assert exif.get_option('OutputFormat') == 'html'

    @pytest.mark.parametrize('name, value', [
        ('Unknown', 1),
        ('Indent', 'wide'),
        ('OutputFormat', 'xml'),
    ])
    def test_set_option_rejects_invalid(self, jpeg_data, name, value):
        """Test rejection of unknown options and invalid values."""
        with pytest.raises(ValueError):
            JpExif(file_data=jpeg_data).set_option(name, value)

    def test_get_option_default(self, jpeg_data):
        assert JpExif(file_data=jpeg_data).get_option('Missing', 'x') == 'x'


class TestReading:
    """Tests for reading and exporting."""

    def test_read_is_cached(self, jpeg_path):
        """Test that the file is decoded once."""
        with JpExif(jpeg_path) as exif:
            document = exif.read()
            assert exif.read() is document
            assert document.thumbnail == THUMBNAIL

    def test_cached_document_cannot_be_changed(self, jpeg_data):
        """Test that callers cannot alter the document later reads return."""
        exif = JpExif(file_data=jpeg_data)
        with pytest.raises(TypeError):
            exif.read().directories[0][0x0112] = None
        with pytest.raises(AttributeError):
            exif.read().exif.clear()

        assert 0x0112 in exif.read().directories[0]
        assert json.loads(exif.export())["exif"]

    def test_extract_thumbnail_option(self, jpeg_data):
        """Test that ExtractThumbnail=False drops only the thumbnail."""
        exif = JpExif(file_data=jpeg_data)
        assert exif.read().thumbnail == THUMBNAIL

        exif.set_option('ExtractThumbnail', False)
        assert exif.read().thumbnail == b''
        assert exif.read().exif

    def test_export_json(self, jpeg_data):
        result = json.loads(JpExif(file_data=jpeg_data).export())
        assert result['thumbnail'] == 'ff,d8,ff,d9'

    def test_export_html(self, jpeg_data):
        exif = JpExif(file_data=jpeg_data)
        exif.set_option('OutputFormat', 'html')
        assert exif.export().startswith('<!DOCTYPE html>')

    def test_decode_errors_propagate(self):
        """Test that fatal decode errors reach the caller unchanged."""
        with pytest.raises(SignatureMismatchError):
            JpExif(file_data=jpeg_file(b'JFIF\x00\x00')).read()


class TestThumbnail:
    """Tests for saving the thumbnail."""

    def test_save_thumbnail(self, tmp_path, jpeg_data):
        output = tmp_path / 'thumb.jpg'
        assert JpExif(file_data=jpeg_data).save_thumbnail(output) is True
        assert output.read_bytes() == THUMBNAIL

    def test_save_thumbnail_without_thumbnail(self, tmp_path, jpeg_data):
        """Test that nothing is written when there is no thumbnail."""
        exif = JpExif(file_data=jpeg_data)
        exif.set_option('ExtractThumbnail', False)
        output = tmp_path / 'thumb.jpg'

        assert exif.save_thumbnail(output) is False
        assert not output.exists()
