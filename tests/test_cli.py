"""
Unit tests for the cli module.
"""

import json

import pytest

from jpexif.cli import main
from tests.helpers import THUMBNAIL, app1_payload, build_sample_tiff, jpeg_file, pack_ifd, tiff_header


@pytest.fixture
def jpeg_path(tmp_path):
    path = tmp_path / 'photo.jpg'
    path.write_bytes(jpeg_file(app1_payload(build_sample_tiff())))
    return path


def test_prints_json(jpeg_path, capsys):
    assert main([str(jpeg_path)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result['ifd'][0]['0112'] == {'type': '3', 'data': '06,00'}
    assert result['thumbnail'] == 'ff,d8,ff,d9'


def test_prints_html(jpeg_path, capsys):
    assert main([str(jpeg_path), '-html']) == 0
    assert capsys.readouterr().out.startswith('<!DOCTYPE html>')


def test_indent_and_file_order(jpeg_path, capsys):
    assert main([str(jpeg_path), '--indent', '0', '--file-order']) == 0
    result = json.loads(capsys.readouterr().out)
    assert list(result['ifd'][0]) == ['010f', '0112', '8769', '8825']


def test_saves_thumbnail(jpeg_path, tmp_path, capsys):
    output = tmp_path / 'thumb.jpg'
    assert main([str(jpeg_path), '-t', str(output)]) == 0
    assert output.read_bytes() == THUMBNAIL


def test_reports_missing_thumbnail(tmp_path, capsys):
    path = tmp_path / 'nothumb.jpg'
    path.write_bytes(jpeg_file(app1_payload(tiff_header() + pack_ifd([]))))

    assert main([str(path), '-t', str(tmp_path / 'thumb.jpg')]) == 0
    assert 'No thumbnail' in capsys.readouterr().err


def test_decode_error(tmp_path, capsys):
    path = tmp_path / 'plain.jpg'
    path.write_bytes(b'\xff\xd8\xff\xe0\x00\x04\x00\x00\xff\xd9')

    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith('jpexif: Error: APP1 segment not found')


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.jpg')]) == 1
    assert 'Unable to open the file' in capsys.readouterr().err


def test_requires_file_argument(capsys):
    with pytest.raises(SystemExit):
        main([])
