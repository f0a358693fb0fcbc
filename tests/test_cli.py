import importlib.util
from pathlib import Path

import pytest

from pngstego.images.png import PNGFile


SCRIPT = Path(__file__).parent.parent / 'scripts' / 'pngmsg.py'


@pytest.fixture
def pngmsg():
    spec = importlib.util.spec_from_file_location('pngmsg', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    return module


def test_encode_decode(pngmsg, png_path, tmp_path, capsys):
    output = tmp_path / 'output.png'

    assert pngmsg.main(['encode', str(png_path), 'ruSt', 'hello there', str(output)]) == 0
    # the input image is untouched
    assert PNGFile(png_path).chunk_by_type('ruSt') is None

    assert pngmsg.main(['decode', str(output), 'ruSt']) == 0
    assert capsys.readouterr().out == 'Encoded message is: "hello there"\n'

    assert pngmsg.main(['decode', str(png_path), 'ruSt']) == 0
    assert capsys.readouterr().out == 'There is no hidden message in this file.\n'


def test_encode_in_place(pngmsg, png_path):
    assert pngmsg.main(['encode', str(png_path), 'ruSt', 'hello there']) == 0

    assert PNGFile(png_path).chunk_by_type('ruSt').data.value == b'hello there'


def test_encode_wrong_type(pngmsg, png_path, png_raw):
    assert pngmsg.main(['encode', str(png_path), 'ru5t', 'hello there']) == 1
    assert png_path.read_bytes() == png_raw


def test_remove(pngmsg, png_path, png_raw, capsys):
    pngmsg.main(['encode', str(png_path), 'ruSt', 'hello there'])

    assert pngmsg.main(['remove', '--dry-run', str(png_path), 'ruSt']) == 0
    assert PNGFile(png_path).chunk_by_type('ruSt') is not None

    assert pngmsg.main(['remove', str(png_path), 'ruSt']) == 0
    assert 'Chunk with type ruSt was removed' in capsys.readouterr().out
    assert png_path.read_bytes() == png_raw

    assert pngmsg.main(['remove', str(png_path), 'ruSt']) == 1


@pytest.mark.parametrize('chunk_type', ['IHDR', 'IEND'])
def test_remove_keeps_the_image_valid(pngmsg, png_path, png_raw, chunk_type):
    assert pngmsg.main(['remove', str(png_path), chunk_type]) == 1
    assert png_path.read_bytes() == png_raw


def test_print(pngmsg, png_path, capsys):
    assert pngmsg.main(['print', str(png_path)]) == 0

    out = capsys.readouterr().out

    assert out.startswith('IHDR: 5x10x8 RGB\n')
    assert '[00] IHDR' in out
    assert 'IEND' in out


def test_missing_file(pngmsg, tmp_path):
    assert pngmsg.main(['print', str(tmp_path / 'nope.png')]) == 1
