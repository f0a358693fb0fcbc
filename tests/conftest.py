import io
import struct

import pytest
from PIL import Image

from pngstego.images.png import PNGChunk, PNGFile, ChunkType


MESSAGE = b'This is where your secret message will be!'
MESSAGE_CRC = 2882656334


@pytest.fixture
def png_raw():
    """A real PNG file, 5 pixels wide and 10 high, all red."""
    image = Image.new('RGB', (5, 10), color='red')
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')

    return buffer.getvalue()


@pytest.fixture
def png_path(tmp_path, png_raw):
    path = tmp_path / 'red.png'
    path.write_bytes(png_raw)

    return path


@pytest.fixture
def chunk_raw():
    return struct.pack('>I', len(MESSAGE)) + b'RuSt' + MESSAGE + struct.pack('>I', MESSAGE_CRC)


@pytest.fixture
def testing_png():
    """IHDR, a private chunk with a message and IEND"""
    ihdr = struct.pack('>IIBBBBB', 4, 4, 8, 2, 0, 0, 0)

    return PNGFile.build([
        PNGChunk.build(ChunkType.from_string('IHDR'), ihdr),
        PNGChunk.build(ChunkType.from_string('ruSt'), b'kebab'),
        PNGChunk.build(ChunkType.from_string('IEND'), b''),
    ])
