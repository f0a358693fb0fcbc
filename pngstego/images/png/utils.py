import logging
from typing import Optional

from . import PNGFile, PNGChunk, IHDRData, HEADER_TYPE
from .chunk_type import ChunkType


logger = logging.getLogger(__name__)


def load(path, **kwargs) -> PNGFile:
    logger.debug(f'loading PNG from \'{path}\'')
    return PNGFile(path, **kwargs)


def save(png: PNGFile, path) -> int:
    data = png.pack()

    with open(path, 'wb') as f:
        f.write(data)

    logger.debug(f'written {len(data)} bytes to \'{path}\'')

    return len(data)


def hide_message(png: PNGFile, chunk_type: str, message: str) -> PNGChunk:
    '''The message is stored UTF-8 encoded in a new chunk placed just before IEND.'''
    chunk = PNGChunk.build(ChunkType.from_string(chunk_type), message.encode('utf-8'))

    if not chunk.chunk_type.is_valid():
        logger.warning(f'chunk type \'{chunk_type}\' has the reserved bit set')

    if chunk.isCritical():
        logger.warning(f'chunk type \'{chunk_type}\' is critical, decoders will refuse the image')

    png.insert_chunk(chunk)

    return chunk


def reveal_message(png: PNGFile, chunk_type: str) -> Optional[str]:
    chunk = png.chunk_by_type(chunk_type)

    if chunk is None:
        return None

    return chunk.data_as_string()


def strip_message(png: PNGFile, chunk_type: str) -> PNGChunk:
    return png.remove_chunk(chunk_type)


def get_image_header(png: PNGFile) -> Optional[IHDRData]:
    chunk = png.header_chunk()

    if str(chunk.chunk_type) != HEADER_TYPE:
        return None

    return IHDRData(chunk.data.value)
