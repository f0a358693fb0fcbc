'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

Here the file is seen only at the chunk level: each chunk keeps its data as an
opaque string of bytes, so that it's possible to add, find and remove chunks
(for example a private one carrying a message) and write the file back.
'''
import struct
from enum import Enum
from typing import Iterable, List, Optional

from pngstego.core import Chunk
from pngstego import (
    fields,
)
from pngstego.enum import Compliant
from pngstego.meta import Endianess
from pngstego.properties import Dependency
from pngstego.common import crc
from pngstego.exceptions import (
    ByteLengthException,
    TruncatedChunkException,
    LengthOverflowException,
    ChunkOrderException,
    ChunkNotFoundException,
)

from .chunk_type import ChunkType, ChunkTypeField


PNG_MAGIC = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'
HEADER_TYPE = 'IHDR'
TERMINAL_TYPE = 'IEND'
# length, type and crc
CHUNK_OVERHEAD = 12
MAX_CHUNK_LENGTH = 0xffffffff


class PNGColorType(Enum):
    '''The color type definition of the PNG is a little tricky and doesn't seem
    to follow a bit-mask. We are going to list all the valid cases.'''
    GRAYSCALE = 0x00
    RGB       = 0x02
    RGB_PALETTE = 0x03
    GS_ALPHA    = 0x04
    RGBA        = 0x06


class PNGCompressionType(Enum):
    '''There is only one method of compression'''
    DEFLATE = 0x00


class PNGFilterType(Enum):
    '''This indicates the preprocessing method applied to the image data before compression. At present, only filter method 0 is defined'''
    ADAPTIVE = 0x00


class PNGInterlaceType(Enum):
    NONE  = 0x00
    ADAM7 = 0x01


class IHDRData(Chunk):
    '''
    Width and height give the image dimensions in pixels.
    Bit depth is a single-byte integer giving the number of bits per sample or per palette index (not per pixel).
    Color type is a single-byte integer that describes the interpretation of the image data.
    '''
    width       = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    height      = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)
    depth       = fields.StructField('B')
    color       = fields.StructField('B', enum=PNGColorType, default=PNGColorType.GRAYSCALE.value)
    compression = fields.StructField('B', enum=PNGCompressionType, default=PNGCompressionType.DEFLATE.value)
    filter      = fields.StructField('B', enum=PNGFilterType, default=PNGFilterType.ADAPTIVE.value)
    interlace   = fields.StructField('B', enum=PNGInterlaceType, default=PNGInterlaceType.NONE.value)

    def __str__(self):
        color = self.color.value
        return '%dx%dx%d %s' % (
            self.width.value,
            self.height.value,
            self.depth.value,
            color.name if isinstance(color, Enum) else color,
        )


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_MAGIC, is_magic=True)


class PNGChunkType(crc.Checksummed, ChunkTypeField):
    pass


class PNGChunkData(crc.Checksummed, fields.StringField):
    pass


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    Changing the type or the data of a chunk updates its length and its crc.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk
    '''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)  # big endian
    type   = PNGChunkType()
    data   = PNGChunkData(Dependency('.length'))
    crc    = crc.CRCField(['type', 'data'])  # network byte order

    @classmethod
    def build(cls, chunk_type: ChunkType, data: bytes) -> "PNGChunk":
        if len(data) > MAX_CHUNK_LENGTH:
            raise LengthOverflowException(len(data))

        chunk = cls()
        chunk.type.value = chunk_type
        chunk.data.value = data
        chunk.relayout()

        return chunk

    @classmethod
    def parse(cls, raw: bytes) -> "PNGChunk":
        '''Unpack the first chunk found in raw, trailing bytes are ignored.'''
        return cls(raw)

    def unpack(self, stream):
        '''The declared length is not trusted: before reading anything we check
        there are enough bytes in the stream for the whole chunk.'''
        available = stream.remaining()
        if available < CHUNK_OVERHEAD:
            raise ByteLengthException(available)

        stream.save()
        declared, = struct.unpack('>I', stream.read(4))
        stream.restore()

        if declared + CHUNK_OVERHEAD > available:
            raise TruncatedChunkException(declared, available - CHUNK_OVERHEAD)

        super().unpack(stream)

    @property
    def chunk_type(self) -> ChunkType:
        return self.type.value

    def isCritical(self):
        return self.chunk_type.is_critical()

    def data_as_string(self) -> str:
        '''Each byte becomes the character with the same code point.'''
        return self.data.value.decode('latin1')

    def __eq__(self, other):
        if not isinstance(other, PNGChunk):
            return NotImplemented

        return (self.chunk_type, self.data.value, self.crc.value) == \
            (other.chunk_type, other.data.value, other.crc.value)

    __hash__ = None

    def __str__(self):
        return '%s length=%d crc=%s data=%r' % (
            self.chunk_type,
            self.length.value,
            self.crc,
            self.data.value[:32],
        )


class PNGFile(Chunk):
    '''The signature followed by all the chunks till the end of the data.

    Without indication the file is checked strictly: wrong magic or a file
    not starting with IHDR and ending with IEND raise an exception. Pass
    compliant=Compliant.NONE to parse anything having a sequence of chunks.
    '''
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk())

    def __init__(self, source=None, compliant=Compliant.MAGIC | Compliant.ORDER, **kwargs):
        super().__init__(source, compliant=compliant, **kwargs)

    @classmethod
    def parse(cls, raw: bytes, **kwargs) -> "PNGFile":
        return cls(raw, **kwargs)

    @classmethod
    def build(cls, chunks: Iterable[PNGChunk], **kwargs) -> "PNGFile":
        png = cls(**kwargs)
        for chunk in chunks:
            png.append_chunk(chunk)

        return png

    def validate(self):
        types = [str(_.chunk_type) for _ in self.chunks]
        first = types[0] if types else None
        last = types[-1] if types else None

        if first == HEADER_TYPE and last == TERMINAL_TYPE:
            return True

        if self.is_compliant(Compliant.ORDER):
            raise ChunkOrderException(first, last)

        return False

    def get_chunks(self) -> List[PNGChunk]:
        return list(self.chunks)

    def header_chunk(self) -> PNGChunk:
        if not len(self.chunks):
            raise ChunkNotFoundException(HEADER_TYPE)

        return self.chunks[0]

    def append_chunk(self, chunk: PNGChunk):
        '''The chunk is put at the end: it's up to the caller to not place it after IEND.'''
        self.chunks.append(chunk)

    def insert_chunk(self, chunk: PNGChunk):
        '''Put the chunk just before the terminal chunk, if any.'''
        index = len(self.chunks)
        if index and str(self.chunks[-1].chunk_type) == TERMINAL_TYPE:
            index -= 1

        self.chunks.insert(index, chunk)

    def chunks_by_type(self, chunk_type: str) -> List[PNGChunk]:
        return [_ for _ in self.chunks if str(_.chunk_type) == chunk_type]

    def chunk_by_type(self, chunk_type: str) -> Optional[PNGChunk]:
        chunks = self.chunks_by_type(chunk_type)

        return chunks[0] if chunks else None

    def remove_chunk(self, chunk_type: str) -> PNGChunk:
        for index, chunk in enumerate(self.chunks):
            if str(chunk.chunk_type) == chunk_type:
                self.logger.debug('removing chunk #%d with type \'%s\'' % (index, chunk_type))
                return self.chunks.pop(index)

        raise ChunkNotFoundException(chunk_type)

    def __str__(self):
        lines = []
        for idx, chunk in enumerate(self.chunks):
            chunk_type = chunk.chunk_type
            lines.append('[%02d] %s %10d %s %s%s%s' % (
                idx,
                chunk_type,
                chunk.length.value,
                chunk.crc,
                'critical ' if chunk_type.is_critical() else 'ancillary',
                ' private' if not chunk_type.is_public() else '',
                ' safe-to-copy' if chunk_type.is_safe_to_copy() else '',
            ))

        return '\n'.join(lines)
