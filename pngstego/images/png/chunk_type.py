'''
# Chunk types

A chunk type is a 4-byte code restricted to uppercase and lowercase ASCII
letters; the case of each letter (i.e. bit 5, value 0x20, of the byte)
encodes a property of the chunk:

 1. ancillary bit (first byte): 0 means critical, 1 ancillary
 2. private bit (second byte): 0 means public, 1 private
 3. reserved bit (third byte): must be 0 in files conforming to this version of PNG
 4. safe-to-copy bit (fourth byte): 0 means unsafe to copy, 1 safe to copy

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
import string

from bitstring import Bits

from ... import fields
from ...exceptions import (
    InvalidLengthException,
    InvalidCharacterException,
)


# position of the property bit (0x20) inside a byte, most significant bit first
PROPERTY_BIT = 2


class ChunkType(object):

    def __init__(self, raw):
        raw = bytes(raw)
        if len(raw) != 4:
            raise InvalidLengthException(len(raw))

        self._raw = raw

    @classmethod
    def from_bytes(cls, raw):
        '''No validation is done on the content: any 4 bytes are accepted.'''
        return cls(raw)

    @classmethod
    def from_string(cls, value: str):
        if len(value) != 4:
            raise InvalidLengthException(len(value))

        if not all(_ in string.ascii_letters for _ in value):
            raise InvalidCharacterException(value)

        return cls(value.encode('ascii'))

    @property
    def raw(self) -> bytes:
        return self._raw

    def __bytes__(self):
        return self._raw

    def __str__(self):
        return self._raw.decode('latin1')

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._raw)

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)

    def _property_bit(self, index: int) -> bool:
        return Bits.from_bytes(self._raw)[index * 8 + PROPERTY_BIT]

    def is_critical(self) -> bool:
        return not self._property_bit(0)

    def is_public(self) -> bool:
        return not self._property_bit(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._property_bit(2)

    def is_safe_to_copy(self) -> bool:
        return self._property_bit(3)

    def is_valid(self) -> bool:
        return self._raw.isalpha() and self.is_reserved_bit_valid()


class ChunkTypeField(fields.Field):
    """The 4 bytes of the type of a chunk, its value is a ChunkType."""

    def value_from_default(self):
        return self.default if self.default else ChunkType(b'\x00' * 4)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.value)

    def _set_value(self, value) -> None:
        if not isinstance(value, ChunkType):
            value = ChunkType.from_bytes(value)

        self._value = value

    def _get_size(self):
        return 4

    def _get_raw(self) -> bytes:
        return self.value.raw

    def unpack(self, stream):
        self.value = ChunkType.from_bytes(self.read(stream, self.size))
