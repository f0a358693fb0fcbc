'''
We are implementing fields to handle CRC calculation.
'''
from zlib import crc32

from .. import fields
from ..meta import Endianess
from ..exceptions import MismatchedCRCException


def checksum(data: bytes) -> int:
    return crc32(data) & 0xffffffff


class CRCField(fields.StructField):
    """standard CRC methods with pre and post conditioning, as defined by ISO 3309 [ISO-3309]
    or ITU-T V.42 [ITU-V42]. The CRC polynomial employed is

      x^32+x^26+x^23+x^22+x^16+x^12+x^11+x^10+x^8+x^7+x^5+x^4+x^2+x+1

    The 32-bit CRC register is initialized to all 1's, and then the data from each byte is processed
    from the least significant bit (1) to the most significant bit (128). After all the data bytes are processed,
    the CRC register is inverted (its ones complement is taken). This value is transmitted (stored in the file)
    MSB first.

    See <https://www.w3.org/TR/PNG-Structure.html#CRC-algorithm>.

    The value is recomputed every time the father chunk is packed and it's
    verified when unpacking: the fields it covers must precede it.
    """

    def __init__(self, fields, *args, endianess=Endianess.BIG_ENDIAN, **kwargs):
        super().__init__('I', *args, endianess=endianess, **kwargs)
        self.fields = fields

    def __str__(self):
        return '0x%08x' % self.value

    def value_from_default(self):
        # a field inside a chunk starts consistent with its siblings
        if self.father is None:
            return super().value_from_default()

        return self.calculate()

    def calculate(self):
        value = b''
        for field_name in self.fields:
            field = getattr(self.father, field_name)
            value += field.raw

        return checksum(value)

    def is_valid(self):
        return self.value == self.calculate()

    def _update_value(self):
        self.value = self.calculate()

    def unpack(self, stream):
        super().unpack(stream)

        computed = self.calculate()
        if self.value != computed:
            self.logger.error(f'crc mismatch: declared 0x{self.value:08x}, computed 0x{computed:08x}')
            raise MismatchedCRCException(self.value, computed, chain=[])


class Checksummed(object):
    '''Mixin for the fields covered by a CRCField: setting their value
    recomputes the checksum of the father, so that the two never disagree.'''
    crc_field = 'crc'

    def _set_value(self, value) -> None:
        super()._set_value(value)

        if self.father is not None:
            getattr(self.father, self.crc_field)._update_value()
