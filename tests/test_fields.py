from enum import Enum, auto

import pytest

from pngstego.enum import Compliant
from pngstego.exceptions import UnpackException, MagicException
from pngstego.fields import StructField, StringField, ArrayField
from pngstego.meta import Endianess
from pngstego.streams import Stream


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\xfe\xca\x00\x00'


def test_structfield_big_endian():
    field = StructField('I', endianess=Endianess.BIG_ENDIAN, default=0xcafe)

    assert field.raw == b'\x00\x00\xca\xfe'
    assert str(field) == '0x0000cafe'


def test_structfield_unpack():
    field = StructField('I')

    field.unpack(Stream(b'\x01\x02\x03\x04'))
    assert field.value == 0x04030201

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x01\x02'))


def test_structfield_enum():
    class DummyEnum(Enum):
        NONE = 0
        FIRST = auto()
        SECOND = auto()

    field = StructField('I', enum=DummyEnum, compliant=Compliant.ENUM)

    assert field.value == DummyEnum.NONE

    field.value = DummyEnum.SECOND

    assert field.value == DummyEnum.SECOND
    assert field.raw == b'\x02\x00\x00\x00'

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x04\x00\x00\x00'))

    # without compliance the unknown value is kept as it is
    lenient = StructField('I', enum=DummyEnum)
    lenient.unpack(Stream(b'\x04\x00\x00\x00'))

    assert lenient.value == 4


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = b''.join([bytes([_]) for _ in range(0x10)])

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_magic():
    field = StringField(4, default=b'\x7fELF', is_magic=True, compliant=Compliant.MAGIC)

    field.unpack(Stream(b'\x7fELF'))
    assert field.value == b'\x7fELF'

    with pytest.raises(MagicException):
        field.unpack(Stream(b'MZ\x90\x00'))

    with pytest.raises(MagicException):
        field.unpack(Stream(b'\x7f'))

    lenient = StringField(4, default=b'\x7fELF', is_magic=True)
    lenient.unpack(Stream(b'MZ\x90\x00'))

    assert lenient.value == b'MZ\x90\x00'


def test_arrayfield():
    array = ArrayField(StructField('I'))

    array.unpack(Stream(
        b'\x01\x00\x00\x00'
        b'\x02\x00\x00\x00'
        b'\x03\x00\x00\x00'
    ))

    # check some basic property
    assert isinstance(array.value, list)
    assert len(array) == 3
    assert [_.value for _ in array] == [1, 2, 3]

    # check that the elements are not duplicated
    assert array[0] is not array[1]
    assert array[0].father is array

    assert [_.offset for _ in array] == [0, 4, 8]
    assert array.size == 12
    assert array.pack() == b'\x01\x00\x00\x00\x02\x00\x00\x00\x03\x00\x00\x00'

    element = array.pop(1)

    assert element.father is None
    assert [_.value for _ in array] == [1, 3]

    array.clear()

    assert len(array) == 0


def test_arrayfield_errors_record_the_index():
    array = ArrayField(StructField('H'))

    with pytest.raises(UnpackException) as excinfo:
        array.unpack(Stream(b'\x01\x00\x02'))

    assert excinfo.value.chain == ['1']
