import pytest

from pngstego.streams import Stream


def test_bytes_stream():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert stream.remaining() == 5
    assert stream.read(1) == b'\x01'

    stream.save()
    assert stream.read(2) == b'\x02\x03'
    stream.restore()

    assert stream.tell() == 1
    assert stream.remaining() == 4
    assert not stream.is_exhausted()

    stream.read(4)

    assert stream.is_exhausted()


def test_file_stream(tmp_path):
    path = tmp_path / 'auaua'
    path.write_bytes(b'\x01\x02\x03\x04\x05')

    for source in (path, str(path)):
        stream = Stream(source)

        assert stream.read(1) == b'\x01'
        assert stream.remaining() == 4
        assert stream.tell() == 1


def test_wrong_source():
    with pytest.raises(ValueError):
        Stream(42)
