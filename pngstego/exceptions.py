class PNGStegoException(Exception):
    '''Base class to extend in order to throw exception in pngstego.

    It takes an argument that represents the chain of the layer that
    caused the exception: each chunk the exception bubbles through appends
    the name of the field that was unpacking.

    Subclasses describe themselves with the "message" template, formatted
    with the attributes of the instance.
    '''
    message = 'generic failure'

    def __init__(self, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__()

    def __str__(self):
        msg = self.message.format(**self.__dict__)
        if self.chain:
            msg += ' (at %s)' % '.'.join(reversed(self.chain))
        return msg


class ChunkTypeException(PNGStegoException):
    pass


class InvalidLengthException(ChunkTypeException):
    message = 'a chunk type must be 4 bytes long, got {length}'

    def __init__(self, length, chain=None):
        self.length = length
        super().__init__(chain=chain)


class InvalidCharacterException(ChunkTypeException):
    message = 'chunk type {value!r} contains characters that are not ASCII letters'

    def __init__(self, value, chain=None):
        self.value = value
        super().__init__(chain=chain)


class UnpackException(PNGStegoException):
    message = 'not enough data to unpack'


class ByteLengthException(UnpackException):
    message = 'a chunk needs at least 12 bytes, only {actual} available'

    def __init__(self, actual, chain=None):
        self.actual = actual
        super().__init__(chain=chain)


class TruncatedChunkException(UnpackException):
    message = 'chunk declares {declared} bytes of data but only {available} bytes are left'

    def __init__(self, declared, available, chain=None):
        self.declared = declared
        self.available = available
        super().__init__(chain=chain)


class MismatchedCRCException(UnpackException):
    message = 'declared crc 0x{declared:08x} does not match the computed one 0x{computed:08x}'

    def __init__(self, declared, computed, chain=None):
        self.declared = declared
        self.computed = computed
        super().__init__(chain=chain)


class LengthOverflowException(PNGStegoException):
    message = 'a chunk can hold at most 0xffffffff bytes, got {length}'

    def __init__(self, length, chain=None):
        self.length = length
        super().__init__(chain=chain)


class MagicException(PNGStegoException):
    message = 'the magic doesn\'t correspond'


class ChunkOrderException(PNGStegoException):
    message = 'expected IHDR first and IEND last, found {first} and {last}'

    def __init__(self, first, last, chain=None):
        self.first = first
        self.last = last
        super().__init__(chain=chain)


class ChunkNotFoundException(PNGStegoException):
    message = 'no chunk with type {chunk_type!r}'

    def __init__(self, chunk_type, chain=None):
        self.chunk_type = chunk_type
        super().__init__(chain=chain)
