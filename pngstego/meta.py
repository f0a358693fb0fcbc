import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """The field declared in the class body works as a prototype: each chunk
    instance gets its own copy the first time the attribute is accessed."""

    def __init__(self, prototype: "FieldBase", name: str):
        prototype.name = name
        self.prototype = prototype

    def __get__(self, chunk, owner=None):
        if chunk is None:
            return self.prototype

        name = self.prototype.name

        if name not in chunk.__dict__:
            chunk.__dict__[name] = self.prototype.create(father=chunk)

        return chunk.__dict__[name]

    def __set__(self, chunk, value):
        self.__get__(chunk).value = value


class FieldBase(object):

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class MetaChunk(type):
    '''Replaces the fields of the class body with descriptors and keeps their
    names, parents' fields first, in "_fields" so that packing and unpacking
    follow the order of declaration.'''

    def __new__(mcs, name, bases, attrs):
        new_cls = super().__new__(mcs, name, bases, attrs)

        fields = []
        for base in bases:
            fields.extend(getattr(base, '_fields', []))

        for attr_name, value in attrs.items():
            if not isinstance(value, FieldBase):
                continue

            if attr_name in fields:
                raise AttributeError(f'field {attr_name} is already present in class {name}')

            logger.debug('field \'%s\' added to \'%s\'' % (attr_name, name))
            setattr(new_cls, attr_name, FieldDescriptor(value, attr_name))
            fields.append(attr_name)

        new_cls._fields = fields

        return new_cls
