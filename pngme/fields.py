"""
A Field is "fundamental" datatype from the format point of view, something
directly packable/unpackable from a fixed number of bytes.
"""
import logging
import struct
from enum import Enum, auto

from .exceptions import UnpackException


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class StructField(object):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    Differently from a format description, the field doesn't store any value: it
    only knows how many bytes it needs and at which offset they are.
    """

    def __init__(self, format, offset=0, endianess=Endianess.LITTLE_ENDIAN):
        self.format = format
        self.offset = offset
        self.endianess = endianess
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return '<%s(%s@%d)>' % (self.__class__.__name__, self.get_format(), self.offset)

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    @property
    def size(self):
        return struct.calcsize(self.get_format())

    def pack(self, value: int) -> bytes:
        return struct.pack(self.get_format(), value)

    def unpack(self, raw: bytes, offset=None) -> int:
        '''Read the value from the buffer at the field's offset (or at the one
        passed as argument).'''
        offset = self.offset if offset is None else offset
        try:
            return struct.unpack_from(self.get_format(), raw, offset)[0]
        except struct.error as e:
            self.logger.debug(e)
            raise UnpackException(f'cannot unpack {self!r}: {e}') from e
