import logging

from ...common.crc import checksum
from ...exceptions import (
    DecodeError,
    InvalidTypeCode,
    MalformedChunk,
)
from ...fields import Endianess, StructField
from .chunk_type import ChunkTypeCode, TYPE_CODE_SIZE


logger = logging.getLogger(__name__)


class Chunk(object):
    '''
    This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each integer field is intended big-endian.

      .--------.------.------------------.-----.
      | length | type | data (length)    | crc |
      '--------'------'------------------'-----'

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    A chunk is never modified after creation: the crc is computed in the
    constructor and it's always consistent with type and data.
    '''
    length_field = StructField('I', offset=0, endianess=Endianess.BIG_ENDIAN)
    crc_field    = StructField('I', endianess=Endianess.BIG_ENDIAN)

    # length + type + crc
    OVERHEAD = length_field.size + TYPE_CODE_SIZE + crc_field.size

    def __init__(self, type_code: ChunkTypeCode, data: bytes):
        self._type_code = type_code
        self._data = bytes(data)
        self._crc = self.checksum_of(type_code, self._data)

    @staticmethod
    def checksum_of(type_code: ChunkTypeCode, data: bytes) -> int:
        return checksum(type_code.raw, data)

    @property
    def type_code(self) -> ChunkTypeCode:
        return self._type_code

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def crc(self) -> int:
        return self._crc

    @property
    def size(self) -> int:
        return self.OVERHEAD + self.length

    def data_as_string(self) -> str:
        try:
            return self._data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(f'data of chunk {self._type_code} is not valid text: {e}') from e

    @property
    def raw(self) -> bytes:
        return b''.join([
            self.length_field.pack(self.length),
            self._type_code.raw,
            self._data,
            self.crc_field.pack(self._crc),
        ])

    def to_wire_bytes(self) -> bytes:
        return self.raw

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented

        return self._type_code == other._type_code and self._data == other._data

    def __hash__(self):
        return hash((self._type_code, self._data))

    def __repr__(self):
        return f'<{self.__class__.__name__}(type={self._type_code}, length={self.length}, crc=0x{self._crc:08x})>'

    def __str__(self):
        return self._data.decode('utf-8', errors='replace')

    @classmethod
    def parse(cls, raw: bytes) -> "Chunk":
        '''Build a chunk from its binary representation.

        The data is taken right after the type and it's long as indicated by the
        length field, the crc instead is read from the last four bytes of the
        buffer: a buffer with extra bytes between the data and the crc is accepted
        as long as the crc matches.
        '''
        if len(raw) < cls.OVERHEAD:
            raise MalformedChunk(f'a chunk needs at least {cls.OVERHEAD} bytes, got {len(raw)}')

        length = cls.length_field.unpack(raw)
        crc = cls.crc_field.unpack(raw, offset=len(raw) - cls.crc_field.size)

        type_offset = cls.length_field.size
        data_offset = type_offset + TYPE_CODE_SIZE

        try:
            type_code = ChunkTypeCode.parse(raw[type_offset:data_offset])
        except InvalidTypeCode as e:
            raise MalformedChunk(str(e), chain=['type']) from e

        data = raw[data_offset:data_offset + length]

        logger.debug('chunk %s declares %d bytes of data, crc 0x%08x', type_code, length, crc)

        if len(data) != length:
            raise MalformedChunk(
                f'chunk {type_code} declares {length} bytes of data but only {len(data)} are available',
                chain=['data'])

        computed = cls.checksum_of(type_code, data)
        if computed != crc:
            raise MalformedChunk(
                f'crc mismatch for chunk {type_code}: found 0x{crc:08x}, computed 0x{computed:08x}',
                chain=['crc'])

        return cls(type_code, data)
