'''
The chunk type is a sequence of four ASCII letters: the case of each letter
encodes a property of the chunk (it's the bit 5, i.e. value 32, of each byte
that is set for lowercase letters)

  .------------------------------------------------.
  | byte | uppercase      | lowercase               |
  |------|----------------|-------------------------|
  |  0   | critical       | ancillary               |
  |  1   | public         | private                 |
  |  2   | reserved valid | reserved invalid        |
  |  3   | unsafe to copy | safe to copy            |
  '------------------------------------------------'

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from bitstring import Bits

from ...enum import ChunkProperty
from ...exceptions import InvalidTypeCode


TYPE_CODE_SIZE = 4
# position of the property bit inside each byte, counting from the MSB
PROPERTY_BIT = 2


def _is_ascii_letter(value: int) -> bool:
    return 0x41 <= value <= 0x5a or 0x61 <= value <= 0x7a


class ChunkTypeCode(object):
    '''Immutable four letters identifier of a chunk.'''

    __slots__ = ('_raw',)

    def __init__(self, raw: bytes):
        raw = bytes(raw)
        text = raw.decode('ascii', errors='replace')

        if len(raw) != TYPE_CODE_SIZE:
            raise InvalidTypeCode(
                text, reason=f'{text!r} is not a valid chunk type: expected {TYPE_CODE_SIZE} bytes, got {len(raw)}')

        if not all(_is_ascii_letter(_) for _ in raw):
            raise InvalidTypeCode(text)

        object.__setattr__(self, '_raw', raw)

    @classmethod
    def parse(cls, raw: bytes) -> "ChunkTypeCode":
        return cls(raw)

    @classmethod
    def parse_text(cls, text: str) -> "ChunkTypeCode":
        return cls(text.encode('utf-8'))

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    @property
    def raw(self) -> bytes:
        return self._raw

    def __eq__(self, other):
        if not isinstance(other, ChunkTypeCode):
            return NotImplemented

        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)

    def __str__(self):
        return self._raw.decode('ascii', errors='replace')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def _is_uppercase(self, index: int) -> bool:
        return not Bits(self._raw)[index * 8 + PROPERTY_BIT]

    def is_critical(self) -> bool:
        return self._is_uppercase(0)

    def is_public(self) -> bool:
        return self._is_uppercase(1)

    def is_reserved_bit_valid(self) -> bool:
        return self._is_uppercase(2)

    def is_safe_to_copy(self) -> bool:
        return not self._is_uppercase(3)

    def is_valid(self) -> bool:
        return self.is_reserved_bit_valid()

    def is_iend(self) -> bool:
        return self._raw == b'IEND'

    @property
    def properties(self) -> ChunkProperty:
        result = ChunkProperty.NONE
        for flag, check in (
            (ChunkProperty.CRITICAL, self.is_critical),
            (ChunkProperty.PUBLIC, self.is_public),
            (ChunkProperty.RESERVED_VALID, self.is_reserved_bit_valid),
            (ChunkProperty.SAFE_TO_COPY, self.is_safe_to_copy),
        ):
            if check():
                result |= flag

        return result
