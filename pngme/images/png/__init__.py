'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

A file is composed of a fixed signature followed by a sequence of chunks

  .-----------.---------.---------.-----.---------.
  | signature | chunk 0 | chunk 1 | ... | chunk N |
  '-----------'---------'---------'-----'---------'

there is no explicit end marker apart from the end of the data: the IEND
chunk is expected to be the last one but this is not enforced here.
'''
import logging
from typing import Iterable, Iterator, Optional, Tuple

from ...exceptions import (
    BadSignature,
    ChunkFormatError,
    MalformedChunk,
    NotFound,
    UnpackException,
)
from ...streams import Stream
from .chunk import Chunk
from .chunk_type import ChunkTypeCode


logger = logging.getLogger(__name__)

SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class ChunkContainer(object):
    '''Ordered collection of chunks, with the order they have (or will have) into the file.'''

    def __init__(self, chunks: Optional[Iterable[Chunk]] = None):
        self._chunks = list(chunks) if chunks is not None else []

    @classmethod
    def parse(cls, raw: bytes) -> "ChunkContainer":
        '''Parse a whole file; any error aborts the entire operation.'''
        raw = bytes(raw)

        if raw[:len(SIGNATURE)] != SIGNATURE:
            raise BadSignature(f'the signature {raw[:len(SIGNATURE)]!r} is not a PNG one')

        chunks = []
        offset = len(SIGNATURE)

        while offset < len(raw):
            index = len(chunks)
            logger.debug('unpacking chunk %d at offset 0x%08x', index, offset)

            try:
                if len(raw) - offset < Chunk.OVERHEAD:
                    raise MalformedChunk(
                        f'only {len(raw) - offset} bytes left, a chunk needs at least {Chunk.OVERHEAD}')

                length = Chunk.length_field.unpack(raw, offset=offset)
                end = offset + Chunk.OVERHEAD + length

                if end > len(raw):
                    raise MalformedChunk(
                        f'chunk declares {length} bytes of data but the file ends {end - len(raw)} bytes before')

                chunk = Chunk.parse(raw[offset:end])
            except UnpackException as e:
                raise ChunkFormatError(f'malformed chunk at offset 0x{offset:x}: {e}', index, offset) from e

            chunks.append(chunk)
            offset = end

        if chunks and not chunks[-1].type_code.is_iend():
            logger.warning('the last chunk is %s and not IEND', chunks[-1].type_code)

        return cls(chunks)

    @classmethod
    def from_stream(cls, stream: Stream) -> "ChunkContainer":
        return cls.parse(stream.read_all())

    def append_chunk(self, chunk: Chunk) -> None:
        logger.debug('appending %r as chunk %d', chunk, len(self._chunks))
        self._chunks.append(chunk)

    def _index_of(self, type_text: str) -> Optional[int]:
        for index, chunk in enumerate(self._chunks):
            if str(chunk.type_code) == type_text:
                return index

        return None

    def remove_chunk(self, type_text: str) -> Chunk:
        '''Remove the first chunk with the given type and return it.'''
        index = self._index_of(type_text)

        if index is None:
            raise NotFound(type_text)

        logger.debug('removing chunk %d of type %s', index, type_text)

        return self._chunks.pop(index)

    def chunk_by_type(self, type_text: str) -> Optional[Chunk]:
        index = self._index_of(type_text)

        return self._chunks[index] if index is not None else None

    def chunks(self) -> Tuple[Chunk, ...]:
        return tuple(self._chunks)

    def __len__(self):
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks())

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(str(_.type_code) for _ in self._chunks))

    @property
    def size(self) -> int:
        return len(SIGNATURE) + sum(_.size for _ in self._chunks)

    @property
    def raw(self) -> bytes:
        return SIGNATURE + b''.join(_.raw for _ in self._chunks)

    def to_wire_bytes(self) -> bytes:
        return self.raw


__all__ = [
    'SIGNATURE',
    'Chunk',
    'ChunkTypeCode',
    'ChunkContainer',
]
