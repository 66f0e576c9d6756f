import logging
from typing import Iterable, Iterator, List

from ...exceptions import DecodeError
from .chunk import Chunk


logger = logging.getLogger(__name__)

# shown in place of the payloads that are not text
BINARY_PLACEHOLDER = '0001010 BinGibbrish 000'


def get_chunks_by_type(chunks: Iterable[Chunk], name: str) -> List[Chunk]:
    return list(filter(lambda x: str(x.type_code) == name, chunks))


def describe_chunk(chunk: Chunk) -> str:
    try:
        message = chunk.data_as_string()
    except DecodeError:
        logger.debug('chunk %s has binary data', chunk.type_code)
        message = BINARY_PLACEHOLDER

    return f'chunk type: {chunk.type_code}, length:{chunk.length:>8}, crc:{chunk.crc:>12}| {message}'


def iter_chunk_descriptions(chunks: Iterable[Chunk]) -> Iterator[str]:
    for chunk in chunks:
        yield describe_chunk(chunk)
