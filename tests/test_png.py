import logging
import struct
import zlib

import pytest

from pngme.exceptions import BadSignature, ChunkFormatError, FormatError, MalformedChunk, NotFound
from pngme.images.png import SIGNATURE, Chunk, ChunkContainer, ChunkTypeCode
from pngme.images.png.utils import (
    BINARY_PLACEHOLDER,
    describe_chunk,
    get_chunks_by_type,
    iter_chunk_descriptions,
)


def make_chunk(type_text, data):
    return Chunk(ChunkTypeCode.parse_text(type_text), data)


@pytest.fixture
def chunks():
    return [
        make_chunk('FrSt', b'I am the first chunk'),
        make_chunk('miDl', b'I am another chunk'),
        make_chunk('LASt', b'I am the last chunk'),
    ]


@pytest.fixture
def container(chunks):
    return ChunkContainer(chunks)


def test_header():
    """Check header is right"""
    assert SIGNATURE == b'\x89PNG\x0d\x0a\x1a\x0a'


def test_png_file(png_bytes):
    """Check unpacking a PNG file produced by a real encoder is fine"""
    png = ChunkContainer.parse(png_bytes)

    types = [str(_.type_code) for _ in png.chunks()]

    assert types[0] == 'IHDR'
    assert types[-1] == 'IEND'
    assert 'IDAT' in types

    ihdr = png.chunk_by_type('IHDR')
    width, height = struct.unpack('>II', ihdr.data[:8])
    assert (width, height) == (5, 10)

    for chunk in png.chunks():
        assert chunk.crc == zlib.crc32(chunk.type_code.raw + chunk.data)

    assert png.to_wire_bytes() == png_bytes
    assert png.size == len(png_bytes)


def test_empty_file():
    png = ChunkContainer.parse(SIGNATURE)

    assert len(png) == 0
    assert png.chunks() == ()
    assert png.to_wire_bytes() == SIGNATURE


def test_from_chunks(container, chunks):
    assert list(container.chunks()) == chunks
    assert len(container) == 3


def test_roundtrip(container):
    raw = container.to_wire_bytes()

    assert raw.startswith(SIGNATURE)
    assert ChunkContainer.parse(raw).to_wire_bytes() == raw
    assert list(ChunkContainer.parse(raw)) == list(container)


@pytest.mark.parametrize('raw', [
    b'',
    b'\x89PN',
    b'\x88PNG\r\n\x1a\n',
    b'GIF89a\x00\x00',
    b'PNG\r\n\x1a\n\x89',
])
def test_bad_signature(raw):
    with pytest.raises(BadSignature):
        ChunkContainer.parse(raw)


def test_bad_signature_is_a_format_error(container):
    raw = b'\x00' + container.to_wire_bytes()[1:]

    with pytest.raises(FormatError):
        ChunkContainer.parse(raw)


def test_truncated_file(container):
    raw = container.to_wire_bytes()[:-1]

    with pytest.raises(ChunkFormatError) as e:
        ChunkContainer.parse(raw)

    assert e.value.index == 2
    assert isinstance(e.value.__cause__, MalformedChunk)
    assert e.value.chain == ['chunks', 2]


def test_corrupted_chunk_in_the_middle(container, chunks):
    raw = bytearray(container.to_wire_bytes())
    offset = len(SIGNATURE) + chunks[0].size
    # flip a bit into the data of the second chunk
    raw[offset + 8] ^= 0x80

    with pytest.raises(ChunkFormatError) as e:
        ChunkContainer.parse(bytes(raw))

    assert e.value.index == 1
    assert e.value.offset == offset


def test_invalid_type_in_the_middle(container, chunks):
    raw = bytearray(container.to_wire_bytes())
    offset = len(SIGNATURE) + chunks[0].size
    raw[offset + 4] = ord('1')

    with pytest.raises(ChunkFormatError) as e:
        ChunkContainer.parse(bytes(raw))

    assert e.value.index == 1


@pytest.mark.parametrize('garbage', [b'\x00', b'\x00' * 11, b'\x00\x00\x00\x00IEND'])
def test_trailing_garbage(container, garbage):
    with pytest.raises(ChunkFormatError) as e:
        ChunkContainer.parse(container.to_wire_bytes() + garbage)

    assert e.value.index == 3


def test_append_chunk(container):
    chunk = make_chunk('TeSt', b'Message')

    container.append_chunk(chunk)

    assert len(container) == 4
    assert container.chunks()[-1] is chunk
    assert container.to_wire_bytes().endswith(chunk.to_wire_bytes())


def test_append_duplicates(container):
    container.append_chunk(make_chunk('FrSt', b'again'))

    assert len(get_chunks_by_type(container.chunks(), 'FrSt')) == 2
    # the lookup returns the first one in order
    assert container.chunk_by_type('FrSt').data == b'I am the first chunk'


def test_append_then_remove_restores(container):
    before = container.to_wire_bytes()
    chunk = make_chunk('TeSt', b'Message')

    container.append_chunk(chunk)
    removed = container.remove_chunk('TeSt')

    assert removed is chunk
    assert container.to_wire_bytes() == before


def test_remove_chunk(container, chunks):
    removed = container.remove_chunk('miDl')

    assert removed == chunks[1]
    assert list(container.chunks()) == [chunks[0], chunks[2]]
    assert container.chunk_by_type('miDl') is None


def test_remove_first_of_duplicates(container, chunks):
    container.append_chunk(make_chunk('miDl', b'second middle'))

    container.remove_chunk('miDl')

    assert [_.data for _ in container] == [
        b'I am the first chunk',
        b'I am the last chunk',
        b'second middle',
    ]


def test_remove_missing_chunk(container):
    with pytest.raises(NotFound) as e:
        container.remove_chunk('NoPe')

    assert isinstance(e.value, LookupError)
    assert len(container) == 3


def test_remove_from_empty():
    png = ChunkContainer()

    with pytest.raises(NotFound):
        png.remove_chunk('FrSt')

    assert len(png) == 0


def test_chunk_by_type(container, chunks):
    assert container.chunk_by_type('LASt') is chunks[2]
    assert container.chunk_by_type('last') is None
    assert ChunkContainer().chunk_by_type('LASt') is None


def test_chunks_can_be_enumerated_many_times(container):
    view = container.chunks()

    assert [str(_.type_code) for _ in view] == ['FrSt', 'miDl', 'LASt']
    assert [str(_.type_code) for _ in view] == ['FrSt', 'miDl', 'LASt']
    assert list(container) == list(container)


def test_chunks_view_is_read_only(container):
    view = container.chunks()

    with pytest.raises((TypeError, AttributeError)):
        view.append(make_chunk('TeSt', b''))

    assert len(container) == 3


def test_last_chunk_not_iend(caplog, container):
    with caplog.at_level(logging.WARNING):
        ChunkContainer.parse(container.to_wire_bytes())

    assert 'not IEND' in caplog.text


def test_describe_chunk():
    chunk = make_chunk('ruSt', b'hello')

    assert describe_chunk(chunk) == 'chunk type: ruSt, length:       5, crc:%12d| hello' % chunk.crc


def test_describe_binary_chunks(container):
    container.append_chunk(make_chunk('biNy', b'\xff\xfe\xfd'))

    lines = list(iter_chunk_descriptions(container.chunks()))

    assert len(lines) == 4
    assert lines[0].endswith('| I am the first chunk')
    assert lines[-1].endswith('| ' + BINARY_PLACEHOLDER)


def test_truncated_file_logs_no_errors(caplog, container):
    with caplog.at_level(logging.DEBUG):
        with pytest.raises(ChunkFormatError):
            ChunkContainer.parse(container.to_wire_bytes() + b'\x00\x00\x00')

    assert not [_ for _ in caplog.records if _.levelno >= logging.ERROR]
