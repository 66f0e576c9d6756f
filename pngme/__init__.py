"""
# pngme: hide messages into PNG files.

A PNG file is a signature followed by a list of chunks, each one with a type
made of four letters, some data and a CRC: the chunks with an unknown
ancillary type are ignored by the decoders, so they are a nice place where to
put some text.

The main operations are

 1. parse(): the more straightforward, i.e., reading the binary data
    and build the list of chunks, checking the signature and the CRC
    of each one of them.

 2. append_chunk()/remove_chunk(): change the list of chunks.

 3. to_wire_bytes(): encode the list of chunks back into binary data,
    without parsing and mutations in between the result is identical
    to the original data.
"""
from .exceptions import (
    PngmeException,
    InvalidTypeCode,
    MalformedChunk,
    FormatError,
    BadSignature,
    ChunkFormatError,
    NotFound,
    DecodeError,
)
from .images.png import (
    SIGNATURE,
    Chunk,
    ChunkContainer,
    ChunkTypeCode,
)
