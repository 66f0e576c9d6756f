'''Command line to hide, show and remove messages into PNG files.'''
import argparse
import logging
import os
import sys

from .exceptions import NotFound, PngmeException
from .images.png import Chunk, ChunkContainer, ChunkTypeCode
from .images.png.utils import get_chunks_by_type, iter_chunk_descriptions
from .streams import Stream


logger = logging.getLogger(__name__)


def chunk_type_arg(value: str) -> ChunkTypeCode:
    try:
        return ChunkTypeCode.parse_text(value)
    except PngmeException as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog='pngme', description='The PNG annotation command')
    p.add_argument('file', metavar='FILE', help='PNG file to operate on')
    p.add_argument('--verbose', action='store_true')

    commands = p.add_subparsers(dest='command', metavar='COMMAND', required=True)

    encode = commands.add_parser('encode', help='Encode a string as the supplied chunk type')
    encode.add_argument('-t', dest='chunk_type', type=chunk_type_arg, required=True)
    encode.add_argument('message', metavar='MESSAGE')

    decode = commands.add_parser('decode', help='Decode the supplied chunk type as a string')
    decode.add_argument('-t', dest='chunk_type', type=chunk_type_arg, required=True)

    remove = commands.add_parser('remove', help='Remove the supplied chunk type')
    remove.add_argument('-t', dest='chunk_type', type=chunk_type_arg, required=True)

    commands.add_parser('print', help='Print all chunks')

    return p.parse_args(argv)


def setup_logging(verbose=False):
    logging.basicConfig(level=logging.DEBUG if verbose or 'DEBUG' in os.environ else logging.INFO)


def do_encode(png, stream, args):
    chunk = Chunk(args.chunk_type, args.message.encode('utf-8'))
    png.append_chunk(chunk)
    stream.overwrite(png.to_wire_bytes())
    logger.info('encoded %d bytes as chunk %s', chunk.length, chunk.type_code)


def do_decode(png, stream, args):
    chunk = png.chunk_by_type(str(args.chunk_type))
    if chunk is None:
        raise NotFound(str(args.chunk_type))

    duplicates = get_chunks_by_type(png.chunks(), str(args.chunk_type))
    if len(duplicates) > 1:
        logger.warning('found %d chunks of type %s, decoding the first one', len(duplicates), args.chunk_type)

    print(chunk.data_as_string())


def do_remove(png, stream, args):
    chunk = png.remove_chunk(str(args.chunk_type))
    stream.overwrite(png.to_wire_bytes())
    logger.info('removed chunk %s of %d bytes', chunk.type_code, chunk.length)


def do_print(png, stream, args):
    for line in iter_chunk_descriptions(png.chunks()):
        print(line)


COMMANDS = {
    'encode': (do_encode, 'rw'),
    'decode': (do_decode, 'r'),
    'remove': (do_remove, 'rw'),
    'print':  (do_print, 'r'),
}


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    command, flags = COMMANDS[args.command]

    try:
        with Stream(args.file, flags=flags) as stream:
            png = ChunkContainer.from_stream(stream)
            command(png, stream, args)
    except (PngmeException, OSError) as e:
        logger.debug('command %s failed', args.command, exc_info=True)
        print(f'error: {e}', file=sys.stderr)
        return 1

    return 0
