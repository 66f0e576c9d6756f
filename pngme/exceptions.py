class PngmeException(Exception):
    '''Base class to extend in order to throw exception in pngme.

    It takes as first argument a message and as keyword argument the chain
    of the layers that caused the exception (for example ``['chunks', 3]``
    for the fourth chunk of a file).
    '''

    def __init__(self, message, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if not self.chain:
            return msg

        return '%s (at %s)' % (msg, '.'.join(str(_) for _ in self.chain))


class InvalidTypeCode(PngmeException, ValueError):
    '''The chunk type is not made of exactly four ASCII letters.'''

    def __init__(self, text, reason=None, chain=None):
        self.text = text
        super().__init__(reason or f'{text!r} is not a valid chunk type', chain=chain)


class UnpackException(PngmeException):
    pass


class MalformedChunk(UnpackException):
    pass


class FormatError(UnpackException):
    pass


class BadSignature(FormatError):
    pass


class ChunkFormatError(FormatError):
    '''Wraps the MalformedChunk found while parsing a whole file: the original
    exception is available as __cause__ and the position via index/offset.'''

    def __init__(self, message, index, offset):
        self.index = index
        self.offset = offset
        super().__init__(message, chain=['chunks', index])


class NotFound(PngmeException, LookupError):

    def __init__(self, type_text):
        self.type_text = type_text
        super().__init__(f'cannot find chunk type {type_text}')


class DecodeError(PngmeException, UnicodeError):
    pass
