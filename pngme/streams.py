import io
import logging
import pathlib


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path/file object to
    uniform its properties: the whole content is read at once and
    it's written back at once overwriting the previous one.'''
    def __init__(self, obj, flags='r'):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.flags = flags
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__})>'

    def close(self):
        self.obj.close()

    def _open(self, path):
        mode = 'r+b' if 'w' in self.flags else 'rb'
        logger.debug('opening path \'%s\' with mode %s' % (path, mode))
        self.obj = open(path, mode)

    def init_str(self):
        '''We think this is a path'''
        self._open(self.obj)

    def init_PosixPath(self):
        self._open(self.obj)

    def init_WindowsPath(self):
        self._open(self.obj)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_file(self):
        '''An already opened binary file: it must be seekable'''
        if not hasattr(self.obj, 'seek'):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def read_all(self) -> bytes:
        '''Returns all the data from the start of the stream.'''
        self.obj.seek(0)
        data = self.obj.read()
        logger.debug('read %d bytes from %r', len(data), self)

        return data

    def overwrite(self, data: bytes) -> None:
        '''Replace the whole content with the data passed as argument.'''
        self.obj.seek(0)
        self.obj.write(data)
        self.obj.truncate()
        self.obj.flush()
        logger.debug('written %d bytes to %r', len(data), self)
