import io
import logging
import os
from contextlib import contextmanager

from .exceptions import UnpackException


logger = logging.getLogger(__name__)

BUFFER_SIZE = 1024


class Stream(object):
    '''This is a simple wrapper around bytes/path/file objects to
    uniform their properties.

    Paths and raw bytes are opened here and so closed when the stream is;
    an already open file object is only borrowed and left open.'''
    def __init__(self, obj, flags='rb'):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.flags = flags
        self.obj = obj
        self._owned = True

        if isinstance(obj, (str, os.PathLike)):
            self.init_path()
        elif isinstance(obj, (bytes, bytearray)):
            self.init_bytes()
        else:
            self._owned = False

    def __getattr__(self, name):
        if name == 'obj':
            raise AttributeError(name)
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def init_path(self):
        logger.debug('opening path \'%s\' with flags \'%s\'' % (self.obj, self.flags))
        self.obj = open(self.obj, self.flags)

    def init_bytes(self):
        self.obj = io.BytesIO(self.obj)

    def close(self):
        if self._owned:
            self.obj.close()

    def seek(self, offset, whence=os.SEEK_SET):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        return self.obj.seek(offset, whence)

    def read_exactly(self, n):
        '''Read n bytes, failing if the stream ends before.'''
        data = self.obj.read(n)
        if len(data) != n:
            raise UnpackException('expected %d bytes, found %d' % (n, len(data)))

        return data

    def write(self, data):
        return self.obj.write(data)

    @contextmanager
    def at(self, offset, whence=os.SEEK_SET):
        '''Move to offset for the duration of the block, then go back where we were.'''
        old_seek = self.obj.tell()
        self.seek(offset, whence)
        try:
            yield self
        finally:
            self.obj.seek(old_seek)

    def length(self):
        with self.at(0, os.SEEK_END):
            return self.obj.tell()

    def eof(self):
        with self.at(0, os.SEEK_CUR):
            return len(self.obj.read(1)) == 0

    def copy_to(self, dst, size, buffer_size=BUFFER_SIZE):
        '''Copy exactly size bytes into dst, at most buffer_size at a time.'''
        remaining = size
        while remaining > 0:
            data = self.obj.read(min(buffer_size, remaining))
            if not data:
                raise UnpackException('stream ended %d bytes before the expected %d' % (remaining, size))

            dst.write(data)
            remaining -= len(data)

        return size
