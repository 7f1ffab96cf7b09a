import logging
from pathlib import Path

from .exceptions import FormatException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around path/bytes objects to
    uniform how the tournament file is obtained: the whole content
    is read in memory once and then only sliced.'''
    def __init__(self, obj):
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            if not isinstance(obj, Path):
                raise ValueError('\'%s\' is the wrong kind of object to use' % obj.__class__.__name__)
            init_method = self.init_path

        self.data = init_method()

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return '<%s(%s, %d bytes)>' % (self.__class__.__name__, self._type.__name__, len(self))

    def init_str(self):
        '''We think this is a path'''
        return self.init_path()

    def init_path(self):
        logger.debug('opening path \'%s\'' % self.obj)
        try:
            with open(self.obj, 'rb') as f:
                return f.read()
        except OSError as e:
            raise FormatException(f'cannot read the file: {e.strerror}', chain=[str(self.obj)]) from e

    def init_bytes(self):
        '''We think these are raw bytes'''
        return self.obj

    def init_bytearray(self):
        return bytes(self.obj)

