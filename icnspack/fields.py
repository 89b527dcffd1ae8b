"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct

from .meta import FieldBase, Endianess
from .exceptions import UnpackException, PackException, MagicException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def pack(self, stream=None, relayout=True):
        '''Return the binary representation of the field and, if a stream is
        passed, write it at the actual position of the stream.'''
        if relayout:
            self.relayout(offset=stream.tell() if stream is not None else 0)

        raw = self.raw

        if stream is not None:
            stream.write(raw)

        return raw

    def unpack(self, stream):
        '''Read from the actual position of the stream exactly the bytes needed.'''
        self.offset = stream.tell()
        self.raw = stream.read(self.size)

    def _check_magic(self, value):
        if self.is_magic and value != self.default:
            self.logger.debug(f'the magic for field \'{self.name}\' doesn\'t correspond')
            raise MagicException('expected magic %r, found %r' % (self.default, value))


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        try:
            return struct.pack(self.get_format(), self.value)
        except struct.error as e:
            self.logger.debug(e)
            raise PackException('value %r doesn\'t fit format \'%s\'' % (self.value, self.get_format()))

    def _set_raw(self, raw: bytes) -> None:
        self.value = self._unpack(raw)

    def _unpack(self, raw):
        try:
            value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            self.logger.debug(e)
            exc = MagicException if self.is_magic else UnpackException
            raise exc('expected %d bytes, found %d' % (self.size, len(raw)))

        self._check_magic(value)

        return value


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n or len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def value_from_default(self):
        return b'\x00' * self.length if not self.default else self.default

    def _get_size(self):
        return self.length

    def _set_value(self, value) -> None:
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        super()._set_value(bytes(value))

    def _get_raw(self):
        return self.value

    def _set_raw(self, raw: bytes) -> None:
        if len(raw) != self.length:
            exc = MagicException if self.is_magic else UnpackException
            raise exc('expected %d bytes, found %d' % (self.length, len(raw)))

        self._check_magic(raw)

        self.value = raw
