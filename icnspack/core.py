"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    ChunkUnpackException,
    UnpackException,
    PackException,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    The fields are declared as class attributes and are packed/unpacked in the
    order of declaration, one after the other.

    A Chunk can contain sub-chunks.
    """

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if source is None:
            self.relayout()
        elif isinstance(source, Stream):
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, source))
            self.unpack(source)
        else:
            with Stream(source) as stream:
                self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
                self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self):
        return b''.join(field.raw for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''Reset the offsets of the chunk's children so that they follow each other
        starting from offset.'''
        self.offset = offset

        size = 0
        for field_name, field in self.get_fields():
            self.logger.debug('relayouting %s.%s' % (self.__class__.__name__, field_name))
            size += field.relayout(offset=offset + size)

        return size

    def pack(self, stream=None, relayout=True):
        '''Encode the chunk field by field: the data is returned and, if a stream
        is passed, written at its actual position.'''
        if relayout:
            self.relayout(offset=stream.tell() if stream is not None else 0)

        value = []
        for field_name, field in self.get_fields():
            self.logger.debug('packing %s.%s' % (self.__class__.__name__, field_name))

            try:
                value.append(field.pack(stream=stream, relayout=False))
            except PackException as e:
                e.chain.append(field_name)
                raise

        return b''.join(value)

    def unpack(self, stream):
        '''Read the fields one after the other starting from the actual position
        of the stream.

        A failure in a field is reported as ChunkUnpackException with the chain of
        field names that leads to it; the MagicException instead is let through as is.
        '''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field.unpack(stream)
            except (UnpackException, ChunkUnpackException) as e:
                chain = e.chain if isinstance(e, ChunkUnpackException) else []
                chain.append(field_name)
                raise ChunkUnpackException(e.message, chain=chain) from e
