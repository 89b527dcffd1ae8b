import logging

from . import IcnsHeader, IcnsChunk
from ..exceptions import MagicException, SizeException, ChunkUnpackException


logger = logging.getLogger(__name__)


def read_icns_header(stream):
    '''Unpack the header of the container checking that is something we can use.'''
    try:
        header = IcnsHeader(stream)
    except MagicException as e:
        raise MagicException("This doesn't look like an Apple .icns file.") from e
    except ChunkUnpackException as e:
        raise SizeException('This looks like an empty .icns file.', chain=e.chain) from e

    if not header.length.value:
        raise SizeException('This looks like an empty .icns file.')

    logger.debug('container declares %d bytes' % header.length.value)

    return header


def iter_icons(stream, length=None):
    '''Iterate over the chunks following the actual position of the stream.

    At each step the stream is positioned at the start of the icon's data, the
    caller can consume it or not: before reading the next chunk we jump after it
    anyway. The iteration stops when the stream ends right at a chunk boundary.

    If length is given we warn when the data found doesn't match it.'''
    while not stream.eof():
        icon = IcnsChunk(stream)

        if icon.length.value <= icon.size:
            raise SizeException('Invalid size in .icns file', chain=['length', 'IcnsChunk'])

        data_offset = stream.tell()

        logger.debug('found icon %r at offset %d (%d bytes)' % (icon.type.value, icon.offset, icon.payload_size))

        yield icon

        stream.seek(data_offset + icon.payload_size)

    if length is not None and stream.tell() != length:
        logger.warning('container declares %d bytes but holds %d' % (length, stream.tell()))
