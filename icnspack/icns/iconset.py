'''
Conversion between .iconset directories and .icns files.

The PNGs are copied as they are, without decoding them. In both directions the
result is created in the current working directory, named after the input with
the extension swapped:

    path/to/x.iconset/  ->  ./x.icns
    path/to/x.icns      ->  ./x.iconset/

Nothing is removed when something goes wrong: what has been written until the
failure stays on disk.
'''
import logging
import os

from . import (
    ICONSET_EXTENSION,
    ICNS_EXTENSION,
    IcnsHeader,
    IcnsChunk,
    filename_to_tag,
)
from .utils import read_icns_header, iter_icons
from ..exceptions import NamingException
from ..streams import Stream


logger = logging.getLogger(__name__)


def _swap_extension(path, extension, new_extension):
    name = os.path.basename(os.path.normpath(os.fspath(path)))

    if len(name) <= len(extension) or not name.endswith(extension):
        return None

    return name[:-len(extension)] + new_extension


def icns_path_for_iconset(iconset_path):
    icns_path = _swap_extension(iconset_path, ICONSET_EXTENSION, ICNS_EXTENSION)
    if icns_path is None:
        raise NamingException('Need .iconset directory as input.')

    return icns_path


def iconset_path_for_icns(icns_path):
    iconset_path = _swap_extension(icns_path, ICNS_EXTENSION, ICONSET_EXTENSION)
    if iconset_path is None:
        raise NamingException("Can't find .icns extension on input file")

    return iconset_path


def write_icon(icns, icon_path, tag):
    '''Append to the container the chunk for the file at icon_path.'''
    with Stream(icon_path) as icon:
        size = icon.length()

        chunk = IcnsChunk()
        chunk.type = tag
        chunk.length = size + chunk.size
        chunk.pack(icns)

        icon.copy_to(icns, size)

    logger.debug('written %r from \'%s\' (%d bytes)' % (tag, icon_path, size))


def create_icns_from_iconset(iconset_path):
    '''Build the .icns file from the PNGs in iconset_path and return its path.

    The files we don't know the type of are skipped with a warning.'''
    icns_path = icns_path_for_iconset(iconset_path)
    entries = sorted(os.listdir(iconset_path))

    with Stream(icns_path, flags='wb') as icns:
        header = IcnsHeader()
        header.pack(icns)

        for entry in entries:
            if entry.startswith('.'):
                continue

            tag = filename_to_tag(entry)
            if tag is None:
                logger.warning("Don't know icon type for %s, skipping" % entry)
                continue

            write_icon(icns, os.path.join(iconset_path, entry), tag)

        header.length = icns.tell()
        with icns.at(header.length.offset):
            header.length.pack(icns, relayout=False)

    logger.info('created \'%s\' (%d bytes)' % (icns_path, header.length.value))

    return icns_path


def copy_icon_to_iconset(icns, icon, iconset_path):
    '''Copy the data of icon, the stream being positioned at its start, into
    a file in iconset_path.'''
    target_path = os.path.join(os.fsencode(iconset_path), icon.filename)

    with open(target_path, 'wb') as target:
        icns.copy_to(target, icon.payload_size)

    logger.debug('extracted %r to \'%s\' (%d bytes)' % (
        icon.type.value, os.fsdecode(target_path), icon.payload_size))

    return target_path


def create_iconset_from_icns(icns_path):
    '''Extract the icons from the .icns file into a new .iconset directory
    and return its path.

    The directory must not exist already.'''
    with Stream(icns_path) as icns:
        header = read_icns_header(icns)

        iconset_path = iconset_path_for_icns(icns_path)
        os.mkdir(iconset_path)

        for icon in iter_icons(icns, length=header.length.value):
            copy_icon_to_iconset(icns, icon, iconset_path)

    logger.info('created \'%s\'' % iconset_path)

    return iconset_path
