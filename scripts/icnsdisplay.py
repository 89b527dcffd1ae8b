#!/usr/bin/env python3
'''
List the icons inside an .icns file and, if a type is given, show it.

 $ icnsdisplay.py x.icns
 $ icnsdisplay.py x.icns ic10
'''
import io
import logging
import os
import sys

from PIL import Image, UnidentifiedImageError

from icnspack.exceptions import IcnspackException, UnrecoverableException
from icnspack.icns.utils import read_icns_header, iter_icons
from icnspack.streams import Stream


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)


def usage(progname):
    print(f'usage: {progname} <icns file> [type]')
    sys.exit(1)


def describe(data):
    try:
        with Image.open(io.BytesIO(data)) as image:
            return f'{image.format} {image.width}x{image.height} {image.mode}'
    except UnidentifiedImageError:
        return 'unknown data'


def icon_filename(icon):
    '''The name the icon gets in an .iconset, '-' if the type can't be used as one.'''
    try:
        return os.fsdecode(icon.filename)
    except UnrecoverableException:
        return '-'


def dump_icons(icns, show=None):
    header = read_icns_header(icns)

    print(f'icns file of {header.length.value} bytes')
    for idx, icon in enumerate(iter_icons(icns, length=header.length.value)):
        data = icns.read_exactly(icon.payload_size)
        filename = icon_filename(icon)
        print(f'[{idx:02d}] {icon.type.value!r:<10} {filename:<22} {icon.payload_size:>8d} bytes  {describe(data)}')

        if show is not None and icon.type.value == show:
            try:
                Image.open(io.BytesIO(data)).show()
            except UnidentifiedImageError:
                logger.warning('%r is not an image we can show' % show)


if __name__ == '__main__':
    if len(sys.argv) not in (2, 3):
        usage(sys.argv[0])

    show = sys.argv[2].encode('latin1') if len(sys.argv) == 3 else None

    try:
        with Stream(sys.argv[1]) as icns:
            dump_icons(icns, show=show)
    except (OSError, IcnspackException) as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)
