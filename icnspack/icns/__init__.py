'''
# Apple Icon Image format

A container of icons: after a header made of the magic 'icns' and the size of the
whole file follows a sequence of chunks, each one a four-char type, the size of the
chunk (header included) and the data.

    .------------------------------.
    | 'icns' | total size          |
    |------------------------------|
    | type   | 8 + N  | N bytes    |
    | type   | 8 + M  | M bytes    |
      ...
    '------------------------------'

Every integer is big-endian. Here we handle only the types that hold PNG images,
the ones an .iconset directory is made of; any other type is carried around as
opaque data.

The types are listed at <https://en.wikipedia.org/wiki/Apple_Icon_Image_format>.
'''
import os
from enum import Enum

from ..core import Chunk
from .. import fields
from ..exceptions import UnrecoverableException


ICNS_MAGIC = b'icns'
ICNS_EXTENSION = '.icns'
ICONSET_EXTENSION = '.iconset'
UNKNOWN_FILENAME_PREFIX = b'icon_data_'


class IconType(Enum):
    '''PNG icons, the value is the type as found on disk.'''
    ICP4 = b'icp4'  # 16x16
    IC11 = b'ic11'  # 16x16@2x
    ICP5 = b'icp5'  # 32x32
    IC12 = b'ic12'  # 32x32@2x
    ICP6 = b'icp6'  # 64x64
    IC07 = b'ic07'  # 128x128
    IC13 = b'ic13'  # 128x128@2x
    IC08 = b'ic08'  # 256x256
    IC14 = b'ic14'  # 256x256@2x
    IC09 = b'ic09'  # 512x512
    IC10 = b'ic10'  # 512x512@2x


ICONSET_FILENAMES = (
    ('icon_16x16.png',      IconType.ICP4),
    ('icon_16x16@2x.png',   IconType.IC11),
    ('icon_32x32.png',      IconType.ICP5),
    ('icon_32x32@2x.png',   IconType.IC12),
    ('icon_64x64.png',      IconType.ICP6),
    ('icon_128x128.png',    IconType.IC07),
    ('icon_128x128@2x.png', IconType.IC13),
    ('icon_256x256.png',    IconType.IC08),
    ('icon_256x256@2x.png', IconType.IC14),
    ('icon_512x512.png',    IconType.IC09),
    ('icon_512x512@2x.png', IconType.IC10),
)


def filename_to_tag(filename):
    for icon_filename, icon_type in ICONSET_FILENAMES:
        if icon_filename == filename:
            return icon_type.value

    return None


def tag_to_filename(tag):
    for icon_filename, icon_type in ICONSET_FILENAMES:
        if icon_type.value == tag:
            return icon_filename

    return None


class IcnsHeader(Chunk):
    '''The length is the size of the whole file, header included: who writes
    doesn't know it in advance, so it's packed as zero and patched at the end.'''
    magic  = fields.StringField(4, default=ICNS_MAGIC, is_magic=True)
    length = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)


class IcnsChunk(Chunk):
    '''Header of a single icon, the data follows directly.'''
    type   = fields.StringField(4)
    length = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)

    @property
    def payload_size(self):
        return self.length.value - self.size

    @property
    def filename(self):
        '''Name of the file inside the .iconset directory.

        The types we don't know are named after the raw bytes of the type
        itself, so they must be usable as part of a path.'''
        tag = self.type.value
        icon_filename = tag_to_filename(tag)
        if icon_filename:
            return os.fsencode(icon_filename)

        if b'\x00' in tag or os.fsencode(os.sep) in tag or \
                (os.altsep and os.fsencode(os.altsep) in tag):
            raise UnrecoverableException('type %r can\'t be used as a filename' % tag)

        return UNKNOWN_FILENAME_PREFIX + tag
