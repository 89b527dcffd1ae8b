#!/usr/bin/env python3
'''
Convert an .iconset directory to an .icns file and back, leaving the PNGs as they are.

 $ icnsconvert.py encode path/to/x.iconset   # creates ./x.icns
 $ icnsconvert.py decode path/to/x.icns      # creates ./x.iconset/
'''
import logging
import os
import sys

from icnspack.exceptions import IcnspackException
from icnspack.icns.iconset import (
    create_icns_from_iconset,
    create_iconset_from_icns,
)


logging.basicConfig(format='%(levelname)s: %(message)s',
                    level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


COMMANDS = {
    'encode': (create_icns_from_iconset, 'No path given to iconset directory.'),
    'decode': (create_iconset_from_icns, 'No path given to icns file.'),
}


def usage(progname):
    print(f'usage: {progname} encode <iconset directory>', file=sys.stderr)
    print(f'       {progname} decode <icns file>', file=sys.stderr)
    sys.exit(1)


def error(message):
    print(f'Error: {message}', file=sys.stderr)


def main(argv):
    progname = os.path.basename(argv[0])

    if len(argv) < 2 or argv[1] not in COMMANDS:
        usage(progname)

    command, missing_path = COMMANDS[argv[1]]

    if len(argv) < 3:
        error(missing_path)
        usage(progname)
    elif len(argv) > 3:
        error('Too many arguments.')
        usage(progname)

    try:
        command(argv[2])
    except (OSError, IcnspackException) as e:
        error(e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
