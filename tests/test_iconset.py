import logging
import os
import struct

import pytest

from icnspack.exceptions import (
    ChunkUnpackException,
    MagicException,
    NamingException,
    SizeException,
    UnpackException,
)
from icnspack.icns import ICONSET_FILENAMES
from icnspack.icns.iconset import (
    create_icns_from_iconset,
    create_iconset_from_icns,
    icns_path_for_iconset,
    iconset_path_for_icns,
)


def read_chunks(data):
    """Split a container into its header fields and the list of (tag, size, data)."""
    magic, total = struct.unpack('>4sI', data[:8])
    chunks = []
    offset = 8
    while offset < len(data):
        tag, size = struct.unpack('>4sI', data[offset:offset + 8])
        chunks.append((tag, size, data[offset + 8:offset + size]))
        offset += size

    return magic, total, chunks


def write_container(path, *chunks, total=None):
    body = b''.join(tag + struct.pack('>I', 8 + len(data)) + data for tag, data in chunks)
    total = 8 + len(body) if total is None else total
    path.write_bytes(b'icns' + struct.pack('>I', total) + body)
    return path


@pytest.mark.parametrize('path,expected', [
    ('App.iconset', 'App.icns'),
    ('App.iconset/', 'App.icns'),
    ('some/where/App.iconset', 'App.icns'),
    ('a.b.iconset', 'a.b.icns'),
])
def test_icns_path_for_iconset(path, expected):
    assert icns_path_for_iconset(path) == expected


@pytest.mark.parametrize('path', ['App', '.iconset', 'App.iconset.bak', 'App.icns', '/'])
def test_icns_path_for_iconset_wrong_name(path):
    with pytest.raises(NamingException):
        icns_path_for_iconset(path)


@pytest.mark.parametrize('path,expected', [
    ('App.icns', 'App.iconset'),
    ('/tmp/icons/App.icns', 'App.iconset'),
    ('a.icns.icns', 'a.icns.iconset'),
])
def test_iconset_path_for_icns(path, expected):
    assert iconset_path_for_icns(path) == expected


@pytest.mark.parametrize('path', ['App', '.icns', 'App.png', 'App.icns.bak'])
def test_iconset_path_for_icns_wrong_name(path):
    with pytest.raises(NamingException):
        iconset_path_for_icns(path)


def test_encode_single_icon(workdir, make_iconset, png_data):
    """A single icon of N bytes gives a container of 16 + N bytes."""
    data = png_data(16)
    iconset = make_iconset({'icon_16x16.png': data})

    icns_path = create_icns_from_iconset(str(iconset))

    assert icns_path == 'App.icns'
    container = (workdir / 'App.icns').read_bytes()
    magic, total, chunks = read_chunks(container)

    assert magic == b'icns'
    assert total == 16 + len(data) == len(container)
    assert chunks == [(b'icp4', 8 + len(data), data)]


def test_encode_empty_iconset(workdir, make_iconset):
    iconset = make_iconset({})

    create_icns_from_iconset(iconset)

    assert (workdir / 'App.icns').read_bytes() == b'icns\x00\x00\x00\x08'


def test_encode_writes_in_the_working_directory(workdir, make_iconset, png_data):
    iconset = make_iconset({'icon_32x32.png': png_data(32)})

    create_icns_from_iconset(str(iconset) + '/')

    assert (workdir / 'App.icns').is_file()
    assert not (iconset.parent / 'App.icns').exists()


def test_encode_skips_unknown_files(workdir, make_iconset, png_data, caplog):
    data = png_data(64)
    iconset = make_iconset({
        'icon_64x64.png': data,
        'icon_1024x1024.png': png_data(8),
        'README': b'not an icon',
    })

    with caplog.at_level(logging.WARNING):
        create_icns_from_iconset(iconset)

    _, total, chunks = read_chunks((workdir / 'App.icns').read_bytes())

    assert chunks == [(b'icp6', 8 + len(data), data)]
    assert total == 16 + len(data)
    assert "Don't know icon type for README, skipping" in caplog.text
    assert "Don't know icon type for icon_1024x1024.png, skipping" in caplog.text


def test_encode_ignores_hidden_files(workdir, make_iconset, png_data, caplog):
    iconset = make_iconset({
        '.DS_Store': b'\x00\x00\x00\x01Bud1',
        'icon_16x16.png': png_data(16),
    })

    with caplog.at_level(logging.WARNING):
        create_icns_from_iconset(iconset)

    _, _, chunks = read_chunks((workdir / 'App.icns').read_bytes())

    assert [_[0] for _ in chunks] == [b'icp4']
    assert '.DS_Store' not in caplog.text


def test_encode_sizes(workdir, make_iconset, png_data):
    """Every chunk size counts its own header and the total the whole file."""
    files = {
        filename: png_data(8 + idx, color=(idx, 0x80, 0xff - idx, 0xff))
        for idx, (filename, _) in enumerate(ICONSET_FILENAMES)
    }
    iconset = make_iconset(files)

    create_icns_from_iconset(iconset)

    container = (workdir / 'App.icns').read_bytes()
    _, total, chunks = read_chunks(container)

    assert total == len(container)
    assert len(chunks) == 11
    for tag, size, data in chunks:
        assert size == 8 + len(data)


def test_encode_wrong_name(workdir, tmp_path):
    iconset = tmp_path / 'App.icons'
    iconset.mkdir()

    with pytest.raises(NamingException, match='Need .iconset directory as input'):
        create_icns_from_iconset(iconset)

    assert os.listdir(workdir) == []


def test_encode_missing_directory(workdir, tmp_path):
    with pytest.raises(FileNotFoundError):
        create_icns_from_iconset(tmp_path / 'Missing.iconset')

    assert os.listdir(workdir) == []


def test_decode_single_icon(workdir, tmp_path, png_data):
    data = png_data(16)
    icns = write_container(tmp_path / 'App.icns', (b'icp4', data))

    iconset_path = create_iconset_from_icns(str(icns))

    assert iconset_path == 'App.iconset'
    assert os.listdir(workdir / 'App.iconset') == ['icon_16x16.png']
    assert (workdir / 'App.iconset' / 'icon_16x16.png').read_bytes() == data


def test_decode_unknown_types(workdir, tmp_path):
    """The unknown types are extracted with the raw type in the name."""
    icns = write_container(
        tmp_path / 'App.icns',
        (b'TOC ', b'\x00\x00\x00\x10'),
        (b'\xfe\xffab', b'opaque'),
    )

    create_iconset_from_icns(icns)

    iconset = os.fsencode(workdir / 'App.iconset')
    assert sorted(os.listdir(iconset)) == [b'icon_data_TOC ', b'icon_data_\xfe\xffab']
    with open(os.path.join(iconset, b'icon_data_\xfe\xffab'), 'rb') as f:
        assert f.read() == b'opaque'


def test_decode_wrong_magic(workdir, tmp_path):
    icns = tmp_path / 'App.icns'
    icns.write_bytes(b'\x89PNG\r\n\x1a\n')

    with pytest.raises(MagicException):
        create_iconset_from_icns(icns)

    assert not (workdir / 'App.iconset').exists()


def test_decode_empty_container(workdir, tmp_path):
    icns = tmp_path / 'App.icns'
    icns.write_bytes(b'icns\x00\x00\x00\x00')

    with pytest.raises(SizeException, match='empty'):
        create_iconset_from_icns(icns)

    assert not (workdir / 'App.iconset').exists()


def test_decode_header_only(workdir, tmp_path):
    icns = write_container(tmp_path / 'App.icns')

    create_iconset_from_icns(icns)

    assert os.listdir(workdir / 'App.iconset') == []


def test_decode_invalid_chunk_size(workdir, tmp_path, png_data):
    """A chunk without data is refused, leaving what was extracted before."""
    data = png_data(16)
    icns = write_container(tmp_path / 'App.icns', (b'icp4', data), (b'icp5', b''))

    with pytest.raises(SizeException, match='Invalid size'):
        create_iconset_from_icns(icns)

    assert os.listdir(workdir / 'App.iconset') == ['icon_16x16.png']


def test_decode_truncated_data(workdir, tmp_path, png_data):
    data = png_data(32)
    icns = tmp_path / 'App.icns'
    icns.write_bytes(b'icns' + struct.pack('>I', 16 + len(data)) +
                     b'icp5' + struct.pack('>I', 8 + len(data)) + data[:-10])

    with pytest.raises(UnpackException):
        create_iconset_from_icns(icns)

    assert (workdir / 'App.iconset' / 'icon_32x32.png').read_bytes() == data[:-10]


def test_decode_truncated_chunk_header(workdir, tmp_path):
    icns = write_container(tmp_path / 'App.icns', (b'icp4', b'data'))
    with open(icns, 'ab') as f:
        f.write(b'ic1')

    with pytest.raises(ChunkUnpackException):
        create_iconset_from_icns(icns)


def test_decode_existing_directory(workdir, tmp_path):
    icns = write_container(tmp_path / 'App.icns', (b'icp4', b'data'))
    (workdir / 'App.iconset').mkdir()

    with pytest.raises(FileExistsError):
        create_iconset_from_icns(icns)


def test_decode_missing_file(workdir, tmp_path):
    with pytest.raises(FileNotFoundError):
        create_iconset_from_icns(tmp_path / 'Missing.icns')

    assert os.listdir(workdir) == []


def test_decode_wrong_name(workdir, tmp_path):
    icns = write_container(tmp_path / 'App.bin', (b'icp4', b'data'))

    with pytest.raises(NamingException):
        create_iconset_from_icns(icns)

    assert os.listdir(workdir) == []


def test_round_trip(workdir, make_iconset, png_data):
    """Whatever the order of the directory, every icon comes back as it was."""
    files = {
        filename: png_data(4 + idx, color=(0xff - idx, idx, 0x40, 0xff))
        for idx, (filename, _) in enumerate(ICONSET_FILENAMES)
    }
    iconset = make_iconset(files)

    icns_path = create_icns_from_iconset(iconset)
    os.rename(icns_path, workdir / 'Copy.icns')
    create_iconset_from_icns('Copy.icns')

    extracted = workdir / 'Copy.iconset'
    assert sorted(os.listdir(extracted)) == sorted(files)
    for filename, data in files.items():
        assert (extracted / filename).read_bytes() == data


def test_round_trip_large_icon(workdir, make_iconset):
    """Data bigger than the copy buffer goes through untouched."""
    data = os.urandom(3 * 1024 * 1024 + 17)
    iconset = make_iconset({'icon_512x512@2x.png': data})

    create_icns_from_iconset(iconset)
    os.rename('App.icns', 'Large.icns')
    create_iconset_from_icns('Large.icns')

    assert (workdir / 'Large.iconset' / 'icon_512x512@2x.png').read_bytes() == data
