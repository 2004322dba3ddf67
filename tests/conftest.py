"""Fixtures that build small synthetic FLAC files"""

import io
import os

import pytest
from PIL import Image

from flacmeta.formats.flac import MAGIC, BlockType, build_block
from flacmeta.formats.picture import build_picture
from flacmeta.formats.streaminfo import build_streaminfo
from flacmeta.formats.vorbis import build_comments

AUDIO = bytes([0xAA, 0xBB, 0xCC])


@pytest.fixture
def audio():
    return AUDIO


@pytest.fixture
def streaminfo_payload():
    return build_streaminfo(44100, 2, 16, 441000, md5=bytes(range(16)))


@pytest.fixture
def make_flac():
    """Join (type, payload) pairs into container bytes, marking the final block as last"""
    def make(blocks, audio=AUDIO):
        out = [MAGIC]
        for i, (block_type, payload) in enumerate(blocks):
            out.append(build_block(block_type, payload, i == len(blocks) - 1))
        return b''.join(out) + audio
    return make


@pytest.fixture
def write_flac(tmp_path, make_flac):
    def write(blocks, audio=AUDIO, name='test.flac'):
        path = tmp_path / name
        path.write_bytes(make_flac(blocks, audio))
        return path
    return write


@pytest.fixture
def tagged_flac(write_flac, streaminfo_payload):
    """STREAMINFO + VORBIS_COMMENT(Title=Old, Artist=Someone) + audio"""
    return write_flac([
        (BlockType.STREAMINFO, streaminfo_payload),
        (BlockType.VORBIS_COMMENT, build_comments([('Title', 'Old'), ('Artist', 'Someone')], vendor='test')),
    ])


@pytest.fixture
def full_flac(write_flac, streaminfo_payload):
    """Every block kind the rebuilder distinguishes, in canonical order"""
    return write_flac([
        (BlockType.STREAMINFO, streaminfo_payload),
        (BlockType.VORBIS_COMMENT, build_comments([('TITLE', 'Song'), ('ALBUM', 'Record')], vendor='test')),
        (BlockType.PICTURE, build_picture(b'\xff\xd8' + bytes(100), 'image/jpeg')),
        (BlockType.SEEKTABLE, bytes(18)),
        (BlockType.PADDING, bytes(64)),
    ], audio=AUDIO * 10)


@pytest.fixture
def bare_flac(write_flac, streaminfo_payload):
    """STREAMINFO only"""
    return write_flac([(BlockType.STREAMINFO, streaminfo_payload)])


@pytest.fixture
def jpeg_like():
    return b'\xff\xd8\xff\xe0' + bytes(996)


@pytest.fixture
def png_bytes():
    # Random pixels keep the encoded PNG well above the sniff window.
    image = Image.frombytes('RGB', (32, 16), os.urandom(32 * 16 * 3))
    buf = io.BytesIO()
    image.save(buf, format='PNG')
    return buf.getvalue()
