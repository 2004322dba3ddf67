"""Test PICTURE blocks and image inspection"""

import pytest
from PIL import Image

from flacmeta import images
from flacmeta.errors import ImageTooSmall, InvalidCoverField, UnexpectedEndOfBlock, UnsupportedImageFormat
from flacmeta.formats.picture import FRONT_COVER, Picture, PictureFormat, build_picture, parse_picture


class TestPictureBlock:
    """Test building and parsing the PICTURE payload"""

    def test_build_layout(self, jpeg_like):
        payload = build_picture(jpeg_like, 'image/jpeg')
        assert payload[0:4] == b'\x00\x00\x00\x03'
        assert payload[4:8] == b'\x00\x00\x00\x0a'
        assert payload[8:18] == b'image/jpeg'
        assert payload[18:22] == b'\x00\x00\x00\x00'
        assert payload.endswith(jpeg_like)
        assert len(payload) == 4 + 4 + 10 + 4 + 0 + 16 + 4 + 1000

    def test_defaults(self, jpeg_like):
        parsed = PictureFormat.parse(build_picture(jpeg_like, 'image/jpeg'))
        assert parsed.picture_type == FRONT_COVER
        assert (parsed.width, parsed.height, parsed.depth, parsed.colors) == (600, 600, 24, 0)
        assert parsed.data == jpeg_like

    def test_parse(self):
        picture = parse_picture(build_picture(b'data', 'image/png', 'Front', 10, 20, 32, 0))
        assert picture.mime == 'image/png'
        assert picture.description == 'Front'
        assert (picture.width, picture.height, picture.depth) == (10, 20, 32)
        assert picture.data == b'data'

    def test_parse_rebuild(self):
        payload = build_picture(b'\x89PNG', 'image/png', 'Ünïcode', 1, 2, 8, 16)
        assert parse_picture(payload).build() == payload

    def test_parse_truncated(self):
        payload = build_picture(b'x' * 100, 'image/png')[:-10]
        with pytest.raises(UnexpectedEndOfBlock):
            parse_picture(payload, offset=100)

    def test_validate(self):
        picture = Picture(b'x', 'image/png', width=0xFFFFFFFF)
        assert picture.validate() is picture

    def test_validate_rejects_unencodable_fields(self):
        with pytest.raises(UnsupportedImageFormat):
            Picture(b'x', 'image/p\u00f1g').validate()
        with pytest.raises(InvalidCoverField):
            Picture(b'x', 'image/png', height=-1).validate()
        with pytest.raises(InvalidCoverField):
            Picture(b'x', 'image/png', depth=24.0).validate()

    def test_picture_type_kept(self):
        picture = Picture(b'x', 'image/png', picture_type=4)
        assert parse_picture(picture.build()).picture_type == 4


class TestImages:
    """Test content sniffing with Pillow"""

    def test_sniff_png(self, png_bytes):
        info = images.sniff(png_bytes)
        assert info.mime == 'image/png'
        assert (info.width, info.height) == (32, 16)
        assert info.depth == 24
        assert info.colors == 0

    def test_too_small(self):
        with pytest.raises(ImageTooSmall) as e:
            images.sniff(b'\x89PNG' + bytes(100))
        assert e.value.size == 104

    def test_unrecognized(self):
        with pytest.raises(UnsupportedImageFormat):
            images.sniff(b'not an image at all. ' * 50)

    def test_describe_palette(self):
        image = Image.new('P', (4, 4))
        image.putpalette([0, 0, 0, 255, 255, 255] * 8)
        info = images.describe(image, 'PNG')
        assert info.mime == 'image/png'
        assert info.depth == 8
        assert 0 < info.colors <= 256

    def test_describe_needs_format(self):
        with pytest.raises(UnsupportedImageFormat):
            images.describe(Image.new('RGB', (2, 2)))

    def test_encode(self):
        data = images.encode(Image.new('RGBA', (3, 3)))
        assert data.startswith(b'\x89PNG')
