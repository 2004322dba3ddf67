import construct
from construct import *

from ..errors import InvalidCoverField, UnexpectedEndOfBlock, UnsupportedImageFormat


FRONT_COVER = 3
MAX_FIELD = 0xFFFFFFFF

# Placeholders used when the caller supplies a MIME type without dimensions.
DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 600
DEFAULT_DEPTH = 24
DEFAULT_COLORS = 0

PictureFormat = Struct(
    'picture_type' / Int32ub,
    'mime' / Prefixed(Int32ub, GreedyBytes),
    'description' / Prefixed(Int32ub, GreedyBytes),
    'width' / Int32ub,
    'height' / Int32ub,
    'depth' / Int32ub,
    'colors' / Int32ub,
    'data' / Prefixed(Int32ub, GreedyBytes),
)


class Picture:
    def __init__(self, data, mime, description='', width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT,
                 depth=DEFAULT_DEPTH, colors=DEFAULT_COLORS, picture_type=FRONT_COVER):
        self.picture_type = picture_type
        self.mime = mime
        self.description = description
        self.width = width
        self.height = height
        self.depth = depth
        self.colors = colors
        self.data = data

    def validate(self):
        try:
            self.mime.encode('ascii')
        except UnicodeEncodeError as e:
            raise UnsupportedImageFormat(f'MIME type must be ASCII: {self.mime!r}') from e

        for field in ('picture_type', 'width', 'height', 'depth', 'colors'):
            value = getattr(self, field)
            if not isinstance(value, int) or not 0 <= value <= MAX_FIELD:
                raise InvalidCoverField(field, value)
        return self

    def build(self):
        return PictureFormat.build({
            'picture_type': self.picture_type,
            'mime': self.mime.encode('ascii'),
            'description': self.description.encode('utf-8'),
            'width': self.width,
            'height': self.height,
            'depth': self.depth,
            'colors': self.colors,
            'data': self.data,
        })

    def __repr__(self):
        return (f'<Picture type={self.picture_type} {self.mime} {self.width}x{self.height}x{self.depth}'
                f' {len(self.data)} bytes>')


def build_picture(data, mime, description='', width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT,
                  depth=DEFAULT_DEPTH, colors=DEFAULT_COLORS):
    return Picture(data, mime, description, width, height, depth, colors).build()


def parse_picture(payload, offset=None):
    try:
        parsed = PictureFormat.parse(payload)
    except construct.StreamError as e:
        raise UnexpectedEndOfBlock(offset=offset, detail=str(e)) from e

    return Picture(parsed.data, parsed.mime.decode('ascii', 'replace'),
                   parsed.description.decode('utf-8', 'replace'), parsed.width, parsed.height,
                   parsed.depth, parsed.colors, parsed.picture_type)
