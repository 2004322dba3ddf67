import io
import logging
from collections import namedtuple

from PIL import Image, UnidentifiedImageError

from .errors import ImageTooSmall, UnsupportedImageFormat


logger = logging.getLogger(__name__)

# Minimum number of bytes needed before trusting content sniffing.
SNIFF_WINDOW = 512

MODE_DEPTHS = {
    '1': 1,
    'L': 8,
    'P': 8,
    'LA': 16,
    'I;16': 16,
    'RGB': 24,
    'YCbCr': 24,
    'LAB': 24,
    'HSV': 24,
    'RGBA': 32,
    'RGBX': 32,
    'CMYK': 32,
    'I': 32,
    'F': 32,
}

ImageInfo = namedtuple('ImageInfo', 'mime width height depth colors')


def describe(image, format=None):
    format = format or image.format
    Image.init()
    mime = Image.MIME.get(format or '')
    if not mime:
        raise UnsupportedImageFormat(format or 'unknown')

    colors = 0
    if image.mode == 'P':
        palette = image.getpalette() or []
        colors = len(palette) // 3

    depth = MODE_DEPTHS.get(image.mode, 8 * len(image.getbands()))
    return ImageInfo(mime, image.width, image.height, depth, colors)


def sniff(data):
    if len(data) < SNIFF_WINDOW:
        raise ImageTooSmall(len(data), SNIFF_WINDOW)

    try:
        with Image.open(io.BytesIO(data)) as image:
            info = describe(image)
    except UnidentifiedImageError as e:
        raise UnsupportedImageFormat('content not recognized') from e

    logger.debug('sniffed %s %dx%d', info.mime, info.width, info.height)
    return info


def encode(image, format=None):
    buf = io.BytesIO()
    image.save(buf, format=format or image.format or 'PNG')
    return buf.getvalue()
