import construct
import logging
from collections import namedtuple
from construct import *

from ..errors import InvalidCommentKey, MalformedComment, UnexpectedEndOfBlock, VendorLengthTooShort


logger = logging.getLogger(__name__)

VENDOR = 'flacmeta 1.0.0'

VorbisCommentFormat = Struct(
    'vendor' / Prefixed(Int32ul, GreedyBytes),
    'comments' / PrefixedArray(Int32ul, Prefixed(Int32ul, GreedyBytes)),
)


class VorbisComment(namedtuple('VorbisComment', 'key value')):
    __slots__ = ()

    @property
    def identity(self):
        return self.key.lower()

    def __str__(self):
        return f'{self.key}={self.value}'


def validate_key(key):
    # Field names are printable ASCII 0x20-0x7D, minus '='.
    if not key or any(c == '=' or not ' ' <= c <= '}' for c in key):
        raise InvalidCommentKey(key)
    return key


def _decode_text(raw):
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise MalformedComment(raw, 'invalid UTF-8') from e


def split_comment(text):
    key, sep, value = text.partition('=')
    if not sep:
        raise MalformedComment(text)
    return VorbisComment(key, value)


def _parse(payload, offset):
    if len(payload) < 8:
        raise VendorLengthTooShort(offset=offset, expected=8, found=len(payload))

    vendor_length = Int32ul.parse(payload[:4])
    if len(payload) < 8 + vendor_length:
        raise VendorLengthTooShort(offset=offset, expected=8 + vendor_length, found=len(payload))

    try:
        return VorbisCommentFormat.parse(payload)
    except construct.StreamError as e:
        raise UnexpectedEndOfBlock(offset=offset, detail=str(e)) from e


def parse_vendor(payload, offset=None):
    return _decode_text(_parse(payload, offset).vendor)


def parse_comments(payload, offset=None):
    comments = [split_comment(_decode_text(raw)) for raw in _parse(payload, offset).comments]
    logger.debug('parsed %d vorbis comments', len(comments))
    return comments


def build_comments(comments, vendor=VENDOR):
    return VorbisCommentFormat.build({
        'vendor': vendor.encode('utf-8'),
        'comments': [f'{key}={value}'.encode('utf-8') for key, value in comments],
    })
