import enum
import logging
from collections import namedtuple
from construct import *

from ..errors import LengthOverflow, NotAFlacFile, TruncatedBlock, TruncatedHeader


logger = logging.getLogger(__name__)

MAGIC = b'fLaC'
HEADER_SIZE = 4
MAX_BLOCK_LENGTH = 0xFFFFFF


class BlockType(enum.IntEnum):
    STREAMINFO = 0
    PADDING = 1
    APPLICATION = 2
    SEEKTABLE = 3
    VORBIS_COMMENT = 4
    CUESHEET = 5
    PICTURE = 6
    INVALID = 127

    @classmethod
    def from_code(cls, code):
        try:
            return cls(code)
        except ValueError:
            return cls.INVALID


BlockHeaderFormat = Struct(
    'info' / BitStruct(
        'last' / Flag,
        'block_type' / BitsInteger(7),
    ),
    'size' / Int24ub,
)


class BlockHeader(namedtuple('BlockHeader', 'block_type type_code is_last length raw')):
    __slots__ = ()

    def __str__(self):
        last = ', last' if self.is_last else ''
        return f'{self.block_type.name} ({self.length} bytes{last})'


def decode_header(data, offset=None):
    if len(data) < HEADER_SIZE:
        raise TruncatedHeader(offset=offset, expected=HEADER_SIZE, found=len(data))

    raw = bytes(data[:HEADER_SIZE])
    header = BlockHeaderFormat.parse(raw)
    code = header.info.block_type
    return BlockHeader(BlockType.from_code(code), code, header.info.last, header.size, raw)


def encode_header(block_type, length, is_last=False):
    if length > MAX_BLOCK_LENGTH:
        raise LengthOverflow(length)

    return BlockHeaderFormat.build({
        'info': {'last': bool(is_last), 'block_type': int(block_type)},
        'size': length,
    })


class MetadataBlock:
    __slots__ = ('_offset', '_header', '_payload')

    def __init__(self, offset, header, payload):
        self._offset = offset
        self._header = header
        self._payload = bytes(payload)

    @property
    def offset(self):
        return self._offset

    @property
    def header(self):
        return self._header

    @property
    def payload(self):
        return self._payload

    @property
    def block_type(self):
        return self._header.block_type

    @property
    def is_last(self):
        return self._header.is_last

    @property
    def size(self):
        return HEADER_SIZE + self._header.length

    def with_last(self, is_last):
        # Only the terminal bit changes; the type code and length go out as read.
        raw = self._header.raw
        first = (raw[0] | 0x80) if is_last else (raw[0] & 0x7F)
        return bytes([first]) + raw[1:] + self._payload

    def __repr__(self):
        return f'<MetadataBlock {self._header} at {self._offset}>'


def read_magic(f):
    f.seek(0, 0)
    magic = f.read(len(MAGIC))
    if magic != MAGIC:
        raise NotAFlacFile(magic)


def scan_blocks(f):
    blocks = []
    offset = len(MAGIC)

    while True:
        f.seek(offset, 0)
        header = decode_header(f.read(HEADER_SIZE), offset)
        payload = f.read(header.length)
        if len(payload) < header.length:
            raise TruncatedBlock(offset=offset, expected=header.length, found=len(payload))

        logger.debug('block at %d: %s', offset, header)
        blocks.append(MetadataBlock(offset, header, payload))
        offset += HEADER_SIZE + header.length

        if header.is_last:
            return blocks


def metadata_end(blocks):
    return len(MAGIC) + sum(block.size for block in blocks)


def find_blocks(blocks, block_type):
    return [block for block in blocks if block.block_type == block_type]


def build_block(block_type, payload, is_last=False):
    return encode_header(block_type, len(payload), is_last) + payload
