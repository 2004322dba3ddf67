import logging
from pathlib import Path

from . import images
from .errors import (CoverNotFound, DuplicateVorbisBlock, LengthOverflow, MetadataNotFound, MissingStreamInfo,
                     SessionClosed)
from .formats import flac, streaminfo, vorbis
from .formats.flac import BlockType
from .formats.picture import DEFAULT_COLORS, DEFAULT_DEPTH, DEFAULT_HEIGHT, DEFAULT_WIDTH, Picture, parse_picture
from .tags import TagLog


logger = logging.getLogger(__name__)

REBUILT_TYPES = (BlockType.STREAMINFO, BlockType.VORBIS_COMMENT, BlockType.PICTURE)


def open(path):
    return Session(path)


class Session:
    """An open FLAC file and its pending metadata changes.

    The metadata blocks are scanned once at open. Reads and mutations only
    touch that in-memory snapshot; save() rescans the file and writes the
    rebuilt container, copying the audio frames as they are.
    """

    def __init__(self, path):
        self.path = Path(path)
        self.tags = TagLog()
        self._file = self.path.open('rb')
        try:
            self._load()
        except BaseException:
            self._file.close()
            raise

    def _load(self):
        flac.read_magic(self._file)
        self.blocks = flac.scan_blocks(self._file)

        vorbis_blocks = flac.find_blocks(self.blocks, BlockType.VORBIS_COMMENT)
        if len(vorbis_blocks) > 1:
            raise DuplicateVorbisBlock([block.offset for block in vorbis_blocks])

        self._vorbis_block = vorbis_blocks[0] if vorbis_blocks else None
        if self._vorbis_block:
            payload, offset = self._vorbis_block.payload, self._vorbis_block.offset
            self.vendor = vorbis.parse_vendor(payload, offset)
            self.parsed_comments = vorbis.parse_comments(payload, offset)
        else:
            self.vendor = None
            self.parsed_comments = []

        pictures = flac.find_blocks(self.blocks, BlockType.PICTURE)
        self._cover_block = pictures[0] if pictures else None
        self.parsed_cover = None
        if self._cover_block:
            self.parsed_cover = parse_picture(self._cover_block.payload, self._cover_block.offset)

        self._streaminfo = None
        self.tags.clear()
        self._pending_cover = None
        self._remove_cover = False

        logger.debug('opened %s: %d blocks, %d comments, cover: %s', self.path, len(self.blocks),
                     len(self.parsed_comments), self.parsed_cover)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self._file.close()

    @property
    def closed(self):
        return self._file.closed

    def _check_open(self):
        if self._file.closed:
            raise SessionClosed()

    @property
    def streaminfo(self):
        self._check_open()
        if self._streaminfo is None:
            blocks = flac.find_blocks(self.blocks, BlockType.STREAMINFO)
            if not blocks:
                return None
            self._streaminfo = streaminfo.parse_streaminfo(blocks[0].payload, blocks[0].offset)
        return self._streaminfo

    @property
    def vorbis_offset(self):
        return self._vorbis_block.offset if self._vorbis_block else None

    @property
    def vorbis_length(self):
        return self._vorbis_block.header.length if self._vorbis_block else None

    @property
    def pending(self):
        return list(self.tags)

    @property
    def removed_keys(self):
        return self.tags.removed_keys()

    @property
    def comments(self):
        self._check_open()
        if not len(self.tags):
            return list(self.parsed_comments)
        return self.tags.merge(self.parsed_comments)

    def get(self, key):
        identity = key.lower()
        for comment in self.comments:
            if comment.identity == identity:
                return comment.value
        raise MetadataNotFound(key)

    def has(self, key):
        identity = key.lower()
        return any(comment.identity == identity for comment in self.comments)

    def set(self, key, value):
        self._check_open()
        self.tags.set(vorbis.validate_key(key), str(value))

    def remove(self, key, ignore_if_missing=False):
        self._check_open()
        if self.has(key):
            self.tags.remove(key)
        elif not ignore_if_missing:
            raise MetadataNotFound(key)

    @property
    def cover(self):
        self._check_open()
        if self._pending_cover:
            return self._pending_cover
        if self._remove_cover:
            return None
        return self.parsed_cover

    def set_cover(self, data, mime=None, description='', width=None, height=None, depth=None, colors=None):
        self._check_open()
        if mime is None:
            info = images.sniff(data)
        else:
            info = images.ImageInfo(mime, DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_DEPTH, DEFAULT_COLORS)

        picture = Picture(
            bytes(data), info.mime, description,
            width if width is not None else info.width,
            height if height is not None else info.height,
            depth if depth is not None else info.depth,
            colors if colors is not None else info.colors,
        ).validate()
        size = len(picture.build())
        if size > flac.MAX_BLOCK_LENGTH:
            raise LengthOverflow(size)

        self._pending_cover = picture
        logger.debug('staged cover %r', self._pending_cover)

    def set_cover_from_image(self, image, data=None, description=''):
        self._check_open()
        if data is None:
            format = image.format or 'PNG'
            data = images.encode(image, format)
            info = images.describe(image, format)
        else:
            # MIME and dimensions describe the embedded bytes, not the image object.
            info = images.sniff(data)
        self.set_cover(data, info.mime, description, info.width, info.height, info.depth, info.colors)

    def set_cover_from_path(self, path, description=''):
        self._check_open()
        self.set_cover(Path(path).read_bytes(), description=description)

    def remove_cover(self, ignore_if_missing=False):
        self._check_open()
        if self.cover is None:
            if not ignore_if_missing:
                raise CoverNotFound()
            return

        self._pending_cover = None
        self._remove_cover = True

    def build(self):
        self._check_open()
        flac.read_magic(self._file)
        blocks = flac.scan_blocks(self._file)

        streaminfos = flac.find_blocks(blocks, BlockType.STREAMINFO)
        if not streaminfos:
            raise MissingStreamInfo()
        if len(streaminfos) > 1:
            logger.warning('%s: dropping %d extra STREAMINFO blocks', self.path, len(streaminfos) - 1)

        # Each entry is either an original MetadataBlock or a (type, payload) pair.
        out = [streaminfos[0]]

        vorbis_blocks = flac.find_blocks(blocks, BlockType.VORBIS_COMMENT)
        if len(vorbis_blocks) > 1:
            raise DuplicateVorbisBlock([block.offset for block in vorbis_blocks])
        if len(self.tags):
            comments = self.tags.merge(self.parsed_comments)
            if comments:
                out.append((BlockType.VORBIS_COMMENT, vorbis.build_comments(comments)))
        elif vorbis_blocks:
            out.append(vorbis_blocks[0])

        pictures = flac.find_blocks(blocks, BlockType.PICTURE)
        if len(pictures) > 1:
            logger.warning('%s: dropping %d extra PICTURE blocks', self.path, len(pictures) - 1)
        if self._pending_cover:
            out.append((BlockType.PICTURE, self._pending_cover.build()))
        elif pictures and not self._remove_cover:
            out.append(pictures[0])

        out.extend(block for block in blocks if block.block_type not in REBUILT_TYPES)

        metadata = []
        for i, item in enumerate(out):
            is_last = i == len(out) - 1
            if isinstance(item, flac.MetadataBlock):
                metadata.append(item.with_last(is_last))
            else:
                metadata.append(flac.build_block(*item, is_last=is_last))

        end = flac.metadata_end(blocks)
        self._file.seek(end, 0)
        audio = self._file.read()

        logger.debug('rebuilt %d metadata blocks, audio starts at %d (%d bytes)', len(out), end, len(audio))
        return flac.MAGIC + b''.join(metadata) + audio

    def save(self, path=None):
        data = self.build()
        target = Path(path) if path is not None else self.path
        overwrite = target.resolve() == self.path.resolve()

        if overwrite:
            self._file.close()
        try:
            with target.open('wb') as f:
                f.write(data)
        finally:
            if overwrite:
                self._file = self.path.open('rb')

        logger.info('saved %s (%d bytes)', target, len(data))

        if overwrite:
            self._load()
        return target
