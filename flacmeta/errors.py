class FlacError(Exception):
    pass


class _OffsetError(FlacError):
    what = 'data'

    def __init__(self, offset=None, expected=None, found=None, detail=None):
        self.offset = offset
        self.expected = expected
        self.found = found
        self.detail = detail
        super().__init__(self._message())

    def _message(self):
        message = f'truncated {self.what}'
        if self.offset is not None:
            message += f' at offset {self.offset}'
        if self.expected is not None:
            message += f': expected {self.expected} bytes, found {self.found}'
        if self.detail:
            message += f' ({self.detail})'
        return message


class NotAFlacFile(FlacError):
    def __init__(self, found):
        self.found = found
        super().__init__(f"invalid FLAC file: expected b'fLaC' marker, found {found!r}")


class TruncatedHeader(_OffsetError):
    what = 'block header'


class TruncatedBlock(_OffsetError):
    what = 'metadata block'


class UnexpectedEndOfBlock(_OffsetError):
    what = 'block payload'

    def _message(self):
        return 'unexpected end of block: ' + super()._message()


class VendorLengthTooShort(UnexpectedEndOfBlock):
    what = 'vorbis comment block'


class LengthOverflow(FlacError):
    def __init__(self, length):
        self.length = length
        super().__init__(f'block length {length} does not fit in 24 bits')


class MissingStreamInfo(FlacError):
    def __init__(self):
        super().__init__('STREAMINFO block is mandatory but none was found')


class MalformedComment(FlacError):
    def __init__(self, comment, reason="no '=' found"):
        self.comment = comment
        super().__init__(f'malformed comment ({reason}): {comment!r}')


class DuplicateVorbisBlock(FlacError):
    def __init__(self, offsets):
        self.offsets = offsets
        super().__init__('found {0} VORBIS_COMMENT blocks (at offsets {1}), expected at most one'.format(
            len(offsets), ', '.join(str(o) for o in offsets)))


class MetadataNotFound(FlacError, KeyError):
    def __init__(self, key):
        self.key = key
        super().__init__(f"no metadata found with key '{key}'")

    def __str__(self):
        return self.args[0]


class CoverNotFound(FlacError):
    def __init__(self):
        super().__init__('no cover picture to remove')


class InvalidCommentKey(FlacError, ValueError):
    def __init__(self, key):
        self.key = key
        super().__init__(f'invalid comment key: {key!r}')


class ImageTooSmall(FlacError):
    def __init__(self, size, minimum):
        self.size = size
        self.minimum = minimum
        super().__init__(f'unable to detect content type: image is {size} bytes, need at least {minimum}')


class UnsupportedImageFormat(FlacError):
    def __init__(self, detail):
        super().__init__(f'unsupported image format: {detail}')


class SessionClosed(FlacError):
    def __init__(self):
        super().__init__('operation on a closed session')


class InvalidCoverField(FlacError, ValueError):
    def __init__(self, field, value):
        self.field = field
        self.value = value
        super().__init__(f'cover {field} {value!r} does not fit in an unsigned 32-bit field')
