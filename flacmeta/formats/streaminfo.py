import construct
from construct import *

from ..errors import UnexpectedEndOfBlock


StreamInfoFormat = Struct(
    'min_blocksize' / Int16ub,
    'max_blocksize' / Int16ub,
    'min_framesize' / Int24ub,
    'max_framesize' / Int24ub,
    'audio' / BitStruct(
        'sample_rate' / BitsInteger(20),
        'channels' / BitsInteger(3),
        'bits_per_sample' / BitsInteger(5),
        'total_samples' / BitsInteger(36),
    ),
    'md5' / Bytes(16),
)


class StreamInfo:
    def __init__(self, parsed):
        self.min_blocksize = parsed.min_blocksize
        self.max_blocksize = parsed.max_blocksize
        self.min_framesize = parsed.min_framesize
        self.max_framesize = parsed.max_framesize
        self.sample_rate = parsed.audio.sample_rate
        # Channels and bits per sample are stored minus one.
        self.channels = parsed.audio.channels + 1
        self.bits_per_sample = parsed.audio.bits_per_sample + 1
        self.total_samples = parsed.audio.total_samples
        self.md5 = parsed.md5

    @property
    def duration(self):
        if not self.sample_rate:
            return 0.0
        return self.total_samples / self.sample_rate

    def as_dict(self):
        return {
            'min_blocksize': self.min_blocksize,
            'max_blocksize': self.max_blocksize,
            'min_framesize': self.min_framesize,
            'max_framesize': self.max_framesize,
            'sample_rate': self.sample_rate,
            'channels': self.channels,
            'bits_per_sample': self.bits_per_sample,
            'total_samples': self.total_samples,
            'duration': self.duration,
            'md5': self.md5.hex(),
        }


def parse_streaminfo(payload, offset=None):
    try:
        return StreamInfo(StreamInfoFormat.parse(payload))
    except construct.StreamError as e:
        raise UnexpectedEndOfBlock(offset=offset, detail=str(e)) from e


def build_streaminfo(sample_rate, channels, bits_per_sample, total_samples, md5=bytes(16),
                     min_blocksize=4096, max_blocksize=4096, min_framesize=0, max_framesize=0):
    return StreamInfoFormat.build({
        'min_blocksize': min_blocksize,
        'max_blocksize': max_blocksize,
        'min_framesize': min_framesize,
        'max_framesize': max_framesize,
        'audio': {
            'sample_rate': sample_rate,
            'channels': channels - 1,
            'bits_per_sample': bits_per_sample - 1,
            'total_samples': total_samples,
        },
        'md5': md5,
    })
