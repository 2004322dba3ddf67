from .core import Session, open
from .errors import *
from .formats.flac import BlockType, MetadataBlock
from .formats.picture import Picture
from .formats.streaminfo import StreamInfo
from .formats.vorbis import VorbisComment

__version__ = '1.0.0'
