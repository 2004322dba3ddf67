import logging
from collections import namedtuple

from .formats.vorbis import VorbisComment


logger = logging.getLogger(__name__)

SET = 'set'
REMOVE = 'remove'

TagOp = namedtuple('TagOp', 'action key value')


class TagLog:
    """Ordered log of pending comment changes.

    Nothing is applied until merge() folds the log over the comments parsed
    at open. SET covers both adding and updating a key.
    """

    def __init__(self):
        self.ops = []

    def __len__(self):
        return len(self.ops)

    def __iter__(self):
        return iter(self.ops)

    def set(self, key, value):
        self.ops.append(TagOp(SET, key, value))

    def remove(self, key):
        self.ops.append(TagOp(REMOVE, key, None))

    def clear(self):
        self.ops = []

    def removed_keys(self):
        last = {}
        for op in self.ops:
            last[op.key.lower()] = op.action
        return {key for key, action in last.items() if action == REMOVE}

    def merge(self, parsed):
        return merge(parsed, self.ops)


def merge(parsed, ops):
    # Keyed by lower-cased key; dicts keep insertion order, so surviving
    # parsed keys stay in place and new keys are appended.
    merged = {}
    for comment in parsed:
        comment = VorbisComment(*comment)
        merged[comment.identity] = comment

    for op in ops:
        identity = op.key.lower()
        if op.action == SET:
            merged[identity] = VorbisComment(op.key, op.value)
        else:
            merged.pop(identity, None)

    logger.debug('merged %d parsed comments and %d pending changes into %d', len(parsed), len(ops),
                 len(merged))
    return list(merged.values())
