"""Test the tag merge engine"""

from flacmeta.formats.vorbis import VorbisComment
from flacmeta.tags import REMOVE, SET, TagLog, TagOp, merge

PARSED = [VorbisComment('Title', 'Old'), VorbisComment('Artist', 'Someone'), VorbisComment('Album', 'Record')]


class TestMerge:
    """Test folding pending changes over parsed comments"""

    def test_no_changes(self):
        assert merge(PARSED, []) == PARSED

    def test_update_keeps_position(self):
        result = merge(PARSED, [TagOp(SET, 'TITLE', 'New')])
        assert result == [('TITLE', 'New'), ('Artist', 'Someone'), ('Album', 'Record')]

    def test_new_keys_are_appended_in_order(self):
        result = merge(PARSED, [TagOp(SET, 'Genre', 'Rock'), TagOp(SET, 'Date', '2001')])
        assert [c.key for c in result] == ['Title', 'Artist', 'Album', 'Genre', 'Date']

    def test_last_write_wins(self):
        result = merge([], [TagOp(SET, 'Artist', 'A'), TagOp(SET, 'Artist', 'B')])
        assert result == [('Artist', 'B')]

    def test_remove_is_case_insensitive(self):
        result = merge(PARSED, [TagOp(REMOVE, 'artist', None)])
        assert [c.key for c in result] == ['Title', 'Album']

    def test_set_after_remove_appends(self):
        result = merge(PARSED, [TagOp(REMOVE, 'Title', None), TagOp(SET, 'title', 'Again')])
        assert result[-1] == ('title', 'Again')
        assert len(result) == 3

    def test_remove_after_set(self):
        result = merge(PARSED, [TagOp(SET, 'Genre', 'Rock'), TagOp(REMOVE, 'GENRE', None)])
        assert result == PARSED

    def test_duplicate_parsed_keys_collapse(self):
        parsed = [VorbisComment('ARTIST', 'A'), VorbisComment('TITLE', 'T'), VorbisComment('artist', 'B')]
        assert merge(parsed, [TagOp(SET, 'X', '1')]) == [('artist', 'B'), ('TITLE', 'T'), ('X', '1')]

    def test_deterministic(self):
        ops = [TagOp(SET, k, v) for k, v in [('b', '1'), ('a', '2'), ('c', '3'), ('A', '4')]]
        assert merge(PARSED, ops) == merge(PARSED, ops)

    def test_does_not_mutate_input(self):
        parsed = list(PARSED)
        merge(parsed, [TagOp(REMOVE, 'Title', None)])
        assert parsed == PARSED


class TestTagLog:
    """Test the pending operation log"""

    def test_log(self):
        log = TagLog()
        log.set('Artist', 'A')
        log.remove('album')
        assert len(log) == 2
        assert list(log) == [TagOp(SET, 'Artist', 'A'), TagOp(REMOVE, 'album', None)]
        assert log.merge(PARSED) == [('Title', 'Old'), ('Artist', 'A')]

    def test_removed_keys(self):
        log = TagLog()
        log.remove('Artist')
        log.remove('Title')
        log.set('TITLE', 'back')
        assert log.removed_keys() == {'artist'}

    def test_clear(self):
        log = TagLog()
        log.set('A', 'b')
        log.clear()
        assert not len(log)
