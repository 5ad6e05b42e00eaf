"""Tests for removed-word bookkeeping."""

from conftest import make_words
from survey_cloud.session import WordToggleState


def test_toggle_returns_new_state():
    state = WordToggleState()
    removed = state.toggle("staff")
    assert removed is not state
    assert not state.is_removed("staff")
    assert removed.is_removed("staff")


def test_remove_then_restore_restores_buckets():
    words = make_words(6)
    state = WordToggleState().remove("price")
    before = state.buckets(words)
    after = state.toggle("staff").toggle("staff").buckets(words)
    assert [set(w.word for w in bucket) for bucket in after] == [set(w.word for w in bucket) for bucket in before]


def test_buckets_keep_rank_order():
    words = make_words(5)
    state = WordToggleState().remove("packaging").remove("staff")
    available, removed = state.buckets(words)
    assert [w.word for w in available] == ["delivery", "price", "app"]
    assert [w.word for w in removed] == ["staff", "packaging"]


def test_restore_unknown_word_is_noop():
    state = WordToggleState()
    assert state.restore("missing") == state
