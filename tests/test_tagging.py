"""Tests for the tagger handle and the nltk tagger."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

import pytest

from conftest import FakeTagger
from survey_cloud import tagging
from survey_cloud.tagging import NltkTagger, TaggerHandle, ensure_nltk_data, load_nltk_tagger


def test_ready_handle():
    tagger = FakeTagger()
    handle = TaggerHandle.ready(tagger)
    assert handle.is_ready
    assert handle.get() is tagger


def test_pending_handle_reports_nothing():
    handle = TaggerHandle()
    assert not handle.is_ready
    assert handle.get() is None
    assert handle.wait(timeout=0.01) is None


def test_background_load():
    tagger = FakeTagger()
    with ThreadPoolExecutor(max_workers=1) as pool:
        handle = TaggerHandle.load_in_background(lambda: tagger, pool)
        assert handle.wait(timeout=5) is tagger


def test_failed_load_resolves_to_none():
    def broken():
        raise OSError("no tagger model")

    with ThreadPoolExecutor(max_workers=1) as pool:
        handle = TaggerHandle.load_in_background(broken, pool)
        assert handle.wait(timeout=5) is None
        assert handle.is_ready


def test_wait_ready_awaits_resolution():
    handle = TaggerHandle()
    tagger = FakeTagger()

    async def scenario():
        waiter = asyncio.ensure_future(handle.wait_ready())
        await asyncio.sleep(0)
        assert not waiter.done()
        handle.resolve(tagger)
        return await waiter

    assert asyncio.run(scenario()) is tagger


def _has_tagger_model() -> bool:
    nltk = pytest.importorskip("nltk")
    try:
        nltk.data.find("taggers/averaged_perceptron_tagger_eng")
    except LookupError:
        return False
    return True


def test_nltk_tagger_splits_parts_of_speech():
    if not _has_tagger_model():
        pytest.skip("nltk perceptron tagger model not downloaded")
    tagger = NltkTagger()
    sentence = "the delivery was slow and the staff were friendly"
    assert "delivery" in tagger.nouns(sentence)
    assert "staff" in tagger.nouns(sentence)
    assert "slow" in tagger.adjectives(sentence)
    assert tagger.nouns("") == []


POS_TAGS = {
    "delivery": "NN", "staff": "NNS", "slow": "JJ", "friendlier": "JJR", "was": "VBD", "the": "DT", "and": "CC",
}


class FakeNltk:
    """Stands in for the nltk module: a fixed tag table and an in-memory data path."""

    def __init__(self, installed=()):
        self.installed = set(installed)
        self.downloads = []
        self.tag_calls = []
        self.data = SimpleNamespace(find=self._find)

    def _find(self, path):
        if path not in self.installed:
            raise LookupError(path)
        return path

    def download(self, name, quiet=False):
        self.downloads.append(name)
        self.installed.add(f"taggers/{name}")

    def pos_tag(self, tokens):
        self.tag_calls.append(list(tokens))
        return [(tok, POS_TAGS.get(tok, "NN")) for tok in tokens]


@pytest.fixture
def fake_nltk(monkeypatch):
    fake = FakeNltk()
    monkeypatch.setattr(tagging, "nltk", fake)
    return fake


def test_tagger_splits_adjectives_and_nouns(fake_nltk):
    tagger = NltkTagger()
    sentence = "the delivery was slow and the staff friendlier"
    assert tagger.adjectives(sentence) == ["slow", "friendlier"]
    assert tagger.nouns(sentence) == ["delivery", "staff"]
    # the second call reuses the tags of the first
    assert len(fake_nltk.tag_calls) == 1


def test_tagger_retags_a_new_sentence(fake_nltk):
    tagger = NltkTagger()
    tagger.nouns("slow delivery")
    tagger.nouns("friendlier staff")
    assert len(fake_nltk.tag_calls) == 2
    assert tagger.nouns("") == []
    assert len(fake_nltk.tag_calls) == 2


def test_missing_model_is_downloaded(fake_nltk):
    ensure_nltk_data()
    assert fake_nltk.downloads == ["averaged_perceptron_tagger_eng"]
    ensure_nltk_data()
    assert fake_nltk.downloads == ["averaged_perceptron_tagger_eng"]


def test_installed_model_is_not_downloaded(monkeypatch):
    fake = FakeNltk(installed={"taggers/averaged_perceptron_tagger_eng"})
    monkeypatch.setattr(tagging, "nltk", fake)
    ensure_nltk_data()
    assert fake.downloads == []


def test_load_nltk_tagger_warms_up(fake_nltk):
    tagger = load_nltk_tagger()
    assert isinstance(tagger, NltkTagger)
    assert fake_nltk.tag_calls == [["warm", "up"]]


def test_load_without_nltk_raises(monkeypatch):
    monkeypatch.setattr(tagging, "nltk", None)
    with pytest.raises(RuntimeError):
        load_nltk_tagger()


def test_background_load_without_nltk_resolves_to_none(monkeypatch):
    monkeypatch.setattr(tagging, "nltk", None)
    with ThreadPoolExecutor(max_workers=1) as pool:
        handle = TaggerHandle.load_in_background(executor=pool)
        assert handle.wait(timeout=5) is None
