"""
part-of-speech tagging capability.

the extractor only needs two operations over a sentence (adjectives, nouns), so
any object with those methods works. the nltk perceptron tagger is the default
and is loaded off the main thread behind a TaggerHandle, which callers poll
(`get`) or await (`wait_ready`) instead of checking a global flag.
"""

import asyncio
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

try:
    import nltk
except ImportError:
    nltk = None


NLTK_RESOURCES = (
    ("taggers/averaged_perceptron_tagger_eng", "averaged_perceptron_tagger_eng"),
)


class Tagger(Protocol):
    def adjectives(self, sentence: str) -> List[str]: ...

    def nouns(self, sentence: str) -> List[str]: ...


def ensure_nltk_data() -> None:
    """Download the tagger model if it is not already on the nltk data path."""
    for path, name in NLTK_RESOURCES:
        try:
            nltk.data.find(path)
        except LookupError:
            logger.info("downloading nltk %s", name)
            nltk.download(name, quiet=True)


class NltkTagger:
    """Tagger backed by nltk.pos_tag; adjectives are JJ*, nouns are NN*."""

    def __init__(self) -> None:
        self._last: Tuple[str, List[Tuple[str, str]]] = ("", [])

    def _tag(self, sentence: str) -> List[Tuple[str, str]]:
        # adjectives() and nouns() are called back to back on the same sentence
        last = self._last
        if sentence != last[0]:
            tokens = sentence.split()
            last = (sentence, nltk.pos_tag(tokens) if tokens else [])
            self._last = last
        return last[1]

    def adjectives(self, sentence: str) -> List[str]:
        return [tok for tok, tag in self._tag(sentence) if tag.startswith("JJ")]

    def nouns(self, sentence: str) -> List[str]:
        return [tok for tok, tag in self._tag(sentence) if tag.startswith("NN")]


def load_nltk_tagger() -> NltkTagger:
    if nltk is None:
        raise RuntimeError("nltk is not installed; run `pip install nltk`")
    ensure_nltk_data()
    tagger = NltkTagger()
    tagger.nouns("warm up")
    return tagger


def _load_or_none(loader: Callable[[], Tagger]) -> Optional[Tagger]:
    try:
        return loader()
    except Exception as e:
        logger.warning("tagger failed to load, word clouds will stay empty: %s", e)
        return None


class TaggerHandle:
    """
    Readiness wrapper around a tagger that may still be loading.
    `get()` never blocks and returns None until the tagger is usable.
    """

    def __init__(self, future: Optional[Future] = None):
        self._future: Future = future if future is not None else Future()

    @classmethod
    def ready(cls, tagger: Optional[Tagger]) -> "TaggerHandle":
        handle = cls()
        handle.resolve(tagger)
        return handle

    @classmethod
    def load_in_background(
        cls,
        loader: Callable[[], Tagger] = load_nltk_tagger,
        executor: Optional[Executor] = None,
    ) -> "TaggerHandle":
        executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="tagger-loader")
        return cls(executor.submit(_load_or_none, loader))

    def resolve(self, tagger: Optional[Tagger]) -> None:
        self._future.set_result(tagger)

    @property
    def is_ready(self) -> bool:
        return self._future.done() and not self._future.cancelled()

    def get(self) -> Optional[Tagger]:
        if not self.is_ready:
            return None
        return self._future.result()

    def wait(self, timeout: Optional[float] = None) -> Optional[Tagger]:
        wait_futures([self._future], timeout=timeout)
        return self.get()

    async def wait_ready(self) -> Optional[Tagger]:
        if not self._future.done():
            # shield so a cancelled waiter does not cancel the shared load
            await asyncio.shield(asyncio.wrap_future(self._future))
        return self.get()
