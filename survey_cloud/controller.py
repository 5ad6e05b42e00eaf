"""
cloud controller: owns the state of one question's word cloud.

extraction is deferred by a short delay after new responses arrive and only
starts once the tagger is ready. every request carries a generation number and
only the newest one is allowed to land, so a slow pass can never overwrite a
fresher one. layouts are cached on their inputs and recomputed when the words,
the removed set, the palette or the canvas size change.
"""

import asyncio
import logging
import random
from functools import partial
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image

from survey_cloud.colors import choose_palette
from survey_cloud.config import DEFAULT_CONFIG, CloudConfig
from survey_cloud.layout import CloudLayout, Measure, place_words
from survey_cloud.lexicon import WordFrequency, build_frequency_table
from survey_cloud.render import PillowMeasurer, render_layout, render_placeholder
from survey_cloud.session import WordListEntry, WordToggleState
from survey_cloud.tagging import TaggerHandle

logger = logging.getLogger(__name__)

GENERATING_MESSAGE = "Generating word cloud..."
NO_RESPONSES_MESSAGE = "No text responses available"
NO_WORDS_MESSAGE = "No words to display"


class CloudController:
    def __init__(
        self,
        tagger: TaggerHandle,
        question_label: str = "",
        config: CloudConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        measure: Optional[Measure] = None,
        font_path: Optional[str] = None,
    ):
        self.tagger = tagger
        self.config = config
        self.rng = rng or random.Random()
        self.font_path = font_path
        self.measure = measure or PillowMeasurer(font_path)
        self.palette: Tuple[str, ...] = choose_palette(question_label)

        self.frequencies: List[WordFrequency] = []
        self.state = WordToggleState()
        self.is_loading = True

        self._responses: Optional[Tuple] = None
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None
        self._layout_key: Optional[tuple] = None
        self._layout: Optional[CloudLayout] = None
        self._closed = False

    # ---------------------------
    # extraction
    # ---------------------------

    @property
    def generation(self) -> int:
        return self._generation

    def submit(self, raw_responses: Iterable) -> "asyncio.Task[bool]":
        """Schedule a deferred extraction on the running loop. The task resolves to True if applied."""
        if self._closed:
            raise RuntimeError("controller is closed")
        self._generation += 1
        self.is_loading = True
        task = asyncio.get_running_loop().create_task(
            self._extract_later(tuple(raw_responses), self._generation)
        )
        self._pending = task
        return task

    async def refresh(self, raw_responses: Iterable) -> bool:
        return await self.submit(raw_responses)

    async def _extract_later(self, responses: Tuple, generation: int) -> bool:
        tagger = await self.tagger.wait_ready()
        await asyncio.sleep(self.config.extraction_delay)
        if generation != self._generation:
            logger.debug("extraction #%d superseded by #%d before it ran", generation, self._generation)
            return False
        frequencies = build_frequency_table(responses, tagger, self.config, self.rng)
        return self.apply(generation, responses, frequencies)

    def apply(self, generation: int, responses: Tuple, frequencies: List[WordFrequency]) -> bool:
        """Install an extraction result unless a newer request was made after it."""
        if generation != self._generation:
            logger.info("discarding stale extraction #%d (latest is #%d)", generation, self._generation)
            return False
        if responses != self._responses:
            # removed words belong to the previous response set
            self.state = WordToggleState()
            self._responses = responses
        self.frequencies = frequencies
        self.is_loading = False
        return True

    def close(self) -> None:
        """Tear down: cancel any extraction still waiting to fire."""
        self._closed = True
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    # ---------------------------
    # word list
    # ---------------------------

    def set_question_label(self, label: str) -> None:
        self.palette = choose_palette(label)

    def toggle(self, word: str) -> None:
        self.state = self.state.toggle(word)

    def available_words(self) -> List[WordFrequency]:
        return self.state.available(self.frequencies)

    def word_list(self) -> Tuple[List[WordListEntry], List[WordListEntry]]:
        available, removed = self.state.buckets(self.frequencies)
        return self._entries(available, False), self._entries(removed, True)

    def _entries(self, words: Sequence[WordFrequency], removed: bool) -> List[WordListEntry]:
        return [WordListEntry(w.word, w.frequency, removed, partial(self.toggle, w.word)) for w in words]

    # ---------------------------
    # layout / render
    # ---------------------------

    def placeholder(self) -> Optional[str]:
        """Message to show instead of a cloud, or None when there is something to draw."""
        if self.is_loading:
            return GENERATING_MESSAGE
        if not self.frequencies:
            return NO_RESPONSES_MESSAGE
        if not self.available_words():
            return NO_WORDS_MESSAGE
        return None

    def layout(self, width: int, height: int) -> CloudLayout:
        available = self.available_words()
        key = (tuple(available), self.palette, width, height)
        if key != self._layout_key or self._layout is None:
            self._layout = place_words(
                available, width, height, self.measure, self.palette, config=self.config, rng=self.rng
            )
            self._layout_key = key
        return self._layout

    def render(self, width: int, height: int) -> Optional[Image.Image]:
        message = self.placeholder()
        if message is not None:
            return render_placeholder(width, height, message, self.font_path)
        return render_layout(self.layout(width, height), self.font_path)
