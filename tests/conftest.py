"""Shared test fixtures."""

import random
from typing import List, Tuple

import pytest

from survey_cloud.config import CloudConfig
from survey_cloud.lexicon import WordFrequency


ADJECTIVES = {
    'great', 'bad', 'slow', 'friendly', 'helpful', 'expensive', 'cheap', 'fast', 'rude', 'clean',
}

FUNCTION_WORDS = {
    'the', 'a', 'an', 'was', 'were', 'is', 'are', 'and', 'but', 'too', 'very', 'i', 'it', 'of',
}


class FakeTagger:
    """Lookup-table tagger: known adjectives are adjectives, other content words are nouns."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def adjectives(self, sentence: str) -> List[str]:
        self.calls.append(sentence)
        return [tok for tok in sentence.split() if tok.lower() in ADJECTIVES]

    def nouns(self, sentence: str) -> List[str]:
        return [
            tok for tok in sentence.split()
            if tok.lower() not in ADJECTIVES and tok.lower() not in FUNCTION_WORDS
        ]


def block_measure(word: str, font_size: int) -> Tuple[float, float]:
    """Monospace-ish extent so layout tests do not depend on a font file."""
    return len(word) * font_size * 0.6, float(font_size)


def make_words(count: int, start: int = 200, step: int = 6) -> List[WordFrequency]:
    names = [
        'delivery', 'staff', 'price', 'packaging', 'app', 'checkout', 'support', 'quality',
        'size', 'color', 'shipping', 'refund', 'website', 'store', 'menu', 'coffee', 'parking',
        'wait', 'music', 'seating', 'portion', 'flavor', 'service', 'manager', 'cashier',
        'selection', 'layout', 'lighting', 'cleanliness', 'location', 'hours', 'signage',
        'booking', 'login', 'search', 'filter', 'receipt', 'discount', 'voucher', 'account',
    ]
    return [WordFrequency(names[i % len(names)] + ("" if i < len(names) else str(i)), max(1, start - i * step))
            for i in range(count)]


@pytest.fixture
def fake_tagger() -> FakeTagger:
    return FakeTagger()


@pytest.fixture
def measure():
    return block_measure


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fast_config() -> CloudConfig:
    return CloudConfig(extraction_delay=0.0)
