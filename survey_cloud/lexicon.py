"""
lexical extraction and ranking.
each distinct response is tagged once; its adjectives and singularized nouns
receive the response's weight (occurrences x sample ratio).
"""

import logging
import math
import random
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from wordcloud import STOPWORDS

from survey_cloud.config import DEFAULT_CONFIG, CloudConfig
from survey_cloud.responses import count_responses, sample_responses
from survey_cloud.tagging import Tagger

logger = logging.getLogger(__name__)


# precompiled patterns
NON_WORD_RE = re.compile(r"[^\w\s-]|_")
WHITESPACE_RE = re.compile(r"\s+")
NUMERIC_RE = re.compile(r"^\d+$")


def survey_filler_words() -> set:
    """Words that show up in almost every survey answer without saying anything."""
    return {
        'seem', 'think', 'sho', 'shoe', 'shoes', 'really', 'much', "don't", 'would', "won't",
        "can't", 'could', 'know', 'like', 'make', 'made', "isn't", 'isn', 'about', 'around',
        'way', 'doesn', 'overall', 'wouldn', 'couldn', 'dont', 'little', 'less', 'skip',
        'nothing', 'none', 'meant', 'will', 'now',
        # "don't" loses its apostrophe during cleaning
        'don',
        # adjectives that carry tone but no topic
        'good', 'bad', 'nice', 'great', 'stuff', 'okay', 'ok', 'fine',
        'cool', 'awesome', 'amazing', 'horrible', 'terrible', 'awful',
        'decent', 'solid', 'pretty', 'many',
        'thing', 'things', 'something', 'everything', 'anything',
        'lot', 'lots', 'kind', 'kinda', 'sorta', 'bit',
        'definitely', 'absolutely', 'totally', 'basically', 'honestly',
        'perfect', 'excellent', 'wonderful', 'fantastic', 'best', 'worst',
    }


def build_stopwords() -> frozenset:
    stopwords = set(STOPWORDS)
    stopwords.update(survey_filler_words())
    stopwords.update({'not', 'specified'})
    return frozenset(stopwords)


STOP_WORDS = build_stopwords()


@dataclass(frozen=True)
class WordFrequency:
    word: str
    frequency: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clean_response(text: str) -> str:
    """Drop punctuation except hyphens and collapse whitespace."""
    text = NON_WORD_RE.sub(" ", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def singularize(word: str) -> str:
    if word.endswith("ies") and len(word) > 4:
        return word[:-3] + "y"
    if word.endswith("es") and len(word) > 3 and not word.endswith(("ses", "xes", "zes")):
        return word[:-2]
    if word.endswith("s") and len(word) > 3 and not word.endswith("ss"):
        return word[:-1]
    return word


def is_candidate(word: str) -> bool:
    return len(word) > 2 and word not in STOP_WORDS and not NUMERIC_RE.match(word)


def extract_candidates(text: str, tagger: Optional[Tagger]) -> List[str]:
    """Adjectives plus singularized nouns of one response, filtered. Duplicates are kept."""
    if tagger is None:
        return []
    cleaned = clean_response(text)
    if not cleaned:
        return []
    adjectives = [w.lower() for w in tagger.adjectives(cleaned)]
    nouns = [singularize(w.lower()) for w in tagger.nouns(cleaned)]
    return [w for w in adjectives + nouns if is_candidate(w)]


def accumulate_frequencies(
    responses: Iterable[str],
    weights: Dict[str, float],
    tagger: Optional[Tagger],
    sample_ratio: float = 1.0,
) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    if tagger is None:
        logger.debug("tagger unavailable, no words extracted")
        return totals
    for response in responses:
        weight = weights.get(response, 1) * sample_ratio
        for word in extract_candidates(response, tagger):
            totals[word] = totals.get(word, 0.0) + weight
    return totals


def rank_frequencies(totals: Dict[str, float], limit: int = 30) -> List[WordFrequency]:
    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(
        (WordFrequency(word, round_half_up(freq)) for word, freq in totals.items()),
        key=lambda wf: wf.frequency,
        reverse=True,
    )
    return ranked[:limit]


def build_frequency_table(
    raw_responses: Iterable,
    tagger: Optional[Tagger],
    config: CloudConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> List[WordFrequency]:
    """Raw answers -> top weighted words. Empty when the tagger is not loaded yet."""
    if tagger is None:
        return []
    counts = count_responses(raw_responses)
    if not counts:
        return []
    sampled, sample_ratio = sample_responses(list(counts), config.max_unique_responses, rng)
    totals = accumulate_frequencies(sampled, counts, tagger, sample_ratio)
    ranked = rank_frequencies(totals, config.top_words)
    logger.info("extracted %d candidate words, kept %d", len(totals), len(ranked))
    return ranked
