"""
response normalizer, deduplicator and sampler.
identical answers are collapsed into one entry with an occurrence count so each
distinct answer is tagged once and weighted by how many people gave it.
"""

import logging
import random
from collections import Counter
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


# low-information answers dropped before weighting
SKIP_RESPONSES = frozenset({
    'not specified', 'n/a', 'na', 'none', 'no', 'yes', '-', '--', '---',
    'nothing', 'idk', "i don't know", 'dont know', "don't know", 'no comment',
    'no comments', 'same', 'all good', 'all', 'everything', 'anything',
})


def normalize_response(text) -> str:
    if not isinstance(text, str):
        return ""
    return text.strip().lower()


def is_usable_response(normalized: str) -> bool:
    return len(normalized) > 2 and normalized not in SKIP_RESPONSES


def count_responses(raw_responses: Iterable) -> Counter:
    """
    Collapse raw answers into {normalized text: occurrences}.
    Non-string cells (NaN from a DataFrame column) count as blank.
    Keys keep first-seen order.
    """
    counts: Counter = Counter()
    total = 0
    for raw in raw_responses:
        total += 1
        normalized = normalize_response(raw)
        if is_usable_response(normalized):
            counts[normalized] += 1

    if total:
        reduction = round((1 - len(counts) / total) * 100)
        logger.info("deduplicated %d responses -> %d unique (%d%% reduction)", total, len(counts), reduction)
    return counts


def sample_responses(
    unique_responses: List[str],
    cap: int,
    rng: Optional[random.Random] = None,
) -> Tuple[List[str], float]:
    """
    Cap the distinct set at `cap` entries. Returns (sampled, sample_ratio) where
    sample_ratio scales each sampled weight back up to the full corpus.
    """
    if cap <= 0:
        raise ValueError(f"sample cap must be positive, got {cap}")
    unique_count = len(unique_responses)
    if unique_count <= cap:
        return list(unique_responses), 1.0

    rng = rng or random.Random()
    sampled = rng.sample(list(unique_responses), cap)
    logger.info("sampled %d of %d unique responses", cap, unique_count)
    return sampled, unique_count / cap
