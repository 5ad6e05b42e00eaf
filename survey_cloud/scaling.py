import math
from typing import List, Sequence, Tuple

from survey_cloud.config import DEFAULT_CONFIG, CloudConfig
from survey_cloud.lexicon import WordFrequency, round_half_up


def font_size_bounds(height: int, config: CloudConfig = DEFAULT_CONFIG) -> Tuple[int, int]:
    """(min_font, max_font) for a canvas of the given height."""
    return (
        round_half_up(height / config.min_font_divisor),
        round_half_up(height / config.max_font_divisor),
    )


def scale_font_sizes(
    words: Sequence[WordFrequency],
    height: int,
    config: CloudConfig = DEFAULT_CONFIG,
) -> List[int]:
    """
    Log-interpolated font size per word, in input order.
    ln(f + 1) keeps one dominant word from shrinking the rest to nothing while
    preserving the size ordering.
    """
    if not words:
        return []
    min_font, max_font = font_size_bounds(height, config)
    frequencies = [w.frequency for w in words]
    log_max = math.log(max(frequencies) + 1)
    log_min = math.log(min(frequencies) + 1)
    if log_max == log_min:
        return [max_font] * len(words)

    span = log_max - log_min
    return [
        round_half_up(min_font + (math.log(f + 1) - log_min) / span * (max_font - min_font))
        for f in frequencies
    ]
