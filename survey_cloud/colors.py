"""
palette choice and color assignment.
the palette is picked once per question from its label; colors are dealt out so
that no color runs three words in a row.
"""

import random
from typing import List, Optional, Sequence, Tuple


POSITIVE_PALETTE: Tuple[str, ...] = (
    '#3A8518',  # brand green
    '#6DAE5B',
    '#A5CF8E',  # light green
    '#B2BBC5',  # silver fog
)

NEGATIVE_PALETTE: Tuple[str, ...] = (
    '#E7CB38',  # brand yellow
    '#ECD560',
    '#F1E088',
    '#393C2C',  # dune
)

NEGATIVE_KEYWORDS = ('negative', 'dislike', 'worst', 'least', "don't like", 'hate')


def is_negative_question(label: str) -> bool:
    lower = (label or "").lower()
    return any(keyword in lower for keyword in NEGATIVE_KEYWORDS)


def choose_palette(label: str) -> Tuple[str, ...]:
    return NEGATIVE_PALETTE if is_negative_question(label) else POSITIVE_PALETTE


def shuffled(colors: Sequence[str], rng: random.Random) -> List[str]:
    pool = list(colors)
    rng.shuffle(pool)
    return pool


def assign_colors(
    palette: Sequence[str],
    count: int,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """
    One color per word. The pool is a shuffled copy of the palette, reshuffled
    when used up; a color that would appear a third time in a row is swapped
    for the first different color in the pool.
    """
    if count <= 0:
        return []
    if not palette:
        raise ValueError("palette must contain at least one color")

    rng = rng or random.Random()
    result: List[str] = []
    pool = shuffled(palette, rng)
    last_color: Optional[str] = None
    streak = 0
    idx = 0

    for _ in range(count):
        if idx >= len(pool):
            pool, idx = shuffled(palette, rng), 0
        color = pool[idx]
        if color == last_color and streak >= 1:
            alt_idx = next((i for i, c in enumerate(pool) if c != last_color), -1)
            if alt_idx != -1:
                color, idx = pool[alt_idx], alt_idx
            streak = 0
        result.append(color)
        streak = streak + 1 if color == last_color else 0
        last_color = color
        idx += 1
    return result
