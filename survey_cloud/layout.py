"""
spiral placement of ranked words on a bounded canvas.

the first word sits at the center; every other word walks an archimedean spiral
outward (alternating direction by index) until its bounding box fits without
touching a placed box or the canvas edge. a word that finds no slot is shrunk
by a couple of pixels and retried, and dropped once it falls below the minimum
font size.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from survey_cloud.colors import POSITIVE_PALETTE, assign_colors
from survey_cloud.config import DEFAULT_CONFIG, CloudConfig
from survey_cloud.lexicon import WordFrequency
from survey_cloud.scaling import scale_font_sizes

logger = logging.getLogger(__name__)

# (word, font_size) -> (text width, text height) in pixels
Measure = Callable[[str, int], Tuple[float, float]]


@dataclass(frozen=True)
class PlacementRect:
    x: float
    y: float
    width: float
    height: float

    def overlaps(self, other: "PlacementRect") -> bool:
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )

    def within(self, width: float, height: float, padding: float = 0) -> bool:
        return (
            self.x >= padding
            and self.x + self.width <= width - padding
            and self.y >= padding
            and self.y + self.height <= height - padding
        )


@dataclass(frozen=True)
class PlacedWord:
    word: str
    frequency: int
    font_size: int
    color: str
    x: float  # glyph center
    y: float
    rotated: bool
    rect: PlacementRect


@dataclass
class CloudLayout:
    width: int
    height: int
    placed: List[PlacedWord] = field(default_factory=list)
    dropped: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.placed

    @property
    def rects(self) -> List[PlacementRect]:
        return [p.rect for p in self.placed]


def shape_ratio(width: int, height: int, config: CloudConfig = DEFAULT_CONFIG) -> float:
    # horizontal text spreads wider than tall; squeeze the spiral so the cloud reads round
    return (width / height) * config.shape_correction


def is_rotated(index: int, config: CloudConfig = DEFAULT_CONFIG) -> bool:
    return index >= config.keep_horizontal and index % config.rotate_every == 0


def spiral_offsets(index: int, ratio: float, config: CloudConfig = DEFAULT_CONFIG) -> Tuple[np.ndarray, np.ndarray]:
    """Offsets from the canvas center visited by the word at `index`, in search order."""
    if index == 0:
        return np.zeros(1), np.zeros(1)
    steps = np.arange(config.max_attempts) * config.spiral_step
    direction = 1 if index % 2 == 0 else -1
    angles = steps * direction
    return np.cos(angles) * steps * ratio, np.sin(angles) * steps


def find_slot(
    xs: np.ndarray,
    ys: np.ndarray,
    box_w: float,
    box_h: float,
    placed: np.ndarray,
    width: int,
    height: int,
    padding: float,
) -> Optional[Tuple[float, float, float, float]]:
    """
    First candidate center whose box is inside the padded canvas and clear of
    every placed box. Returns (center_x, center_y, left, top) or None.
    """
    left = xs - box_w / 2
    top = ys - box_h / 2
    ok = (
        (left >= padding)
        & (left + box_w <= width - padding)
        & (top >= padding)
        & (top + box_h <= height - padding)
    )
    if placed.size and ok.any():
        px, py, pw, ph = placed[:, 0], placed[:, 1], placed[:, 2], placed[:, 3]
        hits = (
            (left[:, None] < px + pw)
            & (left[:, None] + box_w > px)
            & (top[:, None] < py + ph)
            & (top[:, None] + box_h > py)
        )
        ok &= ~hits.any(axis=1)
    found = np.flatnonzero(ok)
    if not found.size:
        return None
    i = found[0]
    return float(xs[i]), float(ys[i]), float(left[i]), float(top[i])


def place_words(
    words: Sequence[WordFrequency],
    width: int,
    height: int,
    measure: Measure,
    palette: Sequence[str] = POSITIVE_PALETTE,
    colors: Optional[Sequence[str]] = None,
    config: CloudConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> CloudLayout:
    """
    Lay out `words` (already filtered to the available ones, highest frequency first).
    Sizes and colors are derived here unless `colors` is given.
    """
    if colors is not None and len(colors) != len(words):
        raise ValueError(f"got {len(colors)} colors for {len(words)} words")
    layout = CloudLayout(width, height)
    if width <= 0 or height <= 0:
        logger.debug("degenerate canvas %sx%s, nothing placed", width, height)
        return layout
    if not words:
        return layout

    sizes = scale_font_sizes(words, height, config)
    colors = list(colors) if colors is not None else assign_colors(palette, len(words), rng)
    cx, cy = width / 2, height / 2
    ratio = shape_ratio(width, height, config)
    placed = np.empty((0, 4))

    for index, (wf, font_size, color) in enumerate(zip(words, sizes, colors)):
        rotated = is_rotated(index, config)
        dx, dy = spiral_offsets(index, ratio, config)
        xs, ys = cx + dx, cy + dy

        slot = None
        while font_size >= config.min_font_size:
            text_w, text_h = measure(wf.word, font_size)
            box_w, box_h = (text_h, text_w) if rotated else (text_w, text_h)
            slot = find_slot(xs, ys, box_w, box_h, placed, width, height, config.edge_padding)
            if slot is not None:
                break
            font_size -= config.font_shrink_step

        if slot is None:
            logger.debug("dropped %r: no free slot down to %dpx", wf.word, config.min_font_size)
            layout.dropped.append(wf.word)
            continue

        x, y, left, top = slot
        rect = PlacementRect(left, top, box_w, box_h)
        placed = np.vstack([placed, [left, top, box_w, box_h]])
        layout.placed.append(PlacedWord(wf.word, wf.frequency, font_size, color, x, y, rotated, rect))

    logger.debug("placed %d words, dropped %d", len(layout.placed), len(layout.dropped))
    return layout
