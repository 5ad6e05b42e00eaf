"""
glyph measuring and rasterizing with pillow.
a layout is drawn into an RGBA buffer; matplotlib wraps it in a figure for the app.
"""

from functools import lru_cache
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image, ImageDraw, ImageFont
from wordcloud.wordcloud import FONT_PATH

from survey_cloud.layout import CloudLayout

PLACEHOLDER_COLOR = '#7E8BA0'
PLACEHOLDER_FONT_SIZE = 20
TRANSPARENT = (0, 0, 0, 0)


@lru_cache(maxsize=256)
def get_font(font_size: int, font_path: Optional[str] = None) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(font_path or FONT_PATH, max(1, int(font_size)))


class PillowMeasurer:
    """Text extent as the canvas sees it: advance width by font size."""

    def __init__(self, font_path: Optional[str] = None):
        self.font_path = font_path

    def __call__(self, word: str, font_size: int) -> Tuple[float, float]:
        font = get_font(font_size, self.font_path)
        return float(font.getlength(word)), float(font_size)


def _draw_rotated(image: Image.Image, text: str, font, color: str, center: Tuple[float, float]) -> None:
    left, top, right, bottom = font.getbbox(text, anchor="mm")
    patch = Image.new("RGBA", (int(right - left) + 2, int(bottom - top) + 2), TRANSPARENT)
    ImageDraw.Draw(patch).text((patch.width / 2, patch.height / 2), text, font=font, fill=color, anchor="mm")
    # canvas rotations are clockwise
    patch = patch.rotate(-90, expand=True)
    offset = (int(round(center[0] - patch.width / 2)), int(round(center[1] - patch.height / 2)))
    image.paste(patch, offset, patch)


def render_layout(
    layout: CloudLayout,
    font_path: Optional[str] = None,
    background: Tuple[int, int, int, int] = TRANSPARENT,
) -> Optional[Image.Image]:
    """Rasterize placed words. Returns None for a zero-area canvas."""
    if layout.width <= 0 or layout.height <= 0:
        return None
    image = Image.new("RGBA", (layout.width, layout.height), background)
    draw = ImageDraw.Draw(image)
    for pw in layout.placed:
        font = get_font(pw.font_size, font_path)
        if pw.rotated:
            _draw_rotated(image, pw.word, font, pw.color, (pw.x, pw.y))
        else:
            draw.text((pw.x, pw.y), pw.word, font=font, fill=pw.color, anchor="mm")
    return image


def render_placeholder(
    width: int,
    height: int,
    message: str = "No words to display",
    font_path: Optional[str] = None,
) -> Optional[Image.Image]:
    if width <= 0 or height <= 0:
        return None
    image = Image.new("RGBA", (width, height), TRANSPARENT)
    font = get_font(PLACEHOLDER_FONT_SIZE, font_path)
    ImageDraw.Draw(image).text((width / 2, height / 2), message, font=font, fill=PLACEHOLDER_COLOR, anchor="mm")
    return image


def to_pixel_buffer(image: Image.Image) -> np.ndarray:
    """(height, width, 4) uint8 array."""
    return np.asarray(image)


def build_cloud_figure(image: Image.Image, bg_color: str = "#ffffff"):
    fig_w, fig_h = max(3.0, image.width / 100.0), max(3.0, image.height / 100.0)
    fig, ax = plt.subplots(figsize=(fig_w, fig_h), dpi=100)
    fig.patch.set_facecolor(bg_color)
    ax.imshow(image, interpolation="bilinear")
    ax.axis("off")
    plt.tight_layout()
    return fig
