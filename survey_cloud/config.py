"""
engine settings for the survey word cloud.
every tunable constant of the pipeline lives here so the app sidebar and the
tests can override them in one place.
"""

import logging
import os
from dataclasses import dataclass


LOG_LEVEL_ENV = "SURVEY_CLOUD_LOG_LEVEL"


@dataclass(frozen=True)
class CloudConfig:
    # deduplication / sampling
    max_unique_responses: int = 2000
    top_words: int = 30

    # spiral search
    spiral_step: float = 0.12
    max_attempts: int = 2000
    edge_padding: int = 2
    shape_correction: float = 0.7

    # font sizing
    max_font_divisor: int = 5
    min_font_divisor: int = 25
    min_font_size: int = 10
    font_shrink_step: int = 2
    rotate_every: int = 3
    keep_horizontal: int = 3

    # deferred extraction (seconds)
    extraction_delay: float = 0.1


DEFAULT_CONFIG = CloudConfig()


def configure_logging(level: str = "") -> None:
    """Root logging setup for the app entry point; level falls back to the env var, then INFO."""
    name = (level or os.getenv(LOG_LEVEL_ENV, "info")).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
