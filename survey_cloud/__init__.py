"""Word-cloud engine for open-ended survey responses."""

from survey_cloud.colors import assign_colors, choose_palette, is_negative_question
from survey_cloud.config import DEFAULT_CONFIG, CloudConfig
from survey_cloud.controller import CloudController
from survey_cloud.labels import clean_question_label
from survey_cloud.layout import CloudLayout, PlacedWord, PlacementRect, place_words
from survey_cloud.lexicon import WordFrequency, build_frequency_table
from survey_cloud.responses import count_responses, sample_responses
from survey_cloud.scaling import scale_font_sizes
from survey_cloud.session import WordListEntry, WordToggleState
from survey_cloud.tagging import NltkTagger, Tagger, TaggerHandle

__all__ = [
    "CloudConfig",
    "CloudController",
    "CloudLayout",
    "DEFAULT_CONFIG",
    "NltkTagger",
    "PlacedWord",
    "PlacementRect",
    "Tagger",
    "TaggerHandle",
    "WordFrequency",
    "WordListEntry",
    "WordToggleState",
    "assign_colors",
    "build_frequency_table",
    "choose_palette",
    "clean_question_label",
    "count_responses",
    "is_negative_question",
    "place_words",
    "sample_responses",
    "scale_font_sizes",
]
