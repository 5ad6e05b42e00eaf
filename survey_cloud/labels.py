"""question label cleanup for display."""

import re

# precompiled patterns
EXAMPLE_MARKER_RE = re.compile(r"example:", flags=re.IGNORECASE)
TEXT_MARKER_RE = re.compile(r"\s*\(text\)\s*", flags=re.IGNORECASE)


def clean_question_label(label: str) -> str:
    """
    Drop the 'Example: ...' tail and the '(text)' marker survey exports append to labels.
    A marker in the middle of a label becomes a single space so the words around it stay apart.
    """
    match = EXAMPLE_MARKER_RE.search(label)
    if match:
        label = label[:match.start()].strip()
    return TEXT_MARKER_RE.sub(" ", label).strip()
