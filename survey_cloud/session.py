"""
removed-word bookkeeping for the interactive word list.
the state is immutable: every toggle returns a new WordToggleState, so a layout
pass never sees a set that changes under it.
"""

from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Sequence, Tuple

from survey_cloud.lexicon import WordFrequency


@dataclass(frozen=True)
class WordToggleState:
    removed: FrozenSet[str] = field(default_factory=frozenset)

    def is_removed(self, word: str) -> bool:
        return word in self.removed

    def remove(self, word: str) -> "WordToggleState":
        return WordToggleState(self.removed | {word})

    def restore(self, word: str) -> "WordToggleState":
        return WordToggleState(self.removed - {word})

    def toggle(self, word: str) -> "WordToggleState":
        return self.restore(word) if word in self.removed else self.remove(word)

    def available(self, words: Sequence[WordFrequency]) -> List[WordFrequency]:
        return [w for w in words if w.word not in self.removed]

    def buckets(self, words: Sequence[WordFrequency]) -> Tuple[List[WordFrequency], List[WordFrequency]]:
        """(available, removed), both in rank order."""
        return self.available(words), [w for w in words if w.word in self.removed]


@dataclass(frozen=True)
class WordListEntry:
    word: str
    frequency: int
    removed: bool
    toggle: Callable[[], None] = field(compare=False, repr=False)
