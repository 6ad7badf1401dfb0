#!/usr/bin/env python3
"""
Intermediate translation document.

TranslationDocument is the format-agnostic structure every exporter
consumes: a locale code plus an ordered list of (term, translation) records.
"""

from dataclasses import dataclass, field
from typing import Iterable


@dataclass
class TranslationRecord:
    """
    One term of a project with its translation for a single locale.

    Attributes:
        term: Locale-independent key of the string
        translation: Translated value, empty string when untranslated
    """
    term: str
    translation: str = ""

    def __post_init__(self):
        """Ensure both fields are strings."""
        self.term = str(self.term)
        self.translation = "" if self.translation is None else str(self.translation)

    @property
    def is_translated(self) -> bool:
        return self.translation != ""


@dataclass
class TranslationDocument:
    """
    Ordered translations of one locale.

    Built fresh for every export request and treated as read-only afterwards;
    operations that change the content (filters, fallback merge) return a
    new document.
    """
    iso: str
    translations: list[TranslationRecord] = field(default_factory=list)

    @classmethod
    def from_pairs(cls, iso: str, pairs: Iterable[tuple[str, str]]) -> "TranslationDocument":
        """Build a document from (term, translation) pairs, keeping their order."""
        return cls(iso=iso, translations=[TranslationRecord(t, v) for t, v in pairs])

    def terms(self) -> list[str]:
        return [record.term for record in self.translations]

    def as_dict(self) -> dict[str, str]:
        """Map of term -> translation in document order."""
        return {record.term: record.translation for record in self.translations}

    def filter(self, predicate) -> "TranslationDocument":
        """Return a new document with the records matching predicate."""
        return TranslationDocument(
            iso=self.iso,
            translations=[r for r in self.translations if predicate(r)],
        )

    def __len__(self) -> int:
        return len(self.translations)
