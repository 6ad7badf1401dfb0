#!/usr/bin/env python3
"""
Term collection for export.

Reads a project's terms with their translations for one locale, applies
the untranslated filter and the fallback-locale overlay, and produces the
TranslationDocument the exporters consume.
"""

from typing import Optional

from .document import TranslationDocument, TranslationRecord
from .errors import NotFoundError, ValidationError
from .logging import get_logger
from .store import ProjectLocale, TermStore

logger = get_logger(__name__)


def merge_fallback(
    primary: TranslationDocument,
    fallback: TranslationDocument,
) -> TranslationDocument:
    """
    Overlay primary translations onto a fallback document.

    Records are matched by term. A primary record replaces the fallback
    record with the same term; fallback records without a primary
    counterpart are kept. Order is the fallback order followed by
    primary-only terms in primary order. Neither input is modified.

    Args:
        primary: Translations that win on conflict
        fallback: Translations used where primary has no record

    Returns:
        New document carrying the primary's locale code
    """
    primary_map = primary.as_dict()
    merged = []
    seen = set()

    for record in fallback.translations:
        translation = primary_map.get(record.term, record.translation)
        merged.append(TranslationRecord(record.term, translation))
        seen.add(record.term)

    for record in primary.translations:
        if record.term not in seen:
            merged.append(TranslationRecord(record.term, record.translation))

    return TranslationDocument(iso=primary.iso, translations=merged)


class TermCollector:
    """
    Builds translation documents from a TermStore.

    Handles:
    - Locale validation against the project's configured locales
    - Mapping term rows to records (ambiguous rows become untranslated)
    - Fallback-locale overlay
    - Untranslated-only filtering
    """

    def __init__(self, store: TermStore):
        self.store = store

    def collect(
        self,
        project_id: str,
        locale_code: Optional[str],
        untranslated: bool = False,
        fallback_locale: Optional[str] = None,
    ) -> TranslationDocument:
        """
        Collect the translations of one project locale.

        Args:
            project_id: Project identifier
            locale_code: Locale to export
            untranslated: Keep only records whose translation is empty
            fallback_locale: Locale whose translations fill the gaps

        Returns:
            TranslationDocument ordered by term

        Raises:
            ValidationError: If no locale is given
            NotFoundError: If the project, the locale or the fallback
                locale is not configured
        """
        if not locale_code:
            raise ValidationError("locale is a required param", field="locale")

        project_locale = self.resolve_locale(project_id, locale_code)
        return self.collect_for(project_locale, untranslated, fallback_locale)

    def resolve_locale(self, project_id: str, locale_code: str) -> ProjectLocale:
        """Find the configured project locale for a code."""
        if not self.store.project_exists(project_id):
            raise NotFoundError("Project", project_id)

        project_locale = self.store.find_project_locale(project_id, locale_code)
        if project_locale is None:
            raise NotFoundError("Project locale", locale_code)
        return project_locale

    def project_locales(self, project_id: str) -> list[ProjectLocale]:
        """All configured locales of an existing project."""
        if not self.store.project_exists(project_id):
            raise NotFoundError("Project", project_id)
        return self.store.project_locales(project_id)

    def collect_for(
        self,
        project_locale: ProjectLocale,
        untranslated: bool = False,
        fallback_locale: Optional[str] = None,
    ) -> TranslationDocument:
        """Collect translations for an already resolved project locale."""
        document = self._load(project_locale)

        if fallback_locale:
            fallback_project_locale = self.store.find_project_locale(
                project_locale.project_id, fallback_locale
            )
            if fallback_project_locale is None:
                raise NotFoundError("Fallback locale", fallback_locale)

            fallback = self._load(fallback_project_locale)
            # Only real translations may override the fallback
            document = merge_fallback(document.filter(lambda r: r.is_translated), fallback)
            logger.debug(
                "fallback_merged",
                locale=project_locale.code,
                fallback=fallback_locale,
                terms=len(document),
            )

        if untranslated:
            document = document.filter(lambda r: not r.is_translated)

        return document

    def _load(self, project_locale: ProjectLocale) -> TranslationDocument:
        rows = self.store.terms_with_translations(project_locale.project_id, project_locale)

        records = []
        for row in rows:
            if len(row.translations) == 1:
                translation = row.translations[0]
            else:
                if row.translations:
                    logger.debug(
                        "ambiguous_translation",
                        term=row.value,
                        locale=project_locale.code,
                        rows=len(row.translations),
                    )
                translation = ""
            records.append(TranslationRecord(row.value, translation))

        records.sort(key=lambda r: r.term)
        return TranslationDocument(iso=project_locale.code, translations=records)
