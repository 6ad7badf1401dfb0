#!/usr/bin/env python3
"""
Batch push of a project's locales.

Runs the collect -> export -> upload pipeline once per locale on a thread
pool and gathers every result before reporting. A failing locale turns
into a failed entry of the summary; it never aborts its siblings and is
never left out of the count.
"""

import contextvars
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Optional

from .collector import TermCollector
from .errors import ValidationError
from .exporters import Exporter, ExporterRegistry
from .logging import get_logger
from .sink import StorageSink, locale_key
from .store import ProjectLocale

logger = get_logger(__name__)

# Locale values that select every configured locale. 'xx' is the
# placeholder the web client sends when no locale is chosen.
ALL_LOCALES = ("all", "*", "xx")


@dataclass
class LocaleResult:
    """Outcome of one locale's pipeline."""
    locale: str
    status: str = "pending"  # pending, ok, failed
    key: Optional[str] = None
    url: Optional[str] = None
    content_type: Optional[str] = None
    terms: int = 0
    data: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class PushSummary:
    """Aggregate of a push: exactly one result per requested locale."""
    project_id: str
    format: str
    results: list[LocaleResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def pushed(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.total - self.pushed

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @property
    def summary(self) -> str:
        text = f"{self.pushed} pushed in total."
        if self.failed:
            text = f"{self.pushed} pushed in total, {self.failed} failed."
        return text

    def to_dict(self) -> dict:
        return {
            "status": "ok" if self.ok else "partial",
            "project_id": self.project_id,
            "format": self.format,
            "total": self.total,
            "pushed": self.pushed,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary,
        }


class PushOrchestrator:
    """
    Exports (and optionally uploads) a project's locales.

    Args:
        collector: Source of translation documents
        sink: Storage sink; without one the serialized text is returned
            in each result
        max_workers: Upper bound on concurrently running locale pipelines
    """

    def __init__(
        self,
        collector: TermCollector,
        sink: Optional[StorageSink] = None,
        max_workers: int = 4,
    ):
        self.collector = collector
        self.sink = sink
        self.max_workers = max(1, max_workers)

    def push(
        self,
        project_id: str,
        format_id: str,
        locale: Optional[str] = None,
        untranslated: bool = False,
        fallback_locale: Optional[str] = None,
    ) -> PushSummary:
        """
        Push one locale or all locales of a project.

        Args:
            project_id: Project identifier
            format_id: Export format
            locale: Locale code, or one of ALL_LOCALES
            untranslated: Export only untranslated terms
            fallback_locale: Locale filling gaps in every pushed locale

        Returns:
            PushSummary with one LocaleResult per pushed locale

        Raises:
            UnsupportedFormatError: Unknown format (before any work)
            ValidationError: Missing locale (before any work)
            NotFoundError: Unknown project or locale
        """
        exporter = ExporterRegistry.get(format_id)
        if not locale:
            raise ValidationError("locale is a required param", field="locale")

        if locale in ALL_LOCALES:
            project_locales = self.collector.project_locales(project_id)
        else:
            project_locales = [self.collector.resolve_locale(project_id, locale)]

        logger.info(
            "push_started",
            project_id=project_id,
            format=exporter.name,
            locales=[pl.code for pl in project_locales],
        )

        summary = PushSummary(project_id=project_id, format=exporter.name)
        if not project_locales:
            return summary

        workers = min(self.max_workers, len(project_locales))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # Each task runs in a copy of the caller's context so bound log
            # fields such as request_id reach the per-locale logs
            futures = [
                executor.submit(
                    contextvars.copy_context().run,
                    self._push_locale, project_locale, exporter, untranslated, fallback_locale
                )
                for project_locale in project_locales
            ]
            # Gather in submission order; every future yields a result
            summary.results = [future.result() for future in futures]

        logger.info(
            "push_finished",
            project_id=project_id,
            total=summary.total,
            pushed=summary.pushed,
            failed=summary.failed,
        )
        return summary

    def _push_locale(
        self,
        project_locale: ProjectLocale,
        exporter: Exporter,
        untranslated: bool,
        fallback_locale: Optional[str],
    ) -> LocaleResult:
        result = LocaleResult(locale=project_locale.code, content_type=exporter.content_type)
        try:
            document = self.collector.collect_for(project_locale, untranslated, fallback_locale)
            result.terms = len(document)
            content = exporter.export(document)

            if self.sink is None:
                result.data = content
            else:
                result.key = locale_key(project_locale.project_id, project_locale.code)
                result.url = self.sink.upload(
                    result.key, content.encode("utf-8"), exporter.content_type
                )
            result.status = "ok"
            logger.info("locale_pushed", locale=project_locale.code, key=result.key, terms=result.terms)
        except Exception as e:
            # Isolated per locale; reported in the summary
            result.status = "failed"
            result.error = str(e)
            result.error_type = type(e).__name__
            logger.exception("locale_push_failed", locale=project_locale.code, error=str(e))
        return result
