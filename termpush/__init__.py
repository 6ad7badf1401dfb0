"""
termpush - translation export and push for localization projects

Collects a project's terms with their translations per locale, applies
untranslated filtering and fallback-locale overlay, and serializes the
result into one of twelve localization file formats. Batch pushes run one
pipeline per locale and can upload the files to S3-compatible storage.

Quick start:
    termpush formats
    termpush export --catalog catalog.yml --project demo --locale fr --format po
    termpush push --catalog catalog.yml --project demo --format jsonnested --sink directory
"""

__version__ = "1.0.0"

from .collector import TermCollector, merge_fallback
from .document import TranslationDocument, TranslationRecord
from .errors import (
    AuthzError,
    NotFoundError,
    PushError,
    SinkError,
    UnsupportedFormatError,
    ValidationError,
)
from .exporters import ExporterRegistry, export
from .push import LocaleResult, PushOrchestrator, PushSummary

__all__ = [
    "TranslationDocument",
    "TranslationRecord",
    "TermCollector",
    "merge_fallback",
    "ExporterRegistry",
    "export",
    "PushOrchestrator",
    "PushSummary",
    "LocaleResult",
    "PushError",
    "ValidationError",
    "NotFoundError",
    "AuthzError",
    "UnsupportedFormatError",
    "SinkError",
]
