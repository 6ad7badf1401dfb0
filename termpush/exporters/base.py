#!/usr/bin/env python3
"""
Base classes for format exporters.

Exporter is the abstract base class that all format-specific exporters
must implement. Each exporter turns a TranslationDocument into the file
format's text and can parse that text back into a document.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..document import TranslationDocument
from ..errors import UnsupportedFormatError


class Exporter(ABC):
    """
    Abstract base class for format-specific exporters.

    Subclasses are pure: export() depends only on the document it is given,
    so a single instance may serve concurrent locale pipelines.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Format identifier used in requests (e.g. 'jsonflat')."""
        pass

    @property
    @abstractmethod
    def content_type(self) -> str:
        """MIME type used for HTTP responses and storage uploads."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension without dot."""
        pass

    @abstractmethod
    def export(self, document: TranslationDocument) -> str:
        """
        Serialize a document into this format.

        Args:
            document: Collected translations for one locale

        Returns:
            Serialized file content
        """
        pass

    @abstractmethod
    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        """
        Parse content produced by export() back into a document.

        Args:
            content: Raw file content
            iso: Locale code for the resulting document, when the
                format does not carry one

        Returns:
            TranslationDocument with records in file order
        """
        pass

    def export_bytes(self, document: TranslationDocument) -> bytes:
        """Serialize a document and encode it as UTF-8."""
        return self.export(document).encode("utf-8")


class ExporterRegistry:
    """Registry of available exporters keyed by format id."""

    _exporters: dict[str, type[Exporter]] = {}

    @classmethod
    def register(cls, exporter_class: type[Exporter]) -> None:
        """Register an exporter class."""
        exporter = exporter_class()
        cls._exporters[exporter.name.lower()] = exporter_class

    @classmethod
    def get(cls, name: str) -> Exporter:
        """Get exporter instance by format id."""
        name_lower = (name or "").lower()
        if name_lower not in cls._exporters:
            raise UnsupportedFormatError(name or "", cls.formats())
        return cls._exporters[name_lower]()

    @classmethod
    def formats(cls) -> list[str]:
        return list(cls._exporters.keys())

    @classmethod
    def list_formats(cls) -> list[dict[str, Any]]:
        """List all registered formats with their content types."""
        result = []
        for name, exporter_class in cls._exporters.items():
            exporter = exporter_class()
            result.append({
                'name': exporter.name,
                'content_type': exporter.content_type,
                'extension': exporter.file_extension,
            })
        return result


def export(format_id: str, document: TranslationDocument) -> str:
    """Serialize document with the exporter registered for format_id."""
    return ExporterRegistry.get(format_id).export(document)
