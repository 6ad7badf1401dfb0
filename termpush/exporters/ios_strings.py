#!/usr/bin/env python3
"""
iOS .strings format exporter.

Writes Apple .strings localization files used in iOS, macOS, watchOS,
and tvOS applications.
"""

import re

from ..document import TranslationDocument
from .base import Exporter

_ENTRY = re.compile(r'"((?:[^"\\]|\\.)*)"\s*=\s*"((?:[^"\\]|\\.)*)"\s*;', re.DOTALL)
_UNESCAPES = {'n': '\n', 't': '\t', 'r': '\r'}


class IosStringsExporter(Exporter):
    """
    Exporter for iOS/macOS .strings files.

    .strings output structure:
    ```
    "greeting" = "Hello, %@!";

    "quote" = "She said \\"hi\\"";
    ```
    """

    @property
    def name(self) -> str:
        return "strings"

    @property
    def content_type(self) -> str:
        return "text/plain; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "strings"

    def _escape_string(self, s: str) -> str:
        """Escape string for .strings format."""
        return (
            s.replace('\\', '\\\\')
            .replace('"', '\\"')
            .replace('\n', '\\n')
            .replace('\t', '\\t')
            .replace('\r', '\\r')
        )

    def _unescape_string(self, s: str) -> str:
        """Unescape .strings file escapes."""
        return re.sub(r'\\(.)', lambda m: _UNESCAPES.get(m.group(1), m.group(1)), s, flags=re.DOTALL)

    def export(self, document: TranslationDocument) -> str:
        lines = []
        for record in document.translations:
            escaped_key = self._escape_string(record.term)
            escaped_value = self._escape_string(record.translation)
            lines.append(f'"{escaped_key}" = "{escaped_value}";')
            lines.append('')
        return '\n'.join(lines)

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        # Drop comments outside of quoted strings before matching entries
        content = re.sub(
            r'("(?:[^"\\]|\\.)*")|/\*.*?\*/|//[^\n]*',
            lambda m: m.group(1) or '',
            content,
            flags=re.DOTALL,
        )
        pairs = [
            (self._unescape_string(key), self._unescape_string(value))
            for key, value in _ENTRY.findall(content)
        ]
        return TranslationDocument.from_pairs(iso, pairs)
