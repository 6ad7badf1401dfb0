#!/usr/bin/env python3
"""
Java .properties exporter.

Follows the escaping of java.util.Properties.store() and the parsing
rules of Properties.load(), so files round-trip through the JDK.
"""

import re

from ..document import TranslationDocument
from ..errors import ValidationError
from .base import Exporter

_CONTROL_ESCAPES = {'\t': 't', '\n': 'n', '\r': 'r', '\f': 'f'}
_CONTROL_UNESCAPES = {v: k for k, v in _CONTROL_ESCAPES.items()}
_WHITESPACE = ' \t\f'


class PropertiesExporter(Exporter):
    """
    Exporter for Java .properties resource bundles.

    ```
    user.greeting=Hello\\, {0}
    url=http\\://example.com
    umlaut=\\u00fc
    ```

    Escapes backslash, '=', ':', '#', '!', spaces in keys, leading spaces
    in values, control characters, and every character outside printable
    ASCII as \\uXXXX (UTF-16 surrogate pairs above the BMP).
    """

    @property
    def name(self) -> str:
        return "properties"

    @property
    def content_type(self) -> str:
        return "text/x-java-properties; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "properties"

    def export(self, document: TranslationDocument) -> str:
        lines = []
        for record in document.translations:
            key = self._escape(record.term, escape_space=True)
            value = self._escape(record.translation, escape_space=False)
            lines.append(f'{key}={value}')
        return '\n'.join(lines) + '\n' if lines else ''

    def _escape(self, text: str, escape_space: bool) -> str:
        out = []
        for i, char in enumerate(text):
            if char == ' ':
                out.append('\\ ' if escape_space or i == 0 else ' ')
            elif char == '\\':
                out.append('\\\\')
            elif char in _CONTROL_ESCAPES:
                out.append('\\' + _CONTROL_ESCAPES[char])
            elif char in '=:#!':
                out.append('\\' + char)
            elif ' ' < char <= '~':
                out.append(char)
            else:
                out.extend(self._unicode_escape(char))
        return ''.join(out)

    def _unicode_escape(self, char: str) -> list[str]:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            units = [0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)]
        else:
            units = [code]
        return [f'\\u{unit:04x}' for unit in units]

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        pairs = []
        for line in self._logical_lines(content):
            key, value = self._split_line(line)
            pairs.append((self._unescape(key), self._unescape(value)))
        return TranslationDocument.from_pairs(iso, pairs)

    def _logical_lines(self, content: str) -> list[str]:
        """Join continuation lines and drop blanks and comments."""
        logical = []
        current = None

        for raw in re.split(r'\r\n|\r|\n', content):
            line = raw.lstrip(_WHITESPACE)
            if current is None:
                if not line or line[0] in '#!':
                    continue
                current = ''

            # An odd number of trailing backslashes continues the line
            trailing = len(line) - len(line.rstrip('\\'))
            if trailing % 2 == 1:
                current += line[:-1]
                continue

            logical.append(current + line)
            current = None

        if current is not None:
            logical.append(current)
        return logical

    def _split_line(self, line: str) -> tuple[str, str]:
        """Split a logical line at the first unescaped '=', ':' or whitespace."""
        i = 0
        while i < len(line):
            char = line[i]
            if char == '\\':
                i += 2
                continue
            if char in '=:' or char in _WHITESPACE:
                break
            i += 1

        key = line[:i]
        rest = line[i:].lstrip(_WHITESPACE)
        if rest and rest[0] in '=:':
            rest = rest[1:].lstrip(_WHITESPACE)
        return key, rest

    def _unescape(self, text: str) -> str:
        out = []
        i = 0
        while i < len(text):
            char = text[i]
            if char != '\\' or i + 1 == len(text):
                out.append(char)
                i += 1
                continue

            escaped = text[i + 1]
            if escaped == 'u':
                digits = text[i + 2:i + 6]
                if not re.fullmatch(r'[0-9a-fA-F]{4}', digits):
                    raise ValidationError(f"Malformed \\uxxxx encoding: \\u{digits}")
                out.append(chr(int(digits, 16)))
                i += 6
            else:
                out.append(_CONTROL_UNESCAPES.get(escaped, escaped))
                i += 2

        # Recombine surrogate pairs produced by \u escapes
        return ''.join(out).encode('utf-16', 'surrogatepass').decode('utf-16', 'surrogatepass')
