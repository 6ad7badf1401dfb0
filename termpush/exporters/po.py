#!/usr/bin/env python3
"""
GNU gettext PO format exporter.

Writes .po files for Django, WordPress and other gettext consumers. The
term is the msgid, the translation the msgstr.
"""

import re

from ..document import TranslationDocument
from ..errors import ValidationError
from .base import Exporter

_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\t': '\\t',
    '\r': '\\r',
    '\f': '\\f',
    '\v': '\\v',
    '\a': '\\a',
    '\b': '\\b',
}
_UNESCAPES = {v[1]: k for k, v in _ESCAPES.items()}

_KEYWORD_LINE = re.compile(r'^(msgctxt|msgid_plural|msgid|msgstr(?:\[\d+\])?)\s+"(.*)"$')


class PoExporter(Exporter):
    """
    Exporter for GNU gettext PO files.

    PO output structure:
    ```
    msgid ""
    msgstr ""
    "Content-Type: text/plain; charset=UTF-8\\n"
    "Language: fr\\n"

    msgid "greeting"
    msgstr "Bonjour"

    msgid "untranslated.term"
    msgstr ""
    ```

    Long strings are wrapped at ~76 characters using continuation lines.
    """

    @property
    def name(self) -> str:
        return "po"

    @property
    def content_type(self) -> str:
        return "text/x-gettext-translation; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "po"

    def export(self, document: TranslationDocument) -> str:
        lines = [
            'msgid ""',
            'msgstr ""',
            '"MIME-Version: 1.0\\n"',
            '"Content-Type: text/plain; charset=UTF-8\\n"',
            '"Content-Transfer-Encoding: 8bit\\n"',
        ]
        if document.iso:
            lines.append(f'"Language: {self._escape_po_string(document.iso)}\\n"')
        lines.append('')

        for record in document.translations:
            lines.extend(self._format_po_string('msgid', record.term))
            lines.extend(self._format_po_string('msgstr', record.translation))
            lines.append('')

        return '\n'.join(lines)

    def _escape_po_string(self, s: str) -> str:
        """Escape string for PO format."""
        return ''.join(_ESCAPES.get(char, char) for char in s)

    def _unescape_po_string(self, s: str) -> str:
        """Unescape PO string escapes."""
        return re.sub(r'\\(.)', lambda m: _UNESCAPES.get(m.group(1), m.group(1)), s)

    def _format_po_string(self, prefix: str, s: str, wrap_width: int = 76) -> list[str]:
        """
        Format a string for PO output, wrapping long strings at ~76 characters.

        Args:
            prefix: The PO prefix (e.g., 'msgid', 'msgstr')
            s: The string to format
            wrap_width: Maximum line width for wrapping (default: 76)

        Returns:
            List of formatted lines
        """
        escaped = self._escape_po_string(s)

        # Account for prefix + space + two quotes
        single_line = f'{prefix} "{escaped}"'
        if len(single_line) <= wrap_width:
            return [single_line]

        # For longer strings, use continuation format:
        # msgid ""
        # "first part\n"
        # "second part"
        lines = [f'{prefix} ""']
        max_chunk = wrap_width - 2

        # Break after every newline, then wrap each piece
        for piece in re.split(r'(?<=\n)', s):
            segment = self._escape_po_string(piece)
            while segment:
                if len(segment) <= max_chunk:
                    lines.append(f'"{segment}"')
                    break

                break_at = max_chunk
                # Prefer a space within the last 20 chars
                space_pos = segment.rfind(' ', max_chunk - 20, max_chunk)
                if space_pos > 0:
                    break_at = space_pos + 1
                # Never end a line inside an escape sequence
                chunk = segment[:break_at]
                if (len(chunk) - len(chunk.rstrip('\\'))) % 2 == 1:
                    break_at -= 1

                lines.append(f'"{segment[:break_at]}"')
                segment = segment[break_at:]

        return lines

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        pairs = []
        header = None
        current: dict[str, str] = {}
        last_key = None

        def flush():
            nonlocal header
            if 'msgid' not in current:
                return
            msgid = self._unescape_po_string(current['msgid'])
            msgstr = self._unescape_po_string(
                current.get('msgstr', current.get('msgstr[0]', ''))
            )
            if not msgid and 'msgctxt' not in current:
                header = msgstr
            else:
                pairs.append((msgid, msgstr))

        for line_num, raw in enumerate(content.split('\n'), 1):
            line = raw.strip()
            if not line or line.startswith('#'):
                continue

            match = _KEYWORD_LINE.match(line)
            if match:
                keyword, value = match.groups()
                if keyword in ('msgctxt', 'msgid') and 'msgid' in current:
                    flush()
                    current = {}
                current[keyword] = value
                last_key = keyword
            elif line.startswith('"') and line.endswith('"') and len(line) > 1 and last_key:
                # Concatenate raw text; unescape once the entry is complete
                current[last_key] += line[1:-1]
            else:
                raise ValidationError(f"Line {line_num}: unexpected content in PO file")

        flush()

        if not iso and header:
            match = re.search(r'^Language:\s*(.*)$', header, re.MULTILINE)
            if match:
                iso = match.group(1).strip()

        return TranslationDocument.from_pairs(iso, pairs)
