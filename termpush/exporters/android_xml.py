#!/usr/bin/env python3
"""
Android XML strings.xml format exporter.
"""

import re
from xml.etree import ElementTree as ET

from ..document import TranslationDocument
from ..errors import ValidationError
from .base import Exporter
from .xml_escape import escape_attribute, escape_text

_ANDROID_UNESCAPES = {'n': '\n', 't': '\t'}


class AndroidXmlExporter(Exporter):
    """
    Exporter for Android strings.xml resource files.

    Android XML output structure:
    ```xml
    <?xml version="1.0" encoding="utf-8"?>
    <resources>
        <string name="app_name">My App</string>
        <string name="welcome">Welcome, %1$s!</string>
    </resources>
    ```

    Resource names must be valid identifiers ([A-Za-z_][A-Za-z0-9_.]*).
    Terms that already are come out unchanged; others have invalid
    characters replaced by '_' and get a numeric suffix if the result
    collides with an earlier name.
    """

    @property
    def name(self) -> str:
        return "androidxml"

    @property
    def content_type(self) -> str:
        return "application/xml; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "xml"

    def resource_name(self, term: str, used: set[str]) -> str:
        """Sanitize a term into a unique Android resource name."""
        name = re.sub(r'[^A-Za-z0-9_.]', '_', term)
        if not re.match(r'[A-Za-z_]', name):
            name = '_' + name

        base = name
        suffix = 2
        while name in used:
            name = f'{base}_{suffix}'
            suffix += 1
        used.add(name)
        return name

    def _escape_android(self, text: str) -> str:
        """Escape string for Android XML."""
        text = text.replace('\\', '\\\\')
        text = text.replace("'", "\\'")
        text = text.replace('"', '\\"')
        text = text.replace('\n', '\\n')
        text = text.replace('\t', '\\t')
        # Leading @ and ? would be read as resource references
        if text[:1] in ('@', '?'):
            text = '\\' + text
        return escape_text(text)

    def _unescape_android(self, text: str) -> str:
        """Unescape Android string escapes."""
        def replace(match):
            escaped = match.group(1)
            if escaped.startswith('u'):
                return chr(int(escaped[1:], 16))
            return _ANDROID_UNESCAPES.get(escaped, escaped)

        return re.sub(r'\\(u[0-9a-fA-F]{4}|.)', replace, text, flags=re.DOTALL)

    def export(self, document: TranslationDocument) -> str:
        lines = ['<?xml version="1.0" encoding="utf-8"?>', '<resources>']
        used: set[str] = set()

        for record in document.translations:
            name = escape_attribute(self.resource_name(record.term, used))
            escaped = self._escape_android(record.translation)
            lines.append(f'    <string name="{name}">{escaped}</string>')

        lines.append('</resources>')
        return '\n'.join(lines) + '\n'

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ValidationError(f"Invalid XML: {e}")

        if root.tag != 'resources':
            raise ValidationError(f"Root element must be 'resources', found '{root.tag}'")

        pairs = []
        for elem in root.findall('string'):
            name = elem.get('name')
            if name is None:
                continue
            # Inline markup (<xliff:g>, <b>) contributes its text
            text = ''.join(elem.itertext())
            pairs.append((name, self._unescape_android(text)))

        return TranslationDocument.from_pairs(iso, pairs)
