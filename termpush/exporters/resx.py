#!/usr/bin/env python3
"""
.NET RESX resource file exporter.
"""

from xml.etree import ElementTree as ET

from ..document import TranslationDocument
from ..errors import ValidationError
from .base import Exporter
from .xml_escape import escape_attribute, escape_text

_RESX_HEADER = [
    '<?xml version="1.0" encoding="utf-8"?>',
    '<root>',
    '  <resheader name="resmimetype">',
    '    <value>text/microsoft-resx</value>',
    '  </resheader>',
    '  <resheader name="version">',
    '    <value>2.0</value>',
    '  </resheader>',
    '  <resheader name="reader">',
    '    <value>System.Resources.ResXResourceReader, System.Windows.Forms, '
    'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089</value>',
    '  </resheader>',
    '  <resheader name="writer">',
    '    <value>System.Resources.ResXResourceWriter, System.Windows.Forms, '
    'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089</value>',
    '  </resheader>',
]


class ResxExporter(Exporter):
    """
    Exporter for .NET RESX files.

    ```xml
    <data name="greeting" xml:space="preserve">
      <value>Hello</value>
    </data>
    ```
    """

    @property
    def name(self) -> str:
        return "resx"

    @property
    def content_type(self) -> str:
        return "application/xml; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "resx"

    def export(self, document: TranslationDocument) -> str:
        lines = list(_RESX_HEADER)
        for record in document.translations:
            lines.append(f'  <data name="{escape_attribute(record.term)}" xml:space="preserve">')
            lines.append(f'    <value>{escape_text(record.translation)}</value>')
            lines.append('  </data>')
        lines.append('</root>')
        return '\n'.join(lines) + '\n'

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ValidationError(f"Invalid XML: {e}")

        pairs = []
        for data in root.findall('data'):
            name = data.get('name')
            if name is None:
                continue
            value = data.find('value')
            text = value.text if value is not None else None
            pairs.append((name, text or ''))

        return TranslationDocument.from_pairs(iso, pairs)
