#!/usr/bin/env python3
"""
XLIFF exporter.

Only XLIFF 1.2 is produced; the version is a constructor parameter so a
2.0 variant can be registered next to it.
"""

from typing import Optional
from xml.etree import ElementTree as ET

from ..document import TranslationDocument
from ..errors import UnsupportedFormatError, ValidationError
from .base import Exporter
from .xml_escape import escape_attribute, escape_text

SUPPORTED_VERSIONS = {'1.2': 'urn:oasis:names:tc:xliff:document:1.2'}


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


class XliffExporter(Exporter):
    """
    Exporter for XLIFF 1.2 files.

    ```xml
    <xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">
      <file original="namespace1" datatype="plaintext"
            source-language="en" target-language="fr">
        <body>
          <trans-unit id="greeting">
            <source>greeting</source>
            <target>Bonjour</target>
          </trans-unit>
        </body>
      </file>
    </xliff>
    ```

    Args:
        version: XLIFF version, only "1.2" is supported
        source_language: Value of source-language; defaults to the
            document's locale since terms carry no language of their own
    """

    def __init__(self, version: str = '1.2', source_language: Optional[str] = None):
        if version not in SUPPORTED_VERSIONS:
            raise UnsupportedFormatError(f"xliff{version}", [f"xliff{v}" for v in SUPPORTED_VERSIONS])
        self.version = version
        self.namespace = SUPPORTED_VERSIONS[version]
        self.source_language = source_language

    @property
    def name(self) -> str:
        return "xliff" + self.version.replace('.', '')

    @property
    def content_type(self) -> str:
        return "application/x-xliff+xml; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "xlf"

    def export(self, document: TranslationDocument) -> str:
        target = escape_attribute(document.iso)
        source = escape_attribute(self.source_language or document.iso)
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<xliff xmlns="{self.namespace}" version="{self.version}">',
            f'  <file original="namespace1" datatype="plaintext" '
            f'source-language="{source}" target-language="{target}">',
            '    <body>',
        ]
        for record in document.translations:
            lines.append(f'      <trans-unit id="{escape_attribute(record.term)}">')
            lines.append(f'        <source>{escape_text(record.term)}</source>')
            lines.append(f'        <target>{escape_text(record.translation)}</target>')
            lines.append('      </trans-unit>')
        lines.extend(['    </body>', '  </file>', '</xliff>'])
        return '\n'.join(lines) + '\n'

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ValidationError(f"Invalid XML: {e}")

        if _local_name(root.tag) != 'xliff':
            raise ValidationError(f"Root element must be 'xliff', found '{_local_name(root.tag)}'")

        pairs = []
        for elem in root.iter():
            tag = _local_name(elem.tag)
            if tag == 'file' and not iso:
                iso = elem.get('target-language', '')
            elif tag == 'trans-unit':
                source = target = None
                for child in elem:
                    if _local_name(child.tag) == 'source':
                        source = ''.join(child.itertext())
                    elif _local_name(child.tag) == 'target':
                        target = ''.join(child.itertext())
                term = elem.get('id')
                if term is None:
                    term = source or ''
                pairs.append((term, target or ''))

        return TranslationDocument.from_pairs(iso, pairs)
