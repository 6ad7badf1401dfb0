#!/usr/bin/env python3
"""
PHP array exporter (Laravel / Symfony style language files).
"""

import re

from ..document import TranslationDocument
from .base import Exporter

_SINGLE_QUOTED = r"'((?:[^'\\]|\\.)*)'"
_ENTRY = re.compile(_SINGLE_QUOTED + r'\s*=>\s*' + _SINGLE_QUOTED, re.DOTALL)


class PhpExporter(Exporter):
    """
    Exporter for PHP files returning an array literal.

    ```php
    <?php
    return [
        'greeting' => 'Hello',
        'apostrophe' => 'It\\'s here',
    ];
    ```

    Strings are single-quoted, so only backslash and the quote are escaped.
    """

    @property
    def name(self) -> str:
        return "php"

    @property
    def content_type(self) -> str:
        return "application/x-httpd-php; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "php"

    def _quote(self, s: str) -> str:
        return "'" + s.replace('\\', '\\\\').replace("'", "\\'") + "'"

    def _unquote(self, s: str) -> str:
        # In single-quoted PHP strings only \\ and \' are escapes
        return re.sub(r"\\([\\'])", r'\1', s)

    def export(self, document: TranslationDocument) -> str:
        lines = ['<?php', '', 'return [']
        for record in document.translations:
            lines.append(f'    {self._quote(record.term)} => {self._quote(record.translation)},')
        lines.append('];')
        return '\n'.join(lines) + '\n'

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        pairs = [
            (self._unquote(key), self._unquote(value))
            for key, value in _ENTRY.findall(content)
        ]
        return TranslationDocument.from_pairs(iso, pairs)
