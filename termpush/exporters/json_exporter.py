#!/usr/bin/env python3
"""
JSON exporters for flat and nested key layouts.
"""

import json

from ..document import TranslationDocument
from ..errors import ValidationError
from .base import Exporter
from .nesting import flatten, nest


class JsonFlatExporter(Exporter):
    """
    Single-level JSON object, one key per term.

    ```json
    {
      "user.greeting": "Hello",
      "welcome": "Welcome"
    }
    ```
    """

    @property
    def name(self) -> str:
        return "jsonflat"

    @property
    def content_type(self) -> str:
        return "application/json; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "json"

    def export(self, document: TranslationDocument) -> str:
        return json.dumps(document.as_dict(), indent=2, ensure_ascii=False)

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        data = self._load(content)
        nested = [k for k, v in data.items() if isinstance(v, (dict, list))]
        if nested:
            raise ValidationError(f"Flat JSON must not contain nested values: {', '.join(nested)}")
        return TranslationDocument.from_pairs(iso, flatten(data))

    def _load(self, content: str) -> dict:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON syntax: {e.msg} at line {e.lineno}")
        if not isinstance(data, dict):
            raise ValidationError("Root element must be an object")
        return data


class JsonNestedExporter(JsonFlatExporter):
    """
    Nested JSON object, terms split on '.' (i18next / vue-i18n style).

    ```json
    {
      "user": {
        "greeting": "Hello"
      },
      "welcome": "Welcome"
    }
    ```

    Keys are flattened back to dot notation when parsing.
    """

    @property
    def name(self) -> str:
        return "jsonnested"

    def export(self, document: TranslationDocument) -> str:
        return json.dumps(nest(document.translations), indent=2, ensure_ascii=False)

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        return TranslationDocument.from_pairs(iso, flatten(self._load(content)))
