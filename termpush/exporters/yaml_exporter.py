#!/usr/bin/env python3
"""
YAML exporters for flat and nested key layouts (Rails/Symfony style files).
"""

import yaml

from ..document import TranslationDocument
from ..errors import ValidationError
from .base import Exporter
from .nesting import flatten, nest

# Line breaks besides \n that PyYAML folds to a space when written unquoted
UNICODE_BREAKS = "\x85\u2028\u2029"


class _Dumper(yaml.SafeDumper):
    pass


def _represent_str(dumper, data):
    if any(ch in data for ch in UNICODE_BREAKS):
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style='"')
    return dumper.represent_str(data)


_Dumper.add_representer(str, _represent_str)


class YamlFlatExporter(Exporter):
    """
    Single-level YAML mapping, one key per term.

    ```yaml
    user.greeting: Hello
    welcome: 'yes'
    ```

    Values that YAML would read as something other than the same string
    (booleans, numbers, null, strings with ': ' or leading '#') are quoted
    by the dumper. Values holding NEL or the Unicode line and paragraph
    separators are double-quoted so they come back unchanged.
    """

    @property
    def name(self) -> str:
        return "yamlflat"

    @property
    def content_type(self) -> str:
        return "application/x-yaml; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "yml"

    def export(self, document: TranslationDocument) -> str:
        return self._dump(document.as_dict())

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        return TranslationDocument.from_pairs(iso, flatten(self._load(content)))

    def _dump(self, data: dict) -> str:
        return yaml.dump(
            data,
            Dumper=_Dumper,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
            width=float('inf'),
        )

    def _load(self, content: str) -> dict:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValidationError(f"Invalid YAML syntax: {e}")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("YAML root must be a mapping")
        return data


class YamlNestedExporter(YamlFlatExporter):
    """
    Nested YAML mapping, terms split on '.'.

    ```yaml
    user:
      greeting: Hello
    welcome: Welcome
    ```
    """

    @property
    def name(self) -> str:
        return "yamlnested"

    def export(self, document: TranslationDocument) -> str:
        return self._dump(nest(document.translations))
