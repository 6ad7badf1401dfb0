#!/usr/bin/env python3
"""
Conversion between dotted terms and nested mappings.

Shared by the nested JSON and YAML exporters. A term like "user.greeting"
becomes {"user": {"greeting": ...}}. When a prefix is needed both as a
leaf and as a branch, the part that cannot be nested stays flat at the
deepest level where it fits:

    terms "a" and "a.b"   ->  {"a": "...", "a.b": "..."}

Flattening joins every path back with the delimiter, so both shapes
produce the original terms.
"""

from typing import Any, Iterable, Iterator

from ..document import TranslationRecord

DELIMITER = '.'


def nest(records: Iterable[TranslationRecord], delimiter: str = DELIMITER) -> dict:
    """
    Build a nested mapping from records, keeping record order.

    Args:
        records: Records whose terms are split on delimiter
        delimiter: Path separator inside terms

    Returns:
        Nested dict with string leaves
    """
    root: dict = {}
    for record in records:
        _set_nested(root, record.term.split(delimiter), record.translation, delimiter)
    return root


def _set_nested(obj: dict, path: list[str], value: str, delimiter: str) -> None:
    """
    Set value at path, creating intermediate dicts as needed.

    Args:
        obj: Root dictionary
        path: Term split into segments
        value: Translation to store
        delimiter: Used to rebuild flat keys on collision
    """
    for i, key in enumerate(path[:-1]):
        child = obj.get(key)
        if child is None:
            child = obj[key] = {}
        elif not isinstance(child, dict):
            # A leaf already owns this prefix
            obj[delimiter.join(path[i:])] = value
            return
        obj = child

    final_key = path[-1]
    existing = obj.get(final_key)
    if isinstance(existing, dict):
        # Branch turns into a leaf: hoist its entries as flat keys
        del obj[final_key]
        for sub_key, sub_value in flatten(existing, delimiter):
            obj[f"{final_key}{delimiter}{sub_key}"] = sub_value
    obj[final_key] = value


def flatten(obj: Any, delimiter: str = DELIMITER) -> list[tuple[str, str]]:
    """
    Flatten a nested mapping into (term, value) pairs in mapping order.

    Lists are flattened with their indices as path segments. Scalars other
    than strings are converted with str(); null becomes an empty string.
    """
    return list(_walk(obj, [], delimiter))


def _walk(obj: Any, path_parts: list[str], delimiter: str) -> Iterator[tuple[str, str]]:
    if isinstance(obj, dict):
        for key, value in obj.items():
            yield from _walk(value, path_parts + [str(key)], delimiter)
    elif isinstance(obj, list):
        for i, item in enumerate(obj):
            yield from _walk(item, path_parts + [str(i)], delimiter)
    elif obj is None:
        yield delimiter.join(path_parts), ""
    elif isinstance(obj, bool):
        yield delimiter.join(path_parts), "true" if obj else "false"
    else:
        yield delimiter.join(path_parts), str(obj)
