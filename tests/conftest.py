"""Shared fixtures: a small catalog with translated, untranslated and ambiguous terms."""

import copy

import pytest

from termpush.collector import TermCollector
from termpush.document import TranslationDocument
from termpush.errors import SinkError
from termpush.sink import StorageSink
from termpush.store import CatalogStore

CATALOG = {
    "projects": {
        "demo": {
            "members": {"alice": "admin", "bob": "viewer", "mallory": "guest"},
            "locales": ["en", "fr", "de"],
            "terms": {
                "greeting.hello": {"en": "Hello", "fr": "Bonjour", "de": "Hallo"},
                "app.title": {"en": "My App", "fr": "Mon application", "de": ""},
                "farewell": {"en": "Goodbye", "fr": ""},
                # Two rows for one locale: treated as untranslated
                "cart.items": {"en": "Items", "de": ["Artikel", "Posten"]},
            },
        },
        "empty": {
            "members": {"alice": "admin"},
            "locales": [],
            "terms": {},
        },
    }
}


class RecordingStore(CatalogStore):
    """CatalogStore that records every read."""

    def __init__(self, catalog):
        super().__init__(catalog)
        self.calls = []

    def project_exists(self, project_id):
        self.calls.append(("project_exists", project_id))
        return super().project_exists(project_id)

    def project_locales(self, project_id):
        self.calls.append(("project_locales", project_id))
        return super().project_locales(project_id)

    def terms_with_translations(self, project_id, project_locale):
        self.calls.append(("terms_with_translations", project_locale.code))
        return super().terms_with_translations(project_id, project_locale)


class MemorySink(StorageSink):
    """Sink keeping uploads in a dict; fails for keys ending in a listed locale."""

    def __init__(self, fail_locales=()):
        self.objects = {}
        self.fail_locales = set(fail_locales)

    def upload(self, key, content, content_type):
        if key.rsplit("/", 1)[-1] in self.fail_locales:
            raise SinkError(f"Upload rejected for {key}")
        self.objects[key] = (content, content_type)
        return f"memory://{key}"


@pytest.fixture
def catalog():
    return copy.deepcopy(CATALOG)


@pytest.fixture
def store(catalog):
    return RecordingStore(catalog)


@pytest.fixture
def collector(store):
    return TermCollector(store)


@pytest.fixture
def tricky_document():
    """Terms and values containing delimiters, quotes, escapes and non-ASCII text."""
    return TranslationDocument.from_pairs("fr", [
        ("app.title", "Mon application"),
        ("cart.items.count", "%d articles, \"quoted\" & <b>bold</b>"),
        ("empty.value", ""),
        ("errors.path", "C:\\Users\\name\\file.txt"),
        ("multi.line", "Line one\nLine two\tTabbed"),
        ("quote's", "It's \"here\" = yes: #1 !"),
        ("unicode", "Grüße, 東京 😀"),
        ("yaml.special", "yes"),
    ])


@pytest.fixture
def memory_sink():
    return MemorySink()


@pytest.fixture
def failing_sink():
    """Sink rejecting the second configured locale (fr)."""
    return MemorySink(fail_locales={"fr"})
