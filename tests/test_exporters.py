"""Tests for the exporter registry and behavior shared by all formats."""

import pytest

from termpush.document import TranslationDocument
from termpush.errors import UnsupportedFormatError, ValidationError
from termpush.exporters import ExporterRegistry, export

ALL_FORMATS = [
    "csv",
    "jsonflat",
    "jsonnested",
    "yamlflat",
    "yamlnested",
    "properties",
    "po",
    "strings",
    "php",
    "androidxml",
    "resx",
    "xliff12",
]

# Android resource names are sanitized, so terms are not preserved verbatim
LOSSLESS_FORMATS = [f for f in ALL_FORMATS if f != "androidxml"]


class TestExporterRegistry:
    def test_all_formats_registered_in_order(self):
        assert ExporterRegistry.formats() == ALL_FORMATS

    def test_get_is_case_insensitive(self):
        assert ExporterRegistry.get("JsonFlat").name == "jsonflat"

    def test_unknown_format_raises(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ExporterRegistry.get("docx")

        assert exc_info.value.details == {"format": "docx"}
        assert "Available: csv, jsonflat" in exc_info.value.message

    def test_unsupported_format_is_a_value_error(self):
        with pytest.raises(ValueError):
            ExporterRegistry.get("docx")

    def test_missing_format_raises(self):
        with pytest.raises(UnsupportedFormatError):
            ExporterRegistry.get(None)

    def test_list_formats_includes_content_type_and_extension(self):
        formats = {f["name"]: f for f in ExporterRegistry.list_formats()}

        assert formats["jsonnested"]["content_type"] == "application/json; charset=utf-8"
        assert formats["yamlflat"]["extension"] == "yml"
        assert formats["xliff12"]["extension"] == "xlf"
        assert formats["po"]["content_type"].startswith("text/x-gettext-translation")

    def test_module_level_export(self):
        document = TranslationDocument.from_pairs("fr", [("greeting", "Bonjour")])

        assert export("jsonflat", document) == '{\n  "greeting": "Bonjour"\n}'


@pytest.mark.parametrize("format_id", LOSSLESS_FORMATS)
def test_export_then_parse_preserves_records(format_id, tricky_document):
    exporter = ExporterRegistry.get(format_id)

    parsed = exporter.parse(exporter.export(tricky_document), iso="fr")

    assert parsed.iso == "fr"
    assert [(r.term, r.translation) for r in parsed.translations] == [
        (r.term, r.translation) for r in tricky_document.translations
    ]


@pytest.mark.parametrize("format_id", ALL_FORMATS)
def test_empty_document_exports_and_parses(format_id):
    exporter = ExporterRegistry.get(format_id)
    document = TranslationDocument(iso="de")

    content = exporter.export(document)

    assert isinstance(content, str)
    assert len(exporter.parse(content, iso="de")) == 0


@pytest.mark.parametrize("format_id", ALL_FORMATS)
def test_export_bytes_is_utf8(format_id):
    exporter = ExporterRegistry.get(format_id)
    document = TranslationDocument.from_pairs("de", [("greeting", "Grüße")])

    assert exporter.export_bytes(document) == exporter.export(document).encode("utf-8")


@pytest.mark.parametrize("format_id", ALL_FORMATS)
def test_export_does_not_modify_document(format_id, tricky_document):
    before = [(r.term, r.translation) for r in tricky_document.translations]

    ExporterRegistry.get(format_id).export(tricky_document)

    assert [(r.term, r.translation) for r in tricky_document.translations] == before


class TestCsvExporter:
    def test_export_quotes_only_when_needed(self):
        document = TranslationDocument.from_pairs("en", [
            ("greeting", "Hello"),
            ("farewell", "Goodbye, friend"),
            ("quote", 'She said "hi"'),
        ])

        content = ExporterRegistry.get("csv").export(document)

        assert content == (
            "term,translation\n"
            "greeting,Hello\n"
            'farewell,"Goodbye, friend"\n'
            'quote,"She said ""hi"""\n'
        )

    def test_bare_carriage_return_survives_parse(self):
        document = TranslationDocument.from_pairs("en", [
            ("cr", "a\rb"),
            ("term\rwith.cr", "plain"),
            ("crlf", "one\r\ntwo"),
        ])
        exporter = ExporterRegistry.get("csv")

        content = exporter.export(document)

        assert '"cr","a\rb"\n' in content
        assert '"term\rwith.cr","plain"\n' in content
        assert exporter.parse(content, iso="en").as_dict() == document.as_dict()

    def test_parse_rejects_wrong_header(self):
        with pytest.raises(ValidationError, match="header"):
            ExporterRegistry.get("csv").parse("key,value\na,b\n")

    def test_parse_rejects_extra_columns(self):
        with pytest.raises(ValidationError, match="Line 2"):
            ExporterRegistry.get("csv").parse("term,translation\na,b,c\n")


class TestJsonExporters:
    def test_flat_keeps_dotted_keys(self):
        document = TranslationDocument.from_pairs("en", [("user.greeting", "Hello")])

        assert ExporterRegistry.get("jsonflat").export(document) == (
            '{\n  "user.greeting": "Hello"\n}'
        )

    def test_flat_writes_unicode_unescaped(self):
        document = TranslationDocument.from_pairs("ja", [("city", "東京")])

        assert '"東京"' in ExporterRegistry.get("jsonflat").export(document)

    def test_flat_parse_rejects_nested_values(self):
        with pytest.raises(ValidationError, match="nested"):
            ExporterRegistry.get("jsonflat").parse('{"user": {"greeting": "Hello"}}')

    def test_parse_rejects_non_object_root(self):
        with pytest.raises(ValidationError, match="object"):
            ExporterRegistry.get("jsonnested").parse('["a", "b"]')

    def test_parse_rejects_invalid_syntax(self):
        with pytest.raises(ValidationError, match="Invalid JSON"):
            ExporterRegistry.get("jsonflat").parse('{"a": ')

    def test_nested_groups_terms(self):
        document = TranslationDocument.from_pairs("en", [
            ("user.greeting", "Hello"),
            ("user.farewell", "Bye"),
            ("welcome", "Welcome"),
        ])

        content = ExporterRegistry.get("jsonnested").export(document)

        assert content == (
            '{\n'
            '  "user": {\n'
            '    "greeting": "Hello",\n'
            '    "farewell": "Bye"\n'
            '  },\n'
            '  "welcome": "Welcome"\n'
            '}'
        )


class TestYamlExporters:
    def test_flat_quotes_values_yaml_would_reinterpret(self):
        document = TranslationDocument.from_pairs("en", [
            ("answer", "yes"),
            ("count", "42"),
            ("nothing", ""),
            ("plain", "Hello"),
        ])

        content = ExporterRegistry.get("yamlflat").export(document)

        assert content == "answer: 'yes'\ncount: '42'\nnothing: ''\nplain: Hello\n"

    def test_nested_layout(self):
        document = TranslationDocument.from_pairs("en", [
            ("user.greeting", "Hello"),
            ("welcome", "Welcome"),
        ])

        content = ExporterRegistry.get("yamlnested").export(document)

        assert content == "user:\n  greeting: Hello\nwelcome: Welcome\n"

    @pytest.mark.parametrize("format_id", ["yamlflat", "yamlnested"])
    def test_unicode_line_breaks_are_double_quoted(self, format_id):
        document = TranslationDocument.from_pairs("en", [
            ("nel", "x\x85y"),
            ("separators", "a\u2028b\u2029c"),
            ("plain", "Hello"),
        ])
        exporter = ExporterRegistry.get(format_id)

        content = exporter.export(document)

        assert 'nel: "x\\Ny"\n' in content
        assert "plain: Hello\n" in content
        assert exporter.parse(content, iso="en").as_dict() == document.as_dict()

    def test_parse_empty_content(self):
        assert len(ExporterRegistry.get("yamlflat").parse("")) == 0

    def test_parse_converts_scalars_to_strings(self):
        document = ExporterRegistry.get("yamlnested").parse(
            "flags:\n  enabled: true\n  count: 3\n  none: null\n"
        )

        assert document.as_dict() == {
            "flags.enabled": "true",
            "flags.count": "3",
            "flags.none": "",
        }

    def test_parse_rejects_non_mapping(self):
        with pytest.raises(ValidationError, match="mapping"):
            ExporterRegistry.get("yamlflat").parse("- a\n- b\n")


class TestIosStringsExporter:
    def test_export(self):
        document = TranslationDocument.from_pairs("en", [
            ("greeting", "Hello, %@!"),
            ("quote", 'She said "hi"\n'),
        ])

        content = ExporterRegistry.get("strings").export(document)

        assert content == (
            '"greeting" = "Hello, %@!";\n'
            '\n'
            '"quote" = "She said \\"hi\\"\\n";\n'
        )

    def test_parse_ignores_comments_outside_strings(self):
        content = (
            '/* Greeting shown on launch */\n'
            '"greeting" = "Hello";\n'
            '// link\n'
            '"url" = "http://example.com/*path*/";\n'
        )

        document = ExporterRegistry.get("strings").parse(content, iso="en")

        assert document.as_dict() == {
            "greeting": "Hello",
            "url": "http://example.com/*path*/",
        }


class TestPhpExporter:
    def test_export(self):
        document = TranslationDocument.from_pairs("en", [
            ("greeting", "Hello"),
            ("apostrophe", "It's here"),
            ("path", "C:\\temp"),
        ])

        content = ExporterRegistry.get("php").export(document)

        assert content == (
            "<?php\n"
            "\n"
            "return [\n"
            "    'greeting' => 'Hello',\n"
            "    'apostrophe' => 'It\\'s here',\n"
            "    'path' => 'C:\\\\temp',\n"
            "];\n"
        )

    def test_parse_keeps_non_escape_backslashes(self):
        document = ExporterRegistry.get("php").parse("<?php\nreturn ['a' => 'x\\ny'];\n")

        assert document.as_dict() == {"a": "x\\ny"}
