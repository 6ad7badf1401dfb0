#!/usr/bin/env python3
"""
Exporters for localization file formats.

Supported formats:
- csv: two-column CSV with header
- jsonflat / jsonnested: flat or dot-nested JSON
- yamlflat / yamlnested: flat or dot-nested YAML
- properties: Java .properties
- po: GNU gettext PO
- strings: iOS/macOS .strings
- php: PHP array language files
- androidxml: Android strings.xml
- resx: .NET RESX
- xliff12: XLIFF 1.2
"""

from .base import Exporter, ExporterRegistry, export
from .android_xml import AndroidXmlExporter
from .csv_exporter import CsvExporter
from .ios_strings import IosStringsExporter
from .json_exporter import JsonFlatExporter, JsonNestedExporter
from .php import PhpExporter
from .po import PoExporter
from .properties import PropertiesExporter
from .resx import ResxExporter
from .xliff import XliffExporter
from .yaml_exporter import YamlFlatExporter, YamlNestedExporter

# Registration order is the order formats are listed in
for _exporter in (
    CsvExporter,
    JsonFlatExporter,
    JsonNestedExporter,
    YamlFlatExporter,
    YamlNestedExporter,
    PropertiesExporter,
    PoExporter,
    IosStringsExporter,
    PhpExporter,
    AndroidXmlExporter,
    ResxExporter,
    XliffExporter,
):
    ExporterRegistry.register(_exporter)

__all__ = [
    'Exporter',
    'ExporterRegistry',
    'export',
    'AndroidXmlExporter',
    'CsvExporter',
    'IosStringsExporter',
    'JsonFlatExporter',
    'JsonNestedExporter',
    'PhpExporter',
    'PoExporter',
    'PropertiesExporter',
    'ResxExporter',
    'XliffExporter',
    'YamlFlatExporter',
    'YamlNestedExporter',
]
