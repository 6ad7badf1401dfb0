#!/usr/bin/env python3
"""
CSV exporter.

Two columns, term and translation, with a header row.
"""

import csv
import io

from ..document import TranslationDocument
from ..errors import ValidationError
from .base import Exporter

HEADER = ['term', 'translation']


class CsvExporter(Exporter):
    """
    Exporter for two-column CSV files.

    ```
    term,translation
    greeting,Hello
    farewell,"Goodbye, friend"
    ```

    Fields containing the delimiter, quotes or line breaks are quoted;
    everything else is written bare. The csv module only quotes characters
    of the line terminator, so rows holding a bare carriage return go
    through a writer that quotes every field.
    """

    @property
    def name(self) -> str:
        return "csv"

    @property
    def content_type(self) -> str:
        return "text/csv; charset=utf-8"

    @property
    def file_extension(self) -> str:
        return "csv"

    def export(self, document: TranslationDocument) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        quoted_writer = csv.writer(buffer, lineterminator='\n', quoting=csv.QUOTE_ALL)
        writer.writerow(HEADER)
        for record in document.translations:
            row = [record.term, record.translation]
            if any('\r' in field for field in row):
                quoted_writer.writerow(row)
            else:
                writer.writerow(row)
        return buffer.getvalue()

    def parse(self, content: str, iso: str = "") -> TranslationDocument:
        reader = csv.reader(io.StringIO(content, newline=''))
        try:
            header = next(reader)
        except StopIteration:
            raise ValidationError("CSV content is empty")
        except csv.Error as e:
            raise ValidationError(f"Invalid CSV: {e}")

        if [h.strip().lower() for h in header] != HEADER:
            raise ValidationError(f"CSV header must be {','.join(HEADER)}")

        pairs = []
        try:
            for line_num, row in enumerate(reader, 2):
                if not row:
                    continue
                if len(row) != 2:
                    raise ValidationError(f"Line {line_num}: expected 2 columns, found {len(row)}")
                pairs.append((row[0], row[1]))
        except csv.Error as e:
            raise ValidationError(f"Invalid CSV: {e}")

        return TranslationDocument.from_pairs(iso, pairs)
