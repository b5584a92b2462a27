"""
CSV reader — header/row mapping onto schema fields.

Known limitation: fields are split on the delimiter verbatim.  Quoted
values containing the delimiter are not unescaped.
"""

from __future__ import annotations

import re

from ingest.core.constants import SourceFormat
from ingest.core.logging import get_logger
from ingest.pipeline.context import ParseOptions
from ingest.pipeline.errors import ReadSyntaxError
from ingest.processing.readers.base import BaseReader, LooseRecord, ReadOutput
from ingest.schemas.models import RecordSchema

logger = get_logger(__name__)

_NORMALIZE_RE = re.compile(r"[\s_\-]+")


def normalize_header(token: str) -> str:
    """Case- and separator-insensitive key used for header matching."""
    return _NORMALIZE_RE.sub("", token).lower()


class CsvReader(BaseReader):
    """Read comma-separated rows; one LooseRecord per non-empty data line."""

    format = SourceFormat.CSV

    def read(self, raw_text: str, schema: RecordSchema, options: ParseOptions) -> ReadOutput:
        text = raw_text.strip()
        if not text:
            raise ReadSyntaxError("empty CSV input", source_format=self.format)

        lines = text.splitlines()
        output = ReadOutput(multi_record=True)
        delimiter = options.delimiter

        if options.has_header:
            columns = self._map_header(lines[0], schema, delimiter, output)
            data_lines = lines[1:]
            first_line_no = 2
        else:
            columns = list(schema.field_names)
            data_lines = lines
            first_line_no = 1

        for offset, line in enumerate(data_lines):
            stripped = line.strip()
            if not stripped:
                continue

            line_no = first_line_no + offset
            values = [v.strip() for v in stripped.split(delimiter)]
            record = LooseRecord(fields={}, raw=stripped, index=len(output.records))

            for position, value in enumerate(values):
                if position >= len(columns):
                    record.warnings.append(
                        f"line {line_no}: {len(values) - len(columns)} extra value(s) ignored"
                    )
                    break
                column = columns[position]
                if column is not None:
                    record.fields[column] = value

            output.records.append(record)

        if not output.records:
            output.warnings.append("CSV input contains no data rows")

        logger.debug(
            "CSV read complete",
            rows=len(output.records),
            columns=len(columns),
            has_header=options.has_header,
        )
        return output

    def _map_header(
        self,
        header_line: str,
        schema: RecordSchema,
        delimiter: str,
        output: ReadOutput,
    ) -> list[str | None]:
        """
        Map header tokens to schema field names.

        Exact name wins; otherwise a normalized match.  Columns that match
        nothing (or a field already claimed) map to None and are skipped.
        """
        by_normalized = {normalize_header(name): name for name in schema.field_names}
        claimed: set[str] = set()
        columns: list[str | None] = []

        for token in (t.strip() for t in header_line.split(delimiter)):
            name = token if schema.get_field(token) else by_normalized.get(normalize_header(token))

            if name is None:
                if token:
                    output.warnings.append(f"{token}: unknown column ignored")
                else:
                    output.warnings.append("empty header column ignored")
                columns.append(None)
            elif name in claimed:
                output.warnings.append(f"{token}: duplicate column for '{name}' ignored")
                columns.append(None)
            else:
                claimed.add(name)
                columns.append(name)

        if not claimed:
            raise ReadSyntaxError(
                f"CSV header matches no field of schema '{schema.name}'",
                source_format=self.format,
                details={"header": header_line},
            )
        return columns
