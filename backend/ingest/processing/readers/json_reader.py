"""JSON reader — one object is one record, an array is a batch."""

from __future__ import annotations

import json

from ingest.core.constants import SourceFormat
from ingest.pipeline.context import ParseOptions
from ingest.pipeline.errors import ReadSyntaxError
from ingest.processing.readers.base import BaseReader, LooseRecord, ReadOutput
from ingest.schemas.models import RecordSchema


class JsonReader(BaseReader):
    format = SourceFormat.JSON

    def read(self, raw_text: str, schema: RecordSchema, options: ParseOptions) -> ReadOutput:
        if not raw_text.strip():
            raise ReadSyntaxError("empty JSON input", source_format=self.format)

        try:
            value = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ReadSyntaxError(
                f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
                source_format=self.format,
            ) from exc
        except RecursionError as exc:
            raise ReadSyntaxError(
                "Invalid JSON: nesting too deep", source_format=self.format,
            ) from exc
        except ValueError as exc:
            # e.g. integer literals past the int string-conversion limit
            raise ReadSyntaxError(f"Invalid JSON: {exc}", source_format=self.format) from exc

        if isinstance(value, dict):
            return ReadOutput(records=[LooseRecord(fields=value, raw=raw_text, index=0)])

        if isinstance(value, list):
            output = ReadOutput(multi_record=True)
            for index, item in enumerate(value):
                if not isinstance(item, dict):
                    raise ReadSyntaxError(
                        f"Invalid JSON: array element {index} is "
                        f"{type(item).__name__}, expected an object",
                        source_format=self.format,
                    )
                output.records.append(
                    LooseRecord(fields=item, raw=json.dumps(item, ensure_ascii=False), index=index)
                )
            if not output.records:
                output.warnings.append("JSON array is empty")
            return output

        raise ReadSyntaxError(
            f"Invalid JSON: top-level {type(value).__name__} is not an object or array",
            source_format=self.format,
        )
