"""
XML reader — flattens elements into loose records.

Shapes:
    <events><event>…</event><event>…</event></events>   → one record per <event>
    <event><name>…</name><startDate>…</startDate></event> → the root is the record

A record's fields are its attributes plus the text of its direct child
elements.  A child tag repeated inside one record becomes a list.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from ingest.core.constants import SourceFormat
from ingest.pipeline.context import ParseOptions
from ingest.pipeline.errors import ReadSyntaxError
from ingest.processing.readers.base import BaseReader, LooseRecord, ReadOutput
from ingest.schemas.models import RecordSchema


def local_name(tag: str) -> str:
    """Strip a '{namespace}' prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


class XmlReader(BaseReader):
    format = SourceFormat.XML

    def read(self, raw_text: str, schema: RecordSchema, options: ParseOptions) -> ReadOutput:
        if not raw_text.strip():
            raise ReadSyntaxError("empty XML input", source_format=self.format)

        try:
            root = ET.fromstring(raw_text.strip())
        except ET.ParseError as exc:
            raise ReadSyntaxError(f"XML parsing error: {exc}", source_format=self.format) from exc

        children = list(root)
        if self._is_collection(children):
            output = ReadOutput(multi_record=True)
            for index, element in enumerate(children):
                try:
                    raw = ET.tostring(element, encoding="unicode").strip()
                except RecursionError as exc:
                    raise ReadSyntaxError(
                        f"XML parsing error: element {index} nested too deep",
                        source_format=self.format,
                    ) from exc
                record = LooseRecord(fields={}, raw=raw, index=index)
                self._flatten(element, record)
                output.records.append(record)
            return output

        record = LooseRecord(fields={}, raw=raw_text, index=0)
        self._flatten(root, record)
        return ReadOutput(records=[record])

    @staticmethod
    def _is_collection(children: list[ET.Element]) -> bool:
        """Root children all share one tag and each carries its own fields."""
        if not children:
            return False
        tags = {local_name(child.tag) for child in children}
        if len(tags) != 1:
            return False
        return all(len(child) > 0 or child.attrib for child in children)

    @staticmethod
    def _flatten(element: ET.Element, record: LooseRecord) -> None:
        fields: dict[str, Any] = record.fields

        for key, value in element.attrib.items():
            fields[local_name(key)] = value

        for child in element:
            name = local_name(child.tag)
            if len(child) > 0:
                record.warnings.append(f"{name}: nested element ignored")
                continue

            text = (child.text or "").strip()
            if name in fields:
                existing = fields[name]
                if isinstance(existing, list):
                    existing.append(text)
                else:
                    fields[name] = [existing, text]
            else:
                fields[name] = text
