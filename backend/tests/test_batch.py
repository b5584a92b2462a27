"""Tests for multi-file batch processing."""

import json

import pytest

from ingest.core.constants import SourceFormat
from ingest.pipeline.batch import BatchFile, process_batch


@pytest.mark.asyncio
async def test_results_follow_input_order(lenient_parser, vehicle_record):
    files = [
        BatchFile(content="name,age\nA,1\nB,2", schema_name="Person", source="people.csv"),
        BatchFile(content=json.dumps(vehicle_record), schema_name="Vehicle", source="fleet.json"),
        BatchFile(content="<p><name>C</name><age>x</age></p>", schema_name="Person", source="p.xml"),
    ]

    items = await process_batch(files, parser=lenient_parser)

    assert [item.file_index for item in items] == [0, 1, 2]
    assert [item.source for item in items] == ["people.csv", "fleet.json", "p.xml"]
    assert len(items[0].results) == 2
    assert items[0].success and items[1].success
    assert not items[2].success
    assert items[2].results[0].errors == ["age: wrong-type"]


@pytest.mark.asyncio
async def test_extension_routes_format(parser):
    # ".csv" routes to CSV at full certainty instead of the detection fallback
    items = await process_batch(
        [BatchFile(content="name,age\nA,1", schema_name="Person", source="export.csv")],
        parser=parser,
    )
    result = items[0].results[0]
    assert result.metadata.source_format == "csv"
    assert result.confidence == 1.0


@pytest.mark.asyncio
async def test_unknown_extension_falls_back_to_detection(parser):
    items = await process_batch(
        [
            BatchFile(content='{"name": "A", "age": 1}', schema_name="Person", source="export.txt"),
            BatchFile(content="name,age\nB,2", schema_name="Person", source="export.txt"),
        ],
        parser=parser,
    )
    as_json, as_csv = (item.results[0] for item in items)

    assert as_json.success
    assert as_json.metadata.source_format == "json"
    assert as_csv.success
    assert as_csv.metadata.source_format == "csv"
    assert as_csv.confidence == pytest.approx(0.7)


@pytest.mark.asyncio
async def test_declared_format_wins_over_extension(parser):
    items = await process_batch(
        [BatchFile(
            content='{"name": "A", "age": 1}',
            schema_name="Person",
            format=SourceFormat.JSON,
            source="mislabelled.csv",
        )],
        parser=parser,
    )
    assert items[0].results[0].metadata.source_format == "json"


@pytest.mark.asyncio
async def test_progress_callback(parser):
    calls = []
    files = [
        BatchFile(content="name,age\nA,1", schema_name="Person"),
        BatchFile(content="name,age\nB,2", schema_name="Person"),
    ]

    await process_batch(files, parser=parser, on_progress=lambda done, total: calls.append((done, total)))

    assert sorted(calls) == [(1, 2), (2, 2)]


@pytest.mark.asyncio
async def test_unexpected_error_is_isolated(parser):
    errors = []
    files = [
        BatchFile(content="a: 1", schema_name="Person", format="yaml"),
        BatchFile(content="name,age\nA,1", schema_name="Person"),
    ]

    items = await process_batch(
        files,
        parser=parser,
        on_error=lambda exc, index: errors.append((type(exc), index)),
    )

    assert errors == [(ValueError, 0)]
    assert not items[0].success
    assert items[0].results[0].confidence == 0.0
    assert items[1].success


@pytest.mark.asyncio
async def test_call_level_failure_is_not_an_exception(parser):
    errors = []
    items = await process_batch(
        [BatchFile(content="name\nA", schema_name="Hotel")],
        parser=parser,
        on_error=lambda exc, index: errors.append(index),
    )
    assert errors == []
    assert items[0].results[0].errors == ["SchemaNotFound: Unknown schema type: Hotel"]


@pytest.mark.asyncio
async def test_item_serialises(parser):
    items = await process_batch(
        [BatchFile(content="name,age\nA,1", schema_name="Person", source="a.csv")],
        parser=parser,
    )
    data = items[0].to_dict()
    assert data["success"] is True
    assert data["results"][0]["data"] == {"name": "A", "age": 1}
