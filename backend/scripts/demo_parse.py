#!/usr/bin/env python3
"""
Demo script — run the ingestion engine locally on sample uploads.

Shows declared and auto-detected formats, fail-fast vs. accumulate
modes, and a mixed multi-file batch.

Usage:
    cd backend
    python -m scripts.demo_parse
"""

import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

PASSENGERS_CSV = """passengerId,firstName,lastName,dateOfBirth,nationality,specialAssistance
P-001,Amira,Haddad,1988-04-12,LB,false
P-002,Jon,Berg,31/13/1990,NO,no
P-003,Li,Wei,1975-11-02,CN,1
"""

EVENT_JSON = """{
  "eventId": "EV-2026-07",
  "name": "Regional Ops Summit",
  "eventType": "conference",
  "startDate": "2026-03-09",
  "endDate": "2026-03-11",
  "attendees": "P-001, P-003",
  "budget": "125000"
}"""

FLEET_XML = """<fleet>
  <vehicle vehicleId="V-100">
    <registrationNumber>DXB-1001</registrationNumber><make>Toyota</make><model>Coaster</model>
    <year>2021</year><color>white</color><capacity>22</capacity><fuelType>diesel</fuelType>
    <transmission>manual</transmission><mileage>48210</mileage>
  </vehicle>
  <vehicle vehicleId="V-101">
    <registrationNumber>DXB-1002</registrationNumber><make>Nissan</make><model>Urvan</model>
    <year>1890</year><color>silver</color><capacity>0</capacity><fuelType>lpg</fuelType>
    <transmission>manual</transmission><mileage>n/a</mileage>
  </vehicle>
</fleet>"""


async def run_accumulate_csv():
    """DEMO 1: CSV with bad rows, accumulate mode."""
    from ingest import ParseOptions, create_data_parser

    print("\n" + "=" * 70)
    print("  DEMO 1: Passenger CSV (continue_on_error=True)")
    print("=" * 70)

    parser = create_data_parser(continue_on_error=True)
    results = await parser.parse_csv(PASSENGERS_CSV, "Passenger", ParseOptions(source="passengers.csv"))
    _print_results(results)


async def run_fail_fast_csv():
    """DEMO 2: Same CSV, fail-fast mode."""
    from ingest import create_data_parser

    print("\n" + "=" * 70)
    print("  DEMO 2: Passenger CSV (continue_on_error=False)")
    print("=" * 70)

    parser = create_data_parser(continue_on_error=False)
    _print_results(await parser.parse_csv(PASSENGERS_CSV, "Passenger"))


async def run_auto_detect():
    """DEMO 3: Auto-detected JSON event and XML fleet."""
    from ingest import quick_parse

    print("\n" + "=" * 70)
    print("  DEMO 3: Auto-detection (JSON event, XML fleet)")
    print("=" * 70)

    _print_results(await quick_parse(EVENT_JSON, "Event"))
    _print_results(await quick_parse(FLEET_XML, "Vehicle"))


async def run_batch():
    """DEMO 4: Mixed batch, one file per format plus an unknown schema."""
    from ingest import BatchFile, create_data_parser, process_batch

    print("\n" + "=" * 70)
    print("  DEMO 4: Multi-file batch")
    print("=" * 70)

    files = [
        BatchFile(content=PASSENGERS_CSV, schema_name="Passenger", source="passengers.csv"),
        BatchFile(content=EVENT_JSON, schema_name="Event", source="event.json"),
        BatchFile(content=FLEET_XML, schema_name="Vehicle", source="fleet.xml"),
        BatchFile(content="hotelId,name\nH1,Marina", schema_name="Hotel", source="hotels.csv"),
    ]
    items = await process_batch(
        files,
        parser=create_data_parser(continue_on_error=True),
        on_progress=lambda done, total: print(f"  progress: {done}/{total}"),
    )
    for item in items:
        ok = "✓" if item.success else "✗"
        print(f"\n  {ok} [{item.file_index}] {item.source}")
        _print_results(item.results)


def _print_results(outcome):
    """Pretty-print one ParsingResult or a list of them."""
    results = outcome if isinstance(outcome, list) else [outcome]
    print(f"\n{'─' * 50}")
    for r in results:
        icon = "✓" if r.success else "✗"
        meta = r.metadata
        index = "-" if meta.record_index is None else meta.record_index
        print(f"  {icon} record {index}  format={meta.source_format}  confidence={meta.confidence:.2f}")
        if r.data:
            print(f"      data    : {r.data}")
        for e in r.errors:
            print(f"      error   : {e}")
        for w in r.warnings:
            print(f"      warning : {w}")
    print(f"{'─' * 50}")


async def main():
    from ingest.core.logging import setup_logging
    setup_logging("WARNING")     # quiet logs, show formatted output only

    print("\n╔" + "═" * 68 + "╗")
    print("║            EVENT-OPS INGEST — PARSING ENGINE DEMO                 ║")
    print("╚" + "═" * 68 + "╝")

    await run_accumulate_csv()
    await run_fail_fast_csv()
    await run_auto_detect()
    await run_batch()

    print("\n✅ All demos completed.\n")


if __name__ == "__main__":
    asyncio.run(main())
