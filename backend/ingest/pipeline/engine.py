"""
DataParser — the orchestrator that runs one parse call end to end.

Responsibilities:
    - Resolve the record schema from the registry
    - Pick the reader (declared format or auto-detection)
    - Read within the configured timeout
    - Validate each record in input order, bounded by batch size
    - Apply the fault-tolerance policy (fail fast vs. error budget)
    - Assemble ParsingResult envelopes with metadata

States per call:  IDLE → READING → VALIDATING → AGGREGATING → DONE.
A call is never resumed; a failed or cancelled call is simply discarded.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from ingest.core.config import settings
from ingest.core.constants import DetectionHeuristic, ParseState, SourceFormat
from ingest.pipeline.context import Detection, ParseContext, ParseOptions, ParserConfig
from ingest.pipeline.errors import ParserError, ParseTimeoutError
from ingest.pipeline.result import ParseOutcome, ParsingMetadata, ParsingResult
from ingest.processing.format_detector import detect_format
from ingest.processing.readers import LooseRecord, ReadOutput, get_reader
from ingest.schemas.models import RecordSchema
from ingest.schemas.registry import SchemaInfo, SchemaRegistry, registry as default_registry
from ingest.validation.confidence_scorer import score_confidence
from ingest.validation.field_validator import ValidationOutcome, validate


class DataParser:
    """
    Parses uploaded text into validated records of a named schema.

    The parser holds only a default ParserConfig and a reference to the
    (read-only) schema registry.  Every call builds its own ParseContext,
    so one instance can serve concurrent calls.

    Usage::

        parser = DataParser(ParserConfig(continue_on_error=True))
        results = await parser.parse_csv(text, "Passenger", ParseOptions(source="pax.csv"))
        single = await parser.parse_json('{"name": "Expo", ...}', "Event")
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        schema_registry: SchemaRegistry | None = None,
    ) -> None:
        self.config = config or ParserConfig.from_settings()
        self.registry = schema_registry or default_registry
        self.logger = structlog.get_logger("pipeline.engine")

    # ─── Public entry points ──────────────────────────

    async def parse(
        self,
        raw: str,
        schema_name: str,
        fmt: SourceFormat | str | None = None,
        options: ParseOptions | None = None,
        config: ParserConfig | None = None,
    ) -> ParseOutcome:
        """
        Full parse call.

        Args:
            raw: Already-decoded payload text.
            schema_name: Registry key, e.g. "Passenger".
            fmt: Declared format; None means auto-detect.
            options: Payload description (source label, header flag, ...).
            config: Per-call config; falls back to the parser default.

        Returns a single ParsingResult for single-record payloads and
        for call-level failures, otherwise a list in input order.
        """
        ctx = ParseContext(
            raw=raw,
            schema_name=schema_name,
            options=options or ParseOptions(),
            config=config or self.config,
        )
        declared = SourceFormat(fmt) if fmt is not None else None
        if declared == SourceFormat.UNKNOWN:
            declared = None

        log = self.logger.bind(
            call_id=ctx.call_id,
            schema=schema_name,
            source=ctx.options.source,
        )
        log.info("Parse started", declared_format=declared, payload_chars=len(raw))

        try:
            async with asyncio.timeout(ctx.config.timeout):
                outcome = await self._run(ctx, declared, log)
        except TimeoutError:
            exc = ParseTimeoutError(
                f"parse exceeded {ctx.config.timeout}s",
                timeout=ctx.config.timeout,
                call_id=ctx.call_id,
                schema_name=schema_name,
            )
            outcome = self._terminal(ctx, exc, log)
        except ParserError as exc:
            outcome = self._terminal(ctx, exc, log)

        self._enter(ctx, ParseState.DONE, log)
        results = outcome if isinstance(outcome, list) else [outcome]
        log.info(
            "Parse finished",
            results=len(results),
            failed=sum(1 for r in results if not r.success),
            duration_ms=ctx.elapsed_ms(),
            summary=ctx.to_summary_dict(),
        )
        return outcome

    async def parse_data(
        self,
        raw: str,
        schema_name: str,
        options: ParseOptions | None = None,
        config: ParserConfig | None = None,
    ) -> ParseOutcome:
        """Parse a payload of unknown format (auto-detection)."""
        return await self.parse(raw, schema_name, None, options, config)

    async def parse_csv(
        self,
        raw: str,
        schema_name: str,
        options: ParseOptions | None = None,
        config: ParserConfig | None = None,
    ) -> list[ParsingResult]:
        """Parse CSV rows.  Always returns a list, even for call-level failures."""
        outcome = await self.parse(raw, schema_name, SourceFormat.CSV, options, config)
        return outcome if isinstance(outcome, list) else [outcome]

    async def parse_json(
        self,
        raw: str,
        schema_name: str,
        options: ParseOptions | None = None,
        config: ParserConfig | None = None,
    ) -> ParseOutcome:
        return await self.parse(raw, schema_name, SourceFormat.JSON, options, config)

    async def parse_xml(
        self,
        raw: str,
        schema_name: str,
        options: ParseOptions | None = None,
        config: ParserConfig | None = None,
    ) -> ParseOutcome:
        return await self.parse(raw, schema_name, SourceFormat.XML, options, config)

    # ─── Domain shortcuts ─────────────────────────────

    async def parse_event_data(self, raw: str, fmt: SourceFormat | str | None = None) -> ParseOutcome:
        return await self.parse(raw, "Event", fmt)

    async def parse_passenger_data(self, raw: str, fmt: SourceFormat | str | None = None) -> ParseOutcome:
        return await self.parse(raw, "Passenger", fmt)

    async def parse_fleet_data(self, raw: str, fmt: SourceFormat | str | None = None) -> ParseOutcome:
        return await self.parse(raw, "Vehicle", fmt)

    # ─── Schema helpers ───────────────────────────────

    def validate_data(self, record: dict[str, Any], schema_name: str) -> ValidationOutcome:
        """Validate an in-memory record without reading any payload."""
        return validate(record, self.registry.get_schema(schema_name))

    def get_schema_info(self, schema_name: str) -> SchemaInfo:
        return self.registry.get_schema_info(schema_name)

    def list_schemas(self) -> list[str]:
        return self.registry.list_schemas()

    # ─── Call internals ───────────────────────────────

    async def _run(
        self,
        ctx: ParseContext,
        declared: SourceFormat | None,
        log: structlog.stdlib.BoundLogger,
    ) -> ParseOutcome:
        schema = self.registry.get_schema(ctx.schema_name)

        # ── Reading ───────────────────────────────────
        self._enter(ctx, ParseState.READING, log)
        ctx.detection = Detection.declared(declared) if declared else detect_format(ctx.raw)
        if ctx.detection.heuristic == DetectionHeuristic.CSV_FALLBACK:
            ctx.add_warning(
                "format not recognised, read as CSV "
                f"(certainty {ctx.detection.certainty:.2f})"
            )

        reader = get_reader(ctx.detection.format)
        output: ReadOutput = await asyncio.to_thread(reader.read, ctx.raw, schema, ctx.options)
        ctx.warnings.extend(output.warnings)

        log.debug(
            "Read complete",
            state=ctx.state,
            format=ctx.source_format,
            heuristic=ctx.detection.heuristic,
            records=len(output.records),
        )

        records = output.records
        if len(records) > ctx.config.batch_size:
            dropped = len(records) - ctx.config.batch_size
            ctx.add_warning(
                f"BatchSizeExceeded: {dropped} record(s) beyond batch size "
                f"{ctx.config.batch_size} dropped"
            )
            log.warning("Batch truncated", dropped=dropped, batch_size=ctx.config.batch_size)
            records = records[: ctx.config.batch_size]

        if not records:
            self._enter(ctx, ParseState.AGGREGATING, log)
            result = self._empty_result(ctx, schema)
            return [result] if output.multi_record else result

        # ── Validating ────────────────────────────────
        self._enter(ctx, ParseState.VALIDATING, log)
        validated: list[tuple[LooseRecord, ValidationOutcome]] = []
        skipped = 0

        for position, record in enumerate(records):
            outcome = validate(record.fields, schema)
            validated.append((record, outcome))
            ctx.error_count += len(outcome.violations)

            if outcome.violations and not ctx.config.continue_on_error:
                log.info(
                    "Record failed, stopping (continue_on_error=False)",
                    record_index=record.index,
                    errors=outcome.errors,
                )
                break

            if ctx.config.continue_on_error and ctx.error_count >= ctx.config.max_errors:
                skipped = len(records) - position - 1
                if skipped:
                    log.warning(
                        "Error budget exhausted",
                        max_errors=ctx.config.max_errors,
                        skipped=skipped,
                    )
                break

            # Let timeouts and cancellation land between records
            await asyncio.sleep(0)

        # ── Aggregating ───────────────────────────────
        self._enter(ctx, ParseState.AGGREGATING, log)
        _, last_outcome = validated[-1]

        if last_outcome.violations and not ctx.config.continue_on_error:
            result = self._fail_fast_result(ctx, schema, validated, output.multi_record)
            return [result] if output.multi_record else result

        results = [
            self._record_result(ctx, schema, record, outcome, output.multi_record)
            for record, outcome in validated
        ]

        if skipped:
            results[-1].warnings.append(
                f"error budget exhausted (max_errors={ctx.config.max_errors}): "
                f"{skipped} record(s) skipped"
            )

        failed = sum(1 for r in results if not r.success)
        if output.multi_record and failed / len(results) > ctx.config.error_threshold:
            results[-1].warnings.append(
                f"failure ratio {failed}/{len(results)} exceeds error threshold "
                f"{ctx.config.error_threshold:.0%}"
            )

        return results if output.multi_record else results[0]

    def _enter(
        self,
        ctx: ParseContext,
        state: ParseState,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        log.debug("State transition", from_state=ctx.state, to_state=state)
        ctx.transition(state)

    # ─── Result builders ──────────────────────────────

    def _metadata(
        self,
        ctx: ParseContext,
        confidence: float,
        raw_data: str,
        record_index: int | None = None,
    ) -> ParsingMetadata:
        return ParsingMetadata(
            parsing_time_ms=ctx.elapsed_ms(),
            source_format=ctx.source_format,
            confidence=confidence,
            parser_version=settings.PARSER_VERSION,
            raw_data=raw_data,
            source=ctx.options.source,
            record_index=record_index,
            call_id=ctx.call_id,
        )

    def _payload(self, ctx: ParseContext) -> str:
        return ctx.options.raw_data if ctx.options.raw_data is not None else ctx.raw

    def _record_result(
        self,
        ctx: ParseContext,
        schema: RecordSchema,
        record: LooseRecord,
        outcome: ValidationOutcome,
        multi_record: bool,
    ) -> ParsingResult:
        success = outcome.is_valid
        return ParsingResult(
            success=success,
            data=outcome.record,
            partial=not success,
            errors=outcome.errors,
            warnings=[*ctx.warnings, *record.warnings, *outcome.warnings],
            metadata=self._metadata(
                ctx,
                confidence=score_confidence(len(schema), len(outcome.violations), ctx.certainty),
                raw_data=record.raw if multi_record else self._payload(ctx),
                record_index=record.index,
            ),
        )

    def _fail_fast_result(
        self,
        ctx: ParseContext,
        schema: RecordSchema,
        validated: list[tuple[LooseRecord, ValidationOutcome]],
        multi_record: bool,
    ) -> ParsingResult:
        """One failure standing for the whole call."""
        errors: list[str] = []
        warnings: list[str] = list(ctx.warnings)
        for record, outcome in validated:
            prefix = f"record {record.index}: " if multi_record else ""
            errors.extend(f"{prefix}{e}" for e in outcome.errors)
            warnings.extend(record.warnings)
            warnings.extend(outcome.warnings)

        _, failing = validated[-1]
        if multi_record:
            warnings.append(
                f"parse stopped at record {validated[-1][0].index} (continue_on_error=False)"
            )

        return ParsingResult(
            success=False,
            data=None,
            errors=errors,
            warnings=warnings,
            metadata=self._metadata(
                ctx,
                confidence=score_confidence(len(schema), len(failing.violations), ctx.certainty),
                raw_data=self._payload(ctx),
            ),
        )

    def _empty_result(self, ctx: ParseContext, schema: RecordSchema) -> ParsingResult:
        return ParsingResult(
            success=False,
            errors=["No data parsed"],
            warnings=list(ctx.warnings),
            metadata=self._metadata(ctx, confidence=0.0, raw_data=self._payload(ctx)),
        )

    def _terminal(
        self,
        ctx: ParseContext,
        exc: ParserError,
        log: structlog.stdlib.BoundLogger,
    ) -> ParsingResult:
        """Call-level failure: no data, zero confidence."""
        log.error(
            "Parse failed",
            kind=exc.kind,
            error=str(exc),
            state=ctx.state,
            details=exc.details or None,
        )
        return ParsingResult(
            success=False,
            data=None,
            errors=[exc.to_error_string()],
            warnings=list(ctx.warnings),
            metadata=self._metadata(ctx, confidence=0.0, raw_data=self._payload(ctx)),
        )


# ═══════════════════════════════════════════════════════════
#  Module-level helpers
# ═══════════════════════════════════════════════════════════

def create_data_parser(config: ParserConfig | None = None, **overrides: Any) -> DataParser:
    """
    Build a DataParser.  Keyword overrides are applied on top of `config`
    (or the settings default), e.g. ``create_data_parser(max_errors=3)``.
    """
    base = config or ParserConfig.from_settings()
    if overrides:
        base = ParserConfig(**{**base.model_dump(), **overrides})
    return DataParser(base)


async def quick_parse(raw: str, schema_name: str, options: ParseOptions | None = None) -> ParseOutcome:
    """Auto-detecting parse with default settings."""
    return await DataParser().parse_data(raw, schema_name, options)


async def quick_parse_csv(
    raw: str, schema_name: str, options: ParseOptions | None = None,
) -> list[ParsingResult]:
    return await DataParser().parse_csv(raw, schema_name, options)


async def quick_parse_json(
    raw: str, schema_name: str, options: ParseOptions | None = None,
) -> ParseOutcome:
    return await DataParser().parse_json(raw, schema_name, options)


async def quick_parse_xml(
    raw: str, schema_name: str, options: ParseOptions | None = None,
) -> ParseOutcome:
    return await DataParser().parse_xml(raw, schema_name, options)
