from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config.loader import NormalizerConfig, default_config
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.errors import NormalizerError
from ..models.processing_result import FileStat, ProcessingResult
from ..models.relationships import ColumnRelationships
from ..models.source_table import SourceTable
from ..models.validation_report import ValidationReport
from ..table.reader import SUPPORTED_SUFFIXES, read_table
from ..table.writer import write_table
from .address_combiner import combine_address_from_row
from .formatting import format_value
from .mapper import MappingStore
from .matching import KeywordMatchingStrategy, MappingPlan, MatchingStrategy
from .name_combiner import combine_name_from_row
from .progress import ProgressTracker
from .relationships import detect
from .sampler import SampleResult, read_sample
from .transformer import splice_combined, transform
from .validator import validate

"""End-to-end normalization pipeline.

`NormalizationSession.run(table)` executes, for one already-parsed table:

    sample -> classify -> detect relationships -> plan mapping -> create
    mapping -> transform (batched) -> splice combined fields -> validate

`process_file()` / `process_all()` wrap a session per file with reading,
writing and error-log bookkeeping for the CLI. A failing file never stops
the remaining files.
"""

__all__ = [
    "ProcessingError",
    "NormalizationOutcome",
    "NormalizationSession",
    "scan_source_files",
    "output_path_for",
    "process_file",
    "process_all",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal problem that prevents a run from starting (e.g. missing directory)."""


@dataclass(frozen=True)
class NormalizationOutcome:
    sample: SampleResult
    relationships: ColumnRelationships
    plan: MappingPlan
    mapping_id: str
    rows: list[list[str]]
    report: ValidationReport
    validated_sample_only: bool


class NormalizationSession:
    """One processing session: owns the mappings it creates in `store`."""

    def __init__(
        self,
        store: MappingStore | None = None,
        strategy: MatchingStrategy | None = None,
        config: NormalizerConfig | None = None,
    ) -> None:
        self.store = store if store is not None else MappingStore()
        self.strategy = strategy if strategy is not None else KeywordMatchingStrategy()
        self.config = config if config is not None else default_config()
        self._mapping_ids: list[str] = []

    def run(self, table: SourceTable, label: str = "rows") -> NormalizationOutcome:
        """Normalize every data row of `table`.

        Raises:
            NormalizerError: any stage rejecting its input
        """
        sample = read_sample(table, self.config.sample_size)
        relationships = detect(sample.headers, sample.sample_rows)
        logger.debug(f"relationships: {relationships.summary()}")

        plan = self.strategy.plan(sample.headers, sample.sample_rows, relationships)
        mapping = self.store.create(plan.selections)
        self._mapping_ids.append(mapping.mapping_id)

        rows: list[list[str]] = []
        batch_size = self.config.batch_size
        batches = range(0, table.total_rows, batch_size)
        with ProgressTracker(len(batches), description=f"Transforming {label}", unit="batch", leave=False) as progress:
            for start in batches:
                progress.start(f"{start + 1}-{min(start + batch_size, table.total_rows)}")
                batch = table.rows[start:start + batch_size]
                transformed = transform(mapping, batch, table.headers)
                self._splice_combiners(plan, transformed, batch, table.headers)
                rows.extend(transformed)
                progress.advance()

        sample_only = table.total_rows > self.config.large_file_threshold
        if sample_only:
            to_validate = [rows[i] for i in sample.indices]
        else:
            to_validate = rows
        report = validate(to_validate)

        return NormalizationOutcome(
            sample=sample,
            relationships=relationships,
            plan=plan,
            mapping_id=mapping.mapping_id,
            rows=rows,
            report=report,
            validated_sample_only=sample_only,
        )

    def _splice_combiners(
        self,
        plan: MappingPlan,
        transformed: list[list[str]],
        batch: Sequence[Sequence[Any]],
        headers: Sequence[str],
    ) -> None:
        if not plan.name_columns and not plan.address_columns:
            return
        formatted = [
            [format_value(row[i] if i < len(row) else None, h) for i, h in enumerate(headers)]
            for row in batch
        ]
        if plan.name_columns:
            names = [combine_name_from_row(plan.name_columns, r, headers) for r in formatted]
            splice_combined(transformed, "Name", names)
        if plan.address_columns:
            addresses = [combine_address_from_row(plan.address_columns, r, headers) for r in formatted]
            splice_combined(transformed, "Address", addresses)

    def dispose(self) -> None:
        """Remove every mapping this session created from its store."""
        for mapping_id in self._mapping_ids:
            self.store.discard(mapping_id)
        self._mapping_ids.clear()

    def __enter__(self) -> NormalizationSession:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.dispose()


def scan_source_files(directory: Path) -> list[Path]:
    """Sorted .csv/.xlsx files in `directory` (non-recursive).

    Raises:
        ProcessingError: directory missing or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_path_for(source: Path, config: NormalizerConfig) -> Path:
    return Path(config.output_directory) / f"{config.output_prefix}{source.name}"


def process_file(
    path: Path,
    config: NormalizerConfig,
    error_log: ErrorLogBuffer,
    strategy: MatchingStrategy | None = None,
) -> FileStat:
    """Normalize one file and write its output; failures are recorded, not raised."""
    start = datetime.now(UTC)
    operation = "read_table"
    with NormalizationSession(MappingStore(), strategy, config) as session:
        try:
            table = read_table(path)
            operation = "normalize"
            outcome = session.run(table, label=path.name)
            operation = "write_table"
            out_path = write_table(output_path_for(path, config), outcome.rows)
        except (NormalizerError, OSError) as e:
            elapsed = (datetime.now(UTC) - start).total_seconds()
            logger.error(f"{path.name}: {operation} failed: {e}")
            error_log.append(ErrorRecord.from_exception(path.name, operation, e))
            return FileStat(
                file_name=path.name,
                status="failed",
                rows_written=0,
                issues=0,
                warnings=0,
                elapsed_seconds=elapsed,
                error=str(e),
            )

    report = outcome.report
    for entry in report.issues:
        for row in entry.affected_rows:
            error_log.append(
                ErrorRecord.create(path.name, "validate", row, "ValidationIssue", f"{entry.column}: {entry.issue}")
            )
    for entry in report.warnings:
        logger.warning(f"{path.name}: {entry.column}: {entry.issue} (rows {len(entry.affected_rows)})")

    scope = "sample" if outcome.validated_sample_only else "all rows"
    status = "passed" if report.passed else "has issues"
    logger.info(
        f"{path.name}: rows={len(outcome.rows)} mapped={sum(1 for v in outcome.plan.selections.values() if v)}/10 "
        f"validation {status} ({scope}) -> {out_path}"
    )
    return FileStat(
        file_name=path.name,
        status="success",
        rows_written=len(outcome.rows),
        issues=len(report.issues),
        warnings=len(report.warnings),
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        output_file=str(out_path),
    )


def process_all(
    config: NormalizerConfig,
    files: Sequence[Path] | None = None,
    strategy: MatchingStrategy | None = None,
) -> ProcessingResult:
    """Process `files` (or every supported file in the source directory).

    Raises:
        ProcessingError: source directory missing when no files are given
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer()
    paths = list(files) if files else scan_source_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_rows = 0
    total_issues = 0
    total_warnings = 0

    with ProgressTracker(len(paths), description="Processing files") as progress:
        for path in paths:
            progress.start(path.name)
            stat = process_file(path, config, error_log, strategy)
            if stat.status == "success":
                success_count += 1
                total_rows += stat.rows_written
                total_issues += stat.issues
                total_warnings += stat.warnings
            else:
                failed_count += 1
            progress.set_postfix(success=success_count, failed=failed_count, rows=total_rows)
            progress.advance()
            file_stats.append(stat)

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"failed to write error log: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        total_issues=total_issues,
        total_warnings=total_warnings,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
