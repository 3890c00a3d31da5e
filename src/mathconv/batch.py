"""Apply one value formula to every row of a table column."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import polars as pl

from mathconv.converter import MathConverter
from mathconv.logging.events import EventType, emit_error, emit_info


def load_frame(path: Path) -> pl.DataFrame:
    """Read a CSV or Parquet file into a DataFrame.

    Raises:
        ValueError: For any other file extension.
    """
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pl.read_csv(path)
    if suffix == ".parquet":
        return pl.read_parquet(path)
    message = f"Unsupported table format: {path.name} (expected .csv or .parquet)"
    emit_error(
        EventType.batch_failed, message, {"path": str(path)}, error_code="unsupported_format"
    )
    raise ValueError(message)


def apply_formula(
    frame: pl.DataFrame,
    column: str,
    formula: str,
    *,
    output: str | None = None,
    converter: MathConverter | None = None,
) -> pl.DataFrame:
    """Evaluate *formula* once per value of *column*.

    Args:
        frame: Source table.
        column: Column whose values are bound to ``@VALUE``.
        formula: Formula text.
        output: Name of the result column (default ``<column>_result``).
        converter: Converter to use; a default one if omitted.

    Returns:
        A new DataFrame with a ``Float64`` result column appended.  Rows
        whose conversion failed hold ``null``.
    """
    if column not in frame.columns:
        message = f"Column {column!r} not found. Available: {frame.columns}"
        emit_error(
            EventType.batch_failed,
            message,
            {"column": column, "formula": formula},
            error_code="column_not_found",
        )
        raise KeyError(message)

    converter = converter or MathConverter()
    output = output or f"{column}_result"
    context: dict[str, Any] = {"column": column, "formula": formula, "rows": frame.height}
    emit_info(EventType.batch_started, f"Applying formula to {column!r}", context)

    results: list[float | None] = []
    for value in frame[column].to_list():
        outcome = converter.try_convert(value, formula)
        results.append(outcome.value if outcome.ok else None)

    failed = sum(1 for r in results if r is None)
    emit_info(
        EventType.batch_completed,
        f"Applied formula to {frame.height} row(s), {failed} failed",
        {**context, "failed": failed},
    )
    return frame.with_columns(pl.Series(output, results, dtype=pl.Float64))
