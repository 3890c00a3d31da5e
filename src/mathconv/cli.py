"""Command-line interface for mathconv."""

from __future__ import annotations

import json
from pathlib import Path

import click

from mathconv import __version__


def _make_converter(project: str | None):
    from mathconv.config import DEFAULT_CONFIG, load_config
    from mathconv.converter import MathConverter
    from mathconv.logging import set_project_dir

    if project is None:
        return MathConverter.from_config(DEFAULT_CONFIG)
    project_dir = Path(project)
    try:
        config = load_config(project_dir)
    except ValueError as e:
        raise click.ClickException(str(e))
    set_project_dir(project_dir)
    return MathConverter.from_config(config)


@click.group()
@click.version_option(version=__version__, prog_name="mathconv")
def main() -> None:
    """mathconv -- left-to-right value formula evaluator.

    Formulas use @VALUE for the bound value and are evaluated strictly
    left to right; only parentheses change the order.
    """


# ---------------------------------------------------------------------------
# Eval
# ---------------------------------------------------------------------------


@main.command("eval")
@click.argument("formula")
@click.option("--value", "value", default=None, help="Value bound to @VALUE.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--project", default=None, type=click.Path(file_okay=False), help="Project directory for config and event logs.")
def eval_command(formula: str, value: str | None, as_json: bool, project: str | None) -> None:
    """Evaluate FORMULA with --value bound to @VALUE."""
    converter = _make_converter(project)
    outcome = converter.try_convert(value, formula)

    if as_json:
        payload = {
            "formula": formula,
            "value": value,
            "result": outcome.value,
            "error": None if outcome.ok else {
                "code": outcome.error.error_code,
                "message": str(outcome.error),
            },
        }
        click.echo(json.dumps(payload, indent=2))
        if not outcome.ok:
            click.get_current_context().exit(1)
        return

    if not outcome.ok:
        raise click.ClickException(str(outcome.error))
    click.echo(repr(outcome.value))


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@main.command()
@click.argument("formula")
@click.option("--value", "value", default=None, help="Value bound to @VALUE.")
def tokens(formula: str, value: str | None) -> None:
    """List the tokens of FORMULA after substitution."""
    from mathconv.formulas import FormulaError, normalize_formula, substitute, tokenize

    try:
        text = substitute(normalize_formula(formula), value)
        for token in tokenize(text):
            click.echo(f"{token.kind.value:10s} {token.text}")
    except FormulaError as e:
        raise click.ClickException(str(e))


# ---------------------------------------------------------------------------
# Apply
# ---------------------------------------------------------------------------


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--column", required=True, help="Column bound to @VALUE.")
@click.option("--formula", required=True, help="Formula to evaluate per row.")
@click.option("--output-column", default=None, help="Result column name.")
@click.option("--out", "out_path", default=None, type=click.Path(dir_okay=False), help="Write the result table (CSV or Parquet).")
@click.option("--project", default=None, type=click.Path(file_okay=False), help="Project directory for config and event logs.")
def apply(
    path: str,
    column: str,
    formula: str,
    output_column: str | None,
    out_path: str | None,
    project: str | None,
) -> None:
    """Apply FORMULA to every value of COLUMN in the table at PATH."""
    from mathconv.batch import apply_formula, load_frame

    converter = _make_converter(project)
    try:
        frame = load_frame(Path(path))
        result = apply_formula(
            frame, column, formula, output=output_column, converter=converter
        )
    except (KeyError, ValueError) as e:
        raise click.ClickException(str(e))

    if out_path is None:
        click.echo(result.write_csv())
        return

    target = Path(out_path)
    if target.suffix.lower() == ".parquet":
        result.write_parquet(target)
    else:
        result.write_csv(target)
    click.echo(f"Wrote {result.height} row(s) to {target}")


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--level", default=None, type=click.Choice(["info", "warning", "error"]))
@click.option("--event-type", default=None, help="Filter by event type.")
@click.option("--limit", default=50, show_default=True, help="Maximum events to show.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def events(directory: str, level: str | None, event_type: str | None, limit: int, as_json: bool) -> None:
    """Show logged events for the project in DIRECTORY, newest first."""
    from mathconv.logging import EventSink

    sink = EventSink(Path(directory))
    rows = sink.read_events(level=level, event_type=event_type, limit=limit)

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return
    if not rows:
        click.echo("No events.")
        return
    for e in rows:
        code = f" [{e['error_code']}]" if e.get("error_code") else ""
        click.echo(f"{e.get('ts', '')}  {e.get('level', ''):7s} {e.get('event_type', '')}{code}  {e.get('message', '')}")
