"""
callgeo CLI.

Commands:
  - annotate: annotate a single call-log record and print it
  - locate: print only the geocoded location for a number
  - batch: annotate every row of a CSV file that has a `number` column
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

import click
from pydantic import ValidationError

from callgeo import __version__
from callgeo.annotator import CallLogAnnotator, build_annotator
from callgeo.config import CallgeoSettings, load_settings
from callgeo.core.locale import StaticLocale
from callgeo.country import StaticCountryContext
from callgeo.flags import ALTERNATE_LOCATION_FLAG, StaticFeatureFlags
from callgeo.logging_config import configure_logging
from callgeo.record import COUNTRY_ISO, GEOCODED_LOCATION, NUMBER, CallRecord

logger = logging.getLogger(__name__)


def _load(config_path: Path | None) -> CallgeoSettings:
    try:
        settings = load_settings(yaml_path=config_path)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    configure_logging(level=settings.log_level, json_logging=settings.json_logging)
    return settings


def build_cli_annotator(
    settings: CallgeoSettings,
    *,
    country: str | None,
    locale: str | None,
    alternate: bool | None,
    dataset_path: Path | None,
) -> CallLogAnnotator:
    """Build an annotator, letting explicit CLI options pin collaborators."""

    country_context = None
    if country is not None:
        country_context = StaticCountryContext(country.strip().upper())
    flags = None
    if alternate is not None:
        flags = StaticFeatureFlags({ALTERNATE_LOCATION_FLAG: alternate})

    return build_annotator(
        settings,
        country_context=country_context,
        locale_source=StaticLocale(locale) if locale else None,
        flags=flags,
        alternate_location_path=dataset_path,
    )


def _human_text(record: CallRecord) -> str:
    lines = [
        f"Number: {record.number or ''}",
        f"Country ISO: {record.country_iso or '(unknown)'}",
        f"Geocoded location: {record.geocoded_location or '(none)'}",
    ]
    return "\n".join(lines) + "\n"


def _read_calls(src: TextIO) -> tuple[list[str], list[CallRecord]]:
    reader = csv.DictReader(src)
    fieldnames = list(reader.fieldnames or [])
    if NUMBER not in fieldnames:
        raise click.ClickException(f"Input CSV must have a '{NUMBER}' column.")
    for name in (COUNTRY_ISO, GEOCODED_LOCATION):
        if name not in fieldnames:
            fieldnames.append(name)
    records = [CallRecord(number=row.get(NUMBER), extras=dict(row)) for row in reader]
    return fieldnames, records


def _write_calls(dst: TextIO, fieldnames: list[str], records: list[CallRecord]) -> None:
    writer = csv.DictWriter(dst, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    for record in records:
        row = dict(record.extras)
        row[COUNTRY_ISO] = record.country_iso or ""
        row[GEOCODED_LOCATION] = record.geocoded_location or ""
        writer.writerow(row)


def _common_options(func: Any) -> Any:
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML config path.",
    )(func)
    func = click.option(
        "--dataset",
        "dataset_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Area-code JSON dataset for the alternate location source.",
    )(func)
    func = click.option(
        "--alternate/--no-alternate",
        default=None,
        help="Force the alternate location source on or off (default: environment).",
    )(func)
    func = click.option("--locale", default=None, help="Display locale, e.g. en, de_DE, zh-Hant-TW.")(
        func
    )
    func = click.option(
        "--country", default=None, help="Current country ISO code (default: detected)."
    )(func)
    return func


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__)
def main() -> None:
    """Country and geocoded-location annotation for call-log records."""


@main.command("annotate")
@click.argument("number", type=str)
@_common_options
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON.")
def annotate_cmd(
    number: str,
    country: str | None,
    locale: str | None,
    alternate: bool | None,
    dataset_path: Path | None,
    config_path: Path | None,
    as_json: bool,
) -> None:
    """Annotate a call-log record for NUMBER."""

    settings = _load(config_path)
    annotator = build_cli_annotator(
        settings, country=country, locale=locale, alternate=alternate, dataset_path=dataset_path
    )
    record = CallRecord(number=number)
    annotator.annotate(record)

    if as_json:
        click.echo(json.dumps(record.to_dict(), indent=2, sort_keys=True))
    else:
        click.echo(_human_text(record), nl=False)


@main.command("locate")
@click.argument("number", type=str)
@_common_options
def locate_cmd(
    number: str,
    country: str | None,
    locale: str | None,
    alternate: bool | None,
    dataset_path: Path | None,
    config_path: Path | None,
) -> None:
    """Print the geocoded location for NUMBER (empty output when unknown)."""

    settings = _load(config_path)
    annotator = build_cli_annotator(
        settings, country=country, locale=locale, alternate=alternate, dataset_path=dataset_path
    )
    location = annotator.get_geocoded_location_for(number, annotator.get_current_country_iso())
    if location:
        click.echo(location)


@main.command("batch")
@click.argument("input_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_common_options
@click.option("--output", "output_path", type=click.Path(path_type=Path), default=None)
def batch_cmd(
    input_csv: Path,
    country: str | None,
    locale: str | None,
    alternate: bool | None,
    dataset_path: Path | None,
    config_path: Path | None,
    output_path: Path | None,
) -> None:
    """Annotate every row of INPUT_CSV and write CSV with the derived columns."""

    settings = _load(config_path)
    annotator = build_cli_annotator(
        settings, country=country, locale=locale, alternate=alternate, dataset_path=dataset_path
    )

    # Read and validate before touching the output file.
    with input_csv.open("r", encoding="utf-8", newline="") as src:
        fieldnames, records = _read_calls(src)

    annotator.annotate_many(records)

    if output_path is None:
        _write_calls(sys.stdout, fieldnames, records)
    else:
        with output_path.open("w", encoding="utf-8", newline="") as dst:
            _write_calls(dst, fieldnames, records)
    logger.info(
        "Annotated call records",
        extra={"record_count": len(records), "source_path": str(input_csv)},
    )
