"""Console script for caniemail."""

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import TextIO

import click
from rich.console import Console

from ._version import __version__ as _version
from .classify import check_html, filter_issues, sort_issues
from .constants import DEFAULT_TIMEOUT_SECONDS, SHOW_CHOICES
from .dataset import DatasetCache, fetch_reference_dataset, load_dataset_file
from .exceptions import CaniemailError
from .render import issues_to_json, render_report
from .util.log import configure_logging


def _build_cache(data_path: Path | None, timeout: float) -> DatasetCache:
    if data_path is not None:
        return DatasetCache(loader=lambda: load_dataset_file(data_path))
    return DatasetCache(loader=lambda: fetch_reference_dataset(timeout=timeout))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "source",
    type=click.File("r", encoding="utf-8", errors="replace"),
    default="-",
    required=False,
)
@click.option(
    "--data",
    "data_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the caniemail dataset from a local JSON file instead of downloading it.",
)
@click.option(
    "--show",
    type=click.Choice(SHOW_CHOICES),
    default="all",
    show_default=True,
    help="Which severities to list: all, errors only, or errors and warnings.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the issues as JSON.")
@click.option("--embed", is_flag=True, help="Include caniemail embed URLs in the report.")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any feature is unsupported.")
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT_SECONDS,
    show_default=True,
    help="Dataset download timeout in seconds.",
)
@click.version_option(_version, "-v", "--version")
def main(
    source: TextIO,
    data_path: Path | None,
    show: str,
    as_json: bool,
    embed: bool,
    strict: bool,
    timeout: float,
) -> None:
    """
    Check an HTML email against caniemail.com support data

    \b
    Example usages:
        caniemail newsletter.html
        caniemail --show errors --strict newsletter.html
        cat newsletter.html | caniemail --json
    """
    configure_logging()
    html = source.read()

    try:
        snapshot = _build_cache(data_path, timeout).get()
    except CaniemailError as exc:
        raise click.ClickException(str(exc)) from exc

    issues = sort_issues(check_html(html, snapshot.index))
    shown = filter_issues(issues, show)

    if as_json:
        click.echo(json.dumps(issues_to_json(shown), indent=2))
    else:
        Console().print(render_report(shown, snapshot.dataset, show_embed=embed))

    if strict and any(issue.severity == "error" for issue in issues):
        sys.exit(1)
