"""CLI entry point for the payment API tester.

    payment-tester run [IDS...] [options]
    payment-tester list [--category valid|invalid]
    payment-tester validate <catalog.yaml>
"""

import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .catalog import Category, TestCase, TestCatalog, load_catalog, parse_catalog, validate_catalog
from .config import DEFAULT_INTER_CALL_DELAY, HarnessConfig, load_endpoint
from .reporting.json_reporter import JsonReporter
from .runner.executor import EngineEvent, EventKind, ExecutionEngine
from .runner.results import ResultStatus, TestResult
from .transport.http_client import PaymentApiClient

CATEGORY_CHOICE = click.Choice([c.value for c in Category])

catalog_option = click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML catalog file (default: bundled catalog).",
)


@click.group()
@click.version_option(__version__, prog_name="payment-tester")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Conformance tests for the payment instructions API."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command("list")
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="Only list one category.")
@catalog_option
def list_cases(category: Optional[str], catalog_path: Optional[Path]) -> None:
    """List the test cases of the catalog."""
    catalog = _load(catalog_path)
    cases = catalog.by_category(category) if category else list(catalog)
    for case in cases:
        click.echo(
            f"{case.id:>3}  {case.category:<8} {case.name} "
            f"(expect {case.expected_status} / {case.expected_code})"
        )


@main.command()
@click.argument("case_ids", nargs=-1, type=int)
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="Only run one category.")
@catalog_option
@click.option("--endpoint", default=None, help="API endpoint (default: $PAYMENT_API_URL or public API).")
@click.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=DEFAULT_INTER_CALL_DELAY,
    show_default=True,
    help="Seconds to wait between requests.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Request timeout in seconds (default: none).",
)
@click.option("--save-report", is_flag=True, help="Save a JSON report to file.")
@click.option(
    "--report-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for saved reports.",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary instead of text.")
@click.option("--pretty", is_flag=True, help="Pretty print JSON output.")
def run(
    case_ids: tuple[int, ...],
    category: Optional[str],
    catalog_path: Optional[Path],
    endpoint: Optional[str],
    delay: float,
    timeout: Optional[float],
    save_report: bool,
    report_dir: Optional[Path],
    as_json: bool,
    pretty: bool,
) -> None:
    """Run test cases against the API.

    Runs the whole catalog unless case ids or a category are given.
    """
    if case_ids and category:
        raise click.UsageError("Pass case ids or --category, not both.")

    catalog = _load(catalog_path)
    try:
        if case_ids:
            selected = catalog.select(list(case_ids))
        elif category:
            selected = catalog.by_category(category)
        else:
            selected = list(catalog)
    except KeyError as e:
        raise click.BadParameter(e.args[0], param_hint="CASE_IDS") from None

    config = HarnessConfig(
        endpoint=endpoint or load_endpoint(),
        inter_call_delay=delay,
        request_timeout=timeout,
        save_report=save_report,
        report_dir=report_dir,
        pretty_output=pretty,
    )

    start_time = time.time()
    error = None

    with PaymentApiClient(config.endpoint, request_timeout=config.request_timeout) as client:
        engine = ExecutionEngine(catalog, client, config=config)

        if not as_json:
            engine.subscribe(_result_printer(catalog))
            click.echo(f"Running {len(selected)} test cases against {config.endpoint}")

        try:
            if case_ids:
                engine.run_ids(case_ids)
            elif category:
                engine.run_category(category)
            else:
                engine.run_all()
        except KeyboardInterrupt:
            error = "Interrupted by user"

    duration_ms = int((time.time() - start_time) * 1000)

    reporter = JsonReporter()
    report = reporter.generate(
        TestCatalog(selected, source=catalog.source),
        engine.store,
        endpoint=config.endpoint,
        duration_ms=duration_ms,
        error=error,
    )

    report_path = None
    if config.save_report:
        report_dir = config.report_dir or Path(".")
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        report_path = str(reporter.save(report, report_dir / f"payment_report_{stamp}.json"))

    if as_json:
        output = reporter.generate_cli_output(report, report_path)
        click.echo(reporter.to_json_string(output, pretty=config.pretty_output))
    else:
        summary = report["summary"]
        click.echo(
            f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
            f"{summary['pending']} pending ({summary['total']} total, {duration_ms} ms)"
        )
        if report_path:
            click.echo(f"Report saved: {report_path}")
        if error:
            click.echo(f"ERROR: {error}", err=True)

    if error:
        sys.exit(130)
    if report["status"] != "passed":
        sys.exit(1)


@main.command()
@click.argument("catalog_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(catalog_file: Path) -> None:
    """Validate a YAML catalog file."""
    try:
        catalog = parse_catalog(catalog_file)
    except ValueError as e:
        raise click.ClickException(str(e))

    result = validate_catalog(catalog)
    for e in result.errors:
        click.echo(f"ERROR    {e.path}: {e.message}")
    for w in result.warnings:
        click.echo(f"WARNING  {w.path}: {w.message}")
    click.echo(f"{catalog_file}: {result}")

    if not result.valid:
        sys.exit(1)


def _load(catalog_path: Optional[Path]) -> TestCatalog:
    try:
        return load_catalog(catalog_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))


def _result_printer(catalog: TestCatalog):
    def on_event(event: EngineEvent) -> None:
        if event.kind != EventKind.RESULT or not event.result.is_terminal:
            return
        click.echo(format_result(catalog.get(event.case_id), event.result))

    return on_event


def format_result(case: TestCase, result: TestResult) -> str:
    """One status line for a finished case."""
    label = f"{case.id}. {case.name}"
    if result.status == ResultStatus.ERROR:
        return f"  [ERROR] {label}: {result.error}"
    received = f"{result.status_code} / {result.response_code or 'N/A'}"
    if result.passed:
        return f"  [PASS] {label}: {received}"
    return (
        f"  [FAIL] {label}: expected {case.expected_status} / {case.expected_code}, "
        f"got {received}"
    )


if __name__ == "__main__":
    main()
