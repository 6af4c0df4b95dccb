"""CLI entry point for billscan."""

from __future__ import annotations

import logging
from typing import TextIO

import click

from billscan.categorization import categorize, list_categories, subcategories_for
from billscan.config import get_log_level
from billscan.extraction import extract_bill
from billscan.ocr import ExtractionFailure
from billscan.scanner import scan_receipt

_LEVEL_CHOICES = click.Choice(
    ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
)


@click.group()
@click.option(
    "--log-level",
    type=_LEVEL_CHOICES,
    default=None,
    help="Logging level (default: LOG_LEVEL or WARNING).",
)
def cli(log_level: str | None) -> None:
    """Bill scanner: extract and categorize receipt data."""
    if log_level is None:
        try:
            level = get_log_level()
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
    else:
        level = getattr(logging, log_level.upper())
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
def extract(source: TextIO) -> None:
    """Extract bill fields from OCR text in SOURCE (default: stdin)."""
    bill = extract_bill(source.read())
    click.echo(bill.model_dump_json(by_alias=True, indent=2))


@cli.command("categorize")
@click.argument("text")
@click.option("--vendor", default=None, help="Vendor name hint.")
@click.option("--product", default=None, help="Product name hint.")
def categorize_command(text: str, vendor: str | None, product: str | None) -> None:
    """Categorize a purchase described by TEXT."""
    match = categorize(text, vendor, product)
    click.echo(match.model_dump_json(indent=2))


@cli.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option("--product", default=None, help="Product name hint.")
def scan(image: str, product: str | None) -> None:
    """Run OCR on IMAGE, then extract and categorize the receipt."""
    try:
        result = scan_receipt(image, product)
    except (ExtractionFailure, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(result.model_dump_json(by_alias=True, indent=2))


@cli.command()
@click.option(
    "--with-subcategories", is_flag=True, help="Also list each subcategory."
)
def categories(with_subcategories: bool) -> None:
    """List the known spending categories."""
    for name in list_categories():
        click.echo(name)
        if with_subcategories:
            for subcategory in subcategories_for(name):
                click.echo(f"  {subcategory}")
