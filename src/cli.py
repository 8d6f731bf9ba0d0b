#!/usr/bin/env python3
"""
CLI tool for the Vault manager.

Reconciles a Vault instance against a declarative YAML document.
"""

import logging
import sys

import click
from tabulate import tabulate

from config import ManagerConfig, load_config
from errors import VaultManagerError
from main import build_registry, run, setup_logging, validate
from vault import VaultClient

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    """Log the cause of an aborted run and exit with status 1."""
    logger.error(message)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """Vault manager - declarative configuration for Vault"""
    setup_logging(log_level or ManagerConfig.from_env().log_level)


@cli.command()
@click.argument("filename", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Report changes without making them")
@click.option(
    "--only",
    multiple=True,
    help="Apply only the named configuration (repeatable)",
)
def apply(filename, dry_run, only):
    """Apply a YAML configuration document to Vault"""
    with open(filename, "rb") as f:
        document = f.read()

    try:
        cfg = load_config()
        dry_run = dry_run or cfg.manager.dry_run
        registry = build_registry(VaultClient.from_config(cfg.vault))
        results = run(registry, document, dry_run, cfg.manager, list(only))
    except (ValueError, VaultManagerError) as e:
        _fail(str(e))

    rows = [
        [
            result.name,
            len(result.to_write),
            len(result.to_delete),
            "planned" if result.dry_run else f"{result.written}/{result.deleted}",
        ]
        for result in results
    ]
    headers = ["Configuration", "To Write", "To Delete", "Applied (w/d)"]
    click.echo(tabulate(rows, headers=headers, tablefmt="grid"))

    if dry_run:
        for result in results:
            configuration = registry.get(result.name)
            for item in result.to_write:
                click.echo(
                    f"[Dry Run] {result.name}: to be written: "
                    f"{configuration.describe(item)}"
                )
            for item in result.to_delete:
                click.echo(
                    f"[Dry Run] {result.name}: to be deleted: "
                    f"{configuration.describe(item)}"
                )
        click.echo("Dry run: no changes were made")


@cli.command("validate")
@click.argument("filename", type=click.Path(exists=True, dir_okay=False))
def validate_command(filename):
    """Validate a YAML configuration document without contacting Vault"""
    with open(filename, "rb") as f:
        document = f.read()

    try:
        counts = validate(build_registry(None), document)
    except VaultManagerError as e:
        _fail(str(e))

    rows = [[name, count] for name, count in counts.items()]
    click.echo(tabulate(rows, headers=["Configuration", "Entries"], tablefmt="grid"))
    click.echo("Configuration is valid")


@cli.command("list")
def list_command():
    """List registered configuration names"""
    for name in build_registry(None).names():
        click.echo(name)


if __name__ == "__main__":
    cli()
