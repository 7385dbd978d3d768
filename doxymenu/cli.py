#!/usr/bin/env python3
import click
import logging
import sys
from typing import Optional

from .config import MenuConfig
from .exporters import ExporterRegistry, outline_lines
from .linkcheck import LinkChecker, broken_links
from .loader import MenuDataLoader, site_base
from .validator import ERROR, validate


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "--variable-name", default="menudata", help="Name of the variable holding the menu"
)
@click.option("--home-url", default="index.html", help="Url of the documentation home page")
@click.option("-t", "--timeout", default=30, help="Timeout for requests in seconds")
@click.pass_context
def cli(ctx, verbose: bool, variable_name: str, home_url: str, timeout: int):
    """Doxygen menu data CLI - read, validate, convert and check menudata.js files."""
    setup_logging(verbose)
    try:
        ctx.obj = MenuConfig(
            variable_name=variable_name,
            home_url=home_url,
            timeout=timeout,
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--variable-name")


@cli.command()
@click.argument("source")
@click.option("-d", "--depth", default=0, help="Menu levels to show (0 for all)")
@click.pass_obj
def show(config: MenuConfig, source: str, depth: int):
    """Print the menu tree found at SOURCE as an outline."""
    logger = logging.getLogger(__name__)

    try:
        with MenuDataLoader(config) as loader:
            root = loader.load(source)
        for line in outline_lines(root, max_depth=depth):
            click.echo(line)
        return 0

    except Exception as e:
        logger.error(f"Failed to read menu data: {str(e)}")
        return 1


@cli.command(name="validate")
@click.argument("source")
@click.option("--strict", is_flag=True, help="Treat warnings as errors")
@click.pass_obj
def validate_command(config: MenuConfig, source: str, strict: bool):
    """Check the structure of the menu tree found at SOURCE."""
    logger = logging.getLogger(__name__)

    try:
        with MenuDataLoader(config) as loader:
            root = loader.load(source)
    except Exception as e:
        logger.error(f"Failed to read menu data: {str(e)}")
        return 1

    issues = validate(root, config)
    for issue in issues:
        click.echo(str(issue))

    failing = issues if strict else [issue for issue in issues if issue.severity == ERROR]
    if failing:
        click.echo(f"{len(failing)} problem(s) found")
        return 1

    click.echo(f"OK: {root.count() - 1} menu entries")
    return 0


@cli.command()
@click.argument("source")
@click.option(
    "-f",
    "--format",
    type=click.Choice(ExporterRegistry.list_formats()),
    default="json",
    help="Output format",
)
@click.option(
    "-o", "--output-dir", default="output", help="Output directory for exported files"
)
@click.option("-n", "--name", default=None, help="Output file name (default: menudata.<ext>)")
@click.option("--no-license", is_flag=True, help="Omit the license comment in js output")
@click.pass_obj
def export(
    config: MenuConfig,
    source: str,
    format: str,
    output_dir: str,
    name: Optional[str],
    no_license: bool,
):
    """Convert the menu tree found at SOURCE to another format."""
    logger = logging.getLogger(__name__)
    config.output_dir = output_dir
    if no_license:
        config.license_header = None

    try:
        with MenuDataLoader(config) as loader:
            root = loader.load(source)

        exporter = ExporterRegistry.get_exporter(format, config)
        file_name = name or f"menudata{exporter.extension}"
        output_path = exporter.export(root, f"{config.output_dir}/{file_name}")
        click.echo(f"Saved {root.count() - 1} menu entries to {output_path}")
        return 0

    except Exception as e:
        logger.error(f"Failed to export menu data: {str(e)}")
        return 1


@cli.command(name="check-links")
@click.argument("source")
@click.option(
    "-b", "--base", default=None, help="Directory or URL the menu urls are relative to"
)
@click.option("--no-anchors", is_flag=True, help="Do not check #fragments in target pages")
@click.option(
    "-w", "--max-workers", default=5, help="Maximum number of concurrent checks"
)
@click.option(
    "--verbose-progress",
    is_flag=True,
    help="Log every checked page instead of showing a progress bar",
)
@click.pass_obj
def check_links(
    config: MenuConfig,
    source: str,
    base: Optional[str],
    no_anchors: bool,
    max_workers: int,
    verbose_progress: bool,
):
    """Check that every entry of the menu found at SOURCE points at an existing page."""
    logger = logging.getLogger(__name__)
    config.check_anchors = not no_anchors
    config.max_workers = max(1, max_workers)
    config.verbose_progress = verbose_progress

    try:
        with MenuDataLoader(config) as loader:
            root = loader.load(source)
            base = base or site_base(loader.locate(source))
            results = LinkChecker(config, loader).check(root, base)
    except Exception as e:
        logger.error(f"Failed to check links: {str(e)}")
        return 1

    broken = broken_links(results)
    for result in broken:
        click.echo(f"BROKEN {result.url} ({result.text}): {result.reason}")

    click.echo(f"{len(results) - len(broken)} of {len(results)} links ok")
    return 1 if broken else 0


def main():
    try:
        return cli(standalone_mode=False) or 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
