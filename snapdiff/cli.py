"""CLI entry point for snapdiff.

    snapdiff [--config FILE] test [PATHS]... [-r REPORTER] [-b BROWSER] [-g GREP]
    snapdiff [--config FILE] update [PATHS]... [--diff] [--new]
    snapdiff [--config FILE] list-browsers

The config file is read before the command line is parsed so that plugins
can add their own commands through the CLI event.
"""

import asyncio
import sys
from typing import Optional

import click

from .config import split_cli_overrides
from .errors import SnapdiffError
from .orchestrator import Snapdiff

DEFAULT_CONFIG = ".snapdiff.yml"


def find_config_path(argv: list[str]) -> str:
    """Value of -c/--config in ``argv``, or the default config file."""
    for i, arg in enumerate(argv):
        if arg in ("-c", "--config") and i + 1 < len(argv):
            return argv[i + 1]
        if arg.startswith("--config="):
            return arg.split("=", 1)[1]
    return DEFAULT_CONFIG


def parse_reporter(value: str):
    """``name`` or ``name=path``."""
    if "=" in value:
        name, path = value.split("=", 1)
        return {"name": name, "path": path}
    return value


def _finish(stats) -> None:
    if stats is not None and stats.has_failures:
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG, show_default=True,
              help="Path to the configuration file.")
def cli(config_path: str):
    """Visual regression testing."""


@cli.command()
@click.argument("paths", nargs=-1)
@click.option("-r", "--reporter", "reporters", multiple=True, default=("flat",), show_default=True,
              help="Reporter name, or name=path.")
@click.option("-b", "--browser", "browsers", multiple=True, help="Run only in this browser.")
@click.option("-g", "--grep", help="Run only suites matching this pattern.")
@click.pass_obj
def test(snapdiff: Snapdiff, paths, reporters, browsers, grep):
    """Compare states with their reference screenshots."""
    stats = asyncio.run(snapdiff.test(
        list(paths) or None,
        reporters=[parse_reporter(r) for r in reporters],
        browsers=list(browsers) or None,
        grep=grep,
    ))
    _finish(stats)


@cli.command()
@click.argument("paths", nargs=-1)
@click.option("-r", "--reporter", "reporters", multiple=True, default=("flat",), show_default=True,
              help="Reporter name, or name=path.")
@click.option("-b", "--browser", "browsers", multiple=True, help="Update only this browser.")
@click.option("-g", "--grep", help="Update only suites matching this pattern.")
@click.option("--diff", is_flag=True, help="Update only references that differ.")
@click.option("--new", is_flag=True, help="Write only missing references.")
@click.pass_obj
def update(snapdiff: Snapdiff, paths, reporters, browsers, grep, diff, new):
    """Capture reference screenshots."""
    stats = asyncio.run(snapdiff.update(
        list(paths) or None,
        reporters=[parse_reporter(r) for r in reporters],
        browsers=list(browsers) or None,
        grep=grep,
        diff=diff,
        new=new,
    ))
    _finish(stats)


@cli.command("list-browsers")
@click.pass_obj
def list_browsers(snapdiff: Snapdiff):
    """Print configured browser ids."""
    for browser_id in snapdiff.browser_ids:
        click.echo(browser_id)


def main(argv: Optional[list[str]] = None):
    """Main CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    _, rest = split_cli_overrides(argv)

    try:
        snapdiff = Snapdiff.create(
            find_config_path(rest), {"env": True, "cli": True}, argv=argv,
        )
        snapdiff.extend_cli(cli)
        cli.main(args=rest, obj=snapdiff, standalone_mode=False)
    except SnapdiffError as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        sys.exit(1)
    except click.exceptions.Abort:
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
