"""Inkwell CLI: entry point for journal, stats, transfer and sync commands."""

import click

from inkwell import __version__


@click.group()
@click.version_option(version=__version__, package_name="inkwell-journal")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    envvar="INKWELL_CONFIG",
    help="Path to config.yaml (default: ~/.inkwell/config.yaml).",
)
@click.pass_context
def main(ctx: click.Context, config_path: str | None) -> None:
    """Inkwell: a personal journal in your terminal."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


from .entries_cmd import delete, edit, list_entries, new, show
from .stats_cmd import stats
from .sync_cmd import sync
from .transfer_cmd import export, import_entries

main.add_command(new)
main.add_command(list_entries)
main.add_command(show)
main.add_command(edit)
main.add_command(delete)
main.add_command(stats)
main.add_command(export)
main.add_command(import_entries)
main.add_command(sync)
