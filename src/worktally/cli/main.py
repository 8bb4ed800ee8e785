"""
worktally CLI - classify navigation targets, extract counts, aggregate.

Commands:
    folders     Classify folder links on a saved folder listing page
    months      Classify monthly links on a saved folder page
    extract     Extract per-person counts from a saved monthly page
    aggregate   Build month/person/folder aggregates from a count source
    configs     Generate monthly folder configs from classified months
"""
import logging
from typing import Optional

import click
from rich.logging import RichHandler

from worktally.cli.aggregate import aggregate_command
from worktally.cli.configs import configs_command
from worktally.cli.console import err_console
from worktally.cli.discover import folders_command, months_command
from worktally.cli.extract import extract_command
from worktally.pipeline import load_config


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(message)s',
        datefmt='[%X]',
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Config JSON (default: $WORKTALLY_CONFIG or built-in defaults)')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """worktally - work item counts from document management pages"""
    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    configure_logging('DEBUG' if verbose else config.log_level)
    ctx.obj = {'config': config}


cli.add_command(folders_command)
cli.add_command(months_command)
cli.add_command(extract_command)
cli.add_command(aggregate_command)
cli.add_command(configs_command)


if __name__ == '__main__':
    cli()
