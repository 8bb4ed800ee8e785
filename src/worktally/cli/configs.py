"""
Configs command - generate monthly folder configs from classified months.
"""
from typing import Optional

import click

from worktally.cli.console import err_console
from worktally.cli.helpers import emit_json, read_json
from worktally.discovery import MonthTarget
from worktally.pipeline import FolderConfig, build_folder_configs
from worktally.tracking import track_run


@click.command('configs')
@click.argument('months_json', type=click.Path(exists=True, dir_okay=False))
@click.option('--existing', type=click.Path(exists=True, dir_okay=False),
              help='JSON list of configs already saved; matches are not regenerated')
@click.option('--script', type=click.Choice(['A', 'B']), default='A', show_default=True,
              help='Script type for the new configs')
@click.pass_obj
def configs_command(obj: dict, months_json: str, existing: Optional[str], script: str):
    """
    Generate "<Parent> - <Mon> <YYYY>" folder configs.

    MONTHS_JSON is a mapping of parent folder -> list of {year, month, url},
    or one payload (or a list of payloads) printed by the months command.
    """
    monthly_results = _monthly_results(read_json(months_json))
    saved = read_json(existing) if existing else []
    if not isinstance(saved, list) or not all(isinstance(c, dict) for c in saved):
        raise click.ClickException("--existing must be a JSON list of config objects")
    saved = [FolderConfig.from_dict(c) for c in saved]

    with track_run('configs', {'parents': len(monthly_results), 'existing': len(saved)}) as tracker:
        generated = build_folder_configs(monthly_results, existing=saved, script=script)
        tracker['generated'] = len(generated)

    for config in generated:
        for problem in config.validate():
            err_console.print(f"[warning]{config.name}: {problem}[/]")

    emit_json([c.to_dict() for c in generated])


def _monthly_results(data) -> dict:
    if not isinstance(data, (dict, list)):
        raise click.ClickException("Months JSON must be an object or a list")
    if isinstance(data, dict) and 'months' in data:
        data = [data]
    payloads = data if isinstance(data, list) else [
        {'parent': parent, 'months': months} for parent, months in data.items()
    ]
    results = {}
    for payload in payloads:
        try:
            targets = [MonthTarget(year=int(m['year']), month=int(m['month']), url=m['url'])
                       for m in payload['months']]
            results.setdefault(payload['parent'], []).extend(targets)
        except (KeyError, TypeError, ValueError) as e:
            raise click.ClickException(f"Malformed months entry: {e}")
    return results
