"""
Extract command - turn a saved monthly page into per-person counts.
"""
from pathlib import Path
from typing import Optional

import click

from worktally.aggregate import merge_series
from worktally.cli.console import err_console
from worktally.cli.helpers import emit_json, read_json, read_snapshot, write_json
from worktally.pipeline import SCRIPT_TYPES, build_resolver, extract_snapshot
from worktally.tracking import track_run


@click.command('extract')
@click.argument('html_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--folder', help='Folder name (defaults to the page breadcrumb)')
@click.option('--script', type=click.Choice(SCRIPT_TYPES), default='A', show_default=True,
              help='A = modified-by page, B = online request titles')
@click.option('--handoff', is_flag=True, help='Print (person_name, date_string, count) rows instead')
@click.option('--source', 'source_path', type=click.Path(dir_okay=False),
              help='Merge the result into this aggregation source JSON (created if missing)')
@click.pass_obj
def extract_command(obj: dict, html_file: str, folder: Optional[str], script: str, handoff: bool,
                    source_path: Optional[str]):
    """
    Extract per-person counts from a saved monthly page.

    Script A credits each list entry to the person who last modified it
    (FORM 5633 folders take the count from a trailing " - N" on the title).
    Script B reads online request titles: dates on weekends or public
    holidays move to the next working day and initials are resolved through
    the configured map.
    """
    config = obj['config']
    try:
        resolver = build_resolver(config)
    except ValueError as e:
        raise click.ClickException(str(e))

    with track_run('extract', {'html_file': html_file, 'folder': folder, 'script': script}) as tracker:
        snapshot = read_snapshot(html_file, config.origin, config)
        page = extract_snapshot(
            snapshot,
            script,
            resolver,
            config.initials_map,
            folder_name=folder or snapshot.folder_name,
        )
        tracker['records'] = len(page.records)
        tracker['total'] = page.total

    for token, date_key in page.unresolved:
        err_console.print(f"[warning]Unresolved initials {token!r} on {date_key}[/]")

    if source_path:
        existing = read_json(source_path) if Path(source_path).exists() else None
        try:
            merged = merge_series(existing, page.folder_name, page.series)
        except (TypeError, ValueError) as e:
            raise click.ClickException(str(e))
        write_json(source_path, merged)
        err_console.print(f"[success]Merged {page.total} item(s) from {page.folder_name!r} into {source_path}[/]")

    emit_json(page.to_handoff() if handoff else page.to_dict())
