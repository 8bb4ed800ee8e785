"""
Folder and month commands - classify navigation targets on a saved page.
"""
import click

from worktally.cli.helpers import emit_json, read_snapshot
from worktally.discovery import classification_result, classify_folder_links, classify_month_links, page_origin
from worktally.tracking import track_run


@click.command('folders')
@click.argument('html_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--origin', help='Page URL or origin for resolving relative links (default: config origin)')
@click.pass_obj
def folders_command(obj: dict, html_file: str, origin: str):
    """Classify folder-type links on a saved folder listing page."""
    config = obj['config']
    origin = page_origin(origin) if origin else config.origin

    with track_run('folders', {'html_file': html_file, 'origin': origin}) as tracker:
        snapshot = read_snapshot(html_file, origin, config)
        folders = classify_folder_links(
            snapshot.links,
            origin,
            path_fragments=config.folder_path_fragments,
            min_length=config.min_label_length,
            max_length=config.max_label_length,
        )
        tracker['folders'] = len(folders)

    emit_json(classification_result(folders, 'folders'))


@click.command('months')
@click.argument('html_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--origin', help='Page URL or origin for resolving relative links (default: config origin)')
@click.option('--parent', default='', help='Parent folder name (defaults to the page breadcrumb)')
@click.pass_obj
def months_command(obj: dict, html_file: str, origin: str, parent: str):
    """Classify monthly links on a saved folder page."""
    config = obj['config']
    origin = page_origin(origin) if origin else config.origin

    with track_run('months', {'html_file': html_file, 'parent': parent}) as tracker:
        snapshot = read_snapshot(html_file, origin, config)
        parent = parent or snapshot.folder_name
        months = classify_month_links(
            snapshot.links,
            origin,
            parent=parent,
            path_fragments=config.folder_path_fragments,
        )
        tracker['months'] = len(months)

    payload = classification_result(months, 'months')
    payload['parent'] = parent
    emit_json(payload)
