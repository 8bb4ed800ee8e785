"""
Aggregate command - build dashboard aggregates from a count source.
"""
from typing import Optional

import click
from rich.table import Table

from worktally.aggregate import aggregates_to_frame, optimize, top_folders
from worktally.cli.console import console
from worktally.cli.helpers import emit_json, read_json
from worktally.tracking import track_run
from worktally.utils import period_label


@click.command('aggregate')
@click.argument('source_json', type=click.Path(exists=True, dir_okay=False))
@click.option('--period-range', type=int, help='Number of most recent months to keep (default: config)')
@click.option('--max-items', type=int, help='Rows to show per table (default: config)')
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), help='Write the long-format aggregates to CSV')
@click.option('--json', 'as_json', is_flag=True, help='Print the aggregate tree as JSON instead of tables')
@click.pass_obj
def aggregate_command(obj: dict, source_json: str, period_range: Optional[int], max_items: Optional[int],
                      csv_path: Optional[str], as_json: bool):
    """Aggregate per-person counts by month, person and folder."""
    config = obj['config']
    source = read_json(source_json)

    with track_run('aggregate', {'source': source_json, 'period_range': period_range}) as tracker:
        tree = optimize(
            source,
            max_items=max_items or config.max_items,
            period_range=period_range or config.period_range,
        )
        if tree is None:
            raise click.ClickException(f"{source_json} is not an aggregation source (missing 'persons')")
        tracker['periods'] = len(tree.periods)
        tracker['total_items'] = tree.overall.total_items

        if csv_path:
            aggregates_to_frame(tree).to_csv(csv_path, index=False)

    if as_json:
        emit_json(tree.to_dict())
        return

    if csv_path:
        console.print(f"[success]Wrote aggregates to {csv_path}[/]")

    if not tree.periods:
        console.print("[warning]No counts found in source[/]")
        return

    months = Table(title="Items by Month")
    months.add_column("Month", style="bold white")
    months.add_column("Folders", justify="right")
    months.add_column("Items", justify="right")
    for period in tree.periods:
        folders = tree.by_month.get(period, {})
        months.add_row(period_label(period), str(len(folders)), _fmt(sum(folders.values())))
    console.print(months)

    folders = Table(title=f"Top Folders ({_fmt(tree.overall.total_items)} items)")
    folders.add_column("Folder", style="bold white")
    folders.add_column("Items", justify="right")
    for row in top_folders(tree).itertuples(index=False):
        folders.add_row(row.folder, _fmt(row.count))
    console.print(folders)

    people = Table(title="Items by Person")
    people.add_column("Person", style="bold white")
    people.add_column("Items", justify="right")
    ranked = sorted(tree.overall.person_totals.items(), key=lambda kv: (-kv[1], kv[0]))
    for person, count in ranked[:tree.max_items]:
        people.add_row(person, _fmt(count))
    console.print(people)


def _fmt(value) -> str:
    return f"{int(value):,}" if float(value).is_integer() else f"{value:,.2f}"
