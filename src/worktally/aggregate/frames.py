"""Tabular views of the aggregate tree for export and display."""
from typing import Optional

import pandas as pd

from .optimizer import AggregateTree

FRAME_COLUMNS = ['period', 'folder', 'person', 'count']


def aggregates_to_frame(tree: AggregateTree) -> pd.DataFrame:
    """Long format: one row per (period, folder, person)."""
    rows = [
        {'period': period, 'folder': folder, 'person': person, 'count': count}
        for person, months in tree.by_person.items()
        for period, folders in months.items()
        for folder, count in folders.items()
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    return df.sort_values(['period', 'folder', 'person'], ascending=[False, True, True]).reset_index(drop=True)


def folder_month_matrix(tree: AggregateTree) -> pd.DataFrame:
    """Folders as rows, periods (oldest first) as columns, zeros where empty."""
    df = pd.DataFrame(tree.by_folder).T
    if df.empty:
        return df
    columns = [p for p in sorted(tree.periods) if p in df.columns]
    return df.reindex(columns=columns).fillna(0).astype(int).sort_index()


def top_folders(tree: AggregateTree, max_items: Optional[int] = None) -> pd.DataFrame:
    """
    Folders by overall total, truncated to `max_items`.

    Presentation-side truncation; the aggregate tree itself keeps every folder.
    """
    limit = max_items or tree.max_items
    totals = pd.Series(tree.overall.folder_totals, name='count', dtype='float64')
    if totals.empty:
        return pd.DataFrame(columns=['folder', 'count'])
    ranked = totals.sort_values(ascending=False, kind='mergesort').head(limit)
    return ranked.rename_axis('folder').reset_index()
