"""
Shared utility functions for worktally CLI commands.
"""
import json
from pathlib import Path
from typing import Any

import click

from worktally.discovery import PageSnapshot
from worktally.pipeline import WorktallyConfig


def read_snapshot(html_file: str, origin: str, config: WorktallyConfig) -> PageSnapshot:
    """Build a page snapshot from a saved HTML file."""
    html = Path(html_file).read_text(encoding='utf-8', errors='replace')
    return PageSnapshot.from_html(html, origin, selectors=config.link_selectors)


def read_json(path: str) -> Any:
    """Load a JSON file, turning parse errors into a CLI error."""
    try:
        return json.loads(Path(path).read_text(encoding='utf-8'))
    except ValueError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}")


def write_json(path: str, payload: Any) -> None:
    Path(path).write_text(json.dumps(payload, indent=2), encoding='utf-8')


def emit_json(payload: Any) -> None:
    """Print a handoff payload to stdout."""
    click.echo(json.dumps(payload, indent=2))
