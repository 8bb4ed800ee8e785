"""
worktally CLI module - shared console and commands.
"""
from worktally.cli.console import console, err_console, custom_theme
from worktally.cli.discover import folders_command, months_command
from worktally.cli.extract import extract_command
from worktally.cli.aggregate import aggregate_command
from worktally.cli.configs import configs_command

__all__ = [
    'console',
    'err_console',
    'custom_theme',
    'folders_command',
    'months_command',
    'extract_command',
    'aggregate_command',
    'configs_command',
]
