"""
Shared Rich console and theme for the worktally CLI.
"""
from rich.console import Console
from rich.theme import Theme

# Simple theme - dark blue for everything (readable on light terminals)
custom_theme = Theme({
    "info": "blue",
    "success": "blue",
    "warning": "blue",
    "error": "bold red",
    "highlight": "bold blue",
    "muted": "blue",
    "period": "blue",
    "count": "blue",
    "table.header": "bold blue",
})

console = Console(theme=custom_theme, highlight=False)

# Logs go to stderr so JSON on stdout stays pipeable
err_console = Console(theme=custom_theme, highlight=False, stderr=True)
