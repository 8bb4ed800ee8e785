"""worktally - work item counts from document management pages."""
__version__ = '0.1.0'
