"""Text normalization for link labels and folder names"""
import re

_WHITESPACE = re.compile(r'\s+')
_UNSAFE_NAME_CHARS = re.compile(r'[/:*?"<>|]')


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to one space and trim."""
    if not text:
        return ''
    return _WHITESPACE.sub(' ', text).strip()


def clean_folder_name(name: str) -> str:
    """
    Clean a folder label taken from a page.

    - Remove characters that are unsafe in file names (/:*?"<>|)
    - Strip a trailing " - Objective ECM" product suffix (page titles)
    - Collapse whitespace
    """
    if not name:
        return ''
    result = _UNSAFE_NAME_CHARS.sub('', name)
    result = re.sub(r'\s*-\s*Objective ECM$', '', result.strip())
    return collapse_whitespace(result)


def contains_token(text: str, token: str) -> bool:
    """Case-insensitive substring test."""
    return token.lower() in (text or '').lower()
