"""Item title grammars.

An item title on a monthly page encodes who handled how many requests on
which day, e.g.

    Online Requests 05/01/25 - JS, AB - 3
    Online Request 5/1/2025 - for the 02/01 not printed 1 & 2 - JS-AB 4

A grammar is a regex plus the names of the groups holding the date, the
name list and the count. Grammars are tried in order; the first match wins.
"""
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence


@dataclass(frozen=True)
class ItemMatch:
    """The pieces of an item title a grammar recognised"""
    grammar: str
    date_text: str
    names_text: str
    count_text: str
    note: Optional[str] = None


@dataclass(frozen=True)
class ItemGrammar:
    name: str
    pattern: Pattern
    date_group: str = 'date'
    names_group: str = 'names'
    count_group: str = 'count'
    note_group: Optional[str] = 'note'

    def match(self, text: str) -> Optional[ItemMatch]:
        found = self.pattern.search(text or '')
        if not found:
            return None
        groups = found.groupdict()
        return ItemMatch(
            grammar=self.name,
            date_text=groups.get(self.date_group) or '',
            names_text=(groups.get(self.names_group) or '').strip(),
            count_text=groups.get(self.count_group) or '',
            note=groups.get(self.note_group) if self.note_group else None,
        )


ONLINE_REQUESTS = ItemGrammar(
    name='online_requests',
    pattern=re.compile(
        r'Online Requests?\s+'
        r'(?P<date>\d{1,2}\s*/\s*\d{1,2}\s*/\s*(?:\d{2}|\d{4}))\s*-\s*'
        r'(?:(?P<note>for\s+the\s+.*?not\s+printed\s+[0-9/&\s-]+)\s*-\s*)?'
        r'(?P<names>[A-Za-z,\s-]+?)\s*(?:-\s*|\s+)'
        r'(?P<count>\d+)',
        re.IGNORECASE,
    ),
)

DEFAULT_GRAMMARS = (ONLINE_REQUESTS,)

# Attached e-mails (.msg) share the title format but are not work items
MESSAGE_FILE_PATTERN = re.compile(r'\.msg\b', re.IGNORECASE)


def match_item(text: str, grammars: Sequence[ItemGrammar] = DEFAULT_GRAMMARS) -> Optional[ItemMatch]:
    """First grammar match for an item title, or None."""
    for grammar in grammars:
        found = grammar.match(text)
        if found:
            return found
    return None


def is_message_file(text: str) -> bool:
    return bool(MESSAGE_FILE_PATTERN.search(text or ''))
