"""Pytest configuration for the worktally test suite."""

import pytest

from worktally.discovery import NavLink
from worktally.workdays import DateResolver, StaticHolidayCalendar


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "cli: marks tests that drive the click command line"
    )


ORIGIN = 'https://ecm.example.gov.au'


@pytest.fixture
def origin():
    return ORIGIN


@pytest.fixture
def calendar():
    """Small calendar: New Year's Day 2025 and Australia Day (observed) 2025."""
    return StaticHolidayCalendar(['2025-01-01', '2025-01-27'])


@pytest.fixture
def resolver(calendar):
    return DateResolver(calendar)


@pytest.fixture
def initials_map():
    return {'JS': 'John Smith', 'AB': 'Alice Brown', 'CD': 'Chris Day'}


@pytest.fixture
def folder_links():
    """Links as rendered on a folder listing page, noise included."""
    return [
        NavLink('Police', '/documents/folders/101'),
        NavLink('Courts', '/documents/folders/102'),
        NavLink('Police', '/documents/folders/103'),          # duplicate text
        NavLink('Courts (2)', '/documents/folders/102'),      # duplicate URL
        NavLink('Copy of Police', '/documents/folders/104'),  # working copy
        NavLink('Help', '/help'),                             # not a folder path
        NavLink('', '/documents/folders/105'),                # no text
        NavLink('Ambulance', 'javascript:void(0)'),           # not http(s)
        NavLink('  Fire   and   Rescue ', '/objective/folders/106'),
    ]
