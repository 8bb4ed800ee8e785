"""Configuration dataclasses"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional
import json

from ..aggregate.optimizer import DEFAULT_MAX_ITEMS, DEFAULT_PERIOD_RANGE
from ..discovery.links import FOLDER_PATH_FRAGMENTS, MAX_LABEL_LENGTH, MIN_LABEL_LENGTH, resolve_url
from ..discovery.strategies import PRIMARY_LINK_SELECTORS
from ..utils.period import MONTH_NAMES_SHORT

INITIALS_TO_NAME: Dict[str, str] = {
    'MB': 'Michael Bourke', 'ZM': 'Zak Masters', 'AD': 'Ashleigh Dykes', 'DL': 'Di Leask',
    'KV': 'Kellie Vereyken', 'JLR': 'Jessica Ricketts', 'JC': 'Jethro Carthew', 'BF': 'Blake Foley',
    'JB': 'Jennifer Bowe', 'JR': 'Jessica Ronalds', 'BB': 'Ben Burrows', 'CW': 'Cheryl Warren',
    'AC': 'Angela Clarke', 'DK': 'Dina Kosso', 'NS': 'Nathan Sweeney',
}

SCRIPT_MODIFIED_BY = 'A'        # one item per entry, credited to the modifier
SCRIPT_ONLINE_REQUESTS = 'B'    # "Online Requests <date> - <initials> - <n>" titles
SCRIPT_TYPES = (SCRIPT_MODIFIED_BY, SCRIPT_ONLINE_REQUESTS)


@dataclass
class WorktallyConfig:
    """Settings for classification, extraction and aggregation"""
    origin: str = ''                                   # base URL for relative hrefs
    folder_path_fragments: List[str] = field(default_factory=lambda: list(FOLDER_PATH_FRAGMENTS))
    min_label_length: int = MIN_LABEL_LENGTH
    max_label_length: int = MAX_LABEL_LENGTH
    link_selectors: List[str] = field(default_factory=lambda: list(PRIMARY_LINK_SELECTORS))
    initials_map: Dict[str, str] = field(default_factory=lambda: dict(INITIALS_TO_NAME))
    holidays_file: Optional[str] = None               # None = built-in NSW calendar
    period_range: int = DEFAULT_PERIOD_RANGE
    max_items: int = DEFAULT_MAX_ITEMS
    log_level: str = 'WARNING'

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict) -> 'WorktallyConfig':
        defaults = cls()
        config = cls(
            origin=data.get('origin', defaults.origin),
            folder_path_fragments=data.get('folder_path_fragments', defaults.folder_path_fragments),
            min_label_length=data.get('min_label_length', defaults.min_label_length),
            max_label_length=data.get('max_label_length', defaults.max_label_length),
            link_selectors=data.get('link_selectors', defaults.link_selectors),
            initials_map=data.get('initials_map', defaults.initials_map),
            holidays_file=data.get('holidays_file', defaults.holidays_file),
            period_range=data.get('period_range', defaults.period_range),
            max_items=data.get('max_items', defaults.max_items),
            log_level=data.get('log_level', defaults.log_level),
        )
        config.validate()
        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'WorktallyConfig':
        return cls.from_dict(json.loads(json_str))

    def validate(self) -> None:
        """Raise ValueError on settings that cannot work."""
        if not isinstance(self.folder_path_fragments, list) or not self.folder_path_fragments:
            raise ValueError("folder_path_fragments must be a non-empty list")
        if not 0 <= self.min_label_length <= self.max_label_length:
            raise ValueError("min_label_length must be between 0 and max_label_length")
        if not isinstance(self.initials_map, dict):
            raise ValueError("initials_map must be an object of initials -> name")
        if not isinstance(self.period_range, int) or self.period_range < 1:
            raise ValueError("period_range must be a positive integer")
        if not isinstance(self.max_items, int) or self.max_items < 1:
            raise ValueError("max_items must be a positive integer")


@dataclass
class FolderConfig:
    """A monthly folder to process: one month of one folder type"""
    name: str                       # "Police - Mar 2025"
    urls: List[str] = field(default_factory=list)
    script: str = 'A'               # A = modified-by pages, B = online request batch sheets
    year: int = 0
    month: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'FolderConfig':
        return cls(
            name=data.get('name', ''),
            urls=data.get('urls', []),
            script=data.get('script', 'A'),
            year=data.get('year', 0),
            month=data.get('month', 0),
        )

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the config is usable."""
        errors = []
        if not isinstance(self.name, str) or not self.name.strip():
            errors.append('Folder name is required and cannot be blank.')
        if self.script not in SCRIPT_TYPES:
            errors.append('Script type must be either "A" or "B".')
        if not isinstance(self.year, int) or isinstance(self.year, bool) or not 2000 <= self.year <= 2100:
            errors.append('Year must be an integer between 2000 and 2100.')
        if not isinstance(self.month, int) or isinstance(self.month, bool) or not 1 <= self.month <= 12:
            errors.append('Month must be an integer between 1 and 12.')
        if not isinstance(self.urls, list) or not self.urls:
            errors.append('At least one URL is required.')
        else:
            for index, url in enumerate(self.urls):
                if not isinstance(url, str) or not resolve_url(url, ''):
                    errors.append(f'Invalid URL at index {index}: {url!r}')
        return errors

    def is_same(self, other: 'FolderConfig') -> bool:
        return self.name == other.name and self.year == other.year and self.month == other.month


def build_folder_configs(
    monthly_results: Dict[str, list],
    existing: Optional[List[FolderConfig]] = None,
    script: str = 'A',
) -> List[FolderConfig]:
    """
    Turn monthly targets per parent folder into folder configs.

    Args:
        monthly_results: parent folder name -> list of MonthTarget
        existing: Configs already saved; matching name/year/month are skipped
        script: Script type for the new configs

    Returns:
        Only the newly generated configs
    """
    known = list(existing or [])
    generated = []
    for parent, targets in monthly_results.items():
        for target in targets:
            config = FolderConfig(
                name=f"{parent} - {MONTH_NAMES_SHORT[target.month - 1]} {target.year}",
                urls=[target.url],
                script=script,
                year=target.year,
                month=target.month,
            )
            if any(config.is_same(k) for k in known):
                continue
            known.append(config)
            generated.append(config)
    return generated
