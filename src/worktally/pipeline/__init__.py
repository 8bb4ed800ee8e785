"""Configuration and batch passes"""
from .config import WorktallyConfig, FolderConfig, build_folder_configs, INITIALS_TO_NAME, SCRIPT_TYPES
from .settings import load_config, build_resolver
from .batch import BatchResult, run_batch, scan_monthly_targets, extract_snapshot, extract_monthly_pages
