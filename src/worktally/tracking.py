"""
Run tracking - logs the start, outcome and duration of each command or batch.

The tracker dict handed to the caller collects result counters, which are
logged with the outcome.
"""
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Generator

logger = logging.getLogger(__name__)


def _format_args(args: Dict[str, Any]) -> str:
    return ', '.join(f"{k}={v!r}" for k, v in args.items())


@contextmanager
def track_run(command: str, args: Dict[str, Any]) -> Generator[Dict[str, Any], None, None]:
    """
    Context manager for tracking a run.

    Usage:
        with track_run('months', {'folders': 12}) as tracker:
            # do work...
            tracker['months_found'] = 40
        # success or failure is logged on exit

    Exceptions are logged with traceback and re-raised.
    """
    started = time.monotonic()
    tracker: Dict[str, Any] = {}
    logger.info(f"{command} started ({_format_args(args)})")

    try:
        yield tracker
    except Exception:
        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.exception(
            f"{command} failed after {elapsed_ms}ms ({_format_args(args)}); partial results: {tracker or 'none'}"
        )
        raise

    elapsed_ms = int((time.monotonic() - started) * 1000)
    logger.info(f"{command} complete in {elapsed_ms}ms: {tracker or 'no results'}")
