"""Auth Log Geo - SSH login attempt parser"""

import calendar
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .models import AggregationStore
from .patterns import COMPILED_PATTERNS

logger = logging.getLogger(__name__)


@dataclass
class Attempt:
    """One recognized login attempt line"""
    date: str
    ip: str
    user: str
    times: int = 1


def _date_token(match) -> str:
    """Short "Mon D" date; ISO timestamps are reduced to the same form."""
    if match.group('date'):
        return ' '.join(match.group('date').split())
    return f"{calendar.month_abbr[int(match.group('month'))]} {int(match.group('day'))}"


def parse_line(line: str) -> Optional[Attempt]:
    line = line.strip()
    if not line:
        return None

    for pattern in COMPILED_PATTERNS:
        match = pattern.match(line)
        if match:
            return Attempt(
                date=_date_token(match),
                ip=match.group('ip'),
                user=(match.group('user') or '').strip(),
                times=int(match.group('repeat') or 1),
            )
    return None


def apply_line(store: AggregationStore, line: str) -> bool:
    """Fold one log line into ``store``; returns False if it was not an attempt."""
    attempt = parse_line(line)
    if attempt is None:
        return False
    store.bucket(attempt.date).record(attempt.ip, attempt.user, times=attempt.times)
    return True


def parse_lines(lines: Iterable[str], store: Optional[AggregationStore] = None) -> AggregationStore:
    if store is None:
        store = AggregationStore()
    for line in lines:
        apply_line(store, line)
    return store


def parse_file(filepath: Union[str, Path], console: Optional[Console] = None,
               show_progress: bool = True) -> AggregationStore:
    """Read the whole auth log, then parse it in a single pass.

    OSError from opening or reading the file is left to the caller.
    """
    path = Path(filepath)
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        lines = f.readlines()
    logger.debug("auth file loaded: %s", path)

    store = AggregationStore()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=not show_progress,
    ) as progress:
        task = progress.add_task("Parsing auth log...", total=len(lines))
        for line in lines:
            apply_line(store, line)
            progress.update(task, advance=1)

    logger.debug("finished parsing log file")
    return store
