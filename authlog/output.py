"""Auth Log Geo - Report output"""

import json
import sys

from rich.console import Console
from rich.markup import escape

from .models import AggregationStore


def print_report(store: AggregationStore, threshold: int = 0, console: Console = None):
    if console is None:
        console = Console()

    for day in store:
        console.print(f"Date: {escape(day.date)}", style="bold green", highlight=False)
        for entry in day:
            if entry.count < threshold:
                continue
            console.print(f"IP: {escape(entry.ip)}", style="bold blue", highlight=False)
            console.print(f"[yellow]Location:[/] {escape(entry.location_string())}", highlight=False)
            console.print(f"[yellow]Attempts:[/] {entry.count}", highlight=False)
            console.print(f"[yellow]Usernames:[/] {escape(', '.join(entry.users))}", highlight=False)
        console.print()


def print_json(store: AggregationStore, stream=None):
    stream = stream or sys.stdout
    stream.write(json.dumps(store.to_json(), indent=4) + "\n")
    stream.flush()
