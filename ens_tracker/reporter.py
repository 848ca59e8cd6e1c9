from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from ens_tracker.domain.models import NameRecord, NameStatus, SyncReport
from ens_tracker.query import ReportPage

STATUS_STYLES: Dict[NameStatus, str] = {
    NameStatus.ACTIVE: "red",
    NameStatus.GRACE_PERIOD: "yellow",
    NameStatus.EXPIRED: "green",
}


def format_expiry(expiry_ms: int) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, or N/A when unset."""
    if not expiry_ms:
        return "N/A"
    moment = datetime.fromtimestamp(expiry_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_price(price: float) -> str:
    return f"{price} ETH" if price else "N/A"


def record_row(record: NameRecord) -> List[str]:
    style = STATUS_STYLES.get(record.status, "")
    return [
        record.name,
        "yes" if record.available else "no",
        f"[{style}]{record.status.value}[/{style}]" if style else record.status.value,
        format_expiry(record.expiry),
        format_price(record.price),
        record.label or "",
    ]


def print_report(page: ReportPage, console: Optional[Console] = None) -> None:
    """
    Render one page of records as a rich table followed by a pagination footer.
    """
    console = console or Console()

    if not page.records:
        console.print("[yellow]No names match the given filters.[/yellow]")
    else:
        table = Table(title="ENS Names", box=box.ROUNDED)
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Available", justify="center")
        table.add_column("Status")
        table.add_column("Expiry", style="magenta")
        table.add_column("Price", justify="right", style="bold green")
        table.add_column("Label", style="dim")
        for record in page.records:
            table.add_row(*record_row(record))
        console.print(table)

    console.print(f"Page {page.page} of {page.total_pages}")
    console.print(f"Showing {len(page.records)} of {page.total_items} total results")


def print_sync_report(report: SyncReport, console: Optional[Console] = None) -> None:
    """Summarize a synchronizer run; failed names are listed individually."""
    console = console or Console()

    table = Table(title=f"Sync Summary ({report.mode})", box=box.ROUNDED)
    table.add_column("Added", justify="right", style="green")
    table.add_column("Skipped", justify="right", style="blue")
    table.add_column("Updated", justify="right", style="magenta")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Rejected", justify="right", style="yellow")
    table.add_row(
        str(report.added),
        str(report.skipped),
        str(report.updated),
        str(report.failed),
        str(report.rejected),
    )
    console.print(table)

    for failure in report.failures:
        console.print(f"[red]Failed:[/red] {failure.name} ({failure.error})")
