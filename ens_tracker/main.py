from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from ens_tracker.config import get_settings
from ens_tracker.domain.candidates import digit_strings, letter_strings, load_word_list
from ens_tracker.domain.models import NameStatus
from ens_tracker.errors import MalformedInputError, StoreError
from ens_tracker.infrastructure.store import NameStore
from ens_tracker.query import ReportQuery, SortKey, load_name_set, run_query
from ens_tracker.registry.abstract import RegistryClient
from ens_tracker.registry.ens_client import EnsRegistryClient
from ens_tracker.reporter import print_report, print_sync_report
from ens_tracker.synchronizer import Synchronizer
from ens_tracker.utils.logging import configure_logging

app = typer.Typer(help="Track availability, expiry, and price of ENS names.")


def build_registry() -> RegistryClient:
    """Registry backend used by the sync commands."""
    return EnsRegistryClient.from_settings()


def _load_store() -> NameStore:
    try:
        return NameStore.load(get_settings().store_path)
    except StoreError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _save_store(store: NameStore) -> None:
    try:
        store.save(get_settings().store_path)
    except StoreError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _read_words(path: Path) -> List[str]:
    try:
        return load_word_list(path)
    except MalformedInputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"RPC={settings.masked_rpc_url} | store={settings.store_path} | "
        f"controller={settings.eth_controller_address} "
        f"registrar={settings.base_registrar_address}"
    )


@app.command()
def add(
    file: Path = typer.Option(
        ..., "--file", "-f", help="JSON file containing words to add."
    ),
    label: str = typer.Option(
        ..., "--label", "-l", help="Label to assign to the added words."
    ),
) -> None:
    """
    Check new words from a JSON array and add them to the store.
    """
    words = _read_words(file)
    store = _load_store()

    report = Synchronizer(build_registry(), store).ingest(words, label)
    _save_store(store)
    print_sync_report(report)


@app.command()
def update() -> None:
    """
    Re-check stored names expiring within the next 30 days.
    """
    store = _load_store()
    if not len(store):
        typer.echo("Database is empty. Please use the add command to add names first.")
        return

    typer.echo("Checking for updates...")
    report = Synchronizer(build_registry(), store).refresh()
    _save_store(store)
    print_sync_report(report)


@app.command()
def seed(
    letters: Optional[List[int]] = typer.Option(
        None, "--letters", help="Add every alphabetic name of this length (repeatable)."
    ),
    digits: Optional[List[int]] = typer.Option(
        None, "--digits", help="Add every numeric name of this length (repeatable)."
    ),
    words: Optional[List[Path]] = typer.Option(
        None, "--words", "-w", help="JSON word list to include (repeatable)."
    ),
) -> None:
    """
    Populate a fresh store from generated names and word lists.
    """
    letters, digits, words = letters or [], digits or [], words or []
    if not (letters or digits or words):
        raise typer.BadParameter("Give at least one of --letters, --digits or --words.")
    if any(n < 1 for n in [*letters, *digits]):
        raise typer.BadParameter("Lengths must be positive.")

    sources = [letter_strings(n) for n in letters]
    sources += [digit_strings(n) for n in digits]
    sources += [_read_words(path) for path in words]

    store = _load_store()
    report = Synchronizer(build_registry(), store).seed(*sources)
    _save_store(store)
    print_sync_report(report)


@app.command()
def report(
    available: Optional[bool] = typer.Option(
        None, "--available/--unavailable", help="Filter by availability."
    ),
    status: Optional[NameStatus] = typer.Option(
        None, "--status", "-s", help="Filter by status."
    ),
    max_price: Optional[float] = typer.Option(
        None, "--max-price", "-m", help="Filter by maximum price (in ETH)."
    ),
    expiring_within: Optional[float] = typer.Option(
        None, "--expiring-within", "-e", help="Filter by names expiring within X days."
    ),
    max_length: Optional[int] = typer.Option(
        None, "--max-length", help="Filter by maximum name length (excluding .eth)."
    ),
    label: Optional[str] = typer.Option(None, "--label", "-l", help="Filter by label."),
    common_names_only: bool = typer.Option(
        False, "--common-names-only", help="Only show names listed in the common names file."
    ),
    only: Optional[Path] = typer.Option(
        None, "--only", help="JSON word list; only show names it contains."
    ),
    sort: Optional[SortKey] = typer.Option(None, "--sort", help="Sort results by field."),
    page: int = typer.Option(1, "--page", help="Page number."),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", min=1, help="Number of items per page."
    ),
) -> None:
    """
    Filter, sort, and page through stored names.
    """
    settings = get_settings()
    common_names: frozenset[str] = frozenset()
    if common_names_only:
        try:
            common_names = load_name_set(settings.common_names_path)
        except MalformedInputError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc
    filter_set = frozenset(_read_words(only)) if only is not None else None

    query = ReportQuery(
        available=available,
        status=status,
        max_price=max_price,
        expiring_within_days=expiring_within,
        max_name_length=max_length,
        label=label,
        common_names_only=common_names_only,
        common_names=common_names,
        filter_set=filter_set,
        sort=sort,
        page=page,
        page_size=page_size or settings.report_page_size,
    )
    print_report(run_query(_load_store(), query))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
