"""CLI commands for Bubble RSVP management."""

from typing import Optional

import typer

from bubble_rsvp.config.database import init_db
from bubble_rsvp.config.logging import setup_logging
from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.dtos import OperationResult, RowRange, RsvpError, StatusFilter, StoreName
from bubble_rsvp.rsvps.features.confirm_rsvps.write_model import ConfirmRsvpsWriteModel
from bubble_rsvp.rsvps.features.regenerate_sheets.write_model import RegenerateSheetsWriteModel
from bubble_rsvp.rsvps.features.rsvp_summary.read_model import RsvpSummaryReadModel
from bubble_rsvp.rsvps.features.submit_rsvp.write_model import SubmitRsvpWriteModel

app = typer.Typer(help="CLI commands for Bubble RSVP management")


@app.callback()
def main(
    create_tables: bool = typer.Option(
        True,
        "--create-tables/--no-create-tables",
        help="Create the storage tables if they do not exist",
    ),
):
    setup_logging()
    if create_tables:
        init_db()


def _report(result: OperationResult) -> None:
    if not result.ok:
        typer.secho(result.message, fg=typer.colors.RED)
        raise typer.Exit(1)
    typer.secho(result.message, fg=typer.colors.GREEN)


def _parse_range(value: str) -> RowRange:
    start, _, end = value.partition("-")
    try:
        return RowRange(start=int(start), end=int(end or start))
    except ValueError:
        raise typer.BadParameter(f"Expected a row or a range like 3-7, got {value!r}")


@app.command()
def submit(
    name: str = typer.Argument(..., help="Name of the guest"),
    attending: str = typer.Option("Y", "--attending", "-a", help="Y, N or Maybe"),
    guests: str = typer.Option("1", "--guests", "-g", help="Number of guests"),
    guest_names: str = typer.Option("", "--guest-names", help="Names of the other guests"),
    email: str = typer.Option("", "--email", "-e"),
    phone: str = typer.Option("", "--phone", "-p"),
    dietary: str = typer.Option("", "--dietary", "-d", help="Dietary restrictions"),
    comments: str = typer.Option("", "--comments", "-c"),
):
    """Record an RSVP as if it came from the invitation page."""
    result = SubmitRsvpWriteModel(get_workbook()).submit_form(
        {
            "name": name,
            "attending": attending,
            "guests": guests,
            "guest_names": guest_names,
            "email": email,
            "phone": phone,
            "dietary": dietary,
            "comments": comments,
        }
    )
    _report(result)

    for outcome in result.data.outcomes:
        color = typer.colors.BLUE if outcome.succeeded else typer.colors.YELLOW
        detail = f" ({outcome.error})" if outcome.error else ""
        typer.secho(f"  {outcome.store.value}: {outcome.action.value}{detail}", fg=color)


@app.command()
def regenerate(
    target: Optional[StoreName] = typer.Argument(
        None,
        help="guest_roster or dietary_roster; both when omitted",
        show_default=False,
    ),
):
    """Rebuild the guest list and/or the dietary list from the RSVP log."""
    write_model = RegenerateSheetsWriteModel(get_workbook())
    if target is None:
        _report(write_model.regenerate_all())
    else:
        _report(write_model.regenerate(target))


@app.command()
def confirm(
    store: StoreName = typer.Argument(..., help="primary_log or guest_roster"),
    ranges: list[str] = typer.Argument(..., help="Rows to confirm, e.g. 3 5-8"),
):
    """Confirm the attending RSVPs in the given rows."""
    result = ConfirmRsvpsWriteModel(get_workbook()).confirm_selection(
        store, [_parse_range(value) for value in ranges]
    )
    _report(result)

    if result.data.unmatched_names:
        typer.secho(
            f"Not found in the other sheet: {', '.join(result.data.unmatched_names)}",
            fg=typer.colors.YELLOW,
        )


@app.command()
def confirm_row(row: int = typer.Argument(..., help="RSVP log row number")):
    """Confirm the RSVP in one row of the RSVP log."""
    _report(ConfirmRsvpsWriteModel(get_workbook()).confirm_by_row(row))


@app.command()
def stats():
    """Show RSVP counts."""
    try:
        summary = RsvpSummaryReadModel(get_workbook()).stats()
    except RsvpError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("RSVP Statistics", fg=typer.colors.GREEN)
    typer.secho(f"  Total RSVPs: {summary.total}", fg=typer.colors.BLUE)
    typer.secho(f"  Confirmed: {summary.confirmed}", fg=typer.colors.BLUE)
    typer.secho(f"  Pending: {summary.pending}", fg=typer.colors.BLUE)
    typer.secho(f"  Maybe: {summary.maybe}", fg=typer.colors.BLUE)
    typer.secho(f"  Cancelled: {summary.cancelled}", fg=typer.colors.BLUE)
    typer.secho(f"  Total confirmed guests: {summary.total_guests}", fg=typer.colors.CYAN)


@app.command("list")
def list_rsvps(
    status: StatusFilter = typer.Option(StatusFilter.ALL, "--status", "-s"),
):
    """List RSVPs from the RSVP log."""
    try:
        rsvps = RsvpSummaryReadModel(get_workbook()).by_status(status)
    except RsvpError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    if not rsvps:
        typer.secho("No RSVPs found", fg=typer.colors.YELLOW)
    for rsvp in rsvps:
        typer.secho(
            f"  [{rsvp.row}] {rsvp.name} - {rsvp.attending or 'No Response'}, "
            f"{rsvp.status or 'Pending'}, {rsvp.guests} guest(s)",
            fg=typer.colors.BLUE,
        )


@app.command()
def ensure_sheets():
    """Write any missing header and caption rows."""
    _report(RegenerateSheetsWriteModel(get_workbook()).ensure_sheets())


if __name__ == "__main__":
    app()
