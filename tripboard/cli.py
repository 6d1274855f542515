from __future__ import annotations

import logging
from typing import Optional, Tuple

import click

from .api_client import TripApiClient
from .app import TripBoardApp, build_app
from .config import Settings, get_settings
from .models import FilterType, PointType, SortType
from .views import PointEditView

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        handlers=[logging.FileHandler(settings.log_file), logging.StreamHandler()],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _open_board() -> TripBoardApp:
    settings = get_settings()
    setup_logging(settings)
    app = build_app(TripApiClient.from_settings(settings))
    if not app.load():
        logger.warning("Board opened with incomplete data")
    return app


def _fill_form(
    form: PointEditView,
    point_type: Optional[str],
    destination: Optional[str],
    date_from: Optional[str],
    date_to: Optional[str],
    price: Optional[str],
    offers: Tuple[str, ...],
) -> None:
    if point_type:
        form.change_type(point_type)
    if destination and not form.change_destination(destination):
        raise click.BadParameter(f"Unknown destination {destination!r}")
    if date_from or date_to:
        try:
            form.change_dates(date_from, date_to)
        except ValueError as exc:
            raise click.BadParameter(f"Invalid date: {exc}") from exc
    if price is not None:
        form.change_price(price)
    for offer_id in offers:
        if not form.toggle_offer(offer_id):
            raise click.BadParameter(f"Offer {offer_id!r} is not available for this type")


def _point_options(func):
    for option in reversed(
        [
            click.option("--type", "point_type", type=click.Choice([t.value for t in PointType])),
            click.option("--destination", help="Destination name"),
            click.option("--date-from", help="Start, ISO-8601"),
            click.option("--date-to", help="End, ISO-8601"),
            click.option("--price", help="Base price"),
            click.option("--offer", "offers", multiple=True, help="Offer id to toggle"),
        ]
    ):
        func = option(func)
    return func


@click.group()
def cli() -> None:
    """Command line interface."""


@cli.command("list")
@click.option(
    "--filter",
    "filter_type",
    type=click.Choice([f.value for f in FilterType]),
    default=FilterType.EVERYTHING.value,
)
@click.option(
    "--sort",
    "sort_type",
    type=click.Choice([s.value for s in SortType]),
    default=SortType.DAY.value,
)
def list_points(filter_type: str, sort_type: str) -> None:
    """Show the board with the given filter and sort."""
    app = _open_board()
    filter_type = FilterType(filter_type)
    if (
        not app.filters.handle_filter_type_change(filter_type)
        and app.filter_model.filter_type is not filter_type
    ):
        raise click.ClickException(f"There are no {filter_type.value} events now")
    app.board.handle_sort_type_change(SortType(sort_type))
    click.echo(app.screen())


@cli.command()
def info() -> None:
    """Show route, dates and total cost of the trip."""
    app = _open_board()
    click.echo(app.header.text or "No points yet")


@cli.command()
@click.argument("point_id")
def favorite(point_id: str) -> None:
    """Toggle the favorite flag of a point."""
    app = _open_board()
    presenter = app.board.point_presenter(point_id)
    if presenter is None:
        raise click.ClickException(f"Point {point_id} not found")
    ok = presenter.toggle_favorite()
    click.echo(app.screen())
    if not ok:
        raise click.ClickException("Failed to update point. Please try again.")


@cli.command()
@click.argument("point_id")
def delete(point_id: str) -> None:
    """Delete a point."""
    app = _open_board()
    presenter = app.board.point_presenter(point_id)
    if presenter is None:
        raise click.ClickException(f"Point {point_id} not found")
    ok = presenter.delete()
    click.echo(app.screen())
    if not ok:
        raise click.ClickException("Failed to delete point. Please try again.")


@cli.command()
@_point_options
def add(point_type, destination, date_from, date_to, price, offers) -> None:
    """Create a new point."""
    app = _open_board()
    if not app.board.create_point():
        raise click.ClickException("Can't create a point right now")
    form = app.board.new_point_presenter.form
    _fill_form(form, point_type, destination, date_from, date_to, price, offers)
    ok = form.submit()
    click.echo(app.screen())
    if not ok:
        raise click.ClickException("Failed to add point. Please try again.")


@cli.command()
@click.argument("point_id")
@_point_options
def edit(point_id, point_type, destination, date_from, date_to, price, offers) -> None:
    """Change an existing point."""
    app = _open_board()
    presenter = app.board.point_presenter(point_id)
    if presenter is None:
        raise click.ClickException(f"Point {point_id} not found")
    if not presenter.start_edit():
        raise click.ClickException(f"Point {point_id} can't be edited right now")
    _fill_form(presenter.form, point_type, destination, date_from, date_to, price, offers)
    ok = presenter.form.submit()
    click.echo(app.screen())
    if not ok:
        raise click.ClickException("Failed to update point. Please try again.")


if __name__ == "__main__":
    cli()
