"""Command-line interface for HabitPulse."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .constants.categories import CATEGORY_CHOICES, DEFAULT_CATEGORY, category_icon, category_label
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .services.dates import is_day_key, today_key
from .services.habits import compute_streaks, filter_habits
from .services.reports import export_weekly_png
from .services.stats import compute_stats


def _day_option(ctx, param, value):
    if value is not None and not is_day_key(value):
        raise click.BadParameter("expected a date as YYYY-MM-DD")
    return value


def _match_id(ids: list[str], habit_id: str, missing: str) -> str:
    matches = [candidate for candidate in ids if candidate.startswith(habit_id)]
    if habit_id in matches:
        return habit_id
    if len(set(matches)) == 1:
        return matches[0]
    if not matches:
        raise click.ClickException(missing)
    raise click.ClickException(f"Id prefix {habit_id!r} is ambiguous")


def _resolve_id(app: AppContext, habit_id: str) -> str:
    """Accept a full id or an unambiguous prefix of one."""

    ids = [h.id for h in app.habit_store.get()]
    return _match_id(ids, habit_id, f"No habit matches id {habit_id!r}")


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Track daily habits and review your progress."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = create_app_context(config)


@main.command("add")
@click.argument("name")
@click.option("--description", "-d", default="", help="Optional description")
@click.option(
    "--category",
    "-c",
    type=click.Choice(CATEGORY_CHOICES),
    default=DEFAULT_CATEGORY.value,
    show_default=True,
)
@click.pass_obj
def add_habit(app: AppContext, name: str, description: str, category: str) -> None:
    """Add a new habit."""

    try:
        habit = app.habit_store.add(name, description=description, category=category)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f'Habit added: "{habit.name}" ({habit.id})')


@main.command("list")
@click.option("--search", "-s", default="", help="Match name or description")
@click.option("--category", "-c", default=None, help="Only show this category")
@click.pass_obj
def list_habits(app: AppContext, search: str, category: str | None) -> None:
    """List habits with today's status and current streak."""

    habits = app.habit_store.get()
    if not habits:
        click.echo("No habits yet. Add one with `habitpulse add`.")
        return

    shown = filter_habits(habits, search=search, category=category)
    if not shown:
        click.echo("There are no habits that match the search and/or filtering you applied.")
        return

    today = today_key()
    for habit in shown:
        mark = "x" if habit.is_completed_on(today) else " "
        streak = compute_streaks(habit.completed_dates).current_streak
        click.echo(
            f"[{mark}] {habit.id[:8]}  {habit.name}  "
            f"<{category_icon(habit.category)}> {category_label(habit.category)}  "
            f"streak: {streak}"
        )
        if habit.description:
            click.echo(f"      {habit.description}")


@main.command("toggle")
@click.argument("habit_id")
@click.option("--day", default=None, callback=_day_option, help="Day to toggle (YYYY-MM-DD)")
@click.pass_obj
def toggle_habit(app: AppContext, habit_id: str, day: str | None) -> None:
    """Mark a habit complete (or incomplete) for today."""

    resolved = _resolve_id(app, habit_id)
    completed = app.habit_store.toggle(resolved, day)
    habit = app.habit_store.find(resolved)
    state = "Completed" if completed else "Marked incomplete"
    click.echo(f'{state}: "{habit.name}" on {day or today_key()}')


@main.command("edit")
@click.argument("habit_id")
@click.option("--name", default=None)
@click.option("--description", default=None)
@click.option("--category", type=click.Choice(CATEGORY_CHOICES), default=None)
@click.pass_obj
def edit_habit(
    app: AppContext,
    habit_id: str,
    name: str | None,
    description: str | None,
    category: str | None,
) -> None:
    """Change a habit's name, description or category."""

    resolved = _resolve_id(app, habit_id)
    try:
        habit = app.habit_store.update(
            resolved, name=name, description=description, category=category
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f'Habit updated: "{habit.name}"')


@main.command("delete")
@click.argument("habit_id")
@click.confirmation_option(prompt="Delete this habit and all of its data?")
@click.pass_obj
def delete_habit(app: AppContext, habit_id: str) -> None:
    """Delete a habit (restorable with `undo` for a short while)."""

    habit = app.habit_store.delete(_resolve_id(app, habit_id))
    click.echo(
        f'Habit deleted: "{habit.name}" ({habit.id[:8]}). '
        f"Run `habitpulse undo` within {app.habit_store.undo_window:g}s to restore it."
    )


@main.command("undo")
@click.argument("habit_id", required=False)
@click.pass_obj
def undo_delete(app: AppContext, habit_id: str | None) -> None:
    """Restore the most recently deleted habit, or the one named by id prefix."""

    if habit_id is not None:
        habit_id = _match_id(app.habit_store.pending_ids(), habit_id, "Nothing to undo")
    try:
        habit = app.habit_store.undo_delete(habit_id)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f'Habit restored: "{habit.name}"')


@main.command("stats")
@click.option("--today", default=None, callback=_day_option, help="Reference day (YYYY-MM-DD)")
@click.option("--chart", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def show_stats(app: AppContext, today: str | None, chart: Path | None) -> None:
    """Show today's completion, the past week and the category breakdown."""

    try:
        snapshot = compute_stats(app.habit_store.get(), today)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if snapshot.total_habits == 0:
        click.echo("No habits found. Add a new habit to see statistics!")
    else:
        click.echo(
            f"Today's completion: {snapshot.completed_today} / {snapshot.total_habits} "
            f"({snapshot.completion_rate:.0f}% complete)"
        )
        click.echo(f"Longest streak: {snapshot.longest_streak} days")
        click.echo("Weekly progress:")
        for day in snapshot.weekly:
            click.echo(f"  {day.weekday} {day.day_key}  {day.completed}/{day.total}  {day.rate:.0f}%")
        click.echo("Category breakdown:")
        for group in snapshot.categories:
            click.echo(f"  {group.label}: {group.completed} / {group.total}  {group.rate:.0f}%")

    if chart is not None:
        path = export_weekly_png(snapshot, output_path=chart)
        click.echo(f"Chart written: {path}")


if __name__ == "__main__":  # pragma: no cover
    main()
