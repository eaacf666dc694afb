"""Retain CLI — inspect and grade a JSON-backed review deck."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from retain.application.config import AppConfig, resolve_config
from retain.application.factory import build_review_service, get_repository
from retain.application.review_service import ReviewService
from retain.domain.errors import RetainError
from retain.domain.models import DifficultyTier, Quality, ReviewState
from retain.domain.timeutils import days_until, to_iso
from retain.infrastructure.adapters.json_store import JsonReviewStateRepository

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="retain: spaced-repetition scheduler for your review deck.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage retain configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    store: Annotated[
        Path | None, typer.Option("--store", help="Deck file. Defaults to 'store_path' in config.")
    ] = None,
    policy: Annotated[
        str | None, typer.Option(help="Scheduling policy: sm2, leitner, sm2+leitner.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for retain."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"store_path": store, "policy": policy, "verbose": verbose}

    if verbose > 1:
        logging.getLogger("retain").setLevel(logging.DEBUG)


def _config(ctx: typer.Context) -> AppConfig:
    overrides = (ctx.obj or {}).get("overrides", {})
    try:
        return resolve_config(overrides)
    except ValueError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _service(ctx: typer.Context) -> tuple[ReviewService, AppConfig]:
    config = _config(ctx)
    try:
        return build_review_service(config), config
    except RetainError as e:
        _fail(e)


def _fail(error: Exception):
    typer.secho(f"Error: {error}", fg="red", err=True)
    raise typer.Exit(1)


def _state_dict(state: ReviewState, now: int) -> dict[str, Any]:
    return {
        "id": state.item_id,
        "difficulty": state.difficulty.value,
        "ease_factor": round(state.ease_factor, 4),
        "review_count": state.review_count,
        "mastery_level": state.mastery_level,
        "next_review_at": to_iso(state.next_review_at),
        "days_until_due": days_until(state.next_review_at, now),
        "last_review_at": to_iso(state.last_review_at) if state.last_review_at else None,
        "leitner_box": state.leitner_box,
        "hard_box_attempts": state.hard_box_attempts,
        "force_review_at": to_iso(state.force_review_at) if state.force_review_at else None,
    }


def _state_line(state: ReviewState) -> str:
    forced = f"  forced {to_iso(state.force_review_at)}" if state.force_review_at else ""
    return (
        f"  {state.item_id:<24} {state.difficulty.value:<6} "
        f"mastery {state.mastery_level:>3.1f}  reviews {state.review_count:>2}  "
        f"next {to_iso(state.next_review_at)}{forced}"
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Identifier of the item to learn.")],
    difficulty: Annotated[
        DifficultyTier, typer.Option(help="Content difficulty tier.")
    ] = DifficultyTier.MEDIUM,
):
    """[bold green]Add[/bold green] an item to the deck, due immediately."""
    service, _ = _service(ctx)
    try:
        state = service.add_item(item_id, difficulty)
    except RetainError as e:
        _fail(e)
    typer.echo(f"{state.item_id}: {state.difficulty.value}, due {to_iso(state.next_review_at)}")


@app.command()
def grade(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Item that was reviewed.")],
    quality: Annotated[Quality, typer.Argument(help="Recall quality.")],
):
    """Record a response and reschedule the item."""
    service, config = _service(ctx)
    try:
        state = service.grade(item_id, quality)
    except RetainError as e:
        _fail(e)

    typer.echo(
        f"{state.item_id}: next review {to_iso(state.next_review_at)} "
        f"(ease {state.ease_factor:.2f}, mastery {state.mastery_level:.1f}, "
        f"box {state.leitner_box}, policy {config.policy})"
    )
    if state.force_review_at:
        typer.secho(f"Forced review at {to_iso(state.force_review_at)}", fg="yellow")


@app.command()
def due(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List items due now, forced reviews first."""
    service, _ = _service(ctx)
    try:
        items = service.due()
    except RetainError as e:
        _fail(e)
    now = service.now()

    if json_output:
        typer.echo(json.dumps([_state_dict(s, now) for s in items], indent=2))
        return

    if not items:
        typer.secho("Nothing due.", fg="green")
        return
    typer.echo(f"Due: {len(items)}")
    for state in items:
        typer.echo(_state_line(state))


@app.command()
def recommend(
    ctx: typer.Context,
    limit: Annotated[
        int | None, typer.Option(help="Maximum items. Defaults to 'recommend_limit'.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Rank due items by priority for a bounded review session."""
    service, config = _service(ctx)
    max_count = config.recommend_limit if limit is None else limit
    try:
        scored = service.recommend(max_count)
    except RetainError as e:
        _fail(e)
    now = service.now()

    if json_output:
        typer.echo(
            json.dumps(
                [{**_state_dict(x.state, now), "score": x.score} for x in scored],
                indent=2,
            )
        )
        return

    if not scored:
        typer.secho("Nothing due.", fg="green")
        return
    for x in scored:
        typer.echo(f"{x.score:>7.1f} {_state_line(x.state)}")


@app.command()
def plan(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show the deck bucketed by when items come due."""
    service, _ = _service(ctx)
    try:
        review_plan = service.plan()
    except RetainError as e:
        _fail(e)
    now = service.now()

    buckets = {
        "due_now": review_plan.due_now,
        "this_week": review_plan.this_week,
        "this_month": review_plan.this_month,
        "later": review_plan.later,
    }

    if json_output:
        typer.echo(
            json.dumps(
                {name: [_state_dict(s, now) for s in states] for name, states in buckets.items()},
                indent=2,
            )
        )
        return

    for name, states in buckets.items():
        typer.secho(f"{name.replace('_', ' ').title()}: {len(states)}", bold=True)
        for state in states:
            typer.echo(_state_line(state))


@app.command()
def progress(
    ctx: typer.Context,
    goal: Annotated[
        int | None, typer.Option(help="Items to learn per day. Defaults to 'daily_goal'.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show today's activity, mastery progress, accuracy and a time-to-mastery estimate."""
    service, config = _service(ctx)
    daily_goal = config.daily_goal if goal is None else goal
    try:
        today = service.today(daily_goal)
        prediction = service.predict()
        distribution = service.distribution()
    except RetainError as e:
        _fail(e)
    efficiency = service.efficiency()

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "today": {
                        "date": today.day.isoformat(),
                        "added": today.added,
                        "learned": today.learned,
                        "reviewed": today.reviewed,
                        "pending_review": today.pending_review,
                        "daily_goal": today.daily_goal,
                        "goal_percent": today.goal_percent,
                    },
                    "prediction": {
                        "total_words": prediction.total_words,
                        "learned_words": prediction.learned_words,
                        "mastered_words": prediction.mastered_words,
                        "progress_percentage": prediction.progress_percentage,
                        "avg_review_count": round(prediction.avg_review_count, 1),
                        "daily_learning_rate": round(prediction.daily_learning_rate, 1),
                        "estimated_days_to_master": prediction.estimated_days_to_master,
                    },
                    "distribution": {
                        "not_started": distribution.not_started,
                        "learning": distribution.learning,
                        "mastered": distribution.mastered,
                    },
                    "efficiency": {
                        "accuracy_percent": efficiency.accuracy_percent,
                        "total_reviews": efficiency.total_reviews,
                        "correct_reviews": efficiency.correct_reviews,
                        "consecutive_correct": efficiency.consecutive_correct,
                        "consecutive_incorrect": efficiency.consecutive_incorrect,
                        "learning_streak": efficiency.learning_streak,
                        "last_review_date": (
                            efficiency.last_review_date.isoformat()
                            if efficiency.last_review_date
                            else None
                        ),
                    },
                },
                indent=2,
            )
        )
        return

    if prediction.is_unbounded:
        eta = "unbounded (nothing learned yet)"
    else:
        eta = f"{prediction.estimated_days_to_master:.1f} days"

    typer.secho(
        f"Today: learned {today.learned}/{today.daily_goal} ({today.goal_percent}%)"
        f"  Reviewed: {today.reviewed}  Added: {today.added}  Pending: {today.pending_review}",
        fg="green" if today.goal_met else None,
        bold=True,
    )
    typer.echo(
        f"Items: {prediction.total_words}  Learned: {prediction.learned_words}"
        f"  Mastered: {prediction.mastered_words} ({prediction.progress_percentage}%)"
    )
    typer.echo(
        f"Not started: {distribution.not_started}  Learning: {distribution.learning}"
        f"  Mastered: {distribution.mastered}"
    )
    typer.echo(
        f"Accuracy: {efficiency.accuracy_percent}% of {efficiency.total_reviews} reviews"
        f"  Streak: {efficiency.learning_streak} days"
    )
    typer.echo(
        f"Avg reviews: {prediction.avg_review_count:.1f}"
        f"  Rate: {prediction.daily_learning_rate:.1f}/day  To mastery: {eta}"
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


@config_app.command("path")
def config_path(ctx: typer.Context):
    """Print the deck file the current configuration points at."""
    config = _config(ctx)
    repo = get_repository(config)
    if isinstance(repo, JsonReviewStateRepository):
        typer.echo(str(repo.path))
    else:
        typer.secho("In-memory backend: nothing is persisted.", fg="yellow")
