"""CLI for the meal plan generation pipeline.

Developer CLI to exercise the same pipeline production callers use:
- repair: run the offline recovery pipeline on a saved model response
- prompt: print the bounded prompt a request would send
- generate: call the configured model and recover a plan from its answer
"""

import asyncio
import sys
from datetime import UTC, date, datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Direct execution (python cli/cli.py) needs the project root on sys.path
# before mealgen can be imported
if __package__ in (None, ""):
    _project_root = Path(__file__).parent.parent
    if str(_project_root) not in sys.path:
        sys.path.insert(0, str(_project_root))

from mealgen.config.settings import settings
from mealgen.core.logger import setup_logger
from mealgen.planning.generate import MealPlanGenerator, PlanResult, assemble_plan
from mealgen.planning.llm.prompts import build_meal_plan_prompt
from mealgen.planning.output.document import dump_plan
from mealgen.planning.schema.plan_request import PlanRequest
from mealgen.services.llm.client import PydanticAIModelClient

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="mealgen-cli",
    help="Meal plan generation CLI - prompt, generate and repair model output",
    add_completion=False,
)


def _setup_logging(debug: bool = False) -> None:
    """Set up logging with console and file output.

    Args:
        debug: Enable debug logging level
    """
    log_level = "DEBUG" if debug else settings.log_level

    if settings.log_file:
        log_file = settings.log_file
    else:
        timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
        log_file = str(Path("logs") / f"cli_{timestamp}.log")

    setup_logger(level=log_level, log_file=log_file)


def _build_request(
    days: int,
    calories: int | None,
    diet: str | None,
    restrictions: list[str] | None,
    prompt: str,
    start: str | None,
) -> PlanRequest:
    return PlanRequest(
        prompt_text=prompt,
        requested_duration_days=days,
        target_calories_per_day=calories,
        diet_style=diet,
        restrictions=frozenset(restrictions or []),
        start_date=date.fromisoformat(start) if start else date.today(),
    )


def _print_result(result: PlanResult, output_file: Path | None) -> None:
    """Render a PlanResult and exit non-zero on failure."""
    if not result.ok:
        error = result.error
        console.print(
            Panel(
                Text(f"{error.code}", style="bold red"),
                subtitle=f"{'; '.join(error.details)} (suggested action: {error.user_action})",
                border_style="red",
            )
        )
        raise typer.Exit(1)

    plan = result.unwrap()
    table = Table(title=f"{plan.name}{' (approximate)' if plan.is_approximate else ''}")
    table.add_column("Day", justify="right")
    table.add_column("Date")
    table.add_column("Breakfast")
    table.add_column("Lunch")
    table.add_column("Dinner")
    table.add_column("kcal", justify="right")
    for day in plan.days:
        table.add_row(
            str(day.day_number),
            day.calendar_date.isoformat(),
            day.breakfast.name,
            day.lunch.name,
            day.dinner.name,
            f"{day.totals.calories:.0f}",
        )
    console.print(table)
    goals = plan.nutritional_goals
    console.print(
        f"Daily target: {goals.daily_calories:.0f} kcal "
        f"(protein {goals.protein_percentage}%, carbs {goals.carb_percentage}%, fat {goals.fat_percentage}%)"
    )

    document = dump_plan(plan)
    if output_file:
        output_file.write_text(document, encoding="utf-8")
        console.print(f"[green]Plan written to {output_file}[/green]")
    else:
        console.print(JSON(document))


@app.command()
def prompt(
    days: int = typer.Option(3, "--days", "-d", min=1, help="Requested plan length in days"),
    calories: int | None = typer.Option(None, "--calories", "-c", min=1, help="Daily calorie target"),
    diet: str | None = typer.Option(None, "--diet", help="Diet style (e.g. mediterranean)"),
    restriction: list[str] | None = typer.Option(None, "--restriction", "-r", help="Dietary restriction (repeatable)"),
    brief: str = typer.Option("", "--prompt", "-p", help="Free-text brief"),
) -> None:
    """Print the bounded prompt a request would send to the model."""
    request = _build_request(days, calories, diet, restriction, brief, None)
    console.print(build_meal_plan_prompt(request), markup=False, highlight=False)


@app.command()
def repair(
    response_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File holding raw model output"),
    days: int = typer.Option(3, "--days", "-d", min=1, help="Requested plan length in days"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD), defaults to today"),
    output_file: Path | None = typer.Option(None, "--output", "-o", help="Write the plan JSON to this file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Recover a plan from a saved model response, without calling the model."""
    _setup_logging(debug)
    raw_text = response_file.read_text(encoding="utf-8")
    request = _build_request(days, None, None, None, "", start)
    _print_result(assemble_plan(raw_text, request), output_file)


@app.command()
def generate(
    days: int = typer.Option(3, "--days", "-d", min=1, help="Requested plan length in days"),
    calories: int | None = typer.Option(None, "--calories", "-c", min=1, help="Daily calorie target"),
    diet: str | None = typer.Option(None, "--diet", help="Diet style (e.g. mediterranean)"),
    restriction: list[str] | None = typer.Option(None, "--restriction", "-r", help="Dietary restriction (repeatable)"),
    brief: str = typer.Option("", "--prompt", "-p", help="Free-text brief"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD), defaults to today"),
    output_file: Path | None = typer.Option(None, "--output", "-o", help="Write the plan JSON to this file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate a plan with the configured model."""
    _setup_logging(debug)
    request = _build_request(days, calories, diet, restriction, brief, start)
    generator = MealPlanGenerator(PydanticAIModelClient())
    console.print(f"[dim]Calling {settings.llm_provider}:{settings.llm_model}...[/dim]")
    result = asyncio.run(generator.generate(request))
    _print_result(result, output_file)


if __name__ == "__main__":
    app()
