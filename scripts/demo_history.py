# ABOUTME: Provides a CLI that generates synthetic learning histories for demos and seeding.
# ABOUTME: Writes per-collection artifacts and prints a summary of what was produced.

import random
from pathlib import Path
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from src.learning_history.catalog import InMemoryCatalog, LearnerNotFoundError
from src.learning_history.cohort import generate_cohort
from src.learning_history.config import EXPORT_FORMATS, load_cohort_config
from src.learning_history.export import summarize_history, write_history
from src.learning_history.generator import generate_learning_history
from src.learning_history.logging_config import configure_logging
from src.learning_history.profiles import PROFILE_SETTINGS, PROFILE_TYPES, build_profile
from src.learning_history.schemas import LearningHistory

console = Console()
app = typer.Typer(help="Generate synthetic learning histories from learner profiles.")

SUMMARY_COLUMNS = (
    "study_plans",
    "activities",
    "progress_records",
    "content_interactions",
    "resource_usage",
    "help_requests",
    "achievements",
)


def _summary_table(histories: Dict[str, LearningHistory]) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Learner")
    for column in SUMMARY_COLUMNS:
        table.add_column(column.replace("_", " ").title(), justify="right")
    table.add_column("Mean Score", justify="right")
    table.add_column("Help Ratio", justify="right")
    for learner_id, history in histories.items():
        summary = summarize_history(history)
        table.add_row(
            learner_id,
            *(str(summary[column]) for column in SUMMARY_COLUMNS),
            f"{summary['mean_score']:.1f}",
            f"{summary['help_request_ratio']:.2f}",
        )
    return table


@app.callback()
def main(log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LEARNING_HISTORY_LOG_LEVEL.")) -> None:
    configure_logging(log_level)


@app.command()
def generate(
    learner_id: str = typer.Option(..., "--learner-id", help="Learner identifier known to the catalog."),
    profile: str = typer.Option("balanced", "--profile", help="Profile archetype; see the `profiles` command."),
    months: int = typer.Option(6, "--months", min=1, help="Length of the history window in months."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for repeatable output."),
    catalog_path: Path = typer.Option(Path("configs/catalog_sample.yaml"), "--catalog", help="Catalog YAML path."),
    output_dir: Path = typer.Option(Path("reports/mock_history"), "--output-dir", help="Directory for artifacts."),
    fmt: str = typer.Option("parquet", "--format", help="Artifact format: parquet or json."),
) -> None:
    """
    Generate one learner's history and write it under OUTPUT_DIR/LEARNER_ID.
    """
    if fmt not in EXPORT_FORMATS:
        raise typer.BadParameter(f"Expected one of: {', '.join(EXPORT_FORMATS)}.", param_hint="--format")
    if not catalog_path.exists():
        console.print(f"[red]Missing catalog at {catalog_path}[/red]")
        raise typer.Exit(code=1)

    catalog = InMemoryCatalog.from_yaml(catalog_path)
    rng = random.Random(seed)
    try:
        learner_profile = build_profile(
            learner_id, profile, time_range_months=months, subject_ids=catalog.all_subject_ids(), rng=rng
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--profile") from exc

    try:
        history = generate_learning_history(learner_profile, catalog, rng=rng)
    except LearnerNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    written = write_history(history, output_dir, fmt)
    console.print(_summary_table({learner_id: history}))
    console.print(f"[bold]Wrote {len(written)} files to {written['summary'].parent}[/bold]")


@app.command()
def cohort(
    config: Path = typer.Option(Path("configs/demo_cohort.yaml"), "--config", help="Cohort config YAML."),
) -> None:
    """
    Generate histories for every learner listed in a cohort config.
    """
    try:
        cohort_config = load_cohort_config(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    if not cohort_config.catalog_path.exists():
        console.print(f"[red]Missing catalog at {cohort_config.catalog_path}[/red]")
        raise typer.Exit(code=1)

    catalog = InMemoryCatalog.from_yaml(cohort_config.catalog_path)
    try:
        histories = generate_cohort(catalog, cohort_config)
    except LearnerNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    for history in histories.values():
        write_history(history, cohort_config.output_dir, cohort_config.output_format)
    console.print(_summary_table(histories))
    console.print(f"[bold]Generated {len(histories)} learners into {cohort_config.output_dir}[/bold]")


@app.command()
def profiles() -> None:
    """
    List the available profile archetypes and their settings.
    """
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Profile")
    table.add_column("Overrides")
    for name in PROFILE_TYPES:
        overrides = PROFILE_SETTINGS[name]
        table.add_row(name, ", ".join(f"{k}={v}" for k, v in overrides.items()) or "(defaults)")
    console.print(table)


if __name__ == "__main__":
    app()
