#!/usr/bin/env python3
"""
Museum Curator Planner - Command Line Interface
Task priorities, the daily energy-slot schedule and budget from the terminal
"""

import os
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.panel import Panel
from typing import Any, Dict, Optional

from museum_planner.core import Config, Database, Task, TASK_CATEGORIES, initialize_database
from museum_planner.core.database import get_database
from museum_planner.dashboard import DashboardAggregator, DashboardFormatter
from museum_planner.agents import TaskAgent, AgentResponse

# Initialize CLI app and console
app = typer.Typer(help="Museum Curator Planner - priorities and schedule for curators")

console = Console()
formatter = DashboardFormatter(console)

# Lazy-loaded services (the database may not exist before init-db)
_config: Optional[Config] = None
_db: Optional[Database] = None


def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_db() -> Database:
    """
    Open the database on first use.

    Exits with a hint when the database file has not been created yet.
    """
    global _db
    if _db is None:
        try:
            _db = get_database(get_config())
        except FileNotFoundError as e:
            console.print(f"[red]{e}[/red]")
            console.print("[dim]Or run 'planner.py init-db --seed'.[/dim]")
            raise typer.Exit(1)
    return _db


def get_aggregator() -> DashboardAggregator:
    return DashboardAggregator(get_db(), get_config())


def format_agent_response(response: AgentResponse) -> None:
    """
    Display an AgentResponse: status line, task panel, suggestions.

    Args:
        response: The AgentResponse to display
    """
    if response.success:
        console.print(f"[green]✓[/green] {response.message}")
    else:
        console.print(f"[red]✗[/red] {response.message}")

    task = (response.data or {}).get("task")
    if task:
        console.print()
        console.print(Panel(
            _format_single_task(task),
            title=f"Task #{task.get('id', 'N/A')}",
            border_style="cyan"
        ))

    if response.suggestions:
        console.print()
        console.print("[dim]Suggestions:[/dim]")
        for suggestion in response.suggestions:
            console.print(f"  [dim]•[/dim] {suggestion}")


def _format_single_task(task: Dict[str, Any]) -> str:
    lines = [f"[bold]{task.get('title', '')}[/bold]"]
    lines.append(f"Category: {task.get('category')}  •  Priority: P{task.get('priority', 3)}")
    if task.get("estimated_hours"):
        lines.append(f"Estimate: {task['estimated_hours']}h")
    if task.get("due_date"):
        lines.append(f"Due: {task['due_date']}")
    lines.append(f"Status: {task.get('status')}")
    return "\n".join(lines)


@app.command("init-db")
def init_db(
    seed: bool = typer.Option(False, "--seed/--no-seed", help="Insert sample projects and tasks"),
    force: bool = typer.Option(False, "--force", help="Replace an existing database"),
):
    """
    Create the SQLite database

    Examples:
      planner init-db --seed
      planner init-db --force
    """
    env_path = os.environ.get("MUSEUM_PLANNER_DB")
    db_path = Path(env_path) if env_path else get_config().get_database_path()

    if db_path.exists():
        if not force:
            console.print(f"[yellow]Database already exists at {db_path}. Use --force to replace it.[/yellow]")
            raise typer.Exit(1)
        db_path.unlink()

    tables = initialize_database(db_path, seed=seed)
    console.print(f"[green]✓[/green] Database created at {db_path}")
    console.print(f"[dim]Tables: {', '.join(tables)}[/dim]")


@app.command()
def today():
    """
    Show the Today view: priorities, schedule, budget and weekly stats

    Example:
      planner today
    """
    try:
        data = get_aggregator().today()
        formatter.render_today(data)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error building dashboard: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def top():
    """Show the top priority tasks with urgency breakdowns"""
    aggregator = get_aggregator()
    console.print(formatter.format_top_priorities(
        aggregator.top_priorities()
    ))


@app.command()
def schedule():
    """Show today's morning/afternoon/evening schedule"""
    aggregator = get_aggregator()
    console.print(formatter.format_schedule(
        aggregator.daily_schedule()
    ))


@app.command()
def suggest(
    task_id: int = typer.Argument(..., help="Task ID"),
    hour: Optional[int] = typer.Option(None, "--hour", min=0, max=23, help="Hour of day (defaults to now)"),
):
    """
    Suggest when to work on a task

    Examples:
      planner suggest 3
      planner suggest 3 --hour 10
    """
    aggregator = get_aggregator()
    task = aggregator.find_task(task_id)
    if task is None:
        console.print(f"[red]Task {task_id} not found[/red]")
        raise typer.Exit(1)

    suggestion = aggregator.planner.suggest_task_time(task, hour)
    console.print(formatter.format_suggestion(task, suggestion))


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    category: str = typer.Option(..., "--category", "-c", help=f"One of: {', '.join(TASK_CATEGORIES)}"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (e.g. 2025-12-04, 'Dec 4')"),
    priority: Optional[int] = typer.Option(None, "--priority", "-p", help="Priority (1-5, 5 is highest)"),
    hours: Optional[float] = typer.Option(None, "--hours", "-e", help="Estimated hours"),
    project_id: Optional[int] = typer.Option(None, "--project", help="Project ID"),
):
    """
    Add a new task

    Examples:
      planner add "Write exhibition labels" -c exhibition --due 2025-12-04 -e 2
      planner add "Order frames" -c collection -p 4
    """
    context = {
        "title": title,
        "category": category,
        "due_date": due,
        "priority": priority,
        "estimated_hours": hours,
        "project_id": project_id,
    }
    context = {k: v for k, v in context.items() if v is not None}

    response = TaskAgent(get_db(), get_config()).process("add_task", context)
    format_agent_response(response)
    if not response.success:
        raise typer.Exit(1)


@app.command()
def complete(
    task_id: int = typer.Argument(..., help="Task ID to mark as completed"),
    hours: Optional[float] = typer.Option(None, "--hours", help="Actual hours spent"),
):
    """Mark a task as completed"""
    context: Dict[str, Any] = {"task_id": task_id}
    if hours is not None:
        context["actual_hours"] = hours

    response = TaskAgent(get_db(), get_config()).process("complete_task", context)
    format_agent_response(response)
    if not response.success:
        raise typer.Exit(1)


@app.command()
def tasks(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Filter by category"),
    project_id: Optional[int] = typer.Option(None, "--project", help="Filter by project ID"),
):
    """List tasks by priority then due date"""
    context = {"status": status, "category": category, "project_id": project_id}
    context = {k: v for k, v in context.items() if v is not None}

    response = TaskAgent(get_db(), get_config()).process("list_tasks", context)
    if not response.success:
        format_agent_response(response)
        raise typer.Exit(1)

    rows = response.data["tasks"]
    if not rows:
        console.print("[dim]No tasks found[/dim]")
        return
    console.print(formatter.format_task_table([Task.from_dict(row) for row in rows]))


@app.command()
def budget():
    """Show the budget summary by category"""
    console.print(formatter.format_budget(get_aggregator().budget_summary()))


if __name__ == "__main__":
    app()
