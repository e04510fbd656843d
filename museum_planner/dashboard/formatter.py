"""
Rich formatter module for the Museum Curator Planner dashboard.

Handles all Rich-based CLI formatting: priority cards, the daily energy-slot
schedule, budget and weekly analytics. Also provides the urgency label and
colour helpers the web dashboard uses.
"""

import math
from typing import Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from museum_planner.core.models import Task
from museum_planner.dashboard.aggregator import (
    AnalyticsSummary,
    BudgetSummary,
    budget_usage_percentage,
)
from museum_planner.dashboard.prioritizer import UrgencyResult
from museum_planner.dashboard.scheduler import DailySchedule, ScheduleSlot, TimeSuggestion


# Status icons for tasks
STATUS_ICONS = {
    "pending": "[dim]○[/dim]",
    "in_progress": "[yellow]◐[/yellow]",
    "paused": "[blue]◎[/blue]",
    "completed": "[green]✓[/green]",
    "cancelled": "[red]✗[/red]",
}

ENERGY_STYLES = {
    "high": "red bold",
    "medium": "yellow",
    "low": "dim",
}

# (threshold, icon, rich style, web colours)
URGENCY_TIERS = [
    (8, "🚨", "red bold", {
        "bg": "rgba(239, 68, 68, 0.1)", "border": "#ef4444", "text": "#fca5a5",
    }),
    (6, "⚠️", "yellow", {
        "bg": "rgba(251, 146, 60, 0.1)", "border": "#fb923c", "text": "#fdba74",
    }),
    (4, "📌", "magenta", {
        "bg": "rgba(168, 85, 247, 0.1)", "border": "#a855f7", "text": "#c084fc",
    }),
    (float("-inf"), "📋", "dim", {
        "bg": "rgba(148, 163, 184, 0.1)", "border": "#94a3b8", "text": "#cbd5e1",
    }),
]


def _tier(score: float):
    for tier in URGENCY_TIERS:
        if score >= tier[0]:
            return tier
    return URGENCY_TIERS[-1]


def format_urgency_score(score: float) -> str:
    """Urgency as tier icon plus percent of the 10-point scale, e.g. '🚨 92%'."""
    percentage = int(math.floor(score * 10 + 0.5))
    return f"{_tier(score)[1]} {percentage}%"


def get_priority_color(score: float) -> Dict[str, str]:
    """Background, border and text colours for a priority card."""
    return dict(_tier(score)[3])


def format_krw(amount: int) -> str:
    """Format an amount in Korean won, e.g. '1,500,000원'."""
    return f"{amount:,}원"


class DashboardFormatter:
    """
    Rich-based formatter for the curator dashboard.

    Creates terminal output using Rich panels, tables, and styling.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize formatter.

        Args:
            console: Rich Console instance (creates default if not provided)
        """
        self.console = console or Console()

    def _format_hours(self, hours: Optional[float]) -> str:
        if not hours:
            return "[dim]---[/dim]"
        if hours < 1:
            return f"{int(round(hours * 60))}m"
        if float(hours).is_integer():
            return f"{int(hours)}h"
        return f"{hours:.1f}h"

    def _truncate(self, title: str, width: int) -> str:
        return title[:width] + "..." if len(title) > width else title

    def format_top_priorities(self, priorities: List[UrgencyResult]) -> Panel:
        """
        Create panel with the priority cards.

        Args:
            priorities: Ranked urgency results

        Returns:
            Rich Panel with one row per task
        """
        if not priorities:
            return Panel(
                Text("No active tasks", style="dim", justify="center"),
                title="[bold]Top Priorities[/bold]",
                border_style="green",
                padding=(0, 1),
            )

        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("#", width=2)
        table.add_column("ID", width=4)
        table.add_column("Title", ratio=1)
        table.add_column("Urgency", width=8, justify="right")
        table.add_column("Due", width=10, justify="right")

        for i, result in enumerate(priorities, 1):
            task = result.task
            style = _tier(result.urgency_score)[2]
            due = task.due_date.isoformat()[:10] if task.due_date else "---"
            table.add_row(
                f"[bold]{i}.[/bold]",
                f"[dim]#{task.id}[/dim]",
                f"{self._truncate(task.title, 40)}\n[dim]{result.recommendation}[/dim]",
                f"[{style}]{format_urgency_score(result.urgency_score)}[/{style}]",
                f"[dim]{due}[/dim]",
            )

        return Panel(
            table,
            title="[bold]Top Priorities[/bold]",
            border_style="green",
            padding=(0, 1),
        )

    def format_slot(self, name: str, slot: ScheduleSlot) -> Table:
        """Rows for one schedule slot."""
        style = ENERGY_STYLES.get(slot.energy, "white")
        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("Icon", width=2)
        table.add_column("Title", ratio=1)
        table.add_column("Est", width=6, justify="right")

        table.add_row(
            "",
            f"[{style}]{name.capitalize()} {slot.time}[/{style}] [dim]({slot.energy} energy)[/dim]",
            f"[dim]{self._format_hours(slot.total_hours)}[/dim]",
        )
        if not slot.tasks:
            table.add_row("", "[dim]Nothing scheduled[/dim]", "")
        for task in slot.tasks:
            table.add_row(
                STATUS_ICONS.get(task.status, "○"),
                self._truncate(task.title, 45),
                self._format_hours(task.estimated_hours),
            )
        return table

    def format_schedule(self, schedule: DailySchedule) -> Panel:
        """
        Create panel with the three energy slots.

        Args:
            schedule: Daily schedule

        Returns:
            Rich Panel with slots, deferred tasks and the recommendation
        """
        grid = Table.grid(expand=True)
        grid.add_column()
        for name in ("morning", "afternoon", "evening"):
            grid.add_row(self.format_slot(name, getattr(schedule, name)))
            grid.add_row("")

        if schedule.deferred:
            deferred = ", ".join(f"#{task.id}" for task in schedule.deferred)
            grid.add_row(f"[dim]Deferred: {deferred}[/dim]")

        grid.add_row(
            f"Total [bold]{self._format_hours(schedule.total_estimated_hours)}[/bold]"
        )
        grid.add_row(schedule.ai_recommendation)

        return Panel(
            grid,
            title=f"[bold]Schedule {schedule.date}[/bold]",
            border_style="cyan",
            padding=(0, 1),
        )

    def format_suggestion(self, task: Task, suggestion: TimeSuggestion) -> Panel:
        content = Text()
        content.append(f"{suggestion.recommended_time}\n", style="bold")
        content.append(suggestion.reason, style="dim")
        return Panel(
            content,
            title=f"[bold]#{task.id} {self._truncate(task.title, 40)}[/bold]",
            border_style="blue",
            padding=(0, 2),
        )

    def format_budget(self, budget: BudgetSummary) -> Panel:
        """
        Create panel with budget totals per category.

        Args:
            budget: Budget summary

        Returns:
            Rich Panel with allocation table and usage line
        """
        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("Category", ratio=1)
        table.add_column("Amount", justify="right")

        for category, amount in budget.by_category.items():
            if amount:
                table.add_row(category.capitalize(), format_krw(amount))

        usage = budget_usage_percentage(budget.spent, budget.total)
        usage_style = "red bold" if budget.at_risk else "green"
        table.add_row("[dim]" + "─" * 20 + "[/dim]", "")
        table.add_row("Total", format_krw(budget.total))
        table.add_row("Spent", f"[{usage_style}]{format_krw(budget.spent)} ({usage}%)[/{usage_style}]")
        table.add_row("Remaining", format_krw(budget.remaining))

        return Panel(
            table,
            title="[bold]Budget[/bold]",
            border_style="magenta",
            padding=(0, 1),
        )

    def format_analytics_bar(self, analytics: AnalyticsSummary) -> str:
        """
        Create bottom weekly stats bar.

        Args:
            analytics: Weekly analytics

        Returns:
            Formatted stats string
        """
        parts = [
            f"[green]✓ {analytics.completed_this_week} done this week[/green]",
            f"[white]{analytics.hours_this_week:.1f}h logged[/white]",
        ]
        if analytics.top_category:
            parts.append(f"[dim]mostly {analytics.top_category}[/dim]")
        return " │ ".join(parts)

    def format_task_table(self, tasks: List[Task]) -> Table:
        """Plain task listing for the tasks command."""
        table = Table(title="Tasks", expand=True)
        table.add_column("ID", justify="right", style="dim")
        table.add_column("", width=2)
        table.add_column("Title", ratio=1)
        table.add_column("Category")
        table.add_column("P", justify="right")
        table.add_column("Est", justify="right")
        table.add_column("Due")

        for task in tasks:
            table.add_row(
                str(task.id),
                STATUS_ICONS.get(task.status, "○"),
                self._truncate(task.title, 50),
                task.category,
                str(task.priority),
                self._format_hours(task.estimated_hours),
                task.due_date.isoformat()[:10] if task.due_date else "---",
            )
        return table

    def render_today(self, data: Dict) -> None:
        """
        Render the complete Today view to console.

        Args:
            data: Result of DashboardAggregator.today()
        """
        self.console.print(self.format_top_priorities(data["top_priorities"]))
        self.console.print()
        self.console.print(self.format_schedule(data["schedule"]))
        self.console.print()
        self.console.print(self.format_budget(data["budget"]))
        self.console.print()

        self.console.print("─" * 60)
        self.console.print(self.format_analytics_bar(data["analytics"]), justify="center")
        self.console.print("─" * 60)
