import math

from rich.console import Group
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sb.types import RenderSummary

HEADER = "Press [q] to quit"

def format_mutation_rate(mutation_rate: float) -> str:
    """whole percent, rounded down: 0.015 -> '1%'."""
    return f"{math.floor(mutation_rate * 100)}%"

def stats_table(summary: RenderSummary) -> Table:
    table = Table.grid(padding=(0, 2))
    table.add_column(min_width=20)
    table.add_column(min_width=10)
    table.add_row("total generations:", str(summary.generation))
    table.add_row("average fitness:", f"{summary.average_fitness:.4f}")
    table.add_row("total population:", str(summary.population_size))
    table.add_row("mutation rate:", format_mutation_rate(summary.mutation_rate))
    return table

def top_table(summary: RenderSummary) -> Table:
    table = Table(show_header=False, min_width=30)
    table.add_column()
    for individual in summary.top_k:
        # Text keeps markup-like characters such as '[' literal
        table.add_row(Text(individual))
    return table

def render(summary: RenderSummary) -> Group:
    """ Lays out one frame: the quit hint, the current top phrase, run statistics and the top individuals."""
    return Group(
        Text(HEADER),
        Panel(Text(summary.best_individual), title="Current top phrase", title_align='left', padding=(1, 2)),
        Padding(stats_table(summary), (1, 2)),
        top_table(summary),
    )
