"""
Terminal summary of betting performance using Rich.

Renders the stats payload as an overview panel plus per-sport and per-bet
type tables.
"""
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from bet_tracker.database.schemas import GroupStats, StatsResponse


def _money(value: float) -> str:
    style = "green" if value >= 0 else "red"
    return f"[{style}]${value:,.2f}[/{style}]"


def _pct(value: float) -> str:
    style = "green" if value >= 0 else "red"
    return f"[{style}]{value:+.2f}%[/{style}]"


def _render_overview(stats: StatsResponse, title: str, balance: Optional[float]) -> Panel:
    o = stats.overview
    lines = []

    if balance is not None:
        lines.append(f"[bold]Balance:[/bold] {_money(balance)}")
    lines.append(
        f"[bold]Picks:[/bold] {o.total_picks} "
        f"({o.won_picks}W-{o.lost_picks}L-{o.push_picks}P, {o.pending_picks} pending)"
    )
    lines.append(f"[bold]Win rate:[/bold] {o.win_rate:.2f}%")
    lines.append(f"[bold]Staked:[/bold] ${o.total_staked:,.2f}")
    lines.append(f"[bold]Net profit:[/bold] {_money(o.net_profit)}")
    lines.append(f"[bold]ROI:[/bold] {_pct(o.roi)}")

    p = stats.parlay_stats
    if p.total_parlays:
        lines.append("")
        lines.append("[dim]─── Parlays ───[/dim]")
        lines.append(f"{p.total_parlays} parlays ({p.won}W-{p.lost}L, {p.pending} pending)")
        lines.append(f"Net profit: {_money(p.net_profit)}  ROI: {_pct(p.roi)}")

    return Panel(
        Text.from_markup("\n".join(lines)),
        title=title,
        border_style="blue",
    )


def _render_group_table(title: str, label: str, rows: list[GroupStats]) -> Table:
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
        expand=True,
    )

    table.add_column(label, style="white", no_wrap=True)
    table.add_column("Picks", justify="right")
    table.add_column("W-L", justify="center")
    table.add_column("Win %", justify="right")
    table.add_column("Staked", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("ROI", justify="right")

    for row in rows:
        key = row.sport if row.sport is not None else row.bet_type
        if not row.total_picks:
            table.add_row(f"[dim]{key.value}[/dim]", "0", "", "", "", "", "")
            continue
        table.add_row(
            key.value,
            str(row.total_picks),
            f"{row.won}-{row.lost}",
            f"{row.win_rate:.1f}%",
            f"${row.staked:,.2f}",
            _money(row.net_profit),
            _pct(row.roi),
        )

    return table


def render_summary(
    stats: StatsResponse, title: str = "Performance", balance: Optional[float] = None
) -> Group:
    return Group(
        _render_overview(stats, title, balance),
        _render_group_table("By Sport", "Sport", stats.sport_stats),
        _render_group_table("By Bet Type", "Bet Type", stats.bet_type_stats),
    )


def print_summary(
    stats: StatsResponse,
    title: str = "Performance",
    balance: Optional[float] = None,
    console: Optional[Console] = None,
) -> None:
    """Print the summary to the terminal."""
    (console or Console()).print(render_summary(stats, title, balance))
