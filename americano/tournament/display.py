"""
Display formatting for tournaments.

Provides ASCII rounds, standings, coverage bars and partner matrices for
terminal output.
"""

from typing import Dict, List, Optional, Sequence

from americano.scheduling.coverage import CoverageReport
from americano.scheduling.models import Match, Player
from americano.scheduling.stats import StatsSnapshot
from americano.tournament.standings import PauseCount, Standing


def _short_name(name: str, max_len: int = 14) -> str:
    if len(name) <= max_len:
        return name
    return name[:max_len-2] + ".."


def format_coverage_bar(percent: int, width: int = 10) -> str:
    """Bar such as '######---- 60%'."""
    p = max(0, min(100, percent))
    filled = int(round(p / 100 * width))
    return f"{'#' * filled}{'-' * max(0, width - filled)} {p}%"


def format_coverage(report: CoverageReport) -> str:
    """One-line partner coverage summary."""
    line = (f"Partner coverage: {format_coverage_bar(report.percent)} "
            f"({report.covered_pairs}/{report.total_pairs} pairs")
    if report.complete:
        return line + ", complete)"
    return line + f", {report.missing_pairs} missing)"


def format_match(match: Match, scores: Optional[Sequence[Optional[int]]] = None) -> str:
    """Format a single court line."""
    team_a = f"{match.team_a[0].name} & {match.team_a[1].name}"
    team_b = f"{match.team_b[0].name} & {match.team_b[1].name}"
    if scores is None:
        return f"Court {match.court}: {team_a} vs {team_b}"
    score_a = "-" if scores[0] is None else scores[0]
    score_b = "-" if scores[1] is None else scores[1]
    return f"Court {match.court}: {team_a} ({score_a}) vs {team_b} ({score_b})"


def format_round(
    round_no: int,
    matches: Sequence[Match],
    bench: Sequence[Player] = (),
    scores: Optional[Dict[int, Sequence[Optional[int]]]] = None
) -> str:
    """
    Format one round with its courts and bench.

    Args:
        round_no: 1-based round number
        matches: Matches of the round
        bench: Players sitting out
        scores: Optional court -> (score_a, score_b)

    Returns:
        Formatted string for terminal display
    """
    lines = [f"--- Round {round_no} ---"]
    for m in matches:
        entry = scores.get(m.court) if scores is not None else None
        lines.append(format_match(m, entry))
    if bench:
        names = ", ".join(p.name for p in bench)
        lines.append(f"Bench: {names}")
    return "\n".join(lines)


def format_standings(rows: Sequence[Standing], title: str = "=== STANDINGS ===") -> str:
    """
    Format standings as an ASCII table.

    Args:
        rows: Standings already sorted by rank

    Returns:
        Formatted string for terminal display
    """
    lines = []
    lines.append(title)
    lines.append("")
    lines.append(f"{'Rank':<6}{'Player':<24}{'Points':>8}")
    lines.append("-" * 38)
    for i, row in enumerate(rows, 1):
        lines.append(f"{i:<6}{_short_name(row.name, 22):<24}{row.points:>8}")
    return "\n".join(lines)


def format_most_benched(rows: Sequence[PauseCount]) -> str:
    """Format the players who sat out most."""
    if not rows:
        return "Most benched: -"
    parts = [f"{r.name} ({r.rests})" for r in rows]
    return "Most benched: " + ", ".join(parts)


def format_partner_matrix(players: Sequence[Player], stats: StatsSnapshot) -> str:
    """
    Format how often each pair of players partnered.

    Shows partner counts for row player with column player.
    """
    short_names = [_short_name(p.name) for p in players]

    lines = []
    lines.append("")
    lines.append("Partner Matrix (times on the same team):")
    lines.append("")

    col_width = max((len(sn) for sn in short_names), default=0) + 2
    col_width = max(col_width, 6)

    header = " " * (col_width + 2)
    for sn in short_names:
        header += f"{sn:>{col_width}}"
    lines.append(header)

    for i, (p, sn) in enumerate(zip(players, short_names)):
        row = f"{sn:<{col_width}}  "
        for j, other in enumerate(players):
            if i == j:
                cell = "-"
            else:
                cell = str(stats.partners(p.id, other.id))
            row += f"{cell:>{col_width}}"
        lines.append(row)

    return "\n".join(lines)


def format_tournament_header(
    name: str,
    num_players: int,
    courts: int,
    target_rounds: int,
    recommended_rounds: int
) -> str:
    """Format tournament header information."""
    lines = []
    lines.append(f"Tournament: {name}")
    lines.append(f"Players: {num_players}")
    lines.append(f"Courts: {courts}")
    lines.append(f"Target rounds: {target_rounds} (recommended: {recommended_rounds})")
    lines.append("")
    return "\n".join(lines)


def format_estimate(estimate) -> List[str]:
    """Lines summarizing a rounds-to-coverage estimate."""
    lines = [
        f"Players: {estimate.n_players}, courts: {estimate.courts}, trials: {estimate.trials}",
        f"Recommended (lower bound): {estimate.recommended}",
    ]
    if estimate.completed:
        lines.append(
            f"Rounds to full coverage: mean {estimate.mean_rounds:.2f}, "
            f"median {estimate.median_rounds:.1f}, "
            f"min {estimate.min_rounds}, max {estimate.max_rounds}"
        )
    if estimate.incomplete:
        lines.append(f"Trials without full coverage: {estimate.incomplete}")
    return lines
