"""
Run summary: the figures printed at the end of an estimation, as a dict that
can be printed or exported as JSON.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict

from .simulation import RunResult
from .stats import estimate_rate, extrapolate, percentage

SCHEMA_VERSION = 1
PLAYERS_PER_DEAL = 4


def format_big_integer(number: int) -> str:
    """Group digits by three with underscores: 1234567 -> '1_234_567'."""
    return f"{number:_d}"


def build_summary(result: RunResult) -> Dict[str, Any]:
    """
    Derive rates and population estimates from a run.

    Rates are strings with a fixed number of decimals (percentages). The
    petit sec rate is per hand dealt; the main imparable rate is per valid
    hand, i.e. per hand that was not a petit sec. Rates of a run with no
    hand are reported as None.
    """
    stats = result.stats
    population = result.population
    summary: Dict[str, Any] = {
        "theoretical_combinations": population,
        "hands_tested": stats.samples_considered,
        "petit_sec_count": stats.petit_sec_count,
        "valid_hands": stats.valid_hands,
        "main_imparable_count": stats.main_imparable_count,
        "petit_sec_rate_percent": None,
        "petit_sec_deal_rate_percent": None,
        "petit_sec_estimate": None,
        "main_imparable_rate_percent": None,
        "main_imparable_estimate": None,
        "valid_population_estimate": None,
        "elapsed_seconds": round(result.elapsed_seconds, 2),
        "hands_per_second": round(result.hands_per_second),
    }

    if stats.samples_considered:
        ps_rate = estimate_rate(stats.petit_sec_count, stats.samples_considered)
        ps_estimate = extrapolate(ps_rate, population)
        summary["petit_sec_rate_percent"] = str(percentage(ps_rate, 6))
        summary["petit_sec_deal_rate_percent"] = str(percentage(ps_rate, 5, factor=PLAYERS_PER_DEAL))
        summary["petit_sec_estimate"] = ps_estimate
        summary["valid_population_estimate"] = population - ps_estimate

    if stats.valid_hands:
        mi_rate = estimate_rate(stats.main_imparable_count, stats.valid_hands)
        summary["main_imparable_rate_percent"] = str(percentage(mi_rate, 7))
        summary["main_imparable_estimate"] = extrapolate(mi_rate, population)

    return summary


def _fmt(value: Any) -> str:
    if value is None:
        return "n/a"
    if isinstance(value, int):
        return format_big_integer(value)
    return str(value)


def format_summary(summary: Dict[str, Any]) -> str:
    lines = [
        f"Theoretical combinations: {_fmt(summary['theoretical_combinations'])}",
        f"Hands tested: {_fmt(summary['hands_tested'])}",
        "",
        f"Petit sec: {_fmt(summary['petit_sec_count'])}",
        f"Petit sec rate per hand: {_fmt(summary['petit_sec_rate_percent'])}%",
        f"Petit sec rate per deal ({PLAYERS_PER_DEAL} players): "
        f"{_fmt(summary['petit_sec_deal_rate_percent'])}%",
        f"Estimated petit sec hands: {_fmt(summary['petit_sec_estimate'])} "
        f"out of {_fmt(summary['theoretical_combinations'])} possible hands",
        "",
        f"Valid hands: {_fmt(summary['valid_hands'])}",
        f"Main imparable: {_fmt(summary['main_imparable_count'])}",
        f"Main imparable rate per valid hand: {_fmt(summary['main_imparable_rate_percent'])}%",
        f"Estimated main imparable hands: {_fmt(summary['main_imparable_estimate'])} "
        f"out of {_fmt(summary['valid_population_estimate'])} possible valid hands",
        "",
        f"Computation time: {summary['elapsed_seconds']} seconds",
        f"Performance: {_fmt(summary['hands_per_second'])} hands per second",
    ]
    return "\n".join(lines)


def summary_to_json(summary: Dict[str, Any], *, metadata: Dict[str, Any] | None = None) -> str:
    """
    Serialize a summary to JSON. Big integers are written as strings so that
    consumers without arbitrary-precision numbers keep every digit.
    """
    payload: Dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "summary": {
            key: str(value) if isinstance(value, int) and not isinstance(value, bool) else value
            for key, value in summary.items()
        },
    }
    if metadata:
        payload["metadata"] = metadata
    return json.dumps(payload, indent=2)


__all__ = [
    "PLAYERS_PER_DEAL",
    "SCHEMA_VERSION",
    "build_summary",
    "format_big_integer",
    "format_summary",
    "summary_to_json",
]
