"""Tests for the run summary."""
import json

from tarot_odds.report import (
    SCHEMA_VERSION,
    build_summary,
    format_big_integer,
    format_summary,
    summary_to_json,
)
from tarot_odds.simulation import RunResult
from tarot_odds.stats import AggregateStats, estimate_rate, extrapolate

C_78_18 = 212566476905162380


def test_format_big_integer():
    assert format_big_integer(C_78_18) == "212_566_476_905_162_380"
    assert format_big_integer(0) == "0"
    assert format_big_integer(999) == "999"
    assert format_big_integer(1000) == "1_000"


def test_build_summary():
    result = RunResult(AggregateStats(1000, 4, 1), C_78_18, 2.0)
    summary = build_summary(result)
    assert summary["theoretical_combinations"] == C_78_18
    assert summary["hands_tested"] == 1000
    assert summary["valid_hands"] == 996
    assert summary["petit_sec_rate_percent"] == "0.400000"
    assert summary["petit_sec_deal_rate_percent"] == "1.60000"
    assert summary["petit_sec_estimate"] == 850265907620650
    assert summary["valid_population_estimate"] == C_78_18 - 850265907620650
    assert summary["main_imparable_rate_percent"] == "0.1004016"
    mi_estimate = summary["main_imparable_estimate"]
    assert mi_estimate == extrapolate(estimate_rate(1, 996), C_78_18)
    assert abs(mi_estimate - C_78_18 // 996) <= 1
    assert summary["hands_per_second"] == 500


def test_build_summary_empty_run():
    summary = build_summary(RunResult(AggregateStats(), C_78_18, 0.0))
    assert summary["petit_sec_rate_percent"] is None
    assert summary["main_imparable_estimate"] is None
    assert summary["hands_per_second"] == 0
    assert "n/a" in format_summary(summary)


def test_build_summary_all_petit_sec():
    summary = build_summary(RunResult(AggregateStats(5, 5, 0), C_78_18, 1.0))
    assert summary["petit_sec_estimate"] == C_78_18
    assert summary["valid_hands"] == 0
    assert summary["main_imparable_rate_percent"] is None


def test_format_summary():
    text = format_summary(build_summary(RunResult(AggregateStats(1000, 4, 1), C_78_18, 2.0)))
    assert "Theoretical combinations: 212_566_476_905_162_380" in text
    assert "Petit sec rate per hand: 0.400000%" in text
    assert "Main imparable: 1" in text


def test_summary_to_json():
    summary = build_summary(RunResult(AggregateStats(1000, 4, 1), C_78_18, 2.0))
    data = json.loads(summary_to_json(summary, metadata={"mode": "estimate"}))
    assert data["schema_version"] == SCHEMA_VERSION
    assert data["metadata"] == {"mode": "estimate"}
    assert data["summary"]["theoretical_combinations"] == str(C_78_18)
    assert data["summary"]["petit_sec_rate_percent"] == "0.400000"
    assert data["summary"]["elapsed_seconds"] == 2.0
    assert "metadata" not in json.loads(summary_to_json(summary))
