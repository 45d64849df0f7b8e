"""
End-to-end tests for the RingTrace detection pipeline.
"""

import random

import pandas as pd
import pytest

from ringtrace.services.analyzer import analyze_transactions


def make_df(pairs) -> pd.DataFrame:
    return pd.DataFrame(pairs, columns=["sender_id", "receiver_id"])


@pytest.fixture
def triangle_df() -> pd.DataFrame:
    return make_df([("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def combined_df() -> pd.DataFrame:
    """A in a triangle, receiving from ten senders and paying three more accounts."""
    pairs = [("A", "B"), ("B", "C"), ("C", "A")]
    pairs += [(f"S{i:02d}", "A") for i in range(10)]
    pairs += [("A", f"X{i}") for i in range(3)]
    return make_df(pairs)


def accounts_by_id(result):
    return {acc["account_id"]: acc for acc in result["suspicious_accounts"]}


def test_triangle(triangle_df: pd.DataFrame):
    result = analyze_transactions(triangle_df)

    assert [r["ring_id"] for r in result["fraud_rings"]] == ["RING_001", "RING_002", "RING_003"]
    assert all(r["risk_score"] == 85 for r in result["fraud_rings"])
    assert all(len(r["member_accounts"]) == 3 for r in result["fraud_rings"])

    accounts = accounts_by_id(result)
    assert set(accounts) == {"A", "B", "C"}
    for acc in accounts.values():
        # three rotations at 40 points each, capped
        assert acc["suspicion_score"] == 100
        assert acc["detected_patterns"] == ["cycle_length_3"]
        assert acc["ring_id"] == "RING_003"

    assert result["summary"] == {
        "total_accounts_analyzed": 3,
        "suspicious_accounts_flagged": 3,
        "fraud_rings_detected": 3,
        "skipped_records": 0,
        "cycle_detection_truncated": False,
    }


def test_triangle_canonical(triangle_df: pd.DataFrame):
    result = analyze_transactions(triangle_df, canonical=True)
    assert len(result["fraud_rings"]) == 1
    assert result["fraud_rings"][0]["member_accounts"] == ["A", "B", "C"]
    assert {acc["suspicion_score"] for acc in result["suspicious_accounts"]} == {40}


def test_cycle_fan_in_and_velocity_sum(combined_df: pd.DataFrame):
    accounts = accounts_by_id(analyze_transactions(combined_df, canonical=True))
    assert accounts["A"]["suspicion_score"] == 80
    assert accounts["A"]["detected_patterns"] == [
        "cycle_length_3",
        "fan_in_smurfing",
        "high_velocity",
    ]
    assert "S00" not in accounts


def test_combined_score_capped_by_default(combined_df: pd.DataFrame):
    result = analyze_transactions(combined_df)
    accounts = accounts_by_id(result)
    assert accounts["A"]["suspicion_score"] == 100
    assert [acc["account_id"] for acc in result["suspicious_accounts"]] == ["A", "B", "C"]


def test_fan_in_without_cycles():
    df = make_df([(f"S{i}", "R") for i in range(10)])
    result = analyze_transactions(df)
    assert result["suspicious_accounts"] == [
        {
            "account_id": "R",
            "suspicion_score": 25,
            "detected_patterns": ["fan_in_smurfing"],
            "ring_id": "NONE",
        }
    ]
    assert result["fraud_rings"] == []
    assert result["summary"]["total_accounts_analyzed"] == 10


def test_total_accounts_counts_senders_only():
    df = make_df([("A", "B"), ("A", "C"), ("D", "A"), ("D", "E")])
    result = analyze_transactions(df)
    assert result["summary"]["total_accounts_analyzed"] == 2


def test_empty_input():
    result = analyze_transactions(make_df([]))
    assert result == {
        "suspicious_accounts": [],
        "fraud_rings": [],
        "summary": {
            "total_accounts_analyzed": 0,
            "suspicious_accounts_flagged": 0,
            "fraud_rings_detected": 0,
            "skipped_records": 0,
            "cycle_detection_truncated": False,
        },
    }


def test_malformed_records_are_skipped(triangle_df: pd.DataFrame):
    df = pd.concat(
        [triangle_df, make_df([(None, "A"), ("B", ""), ("", None)])],
        ignore_index=True,
    )
    result = analyze_transactions(df)
    assert result["summary"]["skipped_records"] == 3
    assert result["summary"]["total_accounts_analyzed"] == 3
    assert result["summary"]["fraud_rings_detected"] == 3


def test_missing_receiver_column_skips_everything():
    df = pd.DataFrame({"sender_id": ["A", "B"]})
    result = analyze_transactions(df)
    assert result["summary"]["skipped_records"] == 2
    assert result["suspicious_accounts"] == []


def test_numeric_ids_become_strings():
    df = make_df([(1, 2), (2, 3), (3, 1)])
    result = analyze_transactions(df, canonical=True)
    assert result["fraud_rings"][0]["member_accounts"] == ["1", "2", "3"]


def test_truncated_cycle_search_keeps_pattern_results(triangle_df: pd.DataFrame):
    df = pd.concat(
        [triangle_df, make_df([(f"S{i}", "R") for i in range(10)])],
        ignore_index=True,
    )
    result = analyze_transactions(df, max_paths=1)

    assert result["summary"]["cycle_detection_truncated"] is True
    assert result["fraud_rings"] == []
    assert [acc["account_id"] for acc in result["suspicious_accounts"]] == ["R"]


def test_timestamp_and_amount_are_ignored(triangle_df: pd.DataFrame):
    enriched = triangle_df.assign(
        amount=[1.0, 1_000_000.0, 5.0],
        timestamp=["2026-01-01 00:00:00", "2020-01-01 00:00:00", "bad"],
    )
    assert analyze_transactions(enriched) == analyze_transactions(triangle_df)


def test_random_batch_invariants():
    rng = random.Random(7)
    accounts = [f"ACC_{i:02d}" for i in range(12)]
    pairs = [tuple(rng.sample(accounts, 2)) for _ in range(60)]
    pairs += [(f"SRC_{i}", "ACC_00") for i in range(10)]
    df = make_df(pairs)

    result = analyze_transactions(df, max_paths=200_000, canonical=True)

    assert result["summary"]["total_accounts_analyzed"] == df["sender_id"].nunique()
    scores = [acc["suspicion_score"] for acc in result["suspicious_accounts"]]
    assert scores == sorted(scores, reverse=True)
    for acc in result["suspicious_accounts"]:
        assert 0 < acc["suspicion_score"] <= 100
        assert len(acc["detected_patterns"]) == len(set(acc["detected_patterns"]))


def test_time_budget_abort_marks_truncation():
    nodes = [f"N{i:02d}" for i in range(12)]
    df = make_df([(a, b) for a in nodes for b in nodes if a != b])

    result = analyze_transactions(df, max_paths=0, time_budget=0.05)

    assert result["summary"]["cycle_detection_truncated"] is True
    assert result["fraud_rings"] == []
    assert len(result["suspicious_accounts"]) == 12
    for acc in result["suspicious_accounts"]:
        assert acc["suspicion_score"] == 65
        assert acc["detected_patterns"] == [
            "fan_in_smurfing",
            "fan_out_smurfing",
            "high_velocity",
        ]
        assert acc["ring_id"] == "NONE"


def test_upstream_skips_are_added():
    result = analyze_transactions(make_df([(None, "A")]), skipped_upstream=2)
    assert result["summary"]["skipped_records"] == 3
