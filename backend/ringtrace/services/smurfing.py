"""
Smurfing (fan-in / fan-out) detection service for RingTrace.
"""

import pandas as pd
from typing import Any, Dict, List

from ringtrace import config


def list_accounts(df: pd.DataFrame) -> List[str]:
    """Every account referenced as sender or receiver, in order of first appearance."""
    if df.empty:
        return []
    return list(pd.unique(df[["sender_id", "receiver_id"]].to_numpy().ravel()))


def detect_smurfing(
    df: pd.DataFrame, threshold: int = config.FAN_THRESHOLD
) -> Dict[str, Dict[str, Any]]:
    """
    Flag accounts whose incoming or outgoing transaction count reaches the threshold.

    Both directions are checked independently, so one account can collect
    both contributions.
    """
    incoming = df["receiver_id"].value_counts()
    outgoing = df["sender_id"].value_counts()
    results: Dict[str, Dict[str, Any]] = {}

    for account in list_accounts(df):
        score = 0
        patterns: List[str] = []

        if incoming.get(account, 0) >= threshold:
            score += config.SCORE_FAN_IN
            patterns.append("fan_in_smurfing")

        if outgoing.get(account, 0) >= threshold:
            score += config.SCORE_FAN_OUT
            patterns.append("fan_out_smurfing")

        if patterns:
            results[account] = {"score": score, "patterns": patterns}

    return results
