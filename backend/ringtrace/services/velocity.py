"""
Transaction velocity detection service for RingTrace.
"""

import pandas as pd
from typing import Any, Dict

from ringtrace import config
from ringtrace.services.smurfing import list_accounts


def detect_velocity(
    df: pd.DataFrame, threshold: int = config.VELOCITY_THRESHOLD
) -> Dict[str, Dict[str, Any]]:
    """Flag accounts taking part in at least ``threshold`` transactions, either side."""
    sent = df["sender_id"].value_counts()
    received = df["receiver_id"].value_counts()
    # a self-transfer is one transaction, not two
    self_transfers = df.loc[df["sender_id"] == df["receiver_id"], "sender_id"].value_counts()

    results: Dict[str, Dict[str, Any]] = {}
    for account in list_accounts(df):
        involvement = (
            sent.get(account, 0) + received.get(account, 0) - self_transfers.get(account, 0)
        )
        if involvement >= threshold:
            results[account] = {
                "score": config.SCORE_HIGH_VELOCITY,
                "patterns": ["high_velocity"],
            }

    return results
