"""
Report assembly for RingTrace.
"""

from typing import Any, Dict, List

from ringtrace import config


def build_report(
    graph: Dict[str, List[str]],
    scored_accounts: List[Dict[str, Any]],
    fraud_rings: List[Dict[str, Any]],
    account_to_ring: Dict[str, str],
    skipped_records: int = 0,
    cycle_detection_truncated: bool = False,
) -> Dict[str, Any]:
    """
    Attach ring ids, rank accounts and compute the summary counters.

    Accounts are ordered by descending score, then ascending account id.
    Only sending accounts (graph keys) count as analyzed.
    """
    suspicious_accounts = sorted(
        (
            {**account, "ring_id": account_to_ring.get(account["account_id"], config.NO_RING)}
            for account in scored_accounts
        ),
        key=lambda acc: (-acc["suspicion_score"], acc["account_id"]),
    )

    return {
        "suspicious_accounts": suspicious_accounts,
        "fraud_rings": fraud_rings,
        "summary": {
            "total_accounts_analyzed": len(graph),
            "suspicious_accounts_flagged": len(suspicious_accounts),
            "fraud_rings_detected": len(fraud_rings),
            "skipped_records": skipped_records,
            "cycle_detection_truncated": cycle_detection_truncated,
        },
    }
