"""
Ring grouping service for RingTrace.
"""

from typing import Any, Dict, List, Tuple

from ringtrace import config


def group_rings(
    cycles: List[List[str]],
) -> Tuple[List[Dict[str, Any]], Dict[str, str]]:
    """
    Turn every cycle occurrence into a fraud ring.

    Returns the rings in discovery order and the ring assignment per account.
    An account in several rings keeps the id of the last one processed.
    """
    fraud_rings: List[Dict[str, Any]] = []
    account_to_ring: Dict[str, str] = {}

    for ring_counter, cycle in enumerate(cycles, start=1):
        ring_id = f"{config.RING_ID_PREFIX}{ring_counter:03d}"
        members = list(dict.fromkeys(cycle))

        fraud_rings.append(
            {
                "ring_id": ring_id,
                "member_accounts": members,
                "pattern_type": "cycle",
                "risk_score": min(
                    config.SCORE_CAP,
                    config.RING_BASE_RISK + config.RING_RISK_PER_MEMBER * len(members),
                ),
            }
        )
        for account in members:
            account_to_ring[account] = ring_id

    return fraud_rings, account_to_ring
