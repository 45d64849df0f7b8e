"""
Suspicion scoring service for RingTrace.
"""

from typing import Any, Dict, Iterable, List

from ringtrace import config


class ScoreAggregator:
    """
    Per-analysis running totals of suspicion points and pattern tags.

    Accounts are kept in order of their first contribution. Totals are only
    capped when the profiles are produced, never while adding.
    """

    def __init__(self) -> None:
        self._scores: Dict[str, int] = {}
        self._patterns: Dict[str, Dict[str, None]] = {}

    def add(self, account: str, points: int, patterns: Iterable[str]) -> None:
        self._scores[account] = self._scores.get(account, 0) + points
        tags = self._patterns.setdefault(account, {})
        for pattern in patterns:
            tags[pattern] = None

    def add_cycles(self, cycles: List[List[str]]) -> None:
        for cycle in cycles:
            members = list(dict.fromkeys(cycle))
            tag = f"cycle_length_{len(members)}"
            for account in members:
                self.add(account, config.SCORE_CYCLE, [tag])

    def add_contributions(self, contributions: Dict[str, Dict[str, Any]]) -> None:
        for account, contribution in contributions.items():
            self.add(account, contribution["score"], contribution["patterns"])

    def profiles(self) -> List[Dict[str, Any]]:
        return [
            {
                "account_id": account,
                "suspicion_score": min(config.SCORE_CAP, score),
                "detected_patterns": list(self._patterns[account]),
            }
            for account, score in self._scores.items()
        ]


def score_accounts(
    cycles: List[List[str]],
    smurfing_results: Dict[str, Dict[str, Any]],
    velocity_results: Dict[str, Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """Merge cycle, fan and velocity contributions into capped account profiles."""
    aggregator = ScoreAggregator()
    aggregator.add_cycles(cycles)
    aggregator.add_contributions(smurfing_results)
    aggregator.add_contributions(velocity_results)
    return aggregator.profiles()
