"""
Detection pipeline for RingTrace.
"""

import logging
import time
from typing import Any, Dict, Optional

import pandas as pd

from ringtrace import config
from ringtrace.services.cycle_detector import (
    CycleSearchLimitExceeded,
    canonicalize_cycles,
    find_cycles,
)
from ringtrace.services.graph_builder import build_graph
from ringtrace.services.report import build_report
from ringtrace.services.ring_grouper import group_rings
from ringtrace.services.scorer import score_accounts
from ringtrace.services.smurfing import detect_smurfing
from ringtrace.services.velocity import detect_velocity
from ringtrace.utils.csv_validator import drop_malformed


logger = logging.getLogger(__name__)


def analyze_transactions(
    df: pd.DataFrame,
    canonical: Optional[bool] = None,
    fan_threshold: int = config.FAN_THRESHOLD,
    velocity_threshold: int = config.VELOCITY_THRESHOLD,
    max_paths: Optional[int] = config.CYCLE_MAX_PATHS,
    max_depth: Optional[int] = config.CYCLE_MAX_DEPTH,
    time_budget: Optional[float] = config.CYCLE_TIMEOUT_SECONDS,
    skipped_upstream: int = 0,
) -> Dict[str, Any]:
    """
    Run the full detection pipeline over one batch of transactions.

    Records without sender or receiver are skipped and counted. If the cycle
    search hits a limit, no cycles or rings are reported and the summary is
    flagged as truncated; fan and velocity results are still returned.
    ``canonical=None`` falls back to the configured cycle mode.
    ``skipped_upstream`` adds records the caller already dropped while parsing.
    """
    start_time = time.monotonic()
    if canonical is None:
        canonical = config.CANONICAL_CYCLES

    df, skipped = drop_malformed(df)
    graph = build_graph(df)

    truncated = False
    try:
        cycles = find_cycles(
            graph, max_paths=max_paths, max_depth=max_depth, time_budget=time_budget
        )
    except CycleSearchLimitExceeded as exc:
        logger.warning("Cycle detection truncated: %s", exc)
        cycles = []
        truncated = True
    if canonical:
        cycles = canonicalize_cycles(cycles)
    logger.debug("%d cycle occurrences.", len(cycles))

    smurfing_results = detect_smurfing(df, threshold=fan_threshold)
    velocity_results = detect_velocity(df, threshold=velocity_threshold)
    logger.debug(
        "%d fan accounts, %d high-velocity accounts.",
        len(smurfing_results),
        len(velocity_results),
    )

    scored_accounts = score_accounts(cycles, smurfing_results, velocity_results)
    fraud_rings, account_to_ring = group_rings(cycles)

    report = build_report(
        graph,
        scored_accounts,
        fraud_rings,
        account_to_ring,
        skipped_records=skipped + skipped_upstream,
        cycle_detection_truncated=truncated,
    )
    logger.info(
        "Analyzed %d transactions in %.3fs: %d accounts flagged, %d rings.",
        len(df),
        time.monotonic() - start_time,
        report["summary"]["suspicious_accounts_flagged"],
        report["summary"]["fraud_rings_detected"],
    )
    return report
