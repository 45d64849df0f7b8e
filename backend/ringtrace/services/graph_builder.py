"""
Graph building utilities for RingTrace.
"""

import pandas as pd
from typing import Dict, List


Graph = Dict[str, List[str]]


def build_graph(df: pd.DataFrame) -> Graph:
    """
    Build a directed multigraph from the transaction DataFrame.

    Keys are sending accounts in order of first appearance; each value lists
    the receivers in transaction order, so repeated transfers stay as
    parallel edges. Receiver-only accounts never become keys.
    """
    graph: Graph = {}
    for row in df.itertuples(index=False):
        graph.setdefault(row.sender_id, []).append(row.receiver_id)
    return graph
