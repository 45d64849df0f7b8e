"""
CSV validation utilities for RingTrace.
"""

import logging
from typing import Any, Dict, List, Tuple

import pandas as pd


logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["sender_id", "receiver_id"]
OPTIONAL_COLUMNS = ["transaction_id", "timestamp", "amount"]


def validate_csv(df: pd.DataFrame) -> Dict[str, Any]:
    """Validate the column layout of a transaction DataFrame."""
    errors: List[str] = []
    warnings: List[str] = []

    missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_columns:
        errors.append(f"Missing required columns: {', '.join(missing_columns)}")
        return {
            "valid": False,
            "errors": errors,
            "warnings": warnings,
            "row_count": 0,
        }

    absent_optional = [col for col in OPTIONAL_COLUMNS if col not in df.columns]
    if absent_optional:
        warnings.append(f"Optional columns not present: {', '.join(absent_optional)}")

    if "transaction_id" in df.columns:
        duplicate_transaction_ids = df["transaction_id"].dropna().duplicated().sum()
        if duplicate_transaction_ids > 0:
            warnings.append(
                f"Found {duplicate_transaction_ids} duplicate transaction_id values"
            )

    return {
        "valid": True,
        "errors": errors,
        "warnings": warnings,
        "row_count": len(df),
    }


def drop_malformed(df: pd.DataFrame) -> Tuple[pd.DataFrame, int]:
    """
    Remove records without a usable sender_id or receiver_id.

    Returns a new DataFrame with both id columns as strings, and the number
    of records dropped. A missing column counts every record as malformed.
    """
    columns = list(df.columns) + [col for col in REQUIRED_COLUMNS if col not in df.columns]
    df = df.reindex(columns=columns)

    usable = pd.Series(True, index=df.index)
    for col in REQUIRED_COLUMNS:
        usable &= df[col].notna() & (df[col].astype(str) != "")

    skipped = int((~usable).sum())
    clean = df.loc[usable].copy()
    for col in REQUIRED_COLUMNS:
        clean[col] = clean[col].astype(str)

    if skipped:
        logger.warning("Skipped %d malformed records without sender_id/receiver_id.", skipped)
    return clean, skipped
