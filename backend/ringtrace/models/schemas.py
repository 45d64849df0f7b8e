"""
Pydantic schemas for RingTrace API.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator


class TransactionRecord(BaseModel):
    # lenient on purpose: a bad field skips one record, not the batch
    sender_id: Optional[str] = None
    receiver_id: Optional[str] = None
    transaction_id: Optional[str] = None
    timestamp: Optional[str] = None
    amount: Optional[float] = None

    @field_validator("sender_id", "receiver_id", "transaction_id", "timestamp", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None


class SuspiciousAccount(BaseModel):
    account_id: str
    suspicion_score: int = Field(..., ge=0, le=100)
    detected_patterns: List[str]
    ring_id: str


class FraudRing(BaseModel):
    ring_id: str
    member_accounts: List[str]
    pattern_type: str
    risk_score: int = Field(..., ge=0, le=100)


class AnalysisSummary(BaseModel):
    total_accounts_analyzed: int
    suspicious_accounts_flagged: int
    fraud_rings_detected: int
    skipped_records: int = 0
    cycle_detection_truncated: bool = False


class AnalysisResponse(BaseModel):
    suspicious_accounts: List[SuspiciousAccount]
    fraud_rings: List[FraudRing]
    summary: AnalysisSummary
