"""
Analysis router for RingTrace API.
"""

import logging
from io import StringIO
from typing import List, Optional

import pandas as pd
from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from starlette.concurrency import run_in_threadpool

from ringtrace import config
from ringtrace.models.schemas import AnalysisResponse, TransactionRecord
from ringtrace.services.analyzer import analyze_transactions
from ringtrace.utils.csv_validator import validate_csv


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_csv(
    file: UploadFile = File(...),
    canonical: Optional[bool] = Query(None),
) -> AnalysisResponse:
    """Upload and analyze a CSV file of transactions."""

    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed")

    contents = await file.read()
    logger.debug("Processing file: %s, size: %d", file.filename, len(contents))
    if len(contents) > config.MAX_FILE_SIZE_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {config.MAX_FILE_SIZE_MB} MB limit",
        )

    bad_lines: List[List[str]] = []
    try:
        csv_text = contents.decode("utf-8-sig")
        # rows with extra fields are skipped and counted like other malformed records
        df = pd.read_csv(
            StringIO(csv_text),
            dtype=str,
            keep_default_na=False,
            na_values=[""],
            engine="python",
            on_bad_lines=bad_lines.append,
        )
    except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.info("Rejected %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=f"Failed to parse CSV: {e}")
    if bad_lines:
        logger.warning("Skipped %d CSV rows with extra fields in %s.", len(bad_lines), file.filename)

    validation_result = validate_csv(df)
    for warning in validation_result["warnings"]:
        logger.debug("CSV warning for %s: %s", file.filename, warning)
    if not validation_result["valid"]:
        raise HTTPException(
            status_code=400,
            detail={
                "message": "CSV validation failed",
                "errors": validation_result["errors"],
            },
        )

    result = await run_in_threadpool(
        analyze_transactions, df, canonical, skipped_upstream=len(bad_lines)
    )
    return AnalysisResponse(**result)


@router.post("/analyze/records", response_model=AnalysisResponse)
async def analyze_records(
    records: List[TransactionRecord],
    canonical: Optional[bool] = Query(None),
) -> AnalysisResponse:
    """Analyze transactions posted as a JSON list."""
    df = pd.DataFrame(
        [record.model_dump() for record in records],
        columns=list(TransactionRecord.model_fields),
    )
    result = await run_in_threadpool(analyze_transactions, df, canonical)
    return AnalysisResponse(**result)
