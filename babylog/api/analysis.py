"""Correlation analysis API endpoints."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from babylog.config import get_app_config
from babylog.database import get_db
from babylog.models.profile import BabyProfile
from babylog.schemas.analysis import (
    AnalysisTaskQueued,
    CorrelationRequest,
    CorrelationResponse,
    HashtagsResponse,
)
from babylog.services.correlation import CorrelationAnalyzer
from babylog.services.events import DateInterval, ensure_utc
from babylog.services.repository import EventRepository
from babylog.tasks.analysis_tasks import run_correlation_analysis, run_correlation_request

router = APIRouter(prefix="/api/v1/analysis", tags=["analysis"])


def _verify_profile(db: Session, profile_id: UUID | None) -> None:
    if profile_id is not None and db.get(BabyProfile, profile_id) is None:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.get("/hashtags", response_model=HashtagsResponse)
def list_hashtags(
    start: datetime | None = Query(None, description="Range start (defaults to the lookback)"),
    end: datetime | None = Query(None, description="Range end (defaults to now)"),
    profile_id: UUID | None = None,
    db: Session = Depends(get_db),
) -> HashtagsResponse:
    """List every hashtag used on a feed, diaper change or custom event in the range."""
    _verify_profile(db, profile_id)

    lookback_days = get_app_config().analysis["hashtag_lookback_days"]
    end = ensure_utc(end) if end else datetime.now(timezone.utc)
    start = ensure_utc(start) if start else end - timedelta(days=lookback_days)
    if start > end:
        raise HTTPException(status_code=422, detail="start must not be after end")

    analyzer = CorrelationAnalyzer(EventRepository(db))
    hashtags = analyzer.fetch_all_hashtags(DateInterval(start=start, end=end), profile_id)
    return HashtagsResponse(start=start, end=end, hashtags=hashtags)


@router.get("/window-choices")
def list_window_choices() -> dict[str, list[int]]:
    """Time windows (in minutes) clients should offer. None is applied by default."""
    return {"window_choices_minutes": get_app_config().analysis["window_choices_minutes"]}


@router.post("/correlations", response_model=CorrelationResponse)
def analyze_correlations(
    request: CorrelationRequest, db: Session = Depends(get_db)
) -> CorrelationResponse:
    """Correlate each hashtag with the target outcome.

    Results are ranked by percentage for custom-event targets and by average
    amount for the feed amount target.
    """
    _verify_profile(db, request.profile_id)
    return run_correlation_request(db, request)


@router.post("/correlations/async", response_model=AnalysisTaskQueued, status_code=202)
def queue_correlation_analysis(
    request: CorrelationRequest, db: Session = Depends(get_db)
) -> AnalysisTaskQueued:
    """Run the analysis in the background. Poll the Celery result backend for the outcome."""
    _verify_profile(db, request.profile_id)
    result = run_correlation_analysis.delay(request.model_dump(mode="json"))
    return AnalysisTaskQueued(task_id=result.id)
