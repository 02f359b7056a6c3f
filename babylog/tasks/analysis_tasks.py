"""Celery tasks for running correlation analyses off the request path."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session

from babylog.celery_app import app as celery_app
from babylog.config import get_app_config
from babylog.database import SessionLocal
from babylog.schemas.analysis import CorrelationRequest, CorrelationResponse, CorrelationResultOut
from babylog.services.correlation import AnalysisValidationError, CorrelationAnalyzer
from babylog.services.events import DateInterval
from babylog.services.repository import EventRepository

logger = logging.getLogger(__name__)


def run_correlation_request(
    db: Session, request: CorrelationRequest, now: datetime | None = None
) -> CorrelationResponse:
    """Resolve request defaults, run the analysis and shape the response.

    A missing end defaults to now and a missing start to the configured
    lookback before the end. The window is never defaulted.
    """
    config = get_app_config().analysis
    end = request.end or now or datetime.now(timezone.utc)
    try:
        start = request.start or end - timedelta(days=config["analysis_lookback_days"])
    except OverflowError as e:
        raise AnalysisValidationError(f"No lookback window fits before {end.isoformat()}") from e
    interval = DateInterval(start=start, end=end)

    analyzer = CorrelationAnalyzer(EventRepository(db))
    results = analyzer.analyze(
        request.hashtags,
        request.target,
        timedelta(minutes=request.window_minutes),
        interval,
        subject_id=request.profile_id,
    )

    alpha = config["significance_level"]
    return CorrelationResponse(
        target=request.target,
        window_minutes=request.window_minutes,
        start=interval.start,
        end=interval.end,
        results=[CorrelationResultOut.from_result(result, alpha) for result in results],
    )


@celery_app.task(name="analysis_tasks.run_correlation_analysis")
def run_correlation_analysis(payload: dict[str, Any]) -> dict[str, Any]:
    """Run a correlation analysis.

    Args:
        payload: JSON form of a ``CorrelationRequest``

    Returns:
        JSON form of the ``CorrelationResponse``
    """
    request = CorrelationRequest.model_validate(payload)
    logger.info(f"Starting correlation analysis for {len(request.hashtags)} hashtags")
    db = SessionLocal()
    try:
        response = run_correlation_request(db, request)
        logger.info(f"Completed correlation analysis: {len(response.results)} results")
        return response.model_dump(mode="json")
    except Exception as e:
        logger.error(f"Correlation analysis failed: {e}")
        raise
    finally:
        db.close()
