"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from signal_engine.config import load_engine_config, settings
from signal_engine.core.aggregator import ArticleAggregator
from signal_engine.core.content_type import ContentTypeClassifier
from signal_engine.core.sentiment import SentimentScorer
from signal_engine.core.summary import WeeklySummaryGenerator
from signal_engine.core.transcript import TranscriptContextExtractor
from signal_engine.errors import SignalEngineError
from signal_engine.schemas import (
    MediaItemIn,
    NewsAnalysisRequest,
    NewsReportResponse,
    PodcastClassificationResponse,
    TrackingResponse,
    TranscriptAnalysisResponse,
    TranscriptRequest,
    WeeklySummaryRequest,
    WeeklySummaryResponse,
)
from signal_engine.services.tracker import MediaSignalTracker
from signal_engine.utils import now_utc

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger("uvicorn")


class Engine:
    """The analysis components, built once from configuration and shared across requests."""

    def __init__(self) -> None:
        config = load_engine_config()
        scorer = SentimentScorer(config.sentiment)
        self.aggregator = ArticleAggregator(config, scorer=scorer)
        self.classifier = ContentTypeClassifier(config.podcast)
        self.extractor = TranscriptContextExtractor(scorer, config.transcript)
        self.summary = WeeklySummaryGenerator(config.summary)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return Engine()


@lru_cache(maxsize=1)
def get_tracker() -> MediaSignalTracker:
    return MediaSignalTracker()


# Initialize FastAPI app
app = FastAPI(
    title="Media Signal Analysis API",
    version="0.1.0",
    description="Sentiment, source bias, injury alerts and podcast analysis for tracked players",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "media-signal-api",
    }


@app.post("/analyze/news", response_model=NewsReportResponse)
def analyze_news(request: NewsAnalysisRequest, engine: Engine = Depends(get_engine)):
    """
    Score a batch of articles and check it for breaking injury coverage.

    Args:
        request: NewsAPI-shaped articles and an optional alert window end

    Returns:
        NewsReportResponse; an empty batch has no analysis and no alert
    """
    payloads = [article.model_dump() for article in request.articles]
    report = engine.aggregator.analyze(payloads, request.now)
    logger.info("Analyzed %d article(s)", len(report.articles))
    return NewsReportResponse.model_validate(report)


@app.post("/classify/media", response_model=PodcastClassificationResponse)
def classify_media(item: MediaItemIn, engine: Engine = Depends(get_engine)):
    """Decide whether a video/audio item is long-form discussion content."""
    try:
        result = engine.classifier.classify(item.to_item())
    except SignalEngineError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return PodcastClassificationResponse.model_validate(result)


@app.post("/analyze/transcript", response_model=TranscriptAnalysisResponse)
def analyze_transcript(request: TranscriptRequest, engine: Engine = Depends(get_engine)):
    """
    Analyze a transcript (plain text or caption segments) for a subject.

    Missing captions come back as ``available: false`` with an error reason.
    """
    if request.segments is not None:
        segments = [segment.to_segment() for segment in request.segments]
        analysis = engine.extractor.analyze_segments(segments, request.subject_name)
    else:
        analysis = engine.extractor.analyze(request.transcript, request.subject_name)
    return TranscriptAnalysisResponse.model_validate(analysis)


@app.post("/summary/weekly", response_model=WeeklySummaryResponse)
def weekly_summary(request: WeeklySummaryRequest, engine: Engine = Depends(get_engine)):
    """
    Analyze each subject's articles and build the cross-subject weekly summary.

    Subjects without articles count as having no data this week.
    """
    reports = {}
    for subject in request.subjects:
        if not subject.articles:
            reports[subject.name] = None
            continue
        payloads = [article.model_dump() for article in subject.articles]
        reports[subject.name] = engine.aggregator.analyze(payloads, request.now)

    summary = engine.summary.generate(reports)
    return WeeklySummaryResponse.model_validate(summary)


@app.get("/track", response_model=TrackingResponse)
async def track_subject(
    name: str = Query(..., min_length=2, max_length=80, description="Player name (e.g., Patrick Mahomes)"),
    tracker: MediaSignalTracker = Depends(get_tracker),
):
    """
    Fetch news, videos, podcasts and Reddit posts for a player and analyze them.

    Args:
        name: Player to track

    Returns:
        TrackingResponse with every enabled source
    """
    try:
        report = await tracker.track(name)
        return TrackingResponse.model_validate(report)
    except HTTPException:
        raise
    except SignalEngineError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error tracking {name}: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("signal_engine.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
