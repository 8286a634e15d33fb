"""
Sanitary Map AI - REST API

FastAPI application through which reporters submit sanitation issues and
operators triage them on the shared board.

Run with: uvicorn src.api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional, List

from fastapi import FastAPI, HTTPException, Query, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from src.core.config import Settings, get_settings
from src.core.geo_utils import BoundingBox
from src.core.logging import setup_logging
from src.geolocation.resolver import GeolocationResolver
from src.reports.classifier import classify
from src.reports.exceptions import (
    NotFound,
    PersistenceError,
    TransitionRejected,
    ValidationError,
)
from src.reports.lifecycle import ReportLifecycle
from src.reports.models import Report, ReportStatus, Severity
from src.reports.repository import ReportInput, ReportRepository
from src.storage.factory import create_store
from src.visualization.map_generator import create_reports_map

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ============================================================================
# Stateful services
# ============================================================================

_repository: Optional[ReportRepository] = None
_resolver: Optional[GeolocationResolver] = None


def get_repository() -> ReportRepository:
    """Get the process-wide report repository."""
    global _repository
    if _repository is None:
        config = get_settings()
        _repository = ReportRepository(
            create_store(config),
            key_prefix=config.report_key_prefix,
        )
    return _repository


def get_resolver() -> GeolocationResolver:
    global _resolver
    if _resolver is None:
        _resolver = GeolocationResolver()
    return _resolver


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings())
    repository = get_repository()
    try:
        await repository.load_all()
    except PersistenceError as e:
        # Serve an empty board; operators can retry via /reports/reload
        logger.error(f"Initial report load failed: {e}")
    yield
    await repository.store.close()


app = FastAPI(
    title="Sanitary Map AI",
    description="Community sanitation issue reporting and remediation tracking API",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Pydantic Models
# ============================================================================

class LocationModel(BaseModel):
    """Coordinate pair."""
    lat: float
    lng: float


class ReportCreateRequest(BaseModel):
    """Request to submit a sanitation report."""
    userName: str = ""
    description: str = ""
    image: Optional[str] = Field(default=None, description="Photo as a data URI")
    location: Optional[LocationModel] = None
    useFallbackLocation: bool = Field(
        default=False,
        description="Use the default location when none was captured",
    )


class StatusUpdateRequest(BaseModel):
    """Request to move a report through its lifecycle."""
    status: str = Field(..., description="pending, in-progress or resolved")


class ClassifyRequest(BaseModel):
    description: str


class ClassifyResponse(BaseModel):
    level: str
    indicator: str
    color: str
    matched_keywords: List[str]


class ReportResponse(BaseModel):
    """Sanitation report."""
    id: str
    userName: str
    description: str
    image: Optional[str]
    location: LocationModel
    severity: str
    indicator: str
    date: str
    status: str
    allowedTransitions: List[str]


class ReportListResponse(BaseModel):
    """List of reports, newest first."""
    count: int
    total: int
    reports: List[ReportResponse]


class ReportStatsResponse(BaseModel):
    """Dashboard counters."""
    total_reports: int
    by_severity: dict
    by_status: dict
    with_image: int


class HealthResponse(BaseModel):
    """API health check response."""
    status: str
    version: str
    timestamp: str
    store: str
    reports_loaded: int


def to_response(report: Report) -> ReportResponse:
    data = report.to_dict()
    data["allowedTransitions"] = [
        s.value for s in ReportLifecycle.allowed_targets(report.status)
    ]
    return ReportResponse(**data)


# ============================================================================
# Error handlers
# ============================================================================

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "fields": exc.fields})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": "Report not found", "id": exc.report_id})


@app.exception_handler(TransitionRejected)
async def transition_rejected_handler(request: Request, exc: TransitionRejected):
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "current": exc.current, "target": exc.target},
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# ============================================================================
# System Routes
# ============================================================================

@app.get("/", response_class=HTMLResponse)
async def root():
    """Welcome page."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Sanitary Map AI</title>
        <style>
            body { font-family: Arial; max-width: 900px; margin: 50px auto; padding: 20px; background: #f0f9ff; color: #1f2937; }
            h1 { color: #16a34a; }
            code { background: #e0f2fe; padding: 2px 8px; border-radius: 4px; }
            .endpoint { background: white; padding: 10px; margin: 5px 0; border-radius: 4px; border-left: 3px solid #3b82f6; }
            .tag { display: inline-block; background: #3b82f6; color: white; padding: 2px 8px; border-radius: 3px; font-size: 12px; margin-right: 5px; }
        </style>
    </head>
    <body>
        <h1>Sanitary Map AI</h1>
        <p>Promoting hygiene awareness and community action.</p>
        <ul>
            <li><a href="/docs">Swagger UI</a></li>
            <li><a href="/health">Health Check</a></li>
        </ul>
        <div class="endpoint"><span class="tag">POST</span> <code>/api/v1/reports</code> - Submit a report</div>
        <div class="endpoint"><span class="tag">GET</span> <code>/api/v1/reports</code> - List reports</div>
        <div class="endpoint"><span class="tag">GET</span> <code>/api/v1/reports/{id}</code> - Report details</div>
        <div class="endpoint"><span class="tag">PUT</span> <code>/api/v1/reports/{id}/status</code> - Update status</div>
        <div class="endpoint"><span class="tag">GET</span> <code>/api/v1/reports/stats/summary</code> - Dashboard counters</div>
        <div class="endpoint"><span class="tag">GET</span> <code>/api/v1/map/reports</code> - Report map</div>
    </body>
    </html>
    """


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(repository: ReportRepository = Depends(get_repository)):
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        store=repository.store.name,
        reports_loaded=len(repository),
    )


@app.post("/api/v1/classify", response_model=ClassifyResponse, tags=["Reports"])
async def classify_description(request: ClassifyRequest):
    """Preview the severity a description would be assigned."""
    result = classify(request.description)
    return ClassifyResponse(
        level=result.level.value,
        indicator=result.indicator.value,
        color=result.indicator.hex,
        matched_keywords=list(result.matched_keywords),
    )


# ============================================================================
# Report Routes
# ============================================================================

@app.post("/api/v1/reports", response_model=ReportResponse, status_code=201, tags=["Reports"])
async def create_report(
    request: ReportCreateRequest,
    repository: ReportRepository = Depends(get_repository),
    resolver: GeolocationResolver = Depends(get_resolver),
):
    """
    Submit a new sanitation report.

    Severity is assigned from the description; the report starts as pending.
    """
    location = None
    if request.location is not None or request.useFallbackLocation:
        resolved = resolver.resolve(
            lat=request.location.lat if request.location else None,
            lng=request.location.lng if request.location else None,
            allow_fallback=request.useFallbackLocation,
        )
        location = resolved.location

    report = await repository.create(ReportInput(
        user_name=request.userName,
        description=request.description,
        location=location,
        image=request.image,
    ))
    return to_response(report)


@app.get("/api/v1/reports", response_model=ReportListResponse, tags=["Reports"])
async def list_reports(
    severity: Optional[Severity] = Query(default=None),
    status: Optional[ReportStatus] = Query(default=None),
    west: Optional[float] = Query(default=None, ge=-180, le=180),
    south: Optional[float] = Query(default=None, ge=-90, le=90),
    east: Optional[float] = Query(default=None, ge=-180, le=180),
    north: Optional[float] = Query(default=None, ge=-90, le=90),
    near_lat: Optional[float] = Query(default=None, ge=-90, le=90),
    near_lng: Optional[float] = Query(default=None, ge=-180, le=180),
    radius_km: Optional[float] = Query(default=None, gt=0),
    limit: int = Query(default=100, ge=1, le=1000),
    repository: ReportRepository = Depends(get_repository),
):
    """List reports newest first, optionally filtered."""
    bbox_parts = (west, south, east, north)
    bbox = None
    if any(p is not None for p in bbox_parts):
        if any(p is None for p in bbox_parts):
            raise HTTPException(status_code=400, detail="west, south, east and north must be given together")
        bbox = BoundingBox(west=west, south=south, east=east, north=north)

    radius_parts = (near_lat, near_lng, radius_km)
    near = None
    if any(p is not None for p in radius_parts):
        if any(p is None for p in radius_parts):
            raise HTTPException(status_code=400, detail="near_lat, near_lng and radius_km must be given together")
        near = (near_lat, near_lng)

    reports = repository.filter(
        severity=severity, status=status, bbox=bbox, near=near, radius_km=radius_km, limit=limit
    )

    return ReportListResponse(
        count=len(reports),
        total=len(repository),
        reports=[to_response(r) for r in reports],
    )


@app.post("/api/v1/reports/reload", response_model=ReportListResponse, tags=["Reports"])
async def reload_reports(repository: ReportRepository = Depends(get_repository)):
    """Reload the board from the store."""
    reports = await repository.load_all()
    return ReportListResponse(
        count=len(reports),
        total=len(reports),
        reports=[to_response(r) for r in reports],
    )


@app.get("/api/v1/reports/stats/summary", response_model=ReportStatsResponse, tags=["Reports"])
async def get_report_stats(repository: ReportRepository = Depends(get_repository)):
    """Get report counts by severity and status."""
    return ReportStatsResponse(**repository.statistics())


@app.get("/api/v1/reports/{report_id}", response_model=ReportResponse, tags=["Reports"])
async def get_report(report_id: str, repository: ReportRepository = Depends(get_repository)):
    """Get a specific report by ID."""
    return to_response(repository.get(report_id))


@app.put("/api/v1/reports/{report_id}/status", response_model=ReportResponse, tags=["Reports"])
async def update_report_status(
    report_id: str,
    request: StatusUpdateRequest,
    repository: ReportRepository = Depends(get_repository),
):
    """Move a report forward: pending -> in-progress -> resolved."""
    report = await repository.update_status(report_id, request.status)
    return to_response(report)


@app.post("/api/v1/reports/{report_id}/reopen", response_model=ReportResponse, tags=["Reports"])
async def reopen_report(
    report_id: str,
    repository: ReportRepository = Depends(get_repository),
    config: Settings = Depends(get_settings),
):
    """Administrative override returning a report to pending."""
    if not config.allow_admin_reopen:
        raise HTTPException(status_code=403, detail="Reopening reports is disabled")

    report = await repository.reopen(report_id)
    return to_response(report)


# ============================================================================
# Map Routes
# ============================================================================

@app.get("/api/v1/map/reports", response_class=HTMLResponse, tags=["Map"])
async def get_reports_map(
    report_id: Optional[str] = Query(default=None, description="Center the map on this report"),
    severity: Optional[Severity] = Query(default=None),
    status: Optional[ReportStatus] = Query(default=None),
    repository: ReportRepository = Depends(get_repository),
):
    """
    Generate a map showing the report board.

    Markers are colored by severity indicator.
    """
    focus = repository.get(report_id) if report_id else None
    reports = repository.filter(severity=severity, status=status)

    report_map = create_reports_map(reports, focus=focus)
    return report_map._repr_html_()


# ============================================================================
# Main
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    config = get_settings()
    uvicorn.run(app, host=config.api_host, port=config.api_port)
