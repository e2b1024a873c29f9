#!/usr/bin/env python3
"""
Facility Insights – REST API for the monitoring dashboard frontend (map, list, search, analytics, planning).
Run: uvicorn api:app --reload --host 0.0.0.0 --port 8000
Then the frontend calls GET /api/stats, GET /api/regions, POST /api/search, POST /api/query, etc.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from facility_insights.anomalies import facility_status
from facility_insights.assistant import AssistantError, ask, stats_context
from facility_insights.config import API_TIMEOUT_SECONDS, LOG_LEVEL
from facility_insights.data.loaders import parse_upload_csv
from facility_insights.models import SearchFilters
from facility_insights.planning import PLAN_TYPES, PlanBook, PlanValidationError, region_choices
from facility_insights.regions import coverage_label, critical_regions
from facility_insights.repository import FacilityRepository
from facility_insights.search import filter_facilities, suggestions

logger = logging.getLogger(__name__)


# --- Request/Response models ---

class QuestionRequest(BaseModel):
    question: str = Field(..., min_length=1, description="Natural language question")


class QuestionResponse(BaseModel):
    answer: str


class UploadRequest(BaseModel):
    csv: str = Field(..., min_length=1, description="CSV text with name, region, specialties, procedures, equipment, phone, website")


class PlanRequest(BaseModel):
    name: str = ""
    type: str = "mobile-clinic"
    target_region: str = ""
    description: str = ""


def _facility_dict(f) -> dict[str, Any]:
    return {**f.model_dump(), "status": facility_status(f)}


def _ask_with_timeout(question: str, context: str, timeout_seconds: int = API_TIMEOUT_SECONDS) -> str:
    """Run the question with a timeout to avoid long-hanging requests."""
    if timeout_seconds <= 0:
        return ask(question, context=context)
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(ask, question, context)
    try:
        return future.result(timeout=timeout_seconds)
    except TimeoutError as e:
        raise AssistantError(f"Question timed out after {timeout_seconds}s.") from e
    finally:
        # Do not wait on a worker that is still running past the timeout
        executor.shutdown(wait=False)


def create_app(repository: FacilityRepository | None = None, plans: PlanBook | None = None) -> FastAPI:
    app = FastAPI(
        title="Facility Insights API",
        description="Backend for the healthcare facility dashboard: region coverage, alerts, search, analytics, planning.",
        version="0.1.0",
    )

    # Allow any frontend origin (restrict in production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.repository = repository or FacilityRepository()
    app.state.plans = plans or PlanBook()

    def _repo(request: Request) -> FacilityRepository:
        repo: FacilityRepository = request.app.state.repository
        if repo.error:
            raise HTTPException(status_code=503, detail=repo.error)
        return repo

    # --- Endpoints ---

    @app.on_event("startup")
    def _startup() -> None:
        """Initial fetch of the facility collection (unless the app was given a populated repository)."""
        repo: FacilityRepository = app.state.repository
        if repo.version == 0:
            repo.refresh()

    @app.get("/api/health")
    def health():
        """Health check for load balancers / frontend."""
        return {"status": "ok", "service": "facility-insights"}

    @app.post("/api/refresh")
    def refresh(request: Request):
        repo: FacilityRepository = request.app.state.repository
        if not repo.refresh():
            raise HTTPException(status_code=503, detail=repo.error)
        return {"total_facilities": len(repo.facilities), "version": repo.version}

    @app.get("/api/facilities")
    def facilities(request: Request):
        repo = _repo(request)
        return {"facilities": [_facility_dict(f) for f in repo.facilities]}

    @app.get("/api/facilities/{facility_id}")
    def facility(facility_id: str, request: Request):
        f = _repo(request).get(facility_id)
        if f is None:
            raise HTTPException(status_code=404, detail=f"Facility not found: {facility_id}")
        return _facility_dict(f)

    @app.get("/api/stats")
    def stats(request: Request):
        return _repo(request).insights()["stats"].model_dump()

    @app.get("/api/alerts")
    def alerts(request: Request):
        return {"alerts": [a.model_dump() for a in _repo(request).insights()["stats"].critical_alerts]}

    @app.get("/api/regions")
    def regions(request: Request):
        region_stats = _repo(request).insights()["regions"]
        return {
            "regions": [{**r.model_dump(), "coverage_label": coverage_label(r.coverage_score)} for r in region_stats],
            "critical_regions": [r.region for r in critical_regions(region_stats)],
        }

    @app.get("/api/map-markers")
    def markers(request: Request):
        return {"markers": [m.model_dump() for m in _repo(request).insights()["markers"]]}

    @app.get("/api/analytics")
    def analytics(request: Request):
        return _repo(request).insights()["analytics"]

    @app.get("/api/filter-options")
    def options(request: Request):
        return _repo(request).insights()["filter_options"]

    @app.get("/api/suggestions")
    def search_suggestions(q: str = ""):
        return {"suggestions": suggestions(q)}

    @app.post("/api/search")
    def search(filters: SearchFilters, request: Request):
        results = filter_facilities(_repo(request).facilities, filters)
        return {
            "count": len(results),
            "facilities": [_facility_dict(f) for f in results],
            "suggestions": suggestions(filters.query),
        }

    @app.post("/api/upload")
    def upload(req: UploadRequest, request: Request):
        """Ingest an uploaded CSV into the current snapshot."""
        repo: FacilityRepository = request.app.state.repository
        added = repo.add(parse_upload_csv(req.csv))
        if not added:
            raise HTTPException(status_code=400, detail="No facility rows found in upload (each row needs a name).")
        return {"uploaded": added, "total_facilities": len(repo.facilities)}

    @app.get("/api/plans")
    def list_plans(request: Request):
        book: PlanBook = request.app.state.plans
        region_stats = request.app.state.repository.insights()["regions"]
        return {
            "plans": [p.model_dump() for p in book.plans],
            "plan_types": PLAN_TYPES,
            "region_choices": [{"value": v, "label": label} for v, label in region_choices(region_stats)],
        }

    @app.post("/api/plans")
    def create_plan(req: PlanRequest, request: Request):
        book: PlanBook = request.app.state.plans
        try:
            plan = book.create(req.name, req.type, req.target_region, req.description)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return plan.model_dump()

    @app.post("/api/plans/{plan_id}/simulate")
    def simulate_plan(plan_id: str, request: Request):
        book: PlanBook = request.app.state.plans
        try:
            return book.simulate(plan_id).model_dump()
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Plan not found: {plan_id}")

    @app.get("/api/plans/export", response_class=PlainTextResponse)
    def export_plans(request: Request):
        book: PlanBook = request.app.state.plans
        return PlainTextResponse(
            book.export_csv(),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=resource-plans.csv"},
        )

    @app.post("/api/query", response_model=QuestionResponse)
    def query(req: QuestionRequest, request: Request):
        """Single-shot natural-language question; answered by the external chat endpoint."""
        repo: FacilityRepository = request.app.state.repository
        insights = repo.insights()
        context = stats_context(insights["stats"], insights["regions"])
        try:
            return QuestionResponse(answer=_ask_with_timeout(req.question, context))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except AssistantError as e:
            raise HTTPException(status_code=502, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Query error: {e}")

    return app


logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
