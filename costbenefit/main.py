"""FastAPI application for the cost-benefit evaluator -- REST endpoints."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from costbenefit.ai.service import AIAnalysisRequest, run_ai_analysis
from costbenefit.bookmarks import decode_bookmark, encode_bookmark
from costbenefit.config.settings import Settings
from costbenefit.engine.calculator import CostBenefitAnalyzer
from costbenefit.engine.result import AnalysisResult
from costbenefit.errors import InputValidationError
from costbenefit.models.inputs import normalize_inputs
from costbenefit.storage import InMemoryFieldStore

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Cost-Benefit Evaluator API", version="0.1.0")

# CORS: allow the local front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

analyzer = CostBenefitAnalyzer()

# In-memory field store (replaced by DB later)
field_store = InMemoryFieldStore()


class AnalyzeRequest(BaseModel):
    fields: dict[str, Any] = Field(default_factory=dict)


class SaveFieldsRequest(BaseModel):
    fields: dict[str, Any]


class AIAnalysisBody(BaseModel):
    provider: Optional[str] = None
    model: str = ""
    api_key: str = ""
    fields: dict[str, Any] = Field(default_factory=dict)


def _run_analysis(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Analyse raw field values, mapping validation failures to HTTP 422."""
    try:
        result = analyzer.analyze_raw(raw)
    except InputValidationError as e:
        logger.info(f"Analysis blocked: {e.message}")
        raise HTTPException(
            status_code=422, detail={"field": e.field, "message": e.message}
        )

    body = _analysis_to_dict(result)
    body["bookmark"] = encode_bookmark(result.inputs)
    return body


@app.post("/api/analyze")
async def analyze(body: AnalyzeRequest):
    """Run the cost-benefit analysis on raw form values."""
    return _run_analysis(body.fields)


@app.get("/api/analyze")
async def analyze_bookmark(request: Request):
    """Run the analysis on the fields encoded in a bookmark query string."""
    return _run_analysis(decode_bookmark(request.url.query))


@app.put("/api/sessions/{session_id}/fields")
async def save_fields(session_id: str, body: SaveFieldsRequest):
    """Store raw field values for a session."""
    field_store.save(session_id, body.fields)
    return {"session_id": session_id, "fields": field_store.load(session_id)}


@app.get("/api/sessions/{session_id}/fields")
async def load_fields(session_id: str):
    """Return the stored field values for a session (empty when unknown)."""
    return {"session_id": session_id, "fields": field_store.load(session_id)}


@app.post("/api/sessions/{session_id}/analyze")
async def analyze_session(session_id: str):
    """Run the analysis on a session's stored field values."""
    return _run_analysis(field_store.load(session_id))


@app.post("/api/ai-analysis")
async def ai_analysis(body: AIAnalysisBody):
    """Request a free-text assessment from the selected AI provider."""
    inputs = normalize_inputs(body.fields, analyzer.config)
    request = AIAnalysisRequest(
        provider=body.provider, model=body.model, api_key=body.api_key
    )
    result = await run_ai_analysis(
        request, inputs, settings=settings, config=analyzer.config
    )
    if result.ok:
        return {"result": result.result}
    return {"error": result.error}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


def serve() -> None:
    """Run the API with uvicorn (``costbenefit-api`` entry point)."""
    uvicorn.run("costbenefit.main:app", host="0.0.0.0", port=8000)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _analysis_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Convert an AnalysisResult to a JSON-safe dict.

    An unreachable break-even is reported as ``None`` with
    ``breakeven_reachable`` set to False.
    """
    risk = result.risk
    return {
        "inputs": result.inputs.to_dict(),
        "costs": {
            "total_costs": result.costs.total_costs,
            "occupation_multiplier": result.costs.occupation_multiplier,
        },
        "revenues": {
            "direct": result.revenues.direct,
            "monthly": result.revenues.monthly,
            "yearly": result.revenues.yearly,
            "scenarios": {
                scenario.value: revenue
                for scenario, revenue in result.revenues.scenarios.items()
            },
        },
        "user_scenarios": {
            scenario.value: users for scenario, users in result.user_scenarios.items()
        },
        "roi": {
            scenario.value: {"value": sr.value, "percentage": sr.percentage}
            for scenario, sr in result.roi.scenarios.items()
        },
        "roi_rating": result.roi_rating.value,
        "breakeven": result.breakeven if result.breakeven_reachable else None,
        "breakeven_reachable": result.breakeven_reachable,
        "evaluation": result.evaluation,
        "risk": {
            "score": risk.score,
            "level": risk.level.value,
            "details": risk.details,
            "mitigations": risk.mitigations,
            "factors": [
                {
                    "factor_id": f.factor_id,
                    "label": f.label,
                    "contribution": f.contribution,
                    "details": list(f.details),
                    "mitigations": list(f.mitigations),
                }
                for f in risk.factors
            ],
        },
    }
