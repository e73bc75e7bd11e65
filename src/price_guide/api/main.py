import logging
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Any, Dict, Optional

from price_guide import __version__
from price_guide.config.settings import configure_logging
from price_guide.engine.models import PriceGuide, PriceEstimate
from price_guide.api.rules_api import router as rules_router
from price_guide.api.state import engine, settings

configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Price Guide API",
    description="Rules-based price estimates for intake form submissions",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include rules authoring API
app.include_router(rules_router)


class EstimateRequest(BaseModel):
    answers: Dict[str, Any] = {}
    guide: Dict[str, Any]
    total_questions: Optional[int] = None


class FormatRequest(BaseModel):
    estimate: Dict[str, Any]
    currency: Optional[str] = None


@app.get("/")
async def root():
    return {"status": "online", "message": "Price Guide API Active"}


@app.post("/estimate")
async def calculate_estimate(req: EstimateRequest):
    try:
        guide = PriceGuide.from_dict(req.guide)
    except (ValueError, TypeError) as e:
        logger.warning("Rejected price guide: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    result = engine.estimate(req.answers, guide)
    logger.info("Estimate %s..%s with %d rules applied",
                result.min, result.max, len(result.applied_rules))

    response = result.to_dict()
    response["customer_display"] = engine.for_customer(result, guide.currency)
    response["internal_display"] = engine.for_internal(result, guide.currency)
    if req.total_questions is not None:
        response["confidence"] = engine.confidence(result, req.total_questions)
    return response


@app.post("/format")
async def format_estimate(req: FormatRequest):
    try:
        result = PriceEstimate.from_dict(req.estimate)
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    currency = req.currency or settings.default_currency
    return {
        "customer_display": engine.for_customer(result, currency),
        "internal_display": engine.for_internal(result, currency),
    }
