"""
Rules API - FastAPI router for authoring-time rule tools.
"""
import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Optional

from .state import engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rules", tags=["rules"])


# Pydantic models for API
class ValidateRequest(BaseModel):
    """Request model for validating a rule list. rules may be any JSON value."""
    rules: Any = None


class ValidationResponse(BaseModel):
    """Response model for validation."""
    valid: bool
    errors: list[str]


class TestRulesRequest(BaseModel):
    """Request model for previewing rules against sample answers."""
    rules: list[dict]
    sample_answers: dict[str, Any] = {}
    base_price: float = 0
    base_callout_fee: float = 0
    total_questions: Optional[int] = None


class SuggestRequest(BaseModel):
    """Request model for building rules from a template."""
    template_rules: Any = None
    questions: list[dict] = []


# Endpoints

@router.post("/validate", response_model=ValidationResponse)
async def validate_rules(request: ValidateRequest):
    """Validate a rule list without saving it."""
    result = engine.validate_rules(request.rules)
    if not result.valid:
        logger.info("Rule validation failed with %d errors", len(result.errors))
    return ValidationResponse(valid=result.valid, errors=result.errors)


@router.post("/test")
async def test_rules(request: TestRulesRequest):
    """Run rules against sample answers exactly as a live submission would."""
    try:
        result = engine.test_rules(
            request.rules,
            request.sample_answers,
            request.base_price,
            request.base_callout_fee,
        )
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = result.to_dict()
    response["customer_display"] = engine.for_customer(result)
    response["internal_display"] = engine.for_internal(result)
    if request.total_questions is not None:
        response["confidence"] = engine.confidence(result, request.total_questions)
    return response


@router.post("/suggest")
async def suggest_rules(request: SuggestRequest):
    """Build a starting rule list from template rules for a form's questions."""
    rules = engine.generate_suggested_rules(request.template_rules, request.questions)
    return {"rules": rules}
