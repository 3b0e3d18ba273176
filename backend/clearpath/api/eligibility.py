from fastapi import APIRouter, HTTPException

from ..engine.eligibility import evaluate
from ..engine.errors import InvalidCase, UnknownJurisdiction
from ..engine.explainer import explain_result
from ..engine.models import EligibilityResult
from ..knowledge import get_jurisdiction
from ..knowledge.base import Jurisdiction
from ..schemas import EligibilityResultOut, EvaluateRequest, ExplanationOut

router = APIRouter(prefix="/api/eligibility", tags=["eligibility"])


def run_evaluation(req: EvaluateRequest) -> tuple[Jurisdiction, EligibilityResult]:
    try:
        jurisdiction = get_jurisdiction(req.jurisdiction)
    except UnknownJurisdiction as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    try:
        result = evaluate(
            req.case.to_model(),
            req.additional_factors.to_model(),
            jurisdiction,
            as_of=req.as_of,
        )
    except InvalidCase as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "missing_fields": exc.missing_fields},
        )
    return jurisdiction, result


@router.post("/evaluate", response_model=EligibilityResultOut)
async def evaluate_case(req: EvaluateRequest):
    _, result = run_evaluation(req)
    return EligibilityResultOut.model_validate(result)


@router.post("/explain", response_model=ExplanationOut)
async def explain_case(req: EvaluateRequest):
    jurisdiction, result = run_evaluation(req)
    explanation = await explain_result(result, jurisdiction)
    return ExplanationOut(
        result=EligibilityResultOut.model_validate(result),
        explanation=explanation,
    )
