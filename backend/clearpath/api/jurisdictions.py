from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from ..engine.errors import UnknownJurisdiction
from ..knowledge import JURISDICTIONS, get_jurisdiction
from ..schemas import JurisdictionSummary

router = APIRouter(prefix="/api/jurisdictions", tags=["jurisdictions"])


@router.get("", response_model=list[JurisdictionSummary])
async def list_jurisdictions():
    return [
        JurisdictionSummary(id=j.id, name=j.name, effective_date=j.effective_date)
        for j in JURISDICTIONS.values()
    ]


@router.get("/{jurisdiction_id}")
async def get_rule_table(jurisdiction_id: str):
    try:
        jurisdiction = get_jurisdiction(jurisdiction_id)
    except UnknownJurisdiction as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return {
        "id": jurisdiction.id,
        "name": jurisdiction.name,
        "effective_date": jurisdiction.effective_date,
        "court_name": jurisdiction.court_name,
        "relief_types": [
            {**asdict(r), "exclusions": sorted(r.exclusions)}
            for r in jurisdiction.relief_types
        ],
        "excluded_offenses": [
            {**asdict(e), "excluded_from": sorted(e.excluded_from)}
            for e in jurisdiction.excluded_offenses
        ],
        "special_programs": [asdict(p) for p in jurisdiction.special_programs],
        "waiting_periods": [asdict(w) for w in jurisdiction.waiting_periods],
        "offenses": [
            {**asdict(o), "excluded_from": sorted(o.excluded_from)}
            for o in jurisdiction.offenses
        ],
    }
