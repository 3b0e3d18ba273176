from fastapi import APIRouter

from ..engine.document_generator import generate_packages
from ..schemas import (
    DocumentPackageOut,
    GenerationErrorOut,
    PackageBatchOut,
    PackageRequest,
)
from .eligibility import run_evaluation

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("/packages", response_model=PackageBatchOut)
async def create_packages(req: PackageRequest):
    jurisdiction, result = run_evaluation(req)
    batch = generate_packages(
        result,
        req.case.to_model(),
        req.personal_info.to_model(),
        jurisdiction,
        relief_types=req.relief_types,
        filing_date=req.filing_date,
    )
    return PackageBatchOut(
        packages={
            relief: DocumentPackageOut.model_validate(package)
            for relief, package in batch.packages.items()
        },
        errors={
            relief: GenerationErrorOut(
                relief_type=err.relief_type, reason=err.reason, field=err.field
            )
            for relief, err in batch.errors.items()
        },
        fee_total=batch.fee_total,
    )
