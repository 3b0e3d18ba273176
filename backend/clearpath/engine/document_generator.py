from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from jinja2 import Environment, StrictUndefined, UndefinedError

from ..knowledge.base import DocumentTemplate, Jurisdiction, ReliefType
from .errors import GenerationError
from .models import (
    ELIGIBLE,
    INELIGIBLE,
    Case,
    DocumentPackage,
    EligibilityResult,
    GeneratedDocument,
    GenerationBatch,
    PersonalInfo,
)

logger = logging.getLogger(__name__)


def _longdate(value: date) -> str:
    return value.strftime("%B %d, %Y").replace(" 0", " ")


_env = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
_env.filters["longdate"] = _longdate


def _resolve(context: dict[str, Any], path: str) -> Any:
    head, *rest = path.split(".")
    value = context.get(head)
    for attr in rest:
        if value is None:
            return None
        value = getattr(value, attr, None)
    return value


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def render_document(
    template: DocumentTemplate, context: dict[str, Any], relief_type: str
) -> GeneratedDocument:
    for path in template.required_fields:
        if _is_blank(_resolve(context, path)):
            raise GenerationError(
                relief_type,
                f"{template.title} requires a value that was not provided",
                field=path,
            )
    try:
        content = _env.from_string(template.body).render(**context)
    except UndefinedError as exc:
        raise GenerationError(
            relief_type, f"{template.title} could not be filled in", field=str(exc)
        ) from exc
    return GeneratedDocument(
        document_type=template.document_type,
        title=template.title,
        content=content,
        required_copies=template.required_copies,
        special_instructions=template.special_instructions,
    )


def _document_types(
    relief: ReliefType, case: Case, result: EligibilityResult
) -> list[str]:
    types = list(relief.document_types)
    if case.is_conviction:
        types.append("certificate_completion")
        if case.sentence is not None and case.sentence.probation_months:
            types.append("probation_completion_certificate")
    if "trafficking_survivors" in result.special_programs:
        types.append("trafficking_victim_affidavit")
    return types


def _filing_instructions(
    relief: ReliefType,
    case: Case,
    result: EligibilityResult,
    jurisdiction: Jurisdiction,
    documents: list[GeneratedDocument],
) -> list[str]:
    instructions = [
        f"File all documents with the {jurisdiction.court_name}",
        "Submit the original plus the required copies listed for each document",
    ]
    if relief.eligibility_standard == "automatic":
        instructions.insert(
            0,
            f"{relief.name} normally happens without a filing; use this package "
            "only if your record has not been cleared by the expected date",
        )
    if relief.filing_fee:
        instructions.append(
            f"Pay the ${relief.filing_fee} filing fee to {jurisdiction.fee_payable_to} "
            "(money order or cashier's check)"
        )
        if relief.fee_waiver_available:
            instructions.append("Fee waivers may be available for qualifying individuals")
    if any(d.document_type == "certificate_of_service" for d in documents):
        instructions.append(
            "Serve copies on the U.S. Attorney's Office and Metropolitan Police Department"
        )
        instructions.append("File proof of service with the court")
    if case.is_conviction:
        instructions.append("Ensure all sentence requirements are completed before filing")
    if "trafficking_survivors" in result.special_programs:
        instructions.append("Trafficking-related cases may qualify for expedited processing")
    instructions.append("Allow 60-90 days for court processing")
    return instructions


def _processing_time(relief: ReliefType, case: Case, result: EligibilityResult) -> str:
    days = 60
    if case.is_conviction:
        days += 30
    if relief.eligibility_standard == "actual_innocence":
        days += 60
    if "trafficking_survivors" in result.special_programs:
        days -= 30
    return f"{max(days - 15, 30)}-{days + 30} days"


def generate_package(
    result: EligibilityResult,
    case: Case,
    personal_info: PersonalInfo,
    jurisdiction: Jurisdiction,
    relief_type: str,
    filing_date: date | None = None,
) -> DocumentPackage:
    """Build the filing package for one relief type.

    Raises GenerationError when the relief type is unknown or ineligible, or
    when a template is missing a required value; no partially blank document
    is ever returned. The result must come from evaluating the same
    jurisdiction.
    """
    if result.jurisdiction_id != jurisdiction.id:
        raise GenerationError(
            relief_type,
            f"result was evaluated for {result.jurisdiction_id}, not {jurisdiction.id}",
        )
    relief = jurisdiction.relief_type(relief_type)
    verdict = result.verdict_for(relief_type)
    if relief is None or verdict is None:
        raise GenerationError(relief_type, "unknown relief type")
    if verdict.verdict == INELIGIBLE:
        raise GenerationError(
            relief_type, f"case is ineligible for {relief.name}"
        )

    context = {
        "personal": personal_info,
        "case": case,
        "offense_name": result.offense_name or case.offense_text,
        "relief": relief,
        "court_name": jurisdiction.court_name,
        "filing_date": filing_date or date.today(),
        "completion_date": case.effective_completion_date,
        "trafficking_victim": "trafficking_survivors" in result.special_programs,
    }

    documents = []
    for doc_type in _document_types(relief, case, result):
        template = jurisdiction.document_templates.get(doc_type)
        if template is None:
            raise GenerationError(relief_type, f"no template for {doc_type}")
        documents.append(render_document(template, context, relief_type))

    return DocumentPackage(
        relief_type=relief.id,
        relief_name=relief.name,
        court_name=jurisdiction.court_name,
        documents=tuple(documents),
        filing_fee=relief.filing_fee,
        fee_payable_to=jurisdiction.fee_payable_to,
        fee_waiver_available=relief.fee_waiver_available,
        filing_instructions=tuple(
            _filing_instructions(relief, case, result, jurisdiction, documents)
        ),
        estimated_processing_time=_processing_time(relief, case, result),
    )


def generate_packages(
    result: EligibilityResult,
    case: Case,
    personal_info: PersonalInfo,
    jurisdiction: Jurisdiction,
    relief_types: Iterable[str] | None = None,
    filing_date: date | None = None,
) -> GenerationBatch:
    """Generate packages for several relief types; one failure never blocks the rest.

    Defaults to every relief type with an eligible verdict.
    """
    if relief_types is None:
        relief_types = [v.relief_type for v in result.verdicts if v.verdict == ELIGIBLE]

    batch = GenerationBatch()
    for relief_type in relief_types:
        try:
            batch.packages[relief_type] = generate_package(
                result, case, personal_info, jurisdiction, relief_type, filing_date
            )
        except GenerationError as exc:
            logger.warning("Document generation failed: %s", exc)
            batch.errors[relief_type] = exc
    return batch
