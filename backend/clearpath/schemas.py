from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from .config import settings
from .engine.models import AdditionalFactors, Case, PersonalInfo, Sentence


class SentenceIn(BaseModel):
    jail_months: int = Field(0, ge=0)
    probation_months: int = Field(0, ge=0)
    fine_amount: float = Field(0.0, ge=0)
    community_service_hours: int = Field(0, ge=0)
    all_completed: bool = False
    completion_date: Optional[date] = None

    def to_model(self) -> Sentence:
        return Sentence(**self.model_dump())


class CaseIn(BaseModel):
    # offense_date and outcome stay optional here so the engine reports
    # every missing field at once
    offense_id: Optional[str] = None
    offense_text: Optional[str] = Field(None, max_length=500)
    offense_date: Optional[date] = None
    outcome: Optional[str] = None
    sentence: Optional[SentenceIn] = None
    completion_date: Optional[date] = None
    age_at_offense: Optional[int] = Field(None, ge=0, le=150)
    case_id: Optional[str] = None
    case_number: Optional[str] = None

    def to_model(self) -> Case:
        data = self.model_dump(exclude={"sentence"})
        return Case(
            **data, sentence=self.sentence.to_model() if self.sentence else None
        )


class AdditionalFactorsIn(BaseModel):
    has_open_cases: bool = False
    is_trafficking_victim: bool = False
    seeking_actual_innocence: bool = False
    additional_info: Optional[str] = Field(None, max_length=2000)

    def to_model(self) -> AdditionalFactors:
        return AdditionalFactors(**self.model_dump())


class PersonalInfoIn(BaseModel):
    first_name: str = Field("", max_length=50)
    last_name: str = Field("", max_length=50)
    middle_name: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    address: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = None
    email: Optional[str] = Field(None, max_length=254)
    attorney_name: Optional[str] = None
    attorney_bar_number: Optional[str] = None

    def to_model(self) -> PersonalInfo:
        return PersonalInfo(**self.model_dump())


class EvaluateRequest(BaseModel):
    jurisdiction: str = settings.default_jurisdiction
    case: CaseIn
    additional_factors: AdditionalFactorsIn = AdditionalFactorsIn()
    as_of: Optional[date] = None


class PackageRequest(EvaluateRequest):
    personal_info: PersonalInfoIn
    relief_types: Optional[list[str]] = None
    filing_date: Optional[date] = None


class _FromAttributes(BaseModel):
    model_config = {"from_attributes": True}


class RequirementOutcomeOut(_FromAttributes):
    requirement_id: str
    type: str
    required: bool
    status: str
    reason: str


class ReliefVerdictOut(_FromAttributes):
    relief_type: str
    name: str
    verdict: str
    reasons: list[str]
    requirements: list[RequirementOutcomeOut]
    waiting_period_ends: Optional[date] = None


class NextStepOut(_FromAttributes):
    id: str
    title: str
    description: str
    priority: str
    timeframe: str
    resources: list[dict]


class EligibilityResultOut(_FromAttributes):
    jurisdiction_id: str
    as_of: date
    offense_id: Optional[str] = None
    offense_name: Optional[str] = None
    classification_method: Optional[str] = None
    verdicts: list[ReliefVerdictOut]
    special_programs: list[str]
    matched_categories: list[str]
    best_option: Optional[str] = None
    reasoning: list[str]
    next_steps: list[NextStepOut]
    required_documents: list[str]
    estimated_timeline: str
    disclaimer: str


class ExplanationOut(BaseModel):
    result: EligibilityResultOut
    explanation: str


class GeneratedDocumentOut(_FromAttributes):
    document_type: str
    title: str
    content: str
    required_copies: int
    special_instructions: list[str]


class DocumentPackageOut(_FromAttributes):
    relief_type: str
    relief_name: str
    court_name: str
    documents: list[GeneratedDocumentOut]
    filing_fee: int
    fee_payable_to: str
    fee_waiver_available: bool
    filing_instructions: list[str]
    estimated_processing_time: str
    disclaimer: str


class GenerationErrorOut(BaseModel):
    relief_type: str
    reason: str
    field: Optional[str] = None


class PackageBatchOut(BaseModel):
    packages: dict[str, DocumentPackageOut]
    errors: dict[str, GenerationErrorOut]
    fee_total: int


class JurisdictionSummary(BaseModel):
    id: str
    name: str
    effective_date: date
