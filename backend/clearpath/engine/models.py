from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import GenerationError

OUTCOMES = ("convicted", "dismissed", "acquitted", "no_papered", "nolle_prosequi")

ELIGIBLE = "eligible"
INELIGIBLE = "ineligible"
NEEDS_MORE_INFO = "needs_more_info"

# requirement outcomes
SATISFIED = "satisfied"
FAILED = "failed"

DISCLAIMER = (
    "This is a preliminary, informational screening only. It is not legal "
    "advice and does not guarantee any outcome. Final eligibility is decided "
    "by the court; consult a licensed attorney before filing."
)


@dataclass(frozen=True)
class Sentence:
    jail_months: int = 0
    probation_months: int = 0
    fine_amount: float = 0.0
    community_service_hours: int = 0
    all_completed: bool = False
    completion_date: date | None = None


@dataclass(frozen=True)
class Case:
    offense_id: str | None = None
    offense_text: str | None = None
    offense_date: date | None = None
    outcome: str | None = None  # one of OUTCOMES
    sentence: Sentence | None = None
    completion_date: date | None = None
    age_at_offense: int | None = None
    case_id: str | None = None
    case_number: str | None = None

    @property
    def is_conviction(self) -> bool:
        return self.outcome == "convicted"

    @property
    def effective_completion_date(self) -> date | None:
        if self.completion_date is not None:
            return self.completion_date
        if self.sentence is not None:
            return self.sentence.completion_date
        return None


@dataclass(frozen=True)
class AdditionalFactors:
    has_open_cases: bool = False
    is_trafficking_victim: bool = False
    seeking_actual_innocence: bool = False
    additional_info: str | None = None


@dataclass(frozen=True)
class PersonalInfo:
    first_name: str = ""
    last_name: str = ""
    middle_name: str | None = None
    date_of_birth: date | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    attorney_name: str | None = None
    attorney_bar_number: str | None = None


@dataclass(frozen=True)
class RequirementOutcome:
    requirement_id: str
    type: str
    required: bool
    status: str  # SATISFIED, FAILED, NEEDS_MORE_INFO
    reason: str


@dataclass(frozen=True)
class ReliefVerdict:
    relief_type: str
    name: str
    verdict: str  # ELIGIBLE, INELIGIBLE, NEEDS_MORE_INFO
    reasons: tuple[str, ...]
    requirements: tuple[RequirementOutcome, ...] = ()
    waiting_period_ends: date | None = None


@dataclass(frozen=True)
class NextStep:
    id: str
    title: str
    description: str
    priority: str  # "high", "medium", "low"
    timeframe: str
    resources: tuple[dict, ...] = ()


@dataclass(frozen=True)
class EligibilityResult:
    jurisdiction_id: str
    as_of: date
    offense_id: str | None
    offense_name: str | None
    classification_method: str | None
    verdicts: tuple[ReliefVerdict, ...]
    special_programs: tuple[str, ...] = ()
    matched_categories: tuple[str, ...] = ()
    best_option: str | None = None
    reasoning: tuple[str, ...] = ()
    next_steps: tuple[NextStep, ...] = ()
    required_documents: tuple[str, ...] = ()
    estimated_timeline: str = ""
    disclaimer: str = DISCLAIMER

    def verdict_for(self, relief_type: str) -> ReliefVerdict | None:
        return next((v for v in self.verdicts if v.relief_type == relief_type), None)

    @property
    def is_classified(self) -> bool:
        return self.classification_method is not None


@dataclass(frozen=True)
class GeneratedDocument:
    document_type: str
    title: str
    content: str
    required_copies: int
    special_instructions: tuple[str, ...] = ()


@dataclass(frozen=True)
class DocumentPackage:
    relief_type: str
    relief_name: str
    court_name: str
    documents: tuple[GeneratedDocument, ...]
    filing_fee: int
    fee_payable_to: str
    fee_waiver_available: bool
    filing_instructions: tuple[str, ...]
    estimated_processing_time: str
    disclaimer: str = DISCLAIMER


@dataclass
class GenerationBatch:
    packages: dict[str, DocumentPackage] = field(default_factory=dict)
    errors: dict[str, GenerationError] = field(default_factory=dict)

    @property
    def fee_total(self) -> int:
        return sum(p.filing_fee for p in self.packages.values())

