from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping

from ..engine.errors import RuleTableError

SEVERITIES = ("infraction", "misdemeanor", "felony")
NON_CONVICTION = "non_conviction"


@dataclass(frozen=True)
class Offense:
    id: str
    name: str
    keywords: tuple[str, ...]
    statutes: tuple[str, ...]
    severity: str  # "infraction", "misdemeanor", "felony"
    category: str
    is_excluded: bool = False
    excluded_from: frozenset[str] = frozenset()  # relief type ids
    special_considerations: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExcludedOffense:
    id: str
    category: str
    description: str
    statutes: tuple[str, ...]
    excluded_from: frozenset[str]
    reasoning: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class Requirement:
    id: str
    description: str
    type: str  # "documentation", "waiting_period", "completion", "court_filing"
    required: bool = True


@dataclass(frozen=True)
class ReliefType:
    id: str
    name: str
    description: str
    requirements: tuple[Requirement, ...]
    eligibility_standard: str  # "automatic", "actual_innocence", "interests_of_justice"
    exclusions: frozenset[str] = frozenset()  # excluded offense ids
    waiting_period_years: int | None = None
    priority: int = 10  # lower ranks first when picking the best option
    timeline: str = ""
    filing_fee: int = 0
    fee_waiver_available: bool = False
    attorney_recommended: bool = False
    document_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class SpecialProgram:
    id: str
    name: str
    description: str
    eligibility_requirements: tuple[str, ...]
    benefits: tuple[str, ...]
    application_process: tuple[str, ...]
    max_age_at_offense: int | None = None
    requires_trafficking_victim: bool = False


@dataclass(frozen=True)
class WaitingPeriod:
    relief_type: str
    offense_type: str  # a severity, or NON_CONVICTION
    years: int
    start_event: str = "completion_date"


@dataclass(frozen=True)
class DocumentTemplate:
    document_type: str
    title: str
    body: str  # Jinja2 source
    required_fields: tuple[str, ...] = ()  # dotted paths into the render context
    required_copies: int = 2
    special_instructions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Jurisdiction:
    id: str
    name: str
    effective_date: date
    court_name: str
    fee_payable_to: str
    offenses: tuple[Offense, ...]
    relief_types: tuple[ReliefType, ...]
    excluded_offenses: tuple[ExcludedOffense, ...]
    special_programs: tuple[SpecialProgram, ...]
    waiting_periods: tuple[WaitingPeriod, ...]
    document_templates: Mapping[str, DocumentTemplate] = field(default_factory=dict)

    def __post_init__(self):
        # read-only view so the table cannot be edited after load
        object.__setattr__(
            self, "document_templates", MappingProxyType(dict(self.document_templates))
        )

    def relief_type(self, relief_type_id: str) -> ReliefType | None:
        return next((r for r in self.relief_types if r.id == relief_type_id), None)

    def offense(self, offense_id: str) -> Offense | None:
        return next((o for o in self.offenses if o.id == offense_id), None)

    def excluded_offense(self, excluded_id: str) -> ExcludedOffense | None:
        return next(
            (e for e in self.excluded_offenses if e.id == excluded_id), None
        )

    def special_program(self, program_id: str) -> SpecialProgram | None:
        return next(
            (p for p in self.special_programs if p.id == program_id), None
        )

    def waiting_period(
        self, relief_type_id: str, offense_type: str
    ) -> WaitingPeriod | None:
        for period in self.waiting_periods:
            if (
                period.relief_type == relief_type_id
                and period.offense_type == offense_type
            ):
                return period
        return None

    def validate(self) -> None:
        """Check the table's cross references; raise RuleTableError listing every problem."""
        problems: list[str] = []
        relief_ids = {r.id for r in self.relief_types}
        excluded_ids = {e.id for e in self.excluded_offenses}

        for label, ids in (
            ("offense", [o.id for o in self.offenses]),
            ("relief type", [r.id for r in self.relief_types]),
            ("excluded offense", [e.id for e in self.excluded_offenses]),
            ("special program", [p.id for p in self.special_programs]),
        ):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            for dup in duplicates:
                problems.append(f"duplicate {label} id '{dup}'")

        for offense in self.offenses:
            if offense.severity not in SEVERITIES:
                problems.append(
                    f"offense '{offense.id}' has unknown severity '{offense.severity}'"
                )
            for rid in sorted(offense.excluded_from - relief_ids):
                problems.append(
                    f"offense '{offense.id}' is excluded from undefined relief type '{rid}'"
                )

        for excluded in self.excluded_offenses:
            for rid in sorted(excluded.excluded_from - relief_ids):
                problems.append(
                    f"excluded offense '{excluded.id}' references undefined relief type '{rid}'"
                )

        for relief in self.relief_types:
            for eid in sorted(relief.exclusions - excluded_ids):
                problems.append(
                    f"relief type '{relief.id}' references undefined exclusion '{eid}'"
                )
            for doc_type in relief.document_types:
                if doc_type not in self.document_templates:
                    problems.append(
                        f"relief type '{relief.id}' needs missing template '{doc_type}'"
                    )

        for period in self.waiting_periods:
            if period.relief_type not in relief_ids:
                problems.append(
                    f"waiting period references undefined relief type '{period.relief_type}'"
                )
            if period.offense_type not in SEVERITIES + (NON_CONVICTION,):
                problems.append(
                    f"waiting period for '{period.relief_type}' has unknown offense type "
                    f"'{period.offense_type}'"
                )

        if problems:
            raise RuleTableError(self.id, problems)
