from __future__ import annotations

import logging
from datetime import date

from dateutil.relativedelta import relativedelta

from ..knowledge.base import NON_CONVICTION, Jurisdiction, ReliefType, Requirement
from .classifier import OffenseMatch, classify_offense
from .errors import InvalidCase
from .models import (
    ELIGIBLE,
    FAILED,
    INELIGIBLE,
    NEEDS_MORE_INFO,
    OUTCOMES,
    SATISFIED,
    AdditionalFactors,
    Case,
    EligibilityResult,
    NextStep,
    ReliefVerdict,
    RequirementOutcome,
)

logger = logging.getLogger(__name__)

UNCLASSIFIED_REASON = "offense could not be classified"
OPEN_CASE_REASON = "pending case must resolve first"


def validate_case(case: Case) -> None:
    """Raise InvalidCase listing every field the evaluator cannot work without.

    A case with no offense id and no offense text is missing input, not an
    unclassified offense: there is nothing to classify. Text that matches no
    offense is a different matter and yields needs_more_info verdicts.
    """
    problems: list[str] = []
    if case.offense_date is None:
        problems.append("offense_date")
    if case.outcome is None:
        problems.append("outcome")
    elif case.outcome not in OUTCOMES:
        problems.append(f"outcome ({case.outcome!r} is not a known outcome)")
    if not case.offense_id and not (case.offense_text or "").strip():
        problems.append("offense")
    if (
        case.sentence is not None
        and case.sentence.all_completed
        and case.effective_completion_date is None
    ):
        problems.append("completion_date")
    if problems:
        raise InvalidCase(problems)


def evaluate(
    case: Case,
    factors: AdditionalFactors,
    jurisdiction: Jurisdiction,
    as_of: date | None = None,
) -> EligibilityResult:
    """Screen one case against a jurisdiction's rule table.

    Pure function of its inputs: no I/O and no shared state, so it is safe to
    call repeatedly or concurrently. Raises InvalidCase for incomplete cases;
    an offense that cannot be classified is a normal result, not an error.
    """
    validate_case(case)
    as_of = as_of or date.today()
    match = classify_offense(case, jurisdiction)

    verdicts: list[ReliefVerdict] = []
    for relief in jurisdiction.relief_types:
        if not match.is_classified:
            verdict = ReliefVerdict(
                relief_type=relief.id,
                name=relief.name,
                verdict=NEEDS_MORE_INFO,
                reasons=(UNCLASSIFIED_REASON,),
            )
        else:
            verdict = _evaluate_relief(relief, case, factors, match, jurisdiction, as_of)

        if factors.seeking_actual_innocence and relief.eligibility_standard == "actual_innocence":
            verdict = ReliefVerdict(
                relief_type=relief.id,
                name=relief.name,
                verdict=NEEDS_MORE_INFO,
                reasons=(
                    "Actual innocence claim must be proven to the court; "
                    "waiting periods do not apply",
                ),
                requirements=verdict.requirements,
            )
        verdicts.append(verdict)

    programs = tuple(
        program.id
        for program in jurisdiction.special_programs
        if _program_applies(program, case, factors)
    )

    best = _select_best_option(verdicts, jurisdiction)
    logger.debug(
        "Evaluated case in %s: method=%s offense=%s verdicts=%s",
        jurisdiction.id,
        match.method,
        match.offense.id if match.offense else None,
        {v.relief_type: v.verdict for v in verdicts},
    )

    return EligibilityResult(
        jurisdiction_id=jurisdiction.id,
        as_of=as_of,
        offense_id=match.offense.id if match.offense else None,
        offense_name=_offense_name(match),
        classification_method=match.method,
        verdicts=tuple(verdicts),
        special_programs=programs,
        matched_categories=tuple(c.id for c in match.categories),
        best_option=best.id if best else None,
        reasoning=tuple(_reasoning(case, match, verdicts, programs, jurisdiction)),
        next_steps=tuple(_next_steps(best, verdicts, factors, jurisdiction)),
        required_documents=tuple(_required_documents(best, case)),
        estimated_timeline=(
            best.timeline or "Timeline varies by case"
            if best
            else "No immediate timeline available"
        ),
    )


# ------------------------------------------------------------------
# Per relief type
# ------------------------------------------------------------------


def _exclusion_reason(relief: ReliefType, match: OffenseMatch) -> str | None:
    for category in match.categories:
        if relief.id in category.excluded_from or category.id in relief.exclusions:
            return f"{category.category} offenses are excluded from {relief.name}"
    if match.offense is not None and relief.id in match.offense.excluded_from:
        return f"{match.offense.name} is excluded from {relief.name}"
    return None


def _evaluate_relief(
    relief: ReliefType,
    case: Case,
    factors: AdditionalFactors,
    match: OffenseMatch,
    jurisdiction: Jurisdiction,
    as_of: date,
) -> ReliefVerdict:
    excluded = _exclusion_reason(relief, match)
    if excluded:
        return ReliefVerdict(
            relief_type=relief.id,
            name=relief.name,
            verdict=INELIGIBLE,
            reasons=(excluded,),
        )

    if factors.has_open_cases:
        return ReliefVerdict(
            relief_type=relief.id,
            name=relief.name,
            verdict=NEEDS_MORE_INFO,
            reasons=(OPEN_CASE_REASON,),
        )

    outcomes: list[RequirementOutcome] = []
    waiting_ends: date | None = None
    for requirement in relief.requirements:
        if requirement.type == "waiting_period":
            outcome, waiting_ends = _check_waiting_period(
                requirement, relief, case, match, jurisdiction, as_of
            )
        elif requirement.type == "completion":
            outcome = _check_completion(requirement, case)
        else:
            outcome = _outcome(
                requirement,
                NEEDS_MORE_INFO,
                f"{requirement.description} (requires review by you or an attorney)",
            )
        outcomes.append(outcome)

    required = [o for o in outcomes if o.required]
    if any(o.status == FAILED for o in required):
        verdict = INELIGIBLE
    elif any(o.status == NEEDS_MORE_INFO for o in required):
        verdict = NEEDS_MORE_INFO
    else:
        verdict = ELIGIBLE

    return ReliefVerdict(
        relief_type=relief.id,
        name=relief.name,
        verdict=verdict,
        reasons=tuple(o.reason for o in outcomes if o.status != SATISFIED)
        or (f"All requirements for {relief.name} appear to be met",),
        requirements=tuple(outcomes),
        waiting_period_ends=waiting_ends,
    )


def _outcome(requirement: Requirement, status: str, reason: str) -> RequirementOutcome:
    return RequirementOutcome(
        requirement_id=requirement.id,
        type=requirement.type,
        required=requirement.required,
        status=status,
        reason=reason,
    )


def _check_waiting_period(
    requirement: Requirement,
    relief: ReliefType,
    case: Case,
    match: OffenseMatch,
    jurisdiction: Jurisdiction,
    as_of: date,
) -> tuple[RequirementOutcome, date | None]:
    if case.is_conviction:
        if match.severity is None:
            return _outcome(
                requirement,
                NEEDS_MORE_INFO,
                "Offense severity is unknown, so the waiting period cannot be determined",
            ), None
        offense_type = match.severity
    else:
        offense_type = NON_CONVICTION

    period = jurisdiction.waiting_period(relief.id, offense_type)
    if period is None:
        label = offense_type.replace("_", "-")
        return _outcome(
            requirement,
            FAILED,
            f"{relief.name} is not available for {label} offenses",
        ), None

    if period.years == 0:
        return _outcome(requirement, SATISFIED, "No waiting period applies"), None

    completed = case.effective_completion_date
    if completed is None:
        return _outcome(
            requirement,
            NEEDS_MORE_INFO,
            f"Sentence completion date is needed to check the {period.years}-year waiting period",
        ), None

    ends = completed + relativedelta(years=period.years)
    if as_of < ends:
        return _outcome(
            requirement,
            FAILED,
            f"{period.years}-year waiting period not yet completed "
            f"({_remaining(as_of, ends)} remaining, ends {ends.isoformat()})",
        ), ends
    return _outcome(
        requirement,
        SATISFIED,
        f"{period.years}-year waiting period completed on {ends.isoformat()}",
    ), ends


def _check_completion(requirement: Requirement, case: Case) -> RequirementOutcome:
    if case.sentence is not None and case.sentence.all_completed:
        return _outcome(requirement, SATISFIED, "All sentence requirements completed")
    if not case.is_conviction and case.sentence is None:
        return _outcome(requirement, SATISFIED, "No sentence was imposed")
    return _outcome(requirement, FAILED, "All sentence requirements must be completed first")


def _remaining(start: date, end: date) -> str:
    delta = relativedelta(end, start)
    parts = []
    if delta.years:
        parts.append(f"{delta.years} year{'s' if delta.years != 1 else ''}")
    if delta.months:
        parts.append(f"{delta.months} month{'s' if delta.months != 1 else ''}")
    if not parts:
        parts.append(f"{delta.days} day{'s' if delta.days != 1 else ''}")
    return ", ".join(parts)


def _program_applies(program, case: Case, factors: AdditionalFactors) -> bool:
    gated = False
    if program.max_age_at_offense is not None:
        gated = True
        if case.age_at_offense is None or case.age_at_offense > program.max_age_at_offense:
            return False
    if program.requires_trafficking_victim:
        gated = True
        if not factors.is_trafficking_victim:
            return False
    return gated


# ------------------------------------------------------------------
# Aggregation helpers
# ------------------------------------------------------------------


def _offense_name(match: OffenseMatch) -> str | None:
    if match.offense is not None:
        return match.offense.name
    if match.categories:
        return match.categories[0].category
    return None


def _select_best_option(
    verdicts: list[ReliefVerdict], jurisdiction: Jurisdiction
) -> ReliefType | None:
    candidates = [v for v in verdicts if v.verdict != INELIGIBLE]
    if not candidates:
        return None
    ranked = sorted(
        candidates,
        key=lambda v: (
            0 if v.verdict == ELIGIBLE else 1,
            jurisdiction.relief_type(v.relief_type).priority,
        ),
    )
    return jurisdiction.relief_type(ranked[0].relief_type)


def _reasoning(
    case: Case,
    match: OffenseMatch,
    verdicts: list[ReliefVerdict],
    programs: tuple[str, ...],
    jurisdiction: Jurisdiction,
) -> list[str]:
    lines = [
        f"Analyzed case: {_offense_name(match) or case.offense_text or case.offense_id}",
        f"Offense date: {case.offense_date.isoformat()}",
        f"Case outcome: {case.outcome.replace('_', ' ')}",
    ]
    if not match.is_classified:
        lines.append(
            "The offense could not be matched to a known offense; "
            "an attorney can confirm which rules apply"
        )
    elif match.method == "keyword":
        lines.append(
            f"Matched your description to {match.offense.name} "
            f"(keyword '{match.matched_keyword}')"
        )
    for category in match.categories:
        lines.append(f"Falls within the excluded category: {category.category}")
    if match.offense is not None:
        lines.extend(match.offense.special_considerations)
    for program_id in programs:
        program = jurisdiction.special_program(program_id)
        lines.append(f"May qualify for {program.name}")

    eligible = [v for v in verdicts if v.verdict == ELIGIBLE]
    pending = [v for v in verdicts if v.verdict == NEEDS_MORE_INFO]
    if eligible:
        lines.append(f"Found {len(eligible)} potential relief option(s)")
    elif pending:
        lines.append(f"{len(pending)} relief option(s) need more information")
    else:
        lines.append("No immediate relief options available, but circumstances may change")
    return lines


def _next_steps(
    best: ReliefType | None,
    verdicts: list[ReliefVerdict],
    factors: AdditionalFactors,
    jurisdiction: Jurisdiction,
) -> list[NextStep]:
    steps: list[NextStep] = []

    if factors.has_open_cases:
        steps.append(NextStep(
            id="resolve_open_cases",
            title="Resolve Pending Cases",
            description="Relief is generally unavailable while another case is open.",
            priority="high",
            timeframe="Before filing",
        ))

    if best is None:
        steps.append(NextStep(
            id="wait_or_consult",
            title="Consider Future Options",
            description="While no immediate relief is available, circumstances may change over time.",
            priority="medium",
            timeframe="Ongoing",
            resources=({
                "title": "Legal Aid DC",
                "url": "https://www.legalaiddc.org",
                "type": "legal_aid",
            },),
        ))
        return steps

    best_verdict = next(v for v in verdicts if v.relief_type == best.id)
    if best.eligibility_standard == "automatic" and best_verdict.verdict == ELIGIBLE:
        steps.append(NextStep(
            id="monitor_automatic",
            title="Monitor Automatic Processing",
            description="Your case appears eligible for automatic processing. Monitor your record periodically.",
            priority="high",
            timeframe=best.timeline or "Within 1-2 years",
            resources=({
                "title": "DC Courts Record Check",
                "url": "https://www.dccourts.gov",
                "type": "court_info",
            },),
        ))
    else:
        steps.append(NextStep(
            id="file_motion",
            title="File Court Motion",
            description=f"Prepare and file a {best.name} with the {jurisdiction.court_name}.",
            priority="high",
            timeframe="Next 30-60 days",
            resources=({
                "title": "DC Superior Court Forms",
                "url": "https://www.dccourts.gov/services/forms-and-fees",
                "type": "form",
            },),
        ))

    if best.attorney_recommended or best_verdict.verdict == NEEDS_MORE_INFO:
        steps.append(NextStep(
            id="consult_attorney",
            title="Consult with Attorney",
            description="Consider consulting with an attorney experienced in DC criminal record relief.",
            priority="high",
            timeframe="Before filing",
            resources=({
                "title": "DC Bar Lawyer Referral Service",
                "url": "https://www.dcbar.org/attorney-directory",
                "type": "attorney_directory",
            },),
        ))

    steps.append(NextStep(
        id="gather_documents",
        title="Gather Required Documents",
        description="Collect all necessary documentation for your case.",
        priority="medium",
        timeframe="Before filing",
    ))
    return steps


def _required_documents(best: ReliefType | None, case: Case) -> list[str]:
    if best is None:
        return []
    documents = ["Certified copy of criminal record", "Court case documents"]
    if case.is_conviction:
        documents.append("Proof of sentence completion")
    if best.eligibility_standard != "automatic":
        documents.extend(["Motion filing forms", "Supporting affidavits"])
    return documents
