"""
Eligibility evaluator: exclusions, open cases, waiting periods, overrides and
special programs, all evaluated against the DC rule table on a pinned date.
"""
from datetime import date, timedelta

import pytest

from clearpath.engine.eligibility import (
    OPEN_CASE_REASON,
    UNCLASSIFIED_REASON,
    evaluate,
)
from clearpath.engine.errors import InvalidCase
from clearpath.engine.models import (
    ELIGIBLE,
    FAILED,
    INELIGIBLE,
    NEEDS_MORE_INFO,
    SATISFIED,
    Case,
    Sentence,
)

from conftest import AS_OF, make_case, no_factors

SEALING = ("automatic_sealing", "motion_sealing")


def _verdicts(result):
    return {v.relief_type: v.verdict for v in result.verdicts}


def _requirement(result, relief_type, requirement_id):
    verdict = result.verdict_for(relief_type)
    return next(r for r in verdict.requirements if r.requirement_id == requirement_id)


class TestWaitingPeriods:

    def test_marijuana_exactly_ten_years_after_completion(self, dc):
        case = make_case(
            offense_id="marijuana_simple_possession",
            completed_on=date(2016, 6, 1),
        )
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        sealing = result.verdict_for("automatic_sealing")
        assert sealing.verdict == ELIGIBLE
        assert sealing.waiting_period_ends == date(2026, 6, 1)
        assert _requirement(result, "automatic_sealing", "waiting_period").status == SATISFIED
        assert result.best_option == "automatic_sealing"

    def test_one_day_short_of_ten_years(self, dc):
        case = make_case(
            offense_id="marijuana_simple_possession",
            completed_on=date(2016, 6, 2),
        )
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        sealing = result.verdict_for("automatic_sealing")
        assert sealing.verdict == INELIGIBLE
        assert sealing.waiting_period_ends == date(2026, 6, 2)
        assert any("not yet completed" in r for r in sealing.reasons)

    def test_calendar_years_handle_leap_day(self, dc):
        case = make_case(completed_on=date(2016, 2, 29))
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)
        assert result.verdict_for("automatic_sealing").waiting_period_ends == date(2026, 2, 28)

    def test_missing_completion_date_needs_more_info(self, dc):
        case = make_case(sentence=None, completion_date=None)
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        waiting = _requirement(result, "motion_sealing", "waiting_period")
        assert waiting.status == NEEDS_MORE_INFO
        assert result.verdict_for("motion_sealing").verdict == NEEDS_MORE_INFO

    def test_no_waiting_period_row_for_severity(self, dc):
        case = make_case(offense_id="public_urination")
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        sealing = result.verdict_for("automatic_sealing")
        assert sealing.verdict == INELIGIBLE
        assert "infraction" in sealing.reasons[0]

    def test_non_conviction_has_no_waiting_period(self, dc):
        case = make_case(
            outcome="dismissed",
            sentence=None,
            completion_date=None,
            offense_date=date(2026, 1, 10),
        )
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)
        assert result.verdict_for("automatic_sealing").verdict == ELIGIBLE

    def test_incomplete_sentence_fails_completion(self, dc):
        case = make_case(sentence=Sentence(all_completed=False))
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        assert _requirement(result, "automatic_sealing", "sentence_completion").status == FAILED
        assert result.verdict_for("automatic_sealing").verdict == INELIGIBLE

    def test_satisfaction_is_monotonic_in_completion_date(self, dc):
        rank = {FAILED: 0, NEEDS_MORE_INFO: 1, SATISFIED: 2}
        start = date(2014, 1, 1)
        ranks = []
        for offset in range(0, 4 * 365, 30):
            case = make_case(completed_on=start + timedelta(days=offset))
            result = evaluate(case, no_factors(), dc, as_of=AS_OF)
            status = _requirement(result, "automatic_sealing", "waiting_period").status
            ranks.append(rank[status])
        assert ranks == sorted(ranks, reverse=True)
        assert ranks[0] == 2 and ranks[-1] == 0


class TestExclusions:

    def test_dui_by_id_is_ineligible_for_sealing(self, dc):
        result = evaluate(make_case(offense_id="dui"), no_factors(), dc, as_of=AS_OF)
        verdicts = _verdicts(result)
        for relief in SEALING:
            assert verdicts[relief] == INELIGIBLE
        assert "Impaired Driving" in result.verdict_for("automatic_sealing").reasons[0]

    def test_dwi_free_text_matches_dui_exclusion(self, dc):
        case = make_case(offense_id=None, offense_text="I got a DWI last year")
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        assert "dui_dwi" in result.matched_categories
        for relief in SEALING:
            assert result.verdict_for(relief).verdict == INELIGIBLE

    @pytest.mark.parametrize("completed_on", [date(1990, 1, 1), date(2025, 12, 31)])
    def test_exclusion_ignores_dates_and_completion(self, dc, completed_on):
        case = make_case(offense_id="dui", completed_on=completed_on)
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)
        assert result.verdict_for("automatic_sealing").verdict == INELIGIBLE

    def test_exclusion_wins_over_open_cases(self, dc):
        result = evaluate(
            make_case(offense_id="dui"), no_factors(has_open_cases=True), dc, as_of=AS_OF
        )
        assert result.verdict_for("motion_sealing").verdict == INELIGIBLE
        assert result.verdict_for("automatic_expungement").verdict == NEEDS_MORE_INFO

    def test_failure_to_appear_keeps_motion_sealing(self, dc):
        case = make_case(offense_id="failure_to_appear")
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)
        assert result.verdict_for("automatic_sealing").verdict == INELIGIBLE
        assert result.verdict_for("motion_sealing").verdict == NEEDS_MORE_INFO

    def test_category_only_match_is_classified(self, dc):
        case = make_case(offense_id=None, offense_text="stalking")
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        assert result.classification_method == "category"
        assert result.offense_name == "Domestic Violence"
        assert result.verdict_for("motion_sealing").verdict == INELIGIBLE


class TestOpenCasesAndUnclassified:

    def test_open_cases_block_everything(self, dc):
        result = evaluate(make_case(), no_factors(has_open_cases=True), dc, as_of=AS_OF)
        for verdict in result.verdicts:
            assert verdict.verdict == NEEDS_MORE_INFO
            assert verdict.reasons == (OPEN_CASE_REASON,)
        assert result.next_steps[0].id == "resolve_open_cases"

    def test_unclassified_offense_is_not_an_error(self, dc):
        case = make_case(offense_id=None, offense_text="jaywalking")
        result = evaluate(case, no_factors(), dc, as_of=AS_OF)

        assert not result.is_classified
        for verdict in result.verdicts:
            assert verdict.verdict == NEEDS_MORE_INFO
            assert verdict.reasons == (UNCLASSIFIED_REASON,)


class TestOverridesAndPrograms:

    def test_actual_innocence_forces_needs_more_info(self, dc):
        case = make_case(offense_id="dui", completed_on=date(2025, 1, 1))
        result = evaluate(
            case,
            no_factors(seeking_actual_innocence=True, has_open_cases=True),
            dc,
            as_of=AS_OF,
        )
        verdict = result.verdict_for("motion_expungement")
        assert verdict.verdict == NEEDS_MORE_INFO
        assert "actual innocence" in verdict.reasons[0].lower()

    def test_trafficking_program_is_advisory(self, dc):
        case = make_case()
        plain = evaluate(case, no_factors(), dc, as_of=AS_OF)
        flagged = evaluate(case, no_factors(is_trafficking_victim=True), dc, as_of=AS_OF)

        assert "trafficking_survivors" in flagged.special_programs
        assert "trafficking_survivors" not in plain.special_programs
        assert _verdicts(plain) == _verdicts(flagged)

    def test_youth_program_gated_on_age(self, dc):
        young = evaluate(make_case(age_at_offense=22), no_factors(), dc, as_of=AS_OF)
        older = evaluate(make_case(age_at_offense=25), no_factors(), dc, as_of=AS_OF)
        unknown = evaluate(make_case(age_at_offense=None), no_factors(), dc, as_of=AS_OF)

        assert young.special_programs == ("youth_rehabilitation_act",)
        assert older.special_programs == ()
        assert unknown.special_programs == ()


class TestInvalidCases:

    def test_missing_offense_date(self, dc):
        with pytest.raises(InvalidCase) as exc_info:
            evaluate(make_case(offense_date=None), no_factors(), dc, as_of=AS_OF)
        assert exc_info.value.missing_fields == ["offense_date"]

    def test_missing_outcome_and_offense(self, dc):
        case = Case(offense_date=date(2015, 1, 1))
        with pytest.raises(InvalidCase) as exc_info:
            evaluate(case, no_factors(), dc, as_of=AS_OF)
        assert exc_info.value.missing_fields == ["outcome", "offense"]

    def test_unknown_outcome(self, dc):
        with pytest.raises(InvalidCase):
            evaluate(make_case(outcome="pardoned"), no_factors(), dc, as_of=AS_OF)

    def test_completed_sentence_requires_completion_date(self, dc):
        case = make_case(completion_date=None, sentence=Sentence(all_completed=True))
        with pytest.raises(InvalidCase) as exc_info:
            evaluate(case, no_factors(), dc, as_of=AS_OF)
        assert "completion_date" in exc_info.value.missing_fields


class TestResultShape:

    def test_evaluation_is_idempotent(self, dc):
        case = make_case(offense_text="shoplifting", offense_id=None)
        first = evaluate(case, no_factors(), dc, as_of=AS_OF)
        second = evaluate(case, no_factors(), dc, as_of=AS_OF)
        assert first == second

    def test_one_verdict_per_relief_type_in_table_order(self, dc):
        result = evaluate(make_case(), no_factors(), dc, as_of=AS_OF)
        assert [v.relief_type for v in result.verdicts] == [r.id for r in dc.relief_types]

    def test_eligible_automatic_relief_next_steps(self, dc):
        result = evaluate(make_case(), no_factors(), dc, as_of=AS_OF)
        assert result.best_option == "automatic_sealing"
        assert result.next_steps[0].id == "monitor_automatic"
        assert result.estimated_timeline == dc.relief_type("automatic_sealing").timeline
        assert "Proof of sentence completion" in result.required_documents

    def test_result_is_labelled_preliminary(self, dc):
        result = evaluate(make_case(), no_factors(), dc, as_of=AS_OF)
        assert "preliminary" in result.disclaimer.lower()
