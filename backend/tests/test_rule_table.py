"""
Rule table integrity: the DC table validates and broken tables are rejected.
"""
from dataclasses import replace

import pytest

from clearpath.engine.errors import RuleTableError, UnknownJurisdiction
from clearpath.knowledge import JURISDICTIONS, get_jurisdiction
from clearpath.knowledge.base import WaitingPeriod


class TestDCRuleTable:

    def test_dc_table_validates(self, dc):
        dc.validate()

    def test_registry_lookup_is_case_insensitive(self, dc):
        assert get_jurisdiction("DC") is dc
        assert set(JURISDICTIONS) == {"dc"}

    def test_unknown_jurisdiction_raises(self):
        with pytest.raises(UnknownJurisdiction):
            get_jurisdiction("maryland")

    def test_offense_exclusions_reference_defined_relief_types(self, dc):
        relief_ids = {r.id for r in dc.relief_types}
        for offense in dc.offenses:
            assert offense.excluded_from <= relief_ids

    def test_failure_to_appear_blocks_only_automatic_sealing(self, dc):
        fta = dc.excluded_offense("failure_to_appear")
        assert fta.excluded_from == frozenset({"automatic_sealing"})
        assert "failure_to_appear" not in dc.relief_type("motion_sealing").exclusions

    def test_waiting_period_lookup(self, dc):
        assert dc.waiting_period("automatic_sealing", "misdemeanor").years == 10
        assert dc.waiting_period("motion_sealing", "misdemeanor").years == 5
        assert dc.waiting_period("motion_sealing", "felony").years == 8
        assert dc.waiting_period("automatic_sealing", "felony") is None

    def test_every_relief_document_has_a_template(self, dc):
        for relief in dc.relief_types:
            for doc_type in relief.document_types:
                assert doc_type in dc.document_templates


class TestBrokenTables:

    def test_waiting_period_for_undefined_relief_type(self, dc):
        broken = replace(
            dc,
            waiting_periods=dc.waiting_periods
            + (WaitingPeriod(relief_type="pardon", offense_type="felony", years=3),),
        )
        with pytest.raises(RuleTableError) as exc_info:
            broken.validate()
        assert any("pardon" in p for p in exc_info.value.problems)

    def test_offense_excluded_from_undefined_relief_type(self, dc):
        bad_offense = replace(dc.offenses[0], excluded_from=frozenset({"pardon"}))
        broken = replace(dc, offenses=(bad_offense,) + dc.offenses[1:])
        with pytest.raises(RuleTableError) as exc_info:
            broken.validate()
        assert "marijuana_simple_possession" in str(exc_info.value)

    def test_duplicate_ids_are_reported(self, dc):
        broken = replace(dc, offenses=dc.offenses + (dc.offenses[0],))
        with pytest.raises(RuleTableError, match="duplicate offense id"):
            broken.validate()

    def test_missing_template_is_reported(self, dc):
        broken = replace(dc, document_templates={})
        with pytest.raises(RuleTableError, match="missing template"):
            broken.validate()


class TestTableImmutability:

    def test_document_templates_are_read_only(self, dc):
        with pytest.raises(TypeError):
            dc.document_templates["petition_sealing"] = None
        assert "petition_sealing" in dc.document_templates

    def test_replaced_table_keeps_templates_read_only(self, dc):
        copy = replace(dc, id="dc_copy")
        assert copy.document_templates == dc.document_templates
        with pytest.raises(TypeError):
            copy.document_templates["extra"] = None
