"""
Offense classification: id, name and keyword resolution plus exclusion categories.
"""
from datetime import date

from clearpath.engine.classifier import classify_offense, keyword_matches
from clearpath.engine.models import Case


def _case(**kw):
    return Case(offense_date=date(2015, 1, 1), outcome="convicted", **kw)


class TestOffenseResolution:

    def test_exact_id_wins(self, dc):
        match = classify_offense(_case(offense_id="dui"), dc)
        assert match.method == "id"
        assert match.offense.id == "dui"

    def test_unknown_id_falls_back_to_text(self, dc):
        match = classify_offense(
            _case(offense_id="not_a_thing", offense_text="shoplifting at a store"), dc
        )
        assert match.method == "keyword"
        assert match.offense.id == "theft_second_degree"

    def test_exact_name_match(self, dc):
        match = classify_offense(_case(offense_text="  disorderly CONDUCT "), dc)
        assert match.method == "name"
        assert match.offense.id == "disorderly_conduct"

    def test_free_text_dwi(self, dc):
        match = classify_offense(_case(offense_text="I got a DWI last year"), dc)
        assert match.offense.id == "dui"
        assert match.matched_keyword == "dwi"
        assert [c.id for c in match.categories] == ["dui_dwi"]

    def test_longest_keyword_wins(self, dc):
        # "domestic assault" (domestic_violence) beats "assault" (simple_assault)
        match = classify_offense(_case(offense_text="charged with domestic assault"), dc)
        assert match.offense.id == "domestic_violence"
        assert match.matched_keyword == "domestic assault"

    def test_equal_length_tie_goes_to_declaration_order(self, dc):
        # "theft" and "metro" are both five characters; theft is declared first
        match = classify_offense(_case(offense_text="theft on the metro"), dc)
        assert match.offense.id == "theft_second_degree"

    def test_keywords_match_whole_words_only(self):
        assert keyword_matches("owi", "OWI arrest")
        assert not keyword_matches("owi", "knowing possession")
        assert not keyword_matches("gun", "had begun the process")

    def test_category_only_match(self, dc):
        match = classify_offense(_case(offense_text="stalking my ex"), dc)
        assert match.offense is None
        assert match.method == "category"
        assert [c.id for c in match.categories] == ["intrafamily_offenses"]

    def test_unclassified(self, dc):
        match = classify_offense(_case(offense_text="jaywalking"), dc)
        assert not match.is_classified
        assert match.categories == ()

    def test_category_matches_use_resolved_offense_name(self, dc):
        match = classify_offense(_case(offense_id="failure_to_appear"), dc)
        assert [c.id for c in match.categories] == ["failure_to_appear"]

    def test_multiple_categories_are_all_kept(self, dc):
        match = classify_offense(_case(offense_text="armed robbery with a gun"), dc)
        assert {c.id for c in match.categories} == {"crimes_of_violence", "weapons_violations"}
