"""
Unit Tests for the Recommendation Rule Table
"""
import pytest

from app.services.recommendation import (
    CATALOG,
    MethodId,
    Recommendation,
    ResearchType,
    Suitability,
    normalize_variables,
    recommend,
)


def methods(recommendations):
    return [r.method.value for r in recommendations]


class TestQuantitativeRules:
    """Quantitative research type"""

    def test_with_both_variable_sets(self):
        """Correlation and regression appear when both variable sets are present"""
        result = recommend("quantitative", None, ["x"], ["y"], None)

        assert methods(result) == ["descriptive", "correlation", "regression", "ttest", "anova"]
        assert [r.suitability for r in result] == [
            Suitability.HIGH, Suitability.HIGH, Suitability.MEDIUM, Suitability.MEDIUM, Suitability.MEDIUM,
        ]

    def test_without_dependent_variables(self):
        result = recommend("quantitative", None, ["x"], [], None)

        assert methods(result) == ["descriptive", "ttest", "anova"]

    def test_without_any_variables(self):
        result = recommend("quantitative")

        assert methods(result) == ["descriptive", "ttest", "anova"]

    def test_blank_string_variables_count_as_empty(self):
        result = recommend("quantitative", None, " , ", "y", None)

        assert "correlation" not in methods(result)

    def test_comma_separated_variables(self):
        result = recommend("quantitative", None, "motivasi, minat", "prestasi", None)

        assert methods(result)[:3] == ["descriptive", "correlation", "regression"]

    def test_descriptive_texts(self):
        first = recommend("quantitative")[0]

        assert first.name == "Statistik Deskriptif"
        assert first.description.startswith("Analisis dasar untuk mengetahui karakteristik data")
        assert first.reason == "Langkah pertama yang wajib dilakukan sebelum analisis lebih lanjut"


class TestQualitativeAndMixedRules:
    """Qualitative and mixed research types"""

    def test_qualitative(self):
        result = recommend("qualitative", None, [], [], None)

        assert methods(result) == ["thematic", "content"]
        assert [r.suitability.value for r in result] == ["high", "medium"]

    def test_mixed(self):
        result = recommend("mixed", None, [], [], None)

        assert methods(result) == ["descriptive", "thematic", "triangulation"]
        assert all(r.suitability is Suitability.HIGH for r in result)

    def test_mixed_uses_mixed_methods_wording(self):
        mixed = recommend("mixed")
        quantitative = recommend("quantitative")
        qualitative = recommend("qualitative")

        assert mixed[0].description != quantitative[0].description
        assert mixed[0].reason == "Langkah pertama untuk komponen kuantitatif"
        assert mixed[1].description != qualitative[0].description
        assert mixed[2].name == "Triangulasi"

    def test_variables_do_not_affect_mixed(self):
        assert methods(recommend("mixed", None, ["x"], ["y"])) == methods(recommend("mixed"))


class TestRecommendationContract:
    """Cross-cutting properties"""

    @pytest.mark.parametrize("research_type", ["experimental", "", None, 42])
    def test_unknown_type_returns_empty_list(self, research_type):
        assert recommend(research_type, None, ["x"], ["y"], None) == []

    @pytest.mark.parametrize("research_type", ["Quantitative", "QUALITATIVE", " mixed"])
    def test_type_must_match_exactly(self, research_type):
        assert recommend(research_type, None, ["x"], ["y"], None) == []

    def test_hypothesis_and_data_summary_do_not_change_output(self):
        base = recommend("quantitative", None, ["x"], ["y"], None)
        with_context = recommend(
            "quantitative", "H1: x mempengaruhi y", ["x"], ["y"], {"rows": 100, "columns": 4}
        )

        assert base == with_context

    def test_every_method_is_in_closed_set(self):
        for rtype in ResearchType:
            for rec in recommend(rtype, None, ["x"], ["y"]):
                assert isinstance(rec.method, MethodId)
                assert rec.suitability in set(Suitability)

    def test_to_dict_shape(self):
        data = recommend("qualitative")[0].to_dict()

        assert data == {
            "method": "thematic",
            "name": "Analisis Tematik",
            "description": "Mengidentifikasi tema dan pola dalam data kualitatif",
            "suitability": "high",
            "reason": "Metode utama untuk analisis data kualitatif",
        }

    def test_catalog_entries_are_immutable(self):
        entry = next(iter(CATALOG.values()))
        with pytest.raises(Exception):
            entry.name = "changed"
        assert isinstance(entry, Recommendation)


class TestNormalizeVariables:
    def test_none(self):
        assert normalize_variables(None) == []

    def test_string(self):
        assert normalize_variables("a, b ,,c") == ["a", "b", "c"]

    def test_list_keeps_order(self):
        assert normalize_variables(["z", " y ", "", None]) == ["z", "y"]
