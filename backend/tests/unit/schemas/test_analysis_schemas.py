"""
Unit Tests for request/response schemas
"""
import pytest
from pydantic import ValidationError

from app.schemas.analysis import (
    AnalysisUpdate,
    ProcessRequest,
    RecommendRequest,
    RecommendationItem,
    RecommendationList,
)
from app.schemas.auth import UserRegister
from app.schemas.common import DataResponse
from app.schemas.project import ProjectUpdate


class TestRecommendRequest:
    def test_variables_accept_string_or_list(self):
        as_text = RecommendRequest(research_type="quantitative", var_independent="motivasi, minat")
        as_list = RecommendRequest(research_type="quantitative", var_independent=["motivasi", "minat"])

        assert as_text.var_independent == "motivasi, minat"
        assert as_list.var_independent == ["motivasi", "minat"]

    def test_everything_optional(self):
        request = RecommendRequest()

        assert request.research_type is None
        assert request.data_summary is None

    def test_research_type_of_any_shape(self):
        assert RecommendRequest(research_type=5).research_type == 5
        assert RecommendRequest(research_type=["mixed"]).research_type == ["mixed"]


class TestProcessRequest:
    def test_extra_fields_ignored(self):
        request = ProcessRequest(project_id="p-1", method="ttest", unexpected=True)

        assert request.method == "ttest"
        assert not hasattr(request, "unexpected")

    def test_numeric_identifiers(self):
        request = ProcessRequest(project_id=42, upload_id=7, method="ttest")

        assert request.project_id == 42
        assert request.upload_id == 7

    def test_params_must_be_object(self):
        with pytest.raises(ValidationError):
            ProcessRequest(project_id="p-1", method="ttest", params=[1, 2])


class TestOtherSchemas:
    def test_register_rejects_malformed_email(self):
        with pytest.raises(ValidationError):
            UserRegister(email="not-an-email", password="x", full_name="Y")

    def test_project_update_drops_unknown_columns(self):
        update = ProjectUpdate(title="Baru", user_id="someone-else")

        assert update.model_dump(exclude_unset=True) == {"title": "Baru"}

    def test_data_envelope(self):
        item = RecommendationItem(
            method="descriptive", name="Statistik Deskriptif",
            description="d", suitability="high", reason="r",
        )
        envelope = DataResponse[RecommendationItem](data=item)

        assert envelope.model_dump()["data"]["suitability"] == "high"

    def test_recommendation_list(self):
        listing = RecommendationList(recommendations=[])

        assert listing.model_dump() == {"recommendations": []}

    def test_analysis_update_fields_optional(self):
        update = AnalysisUpdate(notes="Catatan")

        assert update.status is None
        assert update.notes == "Catatan"
