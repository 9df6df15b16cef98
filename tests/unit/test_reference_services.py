"""Unit tests for the help centre, A/B experiments and reference data."""

import logging

import pytest

from complyflow.data.ab_tests import LANDING_PAGE_HERO
from complyflow.exception.api_exceptions import InvalidInputError, ResourceNotFoundError
from complyflow.service.experiment_service import ExperimentService
from complyflow.service.help_service import HelpService
from complyflow.service.reference_service import ReferenceService


class TestHelpService:
    """Tests for HelpService."""

    def test_no_query_returns_all(self) -> None:
        service = HelpService()

        assert service.get_articles() == service.articles

    def test_query_matches_title_case_insensitively(self) -> None:
        titles = [a["title"] for a in HelpService().get_articles("SPONSORED")]

        assert "Managing Sponsored Workers" in titles

    def test_query_with_no_match(self) -> None:
        assert HelpService().get_articles("zzzz-not-there") == []

    def test_get_by_id(self) -> None:
        article = HelpService().get_article_by_id("upgrading-plan")

        assert article["title"] == "Upgrading Your Plan"

    def test_unknown_id_raises(self) -> None:
        with pytest.raises(ResourceNotFoundError):
            HelpService().get_article_by_id("missing")


class TestExperimentService:
    """Tests for ExperimentService."""

    def test_unset_flag_is_control(self) -> None:
        assert ExperimentService().get_variant(LANDING_PAGE_HERO) == "control"

    def test_listed_variant_is_used(self) -> None:
        service = ExperimentService({"landing-page-hero": "test-a"})

        assert service.get_variant(LANDING_PAGE_HERO) == "test-a"

    def test_unlisted_variant_falls_back(self) -> None:
        service = ExperimentService({"landing-page-hero": "test-z"})

        assert service.get_variant(LANDING_PAGE_HERO) == "control"

    def test_conversion_is_tagged(self, caplog) -> None:
        service = ExperimentService({"landing-page-hero": "test-a"})

        with caplog.at_level(logging.INFO, logger="complyflow.analytics"):
            payload = service.track_conversion(
                "signup_completed", LANDING_PAGE_HERO, {"plan": "pro"}
            )

        assert payload == {
            "plan": "pro",
            "ab_test_flag": "landing-page-hero",
            "ab_test_variant": "test-a",
        }
        assert "signup_completed" in caplog.text

    def test_view_event_name(self) -> None:
        assert ExperimentService().track_view(LANDING_PAGE_HERO) == {
            "event": "landing-page-hero_viewed",
            "variant": "control",
        }


class TestReferenceService:
    """Tests for ReferenceService."""

    def test_regulations_sections(self) -> None:
        assert set(ReferenceService().regulations()) == {
            "saf_quality_statements",
            "home_office_rules",
            "horizon_scanning",
        }

    def test_inspection_overview_sections(self) -> None:
        overview = ReferenceService().inspection_overview()

        assert set(overview) == {
            "key_questions",
            "quality_statements",
            "scenarios",
            "scoring_rubric",
        }

    def test_questions_by_scenario_match_its_key_questions(self) -> None:
        questions = ReferenceService().inspection_questions(scenario_id="MANAGER_SAFE")

        assert questions
        assert all(q["key_question"] == "safe" for q in questions)

    def test_questions_by_role_include_all_role(self) -> None:
        questions = ReferenceService().inspection_questions(role="manager")

        assert {q["target_role"] for q in questions} <= {"manager", "all"}

    def test_unknown_scenario_raises(self) -> None:
        with pytest.raises(ResourceNotFoundError):
            ReferenceService().inspection_questions(scenario_id="NOPE")

    def test_unknown_key_question_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            ReferenceService().inspection_questions(key_question="kind")

    def test_no_filter_returns_every_question(self) -> None:
        service = ReferenceService()

        assert len(service.inspection_questions()) > len(
            service.inspection_questions(key_question="safe")
        )
