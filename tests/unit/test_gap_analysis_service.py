"""Unit tests for the policy gap analysis rule engine."""

import pytest

from complyflow.exception.api_exceptions import MissingRequiredFieldError
from complyflow.service.gap_analysis_service import GapAnalysisService, evaluate_rule

RULE = {
    "id": "safeguarding",
    "name": "Safeguarding Policy",
    "regulation": "Regulation 13 (Safeguarding)",
    "keywords": ["safeguarding", "abuse", "protect"],
    "critical_keywords": ["whistleblowing", "local authority"],
    "failure_msg": "Whistleblowing procedure is not clearly defined or linked.",
}


class TestEvaluateRule:
    """Tests for evaluate_rule."""

    def test_fail_when_topic_absent(self) -> None:
        result = evaluate_rule(RULE, "this policy covers fire safety")

        assert result["status"] == "fail"
        assert result["gap"] == "CRITICAL MISSING"
        assert result["quote"] == RULE["failure_msg"]
        assert result["recommendation"] == "Add a new section explicitly covering this topic."

    def test_partial_without_critical_keyword(self) -> None:
        result = evaluate_rule(RULE, "we protect residents from abuse")

        assert result["status"] == "partial"
        assert result["gap"] == "PARTIAL COMPLIANCE"

    def test_pass_with_critical_keyword(self) -> None:
        result = evaluate_rule(RULE, "safeguarding concerns go to the local authority")

        assert result == {
            "id": "safeguarding",
            "name": "Safeguarding Policy",
            "regulation": "Regulation 13 (Safeguarding)",
            "status": "pass",
            "gap": "None",
            "quote": "Standard met.",
        }


class TestAnalyze:
    """Tests for GapAnalysisService.analyze."""

    def test_one_result_per_rule(self) -> None:
        service = GapAnalysisService()

        results = service.analyze("Our Safeguarding policy includes Whistleblowing.")

        assert len(results) == len(service.rules)
        by_id = {r["id"]: r for r in results}
        assert by_id["safeguarding"]["status"] == "pass"

    def test_matching_is_case_insensitive(self) -> None:
        results = GapAnalysisService([RULE]).analyze("SAFEGUARDING and LOCAL AUTHORITY")

        assert results[0]["status"] == "pass"

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_text_raises(self, text) -> None:
        with pytest.raises(MissingRequiredFieldError, match="Policy text is required"):
            GapAnalysisService().analyze(text)
