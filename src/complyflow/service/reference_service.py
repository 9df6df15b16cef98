"""Read-only regulatory reference data served to the web client."""

from typing import Any, Dict, List, Optional

from complyflow.data import cqc_inspection_data
from complyflow.data.compliance_rules import COMPLIANCE_RULES
from complyflow.data.cqc_knowledge_base import CQC_KNOWLEDGE_BASE
from complyflow.data.regulatory_data import (
    HOME_OFFICE_2025_RULES,
    HORIZON_SCANNING_2026,
    SAF_QUALITY_STATEMENTS,
)
from complyflow.data.subscription_tiers import SUBSCRIPTION_TIERS
from complyflow.exception.api_exceptions import InvalidInputError, ResourceNotFoundError


class ReferenceService:
    """Static datasets: pricing tiers, rules, regulations and inspection prep."""

    def subscription_tiers(self) -> List[Dict[str, Any]]:
        return SUBSCRIPTION_TIERS

    def compliance_rules(self) -> List[Dict[str, Any]]:
        return COMPLIANCE_RULES

    def regulations(self) -> Dict[str, Any]:
        """SAF quality statements, Home Office rules and the horizon scan."""
        return {
            "saf_quality_statements": SAF_QUALITY_STATEMENTS,
            "home_office_rules": HOME_OFFICE_2025_RULES,
            "horizon_scanning": HORIZON_SCANNING_2026,
        }

    def knowledge_base(self) -> str:
        return CQC_KNOWLEDGE_BASE

    def inspection_overview(self) -> Dict[str, Any]:
        return {
            "key_questions": cqc_inspection_data.KEY_QUESTIONS,
            "quality_statements": cqc_inspection_data.QUALITY_STATEMENTS,
            "scenarios": cqc_inspection_data.INSPECTION_SCENARIOS,
            "scoring_rubric": cqc_inspection_data.SCORING_RUBRIC,
        }

    def inspection_questions(
        self,
        scenario_id: Optional[str] = None,
        role: Optional[str] = None,
        key_question: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Interview questions filtered by scenario, role or key question.

        At most one filter applies, in that order. With none, every question
        is returned.

        Raises:
            ResourceNotFoundError: If the scenario does not exist
            InvalidInputError: If the key question is not one of the five
        """
        if scenario_id:
            if cqc_inspection_data.get_scenario(scenario_id) is None:
                raise ResourceNotFoundError("Inspection scenario", scenario_id)
            return cqc_inspection_data.questions_for_scenario(scenario_id)
        if role:
            return cqc_inspection_data.questions_by_role(role)
        if key_question:
            if key_question not in cqc_inspection_data.KEY_QUESTIONS:
                raise InvalidInputError(
                    f"Unknown key question: {key_question}", field="key_question"
                )
            return cqc_inspection_data.questions_by_key_question(key_question)
        return cqc_inspection_data.INSPECTION_QUESTIONS
