"""Keyword rule engine for policy gap analysis."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from complyflow.data.compliance_rules import COMPLIANCE_RULES
from complyflow.exception.api_exceptions import MissingRequiredFieldError

logger = logging.getLogger(__name__)


def evaluate_rule(rule: Dict[str, Any], lower_text: str) -> Dict[str, Any]:
    """Grade lower-cased policy text against one rule."""
    result = {
        "id": rule["id"],
        "name": rule["name"],
        "regulation": rule["regulation"],
    }
    if not any(k.lower() in lower_text for k in rule["keywords"]):
        result.update(
            status="fail",
            gap="CRITICAL MISSING",
            quote=rule["failure_msg"],
            recommendation="Add a new section explicitly covering this topic.",
        )
    elif any(k.lower() in lower_text for k in rule["critical_keywords"]):
        result.update(status="pass", gap="None", quote="Standard met.")
    else:
        result.update(
            status="partial",
            gap="PARTIAL COMPLIANCE",
            quote=rule["failure_msg"],
            recommendation="Review specific clauses related to critical keywords.",
        )
    return result


class GapAnalysisService:
    """Checks policy documents against the compliance rule set."""

    def __init__(self, rules: Optional[Sequence[Dict[str, Any]]] = None):
        self.rules = list(rules if rules is not None else COMPLIANCE_RULES)

    def analyze(self, text: Optional[str]) -> List[Dict[str, Any]]:
        """Evaluate every rule against a policy document.

        Args:
            text: Extracted policy text

        Returns:
            One result per rule with ``status`` pass, partial or fail

        Raises:
            MissingRequiredFieldError: If the text is empty
        """
        if not text or not text.strip():
            raise MissingRequiredFieldError("Policy text is required")

        lower_text = text.lower()
        results = [evaluate_rule(rule, lower_text) for rule in self.rules]
        failed = sum(1 for r in results if r["status"] != "pass")
        logger.info(f"Gap analysis complete: {failed}/{len(results)} rules with gaps")
        return results
