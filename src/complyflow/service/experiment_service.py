"""A/B test variant assignment and event tracking.

Variants come from the configured feature flags. Exposures and conversions
are written to the ``complyflow.analytics`` logger.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from complyflow.data.ab_tests import CONTROL_VARIANT

logger = logging.getLogger(__name__)
analytics_logger = logging.getLogger("complyflow.analytics")


class ExperimentService:
    """Resolves the active variant of an A/B test.

    Attributes:
        flags: Feature flag name to active variant
    """

    def __init__(self, flags: Optional[Mapping[str, str]] = None):
        self.flags = dict(flags or {})

    def get_variant(self, config: Dict[str, Any]) -> str:
        """Active variant, or ``control`` when the flag is unset or not a listed variant."""
        value = self.flags.get(config["flag_name"])
        if value and value in config["variants"]:
            return value
        return CONTROL_VARIANT

    def track_conversion(
        self,
        event_name: str,
        config: Dict[str, Any],
        properties: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Record a conversion event tagged with the test's flag and variant.

        Returns:
            The recorded event properties
        """
        payload = {
            **(properties or {}),
            "ab_test_flag": config["flag_name"],
            "ab_test_variant": self.get_variant(config),
        }
        analytics_logger.info(f"{event_name} {payload}")
        return payload

    def track_view(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Record that the test was shown, as ``<flag>_viewed``."""
        event_name = f"{config['flag_name']}_viewed"
        payload = {"variant": self.get_variant(config)}
        analytics_logger.info(f"{event_name} {payload}")
        return {"event": event_name, **payload}
