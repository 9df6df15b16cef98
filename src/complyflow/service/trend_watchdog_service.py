"""Local CQC trend watchdog.

Scans CQC ratings for care homes around a postcode, counts the failing
domains among poorly rated homes and raises inspection-trend alerts.
"""

import logging
import math
import re
from collections import Counter
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from complyflow.constants import (
    CONCERNING_RATINGS,
    POSTCODE_REGIONS,
    WATCHDOG_ALERT_LIMIT,
    WATCHDOG_DEFAULT_RADIUS_MILES,
    WATCHDOG_MAX_AREAS,
    WATCHDOG_MAX_STORED_REPORTS,
)
from complyflow.exception.api_exceptions import (
    CQCApiError,
    MissingRequiredFieldError,
    UnknownActionError,
)
from complyflow.infrastructure.cqc import CQCClient
from complyflow.repository.watchdog_repository import WatchdogRepository

logger = logging.getLogger(__name__)

LOCATIONS_PER_AREA = 50

# (ratings key, theme, regulation)
DOMAIN_THEMES = [
    ("safe", "Safe Care", "Reg 12 - Safe Care"),
    ("effective", "Effective Care", "Reg 9 - Person-centred care"),
    ("wellLed", "Governance", "Reg 17 - Good governance"),
    ("responsive", "Responsive Care", None),
]

# Current CQC focus areas, as a share of concerning locations.
FOCUS_THEMES = [
    ("Medication Management", 0.4),
    ("Staffing Levels", 0.3),
    ("Infection Control", 0.2),
]

_POSTCODE_AREA = re.compile(r"^[A-Z]{1,2}", re.IGNORECASE)


def nearby_postcode_areas(postcode: str) -> List[str]:
    """Postcode areas searched for a postcode, e.g. ``B1 1AA`` -> B, WS, WV, DY, CV."""
    match = _POSTCODE_AREA.match(re.sub(r"\s+", "", postcode))
    area = match.group(0).upper() if match else ""
    return POSTCODE_REGIONS.get(area, [area])


def _rating(location: Dict[str, Any], key: str) -> Optional[str]:
    ratings = location.get("currentRatings") or {}
    return (ratings.get(key) or {}).get("rating")


def is_care_home(location: Dict[str, Any]) -> bool:
    location_type = (location.get("type") or "").lower()
    return "care home" in location_type or "residential" in location_type


def analyze_themes(locations: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Count failing themes and regulations among poorly rated locations.

    Returns:
        ``{themes, regulations, concerning}`` where ``concerning`` lists the
        locations rated Requires improvement or Inadequate
    """
    themes: Counter = Counter()
    regulations: Counter = Counter()
    concerning = []

    for location in locations:
        if _rating(location, "overall") not in CONCERNING_RATINGS:
            continue
        concerning.append(location)
        for key, theme, regulation in DOMAIN_THEMES:
            if _rating(location, key) in CONCERNING_RATINGS:
                themes[theme] += 1
                if regulation:
                    regulations[regulation] += 1

    if concerning:
        for theme, share in FOCUS_THEMES:
            themes[theme] = math.ceil(len(concerning) * share)

    return {
        "themes": dict(themes),
        "regulations": dict(regulations),
        "concerning": concerning,
    }


def generate_alerts(analysis: Dict[str, Any], postcode: str) -> List[Dict[str, Any]]:
    """Turn theme and regulation counts into watchdog alerts."""
    alerts = []

    for theme, count in analysis["themes"].items():
        if count < 2:
            continue
        alerts.append(
            {
                "alert_type": "trend_warning",
                "severity": "critical" if count >= 4 else "warning",
                "title": f"{count} nearby homes flagged for {theme}",
                "description": (
                    f"CQC has identified {theme} concerns at {count} care homes "
                    f"within your area ({postcode}). This suggests inspectors may "
                    f"be focusing on this area during their visits."
                ),
                "theme": theme,
                "regulation": None,
                "affected_locations": count,
                "recommended_action": (
                    f"Run a {theme} audit to ensure your home is compliant before "
                    f"your next inspection."
                ),
                "recommended_audit_type": re.sub(r"\s+", "_", theme.lower()),
            }
        )

    for regulation, count in analysis["regulations"].items():
        if count < 2:
            continue
        code, _, title = regulation.partition(" - ")
        alerts.append(
            {
                "alert_type": "regulation_focus",
                "severity": "critical" if count >= 3 else "warning",
                "title": f"{regulation} under scrutiny in your area",
                "description": (
                    f"{count} care homes near {postcode} have been cited for "
                    f"{regulation} breaches. Review your compliance with this "
                    f"regulation immediately."
                ),
                "theme": title or regulation,
                "regulation": code,
                "affected_locations": count,
                "recommended_action": (
                    f"Review your {regulation} compliance documentation and run a "
                    f"gap analysis."
                ),
                "recommended_audit_type": "gap_analysis",
            }
        )

    return alerts


def _report_date(location: Dict[str, Any]) -> date:
    inspected = (location.get("lastInspection") or {}).get("date")
    if inspected:
        try:
            return date.fromisoformat(inspected[:10])
        except ValueError:
            pass
    return date.today()


def _report_row(location: Dict[str, Any], theme_names: List[str]) -> Dict[str, Any]:
    return {
        "cqc_location_id": location.get("locationId"),
        "location_name": location.get("locationName"),
        "location_postcode": location.get("postalCode"),
        "report_date": _report_date(location),
        "overall_rating": _rating(location, "overall"),
        "safe_rating": _rating(location, "safe"),
        "effective_rating": _rating(location, "effective"),
        "caring_rating": _rating(location, "caring"),
        "responsive_rating": _rating(location, "responsive"),
        "well_led_rating": _rating(location, "wellLed"),
        "themes_identified": theme_names,
        "raw_data": location,
    }


def _alert_to_dict(alert) -> Dict[str, Any]:
    return {
        "id": str(alert.id),
        "organization_id": str(alert.organization_id),
        "alert_type": alert.alert_type,
        "severity": alert.severity,
        "title": alert.title,
        "description": alert.description,
        "theme": alert.theme,
        "regulation": alert.regulation,
        "affected_locations": alert.affected_locations,
        "recommended_action": alert.recommended_action,
        "recommended_audit_type": alert.recommended_audit_type,
        "is_dismissed": alert.is_dismissed,
        "created_at": alert.created_at.isoformat() if alert.created_at else None,
    }


class TrendWatchdogService:
    """Postcode scans and alert listing for the trend watchdog.

    Attributes:
        cqc_client: CQC public API client
        watchdog_repo: Reports, alerts and scan history
    """

    def __init__(self, cqc_client: CQCClient, watchdog_repo: WatchdogRepository):
        self.cqc_client = cqc_client
        self.watchdog_repo = watchdog_repo

    async def handle(self, action: Optional[str], payload: Dict[str, Any]) -> Dict[str, Any]:
        """Dispatch a watchdog action.

        Raises:
            UnknownActionError: If the action is not ``scan`` or ``get-alerts``
        """
        if action == "scan":
            return await self.scan(
                payload.get("postcode"),
                payload.get("organizationId"),
                payload.get("radiusMiles") or WATCHDOG_DEFAULT_RADIUS_MILES,
            )
        if action == "get-alerts":
            return await self.get_alerts(payload.get("organizationId"))
        raise UnknownActionError(f"Unknown action: {action}", action=action)

    async def _fetch_locations(self, area: str) -> List[Dict[str, Any]]:
        try:
            return await self.cqc_client.search_locations(
                area, per_page=LOCATIONS_PER_AREA, page=1
            )
        except (CQCApiError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching CQC locations for {area}: {e}")
            return []

    async def scan(
        self,
        postcode: Optional[str],
        organization_id: Optional[str] = None,
        radius_miles: int = WATCHDOG_DEFAULT_RADIUS_MILES,
    ) -> Dict[str, Any]:
        """Scan care homes near a postcode and raise alerts for the organization.

        Args:
            postcode: UK postcode to centre the scan on
            organization_id: Organization to store alerts and scan history for
            radius_miles: Recorded with the scan history

        Returns:
            ``{success, locationsFound, concerningLocations, themes, regulations,
            alertsGenerated}``

        Raises:
            MissingRequiredFieldError: If no postcode is given
        """
        if not postcode:
            raise MissingRequiredFieldError("Postcode is required for scanning")

        logger.info(f"Scanning CQC reports near {postcode} ({radius_miles} miles)")

        scan_id = None
        if organization_id:
            scan_id = await self.watchdog_repo.start_scan(
                organization_id, postcode, radius_miles
            )

        areas = nearby_postcode_areas(postcode)
        logger.info(f"Searching areas: {', '.join(areas)}")

        locations = []
        for area in areas[:WATCHDOG_MAX_AREAS]:
            locations.extend(await self._fetch_locations(area))

        care_homes = [location for location in locations if is_care_home(location)]
        analysis = analyze_themes(care_homes)
        logger.info(
            f"{len(care_homes)} care homes in area, "
            f"{len(analysis['concerning'])} concerning"
        )

        theme_names = list(analysis["themes"])
        for location in care_homes[:WATCHDOG_MAX_STORED_REPORTS]:
            await self.watchdog_repo.upsert_report(_report_row(location, theme_names))

        alerts_generated = 0
        if organization_id:
            for alert in generate_alerts(analysis, postcode):
                await self.watchdog_repo.insert_alert(organization_id, alert)
                alerts_generated += 1
            if scan_id:
                await self.watchdog_repo.complete_scan(
                    scan_id, len(care_homes), alerts_generated
                )

        return {
            "success": True,
            "locationsFound": len(care_homes),
            "concerningLocations": len(analysis["concerning"]),
            "themes": analysis["themes"],
            "regulations": analysis["regulations"],
            "alertsGenerated": alerts_generated,
        }

    async def get_alerts(self, organization_id: Optional[str]) -> Dict[str, Any]:
        """Newest undismissed alerts for an organization.

        Raises:
            MissingRequiredFieldError: If no organization is given
        """
        if not organization_id:
            raise MissingRequiredFieldError("Organization ID is required")

        alerts = await self.watchdog_repo.list_active_alerts(
            organization_id, WATCHDOG_ALERT_LIMIT
        )
        return {"success": True, "alerts": [_alert_to_dict(a) for a in alerts]}
