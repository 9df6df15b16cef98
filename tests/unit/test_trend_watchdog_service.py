"""Unit tests for the local CQC trend watchdog."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from complyflow.exception.api_exceptions import (
    MissingRequiredFieldError,
    UnknownActionError,
)
from complyflow.service.trend_watchdog_service import (
    TrendWatchdogService,
    analyze_themes,
    generate_alerts,
    is_care_home,
    nearby_postcode_areas,
)


def _location(overall: str, safe: str = "Good", well_led: str = "Good", **extra):
    return {
        "locationId": extra.get("location_id", "1-100"),
        "locationName": "Oak House",
        "postalCode": "B1 1AA",
        "type": "Social Care Org - Care home service with nursing",
        "currentRatings": {
            "overall": {"rating": overall},
            "safe": {"rating": safe},
            "effective": {"rating": "Good"},
            "wellLed": {"rating": well_led},
            "responsive": {"rating": "Good"},
        },
        "lastInspection": {"date": "2025-11-20"},
    }


@pytest.fixture
def cqc_client() -> MagicMock:
    client = MagicMock()
    client.search_locations = AsyncMock(return_value=[])
    return client


@pytest.fixture
def watchdog_repo() -> MagicMock:
    repo = MagicMock()
    repo.start_scan = AsyncMock(return_value="scan_1")
    repo.complete_scan = AsyncMock(return_value=None)
    repo.upsert_report = AsyncMock(return_value=None)
    repo.insert_alert = AsyncMock(return_value=None)
    repo.list_active_alerts = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def service(cqc_client: MagicMock, watchdog_repo: MagicMock) -> TrendWatchdogService:
    return TrendWatchdogService(cqc_client, watchdog_repo)


class TestNearbyPostcodeAreas:
    """Tests for nearby_postcode_areas."""

    def test_birmingham_region(self) -> None:
        assert nearby_postcode_areas("B1 1AA") == ["B", "WS", "WV", "DY", "CV"]

    def test_two_letter_area(self) -> None:
        assert nearby_postcode_areas("ls6 2ab") == ["LS", "WF", "BD", "HX", "HD"]

    def test_unknown_area_searches_itself(self) -> None:
        assert nearby_postcode_areas("EX4 4QJ") == ["EX"]


class TestIsCareHome:
    def test_matches_care_home_and_residential(self) -> None:
        assert is_care_home({"type": "Care home service without nursing"})
        assert is_care_home({"type": "Residential"})
        assert not is_care_home({"type": "Dentist"})


class TestAnalyzeThemes:
    """Tests for analyze_themes."""

    def test_counts_failing_domains_of_concerning_homes(self) -> None:
        locations = [
            _location("Requires improvement", safe="Inadequate"),
            _location("Inadequate", safe="Requires improvement", well_led="Inadequate"),
            _location("Good", safe="Inadequate"),
        ]

        analysis = analyze_themes(locations)

        assert len(analysis["concerning"]) == 2
        assert analysis["themes"]["Safe Care"] == 2
        assert analysis["themes"]["Governance"] == 1
        assert analysis["regulations"]["Reg 12 - Safe Care"] == 2

    def test_focus_themes_scale_with_concerning_count(self) -> None:
        analysis = analyze_themes([_location("Inadequate") for _ in range(5)])

        assert analysis["themes"]["Medication Management"] == 2
        assert analysis["themes"]["Staffing Levels"] == 2
        assert analysis["themes"]["Infection Control"] == 1

    def test_no_concerning_homes(self) -> None:
        analysis = analyze_themes([_location("Good")])

        assert analysis == {"themes": {}, "regulations": {}, "concerning": []}


class TestGenerateAlerts:
    """Tests for generate_alerts."""

    def test_theme_and_regulation_alerts(self) -> None:
        analysis = {
            "themes": {"Safe Care": 4, "Governance": 1},
            "regulations": {"Reg 12 - Safe Care": 2},
        }

        alerts = generate_alerts(analysis, "B1 1AA")

        assert len(alerts) == 2
        trend, regulation = alerts
        assert trend["alert_type"] == "trend_warning"
        assert trend["severity"] == "critical"
        assert trend["recommended_audit_type"] == "safe_care"
        assert regulation["alert_type"] == "regulation_focus"
        assert regulation["severity"] == "warning"
        assert regulation["regulation"] == "Reg 12"
        assert regulation["theme"] == "Safe Care"


class TestHandle:
    """Tests for TrendWatchdogService.handle and scan."""

    async def test_unknown_action_raises(self, service: TrendWatchdogService) -> None:
        with pytest.raises(UnknownActionError, match="Unknown action: purge"):
            await service.handle("purge", {})

    async def test_scan_requires_postcode(self, service: TrendWatchdogService) -> None:
        with pytest.raises(MissingRequiredFieldError, match="Postcode is required"):
            await service.handle("scan", {"organizationId": "org_test"})

    async def test_get_alerts_requires_org(self, service: TrendWatchdogService) -> None:
        with pytest.raises(MissingRequiredFieldError, match="Organization ID is required"):
            await service.handle("get-alerts", {})

    async def test_scan_searches_first_three_areas(
        self, service: TrendWatchdogService, cqc_client: MagicMock
    ) -> None:
        await service.scan("B1 1AA")

        areas = [c.args[0] for c in cqc_client.search_locations.call_args_list]
        assert areas == ["B", "WS", "WV"]

    async def test_undecodable_area_response_is_skipped(
        self, service: TrendWatchdogService, cqc_client: MagicMock
    ) -> None:
        cqc_client.search_locations.side_effect = [
            ValueError("Expecting value: line 1 column 1 (char 0)"),
            [_location("Good")],
            [],
        ]

        result = await service.scan("B1 1AA")

        assert result["locationsFound"] == 1

    async def test_scan_stores_reports_and_alerts(
        self,
        service: TrendWatchdogService,
        cqc_client: MagicMock,
        watchdog_repo: MagicMock,
    ) -> None:
        """Poorly rated homes raise alerts and the scan is completed."""
        cqc_client.search_locations.side_effect = [
            [_location("Inadequate", safe="Inadequate") for _ in range(2)],
            [],
            httpx.ConnectError("refused"),
        ]

        result = await service.handle(
            "scan", {"postcode": "B1 1AA", "organizationId": "org_test"}
        )

        assert result["success"] is True
        assert result["locationsFound"] == 2
        assert result["concerningLocations"] == 2
        assert result["alertsGenerated"] == watchdog_repo.insert_alert.await_count
        assert result["alertsGenerated"] > 0
        assert watchdog_repo.upsert_report.await_count == 2
        watchdog_repo.start_scan.assert_awaited_once_with("org_test", "B1 1AA", 10)
        watchdog_repo.complete_scan.assert_awaited_once_with(
            "scan_1", 2, result["alertsGenerated"]
        )

    async def test_scan_without_org_stores_no_alerts(
        self,
        service: TrendWatchdogService,
        cqc_client: MagicMock,
        watchdog_repo: MagicMock,
    ) -> None:
        cqc_client.search_locations.return_value = [_location("Inadequate")]

        result = await service.scan("B1 1AA")

        assert result["alertsGenerated"] == 0
        watchdog_repo.start_scan.assert_not_awaited()
        watchdog_repo.insert_alert.assert_not_awaited()
