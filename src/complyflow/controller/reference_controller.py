"""Reference data, help centre and A/B test endpoints.

Everything here is read from static datasets, so none of it needs auth.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from complyflow.data.ab_tests import AB_TESTS
from complyflow.exception.api_exceptions import ResourceNotFoundError
from complyflow.service.experiment_service import ExperimentService
from complyflow.service.help_service import HelpService
from complyflow.service.reference_service import ReferenceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reference"])


class ConversionRequest(BaseModel):
    event: str = Field(..., min_length=1, description="Conversion event name")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Event properties")

    class Config:
        json_schema_extra = {
            "example": {"event": "signup_clicked", "properties": {"plan": "tier_pro"}}
        }


def _reference(request: Request) -> ReferenceService:
    return request.app.state.reference_service


def _experiment_config(flag_name: str) -> Dict[str, Any]:
    for config in AB_TESTS.values():
        if config["flag_name"] == flag_name:
            return config
    raise ResourceNotFoundError("Experiment", flag_name)


@router.get("/reference/subscription-tiers", summary="Subscription Tiers")
async def subscription_tiers(request: Request) -> List[Dict[str, Any]]:
    return _reference(request).subscription_tiers()


@router.get("/reference/compliance-rules", summary="Gap Analysis Rules")
async def compliance_rules(request: Request) -> List[Dict[str, Any]]:
    return _reference(request).compliance_rules()


@router.get(
    "/reference/regulations",
    summary="Regulatory Reference",
    description="SAF quality statements, Home Office sponsor rules and the 2026 horizon scan.",
)
async def regulations(request: Request) -> Dict[str, Any]:
    return _reference(request).regulations()


@router.get("/reference/knowledge-base", summary="CQC Regulations Text")
async def knowledge_base(request: Request) -> Dict[str, str]:
    return {"content": _reference(request).knowledge_base()}


@router.get(
    "/reference/inspection",
    summary="Inspection Preparation Data",
    description="Key questions, quality statements, scenarios and the scoring rubric.",
)
async def inspection_overview(request: Request) -> Dict[str, Any]:
    return _reference(request).inspection_overview()


@router.get(
    "/reference/inspection/questions",
    summary="Inspection Interview Questions",
    description="Filter by `scenario`, else by `role`, else by `key_question`.",
    responses={
        400: {"description": "Unknown key question"},
        404: {"description": "Unknown scenario"},
    },
)
async def inspection_questions(
    request: Request,
    scenario: Optional[str] = Query(None, description="Scenario ID"),
    role: Optional[str] = Query(None, description="Target role"),
    key_question: Optional[str] = Query(None, description="safe, effective, caring, responsive or well_led"),
) -> List[Dict[str, Any]]:
    return _reference(request).inspection_questions(
        scenario_id=scenario, role=role, key_question=key_question
    )


@router.get("/help/articles", summary="Search Help Articles")
async def help_articles(
    request: Request, q: Optional[str] = Query(None, description="Search text")
) -> List[Dict[str, Any]]:
    help_service: HelpService = request.app.state.help_service
    return help_service.get_articles(q)


@router.get(
    "/help/articles/{article_id}",
    summary="Get Help Article",
    responses={404: {"description": "Article not found"}},
)
async def help_article(article_id: str, request: Request) -> Dict[str, Any]:
    help_service: HelpService = request.app.state.help_service
    return help_service.get_article_by_id(article_id)


@router.get(
    "/experiments/{flag_name}/variant",
    summary="A/B Test Variant",
    responses={404: {"description": "Unknown experiment"}},
)
async def experiment_variant(flag_name: str, request: Request) -> Dict[str, str]:
    experiments: ExperimentService = request.app.state.experiment_service
    config = _experiment_config(flag_name)
    return {"flag": flag_name, "variant": experiments.get_variant(config)}


@router.post("/experiments/{flag_name}/view", summary="Track A/B Test View")
async def experiment_view(flag_name: str, request: Request) -> Dict[str, Any]:
    experiments: ExperimentService = request.app.state.experiment_service
    return experiments.track_view(_experiment_config(flag_name))


@router.post("/experiments/{flag_name}/conversion", summary="Track A/B Test Conversion")
async def experiment_conversion(
    flag_name: str, conversion: ConversionRequest, request: Request
) -> Dict[str, Any]:
    experiments: ExperimentService = request.app.state.experiment_service
    properties = experiments.track_conversion(
        conversion.event, _experiment_config(flag_name), conversion.properties
    )
    return {"event": conversion.event, "properties": properties}
