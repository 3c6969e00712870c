from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.analytics.schemas import (
    DashboardStats, StreakDay, XPPoint, BodyMetricCreate, BodyMetricResponse
)
from g4g.modules.analytics.service import AnalyticsService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_analytics_service(supabase: Client = Depends(get_supabase)) -> AnalyticsService:
    return AnalyticsService(supabase)


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    profile: Dict = Depends(require_permission("analytics:read")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return service.get_dashboard(profile)


@router.get("/streak-history", response_model=List[StreakDay])
async def get_streak_history(
    days: int = Query(30, ge=1, le=365),
    profile: Dict = Depends(require_permission("analytics:read")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Day-by-day training record, gaps included"""
    return service.get_streak_history(profile["id"], days=days)


@router.get("/xp-trend", response_model=List[XPPoint])
async def get_xp_trend(
    days: Optional[int] = Query(30, ge=1, le=3650),
    profile: Dict = Depends(require_permission("analytics:read")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return service.get_xp_trend(profile["id"], days=days)


@router.get("/body-metrics", response_model=List[BodyMetricResponse])
async def list_body_metrics(
    limit: Optional[int] = Query(None, ge=1, le=365),
    profile: Dict = Depends(require_permission("analytics:read")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return service.list_body_metrics(profile["id"], limit=limit)


@router.post("/body-metrics", response_model=BodyMetricResponse, status_code=201)
async def add_body_metric(
    metric: BodyMetricCreate,
    profile: Dict = Depends(require_permission("analytics:update")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return service.add_body_metric(profile["id"], metric)


@router.delete("/body-metrics/{metric_id}", status_code=204)
async def delete_body_metric(
    metric_id: str,
    profile: Dict = Depends(require_permission("analytics:update")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    service.delete_body_metric(profile["id"], metric_id)
    return None
