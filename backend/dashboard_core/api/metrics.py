"""
Metrics endpoint for performance monitoring.
"""
from fastapi import APIRouter
from dashboard_core.core.performance import PerformanceMonitor

router = APIRouter()


@router.get("/metrics")
async def get_metrics():
    """
    Get performance metrics.

    Returns duration statistics for every tracked operation, including
    ``suggest_charts`` and the overall ``request_duration``.
    """
    return {'performance': PerformanceMonitor.get_all_metrics()}
