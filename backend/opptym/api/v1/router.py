"""
API v1 router aggregating all endpoints.
"""
from fastapi import APIRouter

from opptym.api.v1.admin_pricing import router as admin_pricing_router
from opptym.api.v1.auth import router as auth_router
from opptym.api.v1.dashboard import router as dashboard_router
from opptym.api.v1.pricing import router as pricing_router
from opptym.api.v1.projects import router as projects_router
from opptym.api.v1.reports import router as reports_router
from opptym.api.v1.seo_tools import router as seo_tools_router
from opptym.api.v1.submissions import router as submissions_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(dashboard_router)
api_router.include_router(projects_router)
api_router.include_router(submissions_router)
api_router.include_router(seo_tools_router)
api_router.include_router(pricing_router)
api_router.include_router(admin_pricing_router)
api_router.include_router(reports_router)
