"""API route aggregation.

All routers registered here get mounted in main.py under the versioned
prefix (/api/1.0 by default). Authorization is declared per route with
guard(...) dependencies, so open routes (health, login, registration)
live next to guarded ones.
"""

from fastapi import APIRouter

from assetdesk.api.asset_groups import router as asset_groups_router
from assetdesk.api.assets import router as assets_router
from assetdesk.api.auth import router as auth_router
from assetdesk.api.companies import router as companies_router
from assetdesk.api.health import router as health_router
from assetdesk.api.statuses import router as statuses_router
from assetdesk.api.users import router as users_router
from assetdesk.api.vendors import router as vendors_router
from assetdesk.config import settings

api_router = APIRouter(prefix=settings.api_prefix)

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(companies_router, tags=["companies"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(assets_router, tags=["assets"])
api_router.include_router(asset_groups_router, tags=["asset-groups"])
api_router.include_router(vendors_router, tags=["vendors"])
api_router.include_router(statuses_router, tags=["asset-status"])
