"""Dashboard route: personalized landing page for any signed-in user."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from editorial_portal.auth.gate import require_view
from editorial_portal.routes.deps import PortalContext, get_portal
from editorial_portal.services.dashboard import DashboardView, build_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", dependencies=[Depends(require_view("dashboard"))])
async def dashboard(portal: Annotated[PortalContext, Depends(get_portal)]) -> DashboardView:
    return build_dashboard(portal.session)
