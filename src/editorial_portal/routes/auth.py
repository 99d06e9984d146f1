"""Login and logout routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from editorial_portal.auth.gate import LOGIN_PATH
from editorial_portal.errors import FormValidationError
from editorial_portal.routes.deps import PortalContext, get_portal

router = APIRouter(tags=["auth"])

MISSING_CREDENTIALS_MESSAGE = "Por favor ingrese usuario y contraseña"


class LoginForm(BaseModel):
    username: str = ""
    password: str = ""


@router.post("/login")
async def login(
    form: LoginForm,
    portal: Annotated[PortalContext, Depends(get_portal)],
) -> dict:
    """Authenticate and store the credential in the browser session."""
    if not form.username.strip() or not form.password:
        raise FormValidationError(
            {
                field: MISSING_CREDENTIALS_MESSAGE
                for field, value in (("username", form.username.strip()), ("password", form.password))
                if not value
            },
        )
    identity = await portal.session.login(form.username.strip(), form.password)
    return {
        "username": identity.subject,
        "user_id": identity.user_id,
        "role": identity.primary_role,
        "redirect": "/dashboard",
    }


@router.post("/logout")
async def logout(portal: Annotated[PortalContext, Depends(get_portal)]) -> RedirectResponse:
    """Clear the credential; calling it twice is harmless."""
    portal.session.logout()
    return RedirectResponse(LOGIN_PATH, status_code=303)
