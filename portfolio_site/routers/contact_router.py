"""Contact form API route."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from portfolio_site.config import Settings, get_settings
from portfolio_site.core.middleware import limiter
from portfolio_site.exceptions import PortfolioException
from portfolio_site.models.contact import ContactMessage, ContactResult
from portfolio_site.services import contact_service

router = APIRouter()


@router.post(
    "/contact",
    response_model=ContactResult,
    summary="Send a contact form message",
    description="""
    Emails the submitted name, address and message to the site owner.

    **Rate Limited:** 5 requests/minute per IP to prevent abuse.
    """,
    responses={
        200: {"content": {"application/json": {"example": {"success": True}}}},
        422: {"description": "Missing or invalid fields"},
        500: {
            "description": "Email could not be sent",
            "content": {"application/json": {"example": {"success": False, "message": "Email could not be sent"}}},
        },
    },
)
@limiter.limit("5/minute")
async def send_contact_message(
    request: Request,
    body: ContactMessage,
    settings: Settings = Depends(get_settings),
):
    """Send the contact email.

    Delivery failures are answered in the form's own `{success, message}`
    shape rather than the generic error envelope.
    """
    try:
        await contact_service.send_contact_email(body, settings)
    except PortfolioException as e:
        return JSONResponse(
            status_code=e.status_code,
            content=ContactResult(success=False, message=e.message).model_dump(),
        )
    return ContactResult(success=True)
