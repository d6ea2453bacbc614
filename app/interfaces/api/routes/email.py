"""Endpoint sending transactional emails."""

from fastapi import APIRouter

from app.application.use_cases import send_verification_email
from app.interfaces.api.schemas import VerificationEmailRequest, VerificationEmailResponse

router = APIRouter(prefix="/api", tags=["email"])


@router.post("/send-verification-email", response_model=VerificationEmailResponse)
def send_verification_email_endpoint(
    payload: VerificationEmailRequest,
) -> VerificationEmailResponse:
    """Tell a user that their SiPPKe account has been verified."""

    result = send_verification_email(payload.email)
    return VerificationEmailResponse(
        message="Verification email sent successfully",
        info=result.as_info(),
    )
