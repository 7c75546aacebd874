from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from eventsnap.application.verification import VerificationCodeService
from eventsnap.domain.entities import VerificationPurpose
from eventsnap.domain.errors import InvalidOrExpiredCode, StoreUnavailable
from eventsnap.presentation.dependencies import get_verification_service, rate_limit
from eventsnap.schemas.requests import VerificationConfirmIn, VerificationIssueIn
from eventsnap.schemas.responses import OkOut, VerificationIssuedOut
from eventsnap.settings import Settings, get_settings

router = APIRouter(prefix="/verification", tags=["Verification"])


@router.post(
    "/{purpose}",
    status_code=202,
    response_model=VerificationIssuedOut,
    dependencies=[Depends(rate_limit("verification"))],
)
async def post_issue_code(
    purpose: VerificationPurpose,
    body: VerificationIssueIn,
    service: Annotated[VerificationCodeService, Depends(get_verification_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    try:
        code = await service.issue(body.email, purpose)
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="verification temporarily unavailable",
        )
    # TODO: hand the code to the email service once outbound delivery exists
    return VerificationIssuedOut(debug_code=code if settings.app_env == "dev" else None)


@router.post(
    "/{purpose}/confirm",
    response_model=OkOut,
    dependencies=[Depends(rate_limit("verification-confirm"))],
)
async def post_confirm_code(
    purpose: VerificationPurpose,
    body: VerificationConfirmIn,
    service: Annotated[VerificationCodeService, Depends(get_verification_service)],
):
    try:
        await service.validate(body.email, body.code, purpose)
    except InvalidOrExpiredCode:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="invalid or expired code"
        )
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="verification temporarily unavailable",
        )
    return OkOut()
