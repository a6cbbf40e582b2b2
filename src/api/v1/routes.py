"""
API v1 routes.

Defines REST endpoints for the sign-up API.
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_registration_service
from src.api.errors import translate
from src.api.models import ErrorResponse, SignUpRequest, SuccessResponse
from src.domain.exceptions import RegistrationError
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])


@router.post(
    "/signup",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request data or password policy"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
        500: {"model": ErrorResponse, "description": "Server error"},
    },
    summary="Register a new user",
    description="Create an account and start a session. "
    "The access and refresh tokens are set as HttpOnly cookies and never "
    "returned in the response body.",
)
def sign_up(
    request_data: SignUpRequest,
    response: Response,
    service: RegistrationService = Depends(get_registration_service),
) -> SuccessResponse | Response:
    """
    Register a new user and establish their session.

    - **username**: 3-32 letters, digits or underscores
    - **password** / **confirmPassword**: must match and satisfy the password policy
    - **email**: Valid email address
    - **termsAccepted**: must be true
    """
    try:
        outcome = service.register(request_data.to_domain())
    except RegistrationError as exc:
        return translate(exc)

    for cookie in outcome.cookies:
        response.set_cookie(
            key=cookie.name,
            value=cookie.value,
            max_age=cookie.max_age,
            expires=cookie.expires,
            path=cookie.path,
            domain=cookie.domain,
            secure=cookie.secure,
            httponly=cookie.httponly,
            samesite=cookie.samesite,
        )

    return SuccessResponse(message="Account registration completed successfully")
