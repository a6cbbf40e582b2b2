"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Only the payload shape is checked here; registration rules live in the
domain validator so they keep their precedence and error codes.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from src.domain.models import RegistrationRequest


class SignUpRequest(BaseModel):
    """Request model for user sign-up."""

    model_config = ConfigDict(populate_by_name=True)

    username: StrictStr
    password: StrictStr = Field(..., description="Plaintext password (never stored)")
    confirm_password: StrictStr = Field(..., alias="confirmPassword")
    email: StrictStr
    terms_accepted: StrictBool = Field(..., alias="termsAccepted")

    def to_domain(self) -> RegistrationRequest:
        return RegistrationRequest(
            username=self.username,
            password=self.password,
            confirm_password=self.confirm_password,
            email=self.email,
            terms_accepted=self.terms_accepted,
        )


class SuccessResponse(BaseModel):
    """Response model for successful operations."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    success: bool = False
    message: str
    code: str
