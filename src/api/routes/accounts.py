from datetime import timedelta

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, EmailStr, Field, field_validator

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.pages import render_password_reset, render_verification_success
from src.api.utils.jwt import generate_jwt
from src.app.services.notifications import INotificationDispatcher
from src.app.services.passwords import MAX_PASSWORD_BYTES, password_fits
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import (
    AuthenticateResponse,
    AuthenticateUseCase,
    CompletePasswordResetResponse,
    CompletePasswordResetUseCase,
    GetProfileUseCase,
    ProfileResponse,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    VerifyAccountUseCase,
)
from src.depends import get_current_user, get_notifier, get_unit_of_work

router = APIRouter()


def links_base_url() -> str:
    """Absolute prefix for links placed in emails"""
    return f"{ApplicationConfig.APP_DOMAIN.rstrip('/')}{ApplicationConfig.ROUTE_PREFIX}"


def check_password_bytes(value: str) -> str:
    if not password_fits(value):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    username: str = Field(..., min_length=1, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return check_password_bytes(value)


@router.post(
    "/api/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notifier),
):
    """
    Create a new account and email its verification link.

    Raises:
        - 400 Bad Request: Username taken or email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        username=request.username, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow, notifier, links_base_url())
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "USERNAME_TAKEN": status.HTTP_400_BAD_REQUEST,
                "EMAIL_TAKEN": status.HTTP_400_BAD_REQUEST,
                "PASSWORD_TOO_LONG": status.HTTP_422_UNPROCESSABLE_ENTITY,
            },
        )

    return result.value


@router.get("/verify-now/{token}", response_class=HTMLResponse)
async def verify_account(token: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Verify an account from the emailed link and render a confirmation page.

    Raises:
        - 401 Unauthorized: Unknown or already used verification token
    """
    use_case = VerifyAccountUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        raise_for_error(result.error, {"INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED})

    return HTMLResponse(render_verification_success(result.value.username))


class AuthenticateRequest(BaseModel):
    """Authenticate HTTP request payload"""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="User password")


@router.post(
    "/api/authenticate", status_code=status.HTTP_200_OK, response_model=AuthenticateResponse
)
async def authenticate(
    request: AuthenticateRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Check credentials and return the account with a bearer token.

    Raises:
        - 404 Not Found: Username not found
        - 401 Unauthorized: Incorrect password
        - 403 Forbidden: Account not verified (only with REQUIRE_VERIFIED_LOGIN)
        - 500 Internal Server Error: Server error
    """
    use_case = AuthenticateUseCase(
        uow, generate_jwt, require_verified=ApplicationConfig.REQUIRE_VERIFIED_LOGIN
    )
    result = await use_case.execute(request.username, request.password)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "WRONG_PASSWORD": status.HTTP_401_UNAUTHORIZED,
                "ACCOUNT_NOT_VERIFIED": status.HTTP_403_FORBIDDEN,
            },
        )

    return result.value


@router.get("/api/authenticate", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_profile(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Return the account behind the bearer token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token, or account gone
    """
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(current_user["account_id"])

    if result.is_err():
        raise_for_error(result.error, {"INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED})

    return result.value


class RequestPasswordResetRequest(BaseModel):
    """Request password reset HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.put(
    "/api/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notifier),
):
    """
    Issue a reset token and email the reset link. Any earlier pending token
    stops working.

    Raises:
        - 404 Not Found: No account with this email
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier,
        links_base_url(),
        token_ttl=timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error, {"USER_NOT_FOUND": status.HTTP_404_NOT_FOUND})

    return result.value


@router.get("/reset-password-now/{token}", response_class=HTMLResponse)
async def reset_password_form(token: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Render the reset form for a pending, unexpired reset token.

    Raises:
        - 401 Unauthorized: Token invalid or expired (not distinguished)
    """
    use_case = ValidateResetTokenUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        raise_for_error(
            result.error, {"INVALID_OR_EXPIRED_TOKEN": status.HTTP_401_UNAUTHORIZED}
        )

    action = f"{ApplicationConfig.ROUTE_PREFIX}/api/reset-password-now"
    return HTMLResponse(render_password_reset(result.value.username, token, action))


class CompletePasswordResetRequest(BaseModel):
    """Complete password reset HTTP request payload"""

    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(..., min_length=1, description="New password")

    @field_validator("new_password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return check_password_bytes(value)


@router.post(
    "/api/reset-password-now",
    status_code=status.HTTP_200_OK,
    response_model=CompletePasswordResetResponse,
)
async def complete_password_reset(
    request: CompletePasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notifier),
):
    """
    Consume the reset token and set the new password.

    Raises:
        - 401 Unauthorized: Token invalid, expired or already used
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    use_case = CompletePasswordResetUseCase(uow, notifier, ApplicationConfig.SUPPORT_EMAIL)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_OR_EXPIRED_TOKEN": status.HTTP_401_UNAUTHORIZED,
                "PASSWORD_TOO_LONG": status.HTTP_422_UNPROCESSABLE_ENTITY,
            },
        )

    return result.value
