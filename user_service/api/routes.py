"""
API routes - Account lifecycle endpoints.

This module defines the HTTP endpoints:
- POST /users/signup - Begin registration, email the activation code
- POST /users/verify-otp - Activate the account with the emailed code
- POST /users/login - Exchange credentials for access/refresh tokens
- POST /users/refresh - Exchange a refresh token for a new pair
- GET /users/logout - Clear the current session
- GET /users/getusers - List all accounts
- GET /users/current-user - Return the authenticated user
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from user_service.api.dependencies import (
    get_account_service,
    get_optional_session,
    get_session,
)
from user_service.api.models import (
    ActivateRequest,
    ActivateResponse,
    CurrentUserResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenPairResponse,
    UserResponse,
)
from user_service.domain.accounts import AccountService
from user_service.domain.contracts import RegisterCommand
from user_service.domain.exceptions import (
    ConflictError,
    DeliveryError,
    InvalidActivationCodeError,
    InvalidTokenError,
    ValidationError,
)
from user_service.domain.models import SessionContext

router = APIRouter(prefix="/users", tags=["users"])

_email_adapter = TypeAdapter(EmailStr)


@router.post(
    "/signup",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields"},
        422: {"model": ErrorResponse, "description": "Malformed email address"},
        409: {"model": ErrorResponse, "description": "Email or phone already registered"},
        502: {"model": ErrorResponse, "description": "Activation email could not be sent"},
    },
    summary="Register a new user",
    description="Submit name, email, password and phone number. A 4-digit "
    "activation code is emailed; the returned token must accompany it.",
)
async def signup(
    request_data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    try:
        command = RegisterCommand.from_fields(
            request_data.name,
            request_data.email,
            request_data.password,
            request_data.phone_number,
        )
        _email_adapter.validate_python(command.email)
        activation_token = await service.register(command)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except SchemaValidationError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid email address",
        ) from None
    except ConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration failed",
        ) from None
    except DeliveryError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Activation email could not be sent",
        ) from None
    return RegisterResponse(activation_token=activation_token)


@router.post(
    "/verify-otp",
    response_model=ActivateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid token or code"},
        409: {"model": ErrorResponse, "description": "Email or phone already registered"},
    },
    summary="Activate account with activation code",
)
async def verify_otp(
    request_data: ActivateRequest,
    service: AccountService = Depends(get_account_service),
) -> ActivateResponse:
    """
    Activate the account held in the activation token.

    - **activationToken**: token returned by signup
    - **activationCode**: 4-digit code received by email
    """
    try:
        account = await service.activate(
            request_data.activation_token, request_data.activation_code
        )
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired activation token",
        ) from None
    except InvalidActivationCodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid activation code",
        ) from None
    except ConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration failed",
        ) from None
    return ActivateResponse(user=UserResponse.from_domain(account))


@router.post("/login", response_model=LoginResponse, summary="Log in with email and password")
async def login(
    request_data: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """Failed logins return 200 with ``error`` set and null tokens."""
    result = await service.login(request_data.email, request_data.password)
    return LoginResponse(
        user=UserResponse.from_domain(result.account) if result.account else None,
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        error=result.error,
    )


@router.post(
    "/refresh",
    response_model=TokenPairResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid refresh token"}},
    summary="Exchange a refresh token for a new token pair",
)
async def refresh(
    request_data: RefreshRequest,
    service: AccountService = Depends(get_account_service),
) -> TokenPairResponse:
    try:
        pair = await service.refresh(request_data.refresh_token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from None
    return TokenPairResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


@router.get("/logout", response_model=LogoutResponse, summary="Log out the current user")
async def logout(
    session: SessionContext = Depends(get_optional_session),
    service: AccountService = Depends(get_account_service),
) -> LogoutResponse:
    """Always succeeds; a request without a valid session is already logged out."""
    message = await service.logout(session)
    return LogoutResponse(message=message)


@router.get("/getusers", response_model=list[UserResponse], summary="List all users")
async def get_users(
    service: AccountService = Depends(get_account_service),
) -> list[UserResponse]:
    accounts = await service.list_accounts()
    return [UserResponse.from_domain(account) for account in accounts]


@router.get(
    "/current-user",
    response_model=CurrentUserResponse,
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
    summary="Return the authenticated user",
)
async def current_user(
    session: SessionContext = Depends(get_session),
    service: AccountService = Depends(get_account_service),
) -> CurrentUserResponse:
    current = await service.whoami(session)
    return CurrentUserResponse(
        user=UserResponse.from_domain(current.user) if current.user else None,
        access_token=current.access_token,
        refresh_token=current.refresh_token,
    )
