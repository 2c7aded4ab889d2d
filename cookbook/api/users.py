"""User account API endpoints."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, File, Response, UploadFile, status

from cookbook.api.dependencies import (
    CurrentUser,
    get_bearer_token,
    get_image_service,
    get_mailer_service,
    get_user_service,
)
from cookbook.schemas.auth import (
    AuthResponse,
    UserEnvelope,
    UserLogin,
    UserNameUpdate,
    UserRegister,
    UserResponse,
)
from cookbook.schemas.common import MessageResponse
from cookbook.services.images import ImageService
from cookbook.services.mailer import MailerService
from cookbook.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    background_tasks: BackgroundTasks,
    users: Annotated[UserService, Depends(get_user_service)],
    mailer: Annotated[MailerService, Depends(get_mailer_service)],
):
    """Register a new user and start their first session.

    The verification mail is sent after the response; delivery failures are
    logged and never fail the registration.
    """
    user, token = users.register(
        user_data.name, user_data.email, user_data.password, user_data.newsletter
    )
    background_tasks.add_task(mailer.send_verification, user.email, user.verification_token)

    return AuthResponse(
        status="success",
        code=status.HTTP_201_CREATED,
        message="User created",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    credentials: UserLogin,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Sign in with email and password. Any earlier session is replaced."""
    user, token = users.sign_in(credentials.email, credentials.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    current_user: CurrentUser,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """End the current session; its token stops working immediately."""
    users.logout(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/verify/{verification_token}", response_model=MessageResponse)
async def verify_account(
    verification_token: str,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Confirm the email address using the token from the verification mail."""
    users.verify_account(verification_token)
    return MessageResponse(message="Verification successful")


@router.get("/current", response_model=AuthResponse)
async def get_current(
    current_user: CurrentUser,
    token: Annotated[str, Depends(get_bearer_token)],
):
    """Get current user information."""
    return AuthResponse(token=token, user=UserResponse.model_validate(current_user))


@router.patch("/current/name", response_model=UserEnvelope)
async def update_name(
    data: UserNameUpdate,
    current_user: CurrentUser,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Change the display name."""
    user = users.update_name(current_user, data.name)
    return UserEnvelope(status="success", user=UserResponse.model_validate(user))


@router.patch("/current/avatar", response_model=UserEnvelope)
async def update_avatar(
    current_user: CurrentUser,
    users: Annotated[UserService, Depends(get_user_service)],
    images: Annotated[ImageService, Depends(get_image_service)],
    avatar: Annotated[UploadFile | None, File()] = None,
):
    """Upload a new avatar image.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    staged = await images.stage(avatar)
    avatar_url = images.publish_avatar(staged, current_user.id)
    user = users.update_avatar(current_user, avatar_url)
    return UserEnvelope(status="success", user=UserResponse.model_validate(user))
