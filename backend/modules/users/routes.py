"""
User account API endpoints.

Registration, login/logout/refresh with cookie sessions, profile and
password management, wishlist, and the administrator user listing.
Module exceptions are translated to HTTP responses by the app-wide
GardenError handler.
"""

from typing import Any, Optional

from fastapi import APIRouter, Cookie, Depends, File, Form, Query, Response, UploadFile
from pydantic import BaseModel

from api.dependencies import get_user_service
from api.middleware.auth import apply_cookies, get_current_user, require_admin
from modules.auth.sessions import REFRESH_COOKIE
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import (
    AuthResult,
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserProfile,
    UserView,
    WishlistItem,
)

router = APIRouter()


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class UserResponse(MessageResponse):
    user: UserView


class ProfileResponse(MessageResponse):
    user: UserProfile


class WishlistToggleResponse(MessageResponse):
    action: str
    wishlist: list[str]


class WishlistResponse(MessageResponse):
    wishlist: list[WishlistItem]


class UserListPage(MessageResponse):
    users: list[UserView]
    pagination: dict[str, Any]


def _session_response(response: Response, result: AuthResult, message: str) -> UserResponse:
    apply_cookies(response, result.session.cookies)
    return UserResponse(message=message, user=result.user)


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    request: RegisterRequest,
    response: Response,
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """Create an account and start a session."""
    result = await service.register(request)
    return _session_response(response, result, "User registered successfully")


@router.post("/login", response_model=UserResponse)
async def login(
    request: LoginRequest,
    response: Response,
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """Verify credentials and set the `token` and `refreshToken` cookies."""
    result = await service.login(request)
    return _session_response(response, result, "Login successful")


@router.post("/refresh", response_model=UserResponse)
async def refresh(
    response: Response,
    body: Optional[RefreshRequest] = None,
    refresh_cookie: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """
    Rotate the session using the refresh token.

    The token is read from the `refreshToken` cookie, or from the body for
    clients that cannot send cookies.
    """
    token = (body.refresh_token if body else None) or refresh_cookie
    result = await service.refresh_session(token)
    return _session_response(response, result, "Session refreshed")


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    """Revoke the refresh token and clear both session cookies."""
    apply_cookies(response, await service.logout(user.id))
    return MessageResponse(message="Logout successful")


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> ProfileResponse:
    profile = await service.get_profile(user.id)
    return ProfileResponse(message="Profile fetched successfully", user=profile)


@router.get("/me", response_model=UserResponse)
async def get_my_info(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    info = await service.get_my_info(user.id)
    return UserResponse(message="User info fetched successfully", user=info)


@router.patch("/profile", response_model=ProfileResponse)
async def update_profile(
    username: Optional[str] = Form(default=None),
    phone: Optional[str] = Form(default=None),
    address: Optional[str] = Form(default=None, description="Address as a JSON object string"),
    avatar: Optional[UploadFile] = File(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> ProfileResponse:
    """
    Update profile fields and optionally replace the avatar.

    Accepts multipart form data; `address` is a JSON-encoded object.
    """
    avatar_bytes = await avatar.read() if avatar is not None else None
    profile = await service.update_profile(
        user.id,
        UpdateProfileRequest(username=username, phone=phone, address=address),
        avatar=avatar_bytes or None,
    )
    return ProfileResponse(message="Profile updated successfully", user=profile)


@router.patch("/password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    await service.change_password(user.id, request)
    return MessageResponse(message="Password changed successfully")


@router.get("/wishlist", response_model=WishlistResponse)
async def get_wishlist(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> WishlistResponse:
    items = await service.get_wishlist(user.id)
    return WishlistResponse(message="Wishlist fetched successfully", wishlist=items)


@router.patch("/wishlist/{product_id}", response_model=WishlistToggleResponse)
async def toggle_wishlist(
    product_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> WishlistToggleResponse:
    """Add the product to the wishlist, or remove it if already there."""
    result = await service.toggle_wishlist(user.id, product_id)
    return WishlistToggleResponse(
        message=result.message,
        action=result.action,
        wishlist=result.wishlist,
    )


@router.get("", response_model=UserListPage)
async def list_users(
    page: int = Query(default=1, description="Page number (1-indexed)"),
    limit: int = Query(default=10, description="Items per page"),
    search: Optional[str] = Query(default=None, description="Username or email substring"),
    role: Optional[str] = Query(default=None, description="Filter by role"),
    admin: AuthenticatedUser = Depends(require_admin),
    service: IUserService = Depends(get_user_service),
) -> UserListPage:
    """
    List users for administrators, newest first.

    Page and limit below 1 are treated as 1.
    """
    result = await service.list_users(page=page, limit=limit, search=search, role=role)
    return UserListPage(
        message="Users fetched successfully",
        users=result.items,
        pagination={
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "pages": result.total_pages,
        },
    )
