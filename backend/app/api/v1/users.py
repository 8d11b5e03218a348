"""User account, profile and channel endpoints."""

from __future__ import annotations

from contextlib import ExitStack
from typing import Any

from flask import Blueprint, current_app, request

from app.api.cookies import (
    REFRESH_COOKIE,
    CookieOptions,
    clear_token_cookies,
    set_token_cookies,
)
from app.api.deps import (
    current_user_id,
    parse_pagination,
    require_auth,
    success_response,
    timing,
    viewer_id,
)
from app.api.uploads import staged_upload
from app.infra.jwt.jwt_token_provider import JWTTokenProvider
from app.schemas import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateProfileSchema,
    UserSchema,
    WatchedVideoSchema,
    WatchHistoryPageSchema,
)
from app.services import (
    AuthService,
    ChangePasswordIn,
    ChannelService,
    LoginIn,
    ProfileService,
    RegisterIn,
    UpdateMediaIn,
    UpdateProfileIn,
)

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
change_password_schema = ChangePasswordSchema()
update_profile_schema = UpdateProfileSchema()
user_schema = UserSchema()
login_response_schema = LoginResponseSchema()
token_pair_schema = TokenPairSchema()
channel_schema = ChannelProfileSchema()
history_schema = WatchedVideoSchema(many=True)
history_page_schema = WatchHistoryPageSchema()


def _payload() -> dict[str, Any]:
    """Return the JSON body, falling back to form fields."""
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form.to_dict()


def _cookie_options() -> CookieOptions:
    return CookieOptions.from_config(current_app.config)


def _with_tokens(response, access_token: str, refresh_token: str):
    cfg = current_app.config
    return set_token_cookies(
        response,
        access_token=access_token,
        refresh_token=refresh_token,
        options=_cookie_options(),
        access_max_age=cfg.get("ACCESS_TOKEN_EXPIRY"),
        refresh_max_age=cfg.get("REFRESH_TOKEN_EXPIRY"),
    )


def _auth_service() -> AuthService:
    return AuthService(token_provider=JWTTokenProvider())


# --------------------------------------------------------------------------- #
# Account lifecycle
# --------------------------------------------------------------------------- #


@bp.post("/register")
@timing
def register():
    """Create an account from a multipart form with ``avatar``/``coverImage``."""

    data = register_schema.load(request.form.to_dict())
    service = _auth_service()
    with ExitStack() as stack:
        avatar_path = stack.enter_context(staged_upload(request.files.get("avatar")))
        cover_path = stack.enter_context(staged_upload(request.files.get("coverImage")))
        user = service.register(
            RegisterIn(
                username=data["username"],
                email=data["email"],
                full_name=data["full_name"],
                password=data["password"],
                avatar_path=avatar_path,
                cover_path=cover_path,
            )
        )
    return success_response(user_schema.dump(user), "User registered successfully", status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate by username or email and set the token cookies."""

    data = login_schema.load(_payload())
    result = _auth_service().login(
        LoginIn(password=data["password"], username=data["username"], email=data["email"])
    )
    response = success_response(login_response_schema.dump(result), "User logged in successfully")
    return _with_tokens(response, result.access_token, result.refresh_token)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Drop the refresh session and clear both cookies."""

    _auth_service().logout(current_user_id())
    response = success_response({}, "User logged out")
    return clear_token_cookies(response, options=_cookie_options())


@bp.post("/refreshAccessToken")
@timing
def refresh_access_token():
    """Rotate the refresh token taken from the cookie or the request body."""

    token = request.cookies.get(REFRESH_COOKIE)
    if not token:
        token = refresh_schema.load(_payload())["refresh_token"]
    pair = _auth_service().refresh(token)
    response = success_response(token_pair_schema.dump(pair), "Access token refreshed")
    return _with_tokens(response, pair.access_token, pair.refresh_token)


@bp.post("/change-current-password")
@require_auth
@timing
def change_current_password():
    data = change_password_schema.load(_payload())
    _auth_service().change_password(
        ChangePasswordIn(
            user_id=current_user_id(),
            old_password=data["password"],
            new_password=data["new_password"],
        )
    )
    return success_response({}, "Password changed successfully")


# --------------------------------------------------------------------------- #
# Profile
# --------------------------------------------------------------------------- #


@bp.get("/getUserDetails")
@require_auth
@timing
def get_user_details():
    user = ProfileService().get_current_user(current_user_id())
    return success_response(user_schema.dump(user), "Current user fetched successfully")


@bp.post("/updateUserProfile")
@require_auth
@timing
def update_user_profile():
    data = update_profile_schema.load(_payload())
    user = ProfileService().update_profile(
        UpdateProfileIn(
            user_id=current_user_id(),
            full_name=data["full_name"],
            email=data["email"],
        )
    )
    return success_response(user_schema.dump(user), "Account details updated successfully")


@bp.post("/updateUserAvatar")
@require_auth
@timing
def update_user_avatar():
    service = ProfileService()
    with staged_upload(request.files.get("avatar")) as path:
        user = service.update_avatar(UpdateMediaIn(user_id=current_user_id(), local_path=path))
    return success_response(user_schema.dump(user), "Avatar updated successfully")


@bp.post("/updateUserCoverImage")
@require_auth
@timing
def update_user_cover_image():
    service = ProfileService()
    with staged_upload(request.files.get("coverImage")) as path:
        user = service.update_cover_image(
            UpdateMediaIn(user_id=current_user_id(), local_path=path)
        )
    return success_response(user_schema.dump(user), "Cover image updated successfully")


# --------------------------------------------------------------------------- #
# Channel & history
# --------------------------------------------------------------------------- #


@bp.get("/channel/<string:username>")
@timing
def get_channel_profile(username: str):
    """Public channel header; ``isSubscribed`` reflects the caller when signed in."""

    profile = ChannelService().get_channel_profile(username, viewer_id=viewer_id())
    return success_response(channel_schema.dump(profile), "User channel fetched successfully")


@bp.get("/history")
@require_auth
@timing
def get_watch_history():
    """Watch history; paginated only when ``page`` or ``limit`` is given."""

    pagination = parse_pagination()
    history = ChannelService().get_watch_history(current_user_id(), pagination=pagination)
    if history.meta is None:
        data = history_schema.dump(history.items)
    else:
        data = history_page_schema.dump(history)
    return success_response(data, "Watch history fetched successfully")
