"""
Token issuing and verification.

Access tokens are simplejwt tokens carrying the user id and a ``role``
claim. ``verify`` is what request authentication goes through;
``authorize`` is the role check used by the admin permission.
"""
from typing import NamedTuple

from django.contrib.auth import get_user_model
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken


class Identity(NamedTuple):
    user_id: int
    role: str
    user: object


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    access = refresh.access_token
    access["role"] = user.role
    return {"access": str(access), "refresh": str(refresh)}


def verify(token):
    """Decode an access token and load its user; raise AuthenticationFailed otherwise."""
    try:
        payload = AccessToken(token)
    except TokenError:
        raise AuthenticationFailed("Invalid token.", code="token_not_valid")

    user_id = payload.get(api_settings.USER_ID_CLAIM)
    if user_id is None:
        raise AuthenticationFailed("Invalid token.", code="token_not_valid")

    User = get_user_model()
    try:
        user = User.objects.get(**{api_settings.USER_ID_FIELD: user_id})
    except User.DoesNotExist:
        raise AuthenticationFailed("Invalid token.", code="user_not_found")

    if not user.is_active:
        raise AuthenticationFailed("User is inactive.", code="user_inactive")

    # the stored role wins over a stale claim
    return Identity(user_id=user.pk, role=user.role, user=user)


def authorize(role, required_roles):
    return role in required_roles
