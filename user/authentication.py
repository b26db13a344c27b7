from rest_framework_simplejwt.authentication import JWTAuthentication

from .auth import verify


class JWTRoleAuthentication(JWTAuthentication):
    """Bearer-token authentication that resolves the caller through ``user.auth.verify``."""

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        if isinstance(raw_token, bytes):
            raw_token = raw_token.decode()

        identity = verify(raw_token)
        return identity.user, raw_token
