from django.utils.deprecation import MiddlewareMixin


class JWTAuthCookieMiddleware(MiddlewareMixin):
    """Lets browser clients authenticate with the httponly cookie set at login."""

    COOKIE_NAMES = ("access_token", "access")

    def process_request(self, request):
        # an explicit header wins over the cookie
        if request.META.get("HTTP_AUTHORIZATION"):
            return None
        for name in self.COOKIE_NAMES:
            token = request.COOKIES.get(name)
            if token:
                request.META["HTTP_AUTHORIZATION"] = f"Bearer {token}"
                break
        return None
