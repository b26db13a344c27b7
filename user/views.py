# user/views.py
import logging

from django.contrib.auth import authenticate
from django.db import transaction
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.models import Cart
from .auth import issue_tokens
from .serializers import RegisterSerializer, LoginSerializer, UserSerializer, ProfileSerializer

logger = logging.getLogger(__name__)


def _set_auth_cookies(response, tokens):
    response.set_cookie(
        key="access_token",
        value=tokens["access"],
        httponly=True,
        secure=False,     # set True in production (HTTPS)
        samesite="Lax",
        max_age=60 * 60,  # 1 hour
    )
    response.set_cookie(
        key="refresh_token",
        value=tokens["refresh"],
        httponly=True,
        secure=False,     # set True in production (HTTPS)
        samesite="Lax",
        max_age=7 * 24 * 60 * 60,  # 7 days
    )


class RegisterView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            user = serializer.save()
            # every customer starts with an empty cart
            Cart.objects.create(user=user)

        logger.info("Registered user %s", user.pk)
        tokens = issue_tokens(user)
        response = Response(
            {
                "message": "User registered successfully",
                "user": UserSerializer(user).data,
                "token": tokens["access"],
            },
            status=status.HTTP_201_CREATED,
        )
        _set_auth_cookies(response, tokens)
        return response


class LoginView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        user = authenticate(request, email=email, password=password)
        if user is None:
            logger.warning("Failed login for %s", email)
            return Response({"detail": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)

        tokens = issue_tokens(user)
        response = Response(
            {
                "message": "Login successful",
                "user": UserSerializer(user).data,
                "token": tokens["access"],
            },
            status=status.HTTP_200_OK,
        )
        _set_auth_cookies(response, tokens)
        return response


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        response = Response(
            {"message": "Logged out"},
            status=status.HTTP_200_OK
        )

        # delete both JWT cookies
        response.delete_cookie("access_token")
        response.delete_cookie("refresh_token")
        return response


class ProfileView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        serializer = ProfileSerializer(request.user, context={"request": request})
        return Response(serializer.data)

    def patch(self, request):
        serializer = ProfileSerializer(request.user, data=request.data, partial=True, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
