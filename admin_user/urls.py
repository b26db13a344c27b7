from django.urls import path
from .views import UserListAPIView, UserStatsAPIView, UserDetailAPIView, UserDetailsAPIView

urlpatterns = [
    path("users/", UserListAPIView.as_view(), name="admin-user-list"),
    path("users/stats/", UserStatsAPIView.as_view(), name="admin-user-stats"),
    path("users/<int:pk>/", UserDetailAPIView.as_view(), name="admin-user-detail"),
    path("users/<int:pk>/details/", UserDetailsAPIView.as_view(), name="admin-user-details"),
]
