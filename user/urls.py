from django.urls import path
from .adapters.viewsets import auth_viewset
from .adapters.viewsets.auth_refresh import CookieTokenRefreshView
from .adapters.viewsets.profile_viewset import ProfileView

urlpatterns = [
    # URL for user registration
    path('auth/register/', auth_viewset.AuthViewSet.as_view({'post': 'register'}), name='register'),
    # URL for logging in with email; sets the session cookies
    path('auth/login/', auth_viewset.AuthViewSet.as_view({'post': 'login'}), name='login'),
    # URL for logging out; clears the session cookies
    path('auth/logout/', auth_viewset.AuthViewSet.as_view({'post': 'logout'}), name='logout'),
    # new access cookie from the refresh cookie
    path('auth/token/refresh/', CookieTokenRefreshView.as_view(), name='token_refresh'),

    # the signed-in user's profile
    path('user/profile/', ProfileView.as_view(), name='user_profile'),
]
