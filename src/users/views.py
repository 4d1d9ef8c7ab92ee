from rest_framework.generics import CreateAPIView, RetrieveUpdateAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.throttling import ScopedRateThrottle
from rest_framework_simplejwt.views import (
    TokenObtainPairView as BaseTokenObtainPairView,
    TokenRefreshView as BaseTokenRefreshView,
)
from drf_spectacular.utils import extend_schema, OpenApiResponse

from .serializers import CustomUserSerializer, RegistrationSerializer


@extend_schema(tags=["auth"], summary="Obtain JWT pair (email + password)")
class ThrottledTokenObtainPairView(BaseTokenObtainPairView):
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = 'auth_login'


@extend_schema(tags=["auth"], summary="Refresh JWT access token")
class ThrottledTokenRefreshView(BaseTokenRefreshView):
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = 'auth_login'


@extend_schema(
    summary="Register",
    request=RegistrationSerializer,
    responses={
        201: OpenApiResponse(response=RegistrationSerializer, description="Account created"),
        400: OpenApiResponse(description="Validation error"),
    },
    tags=["auth"],
)
class RegisterView(CreateAPIView):
    serializer_class = RegistrationSerializer
    permission_classes = [AllowAny]
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = 'auth_register'


@extend_schema(tags=["auth"], summary="Current user profile")
class MeView(RetrieveUpdateAPIView):
    serializer_class = CustomUserSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ['get', 'patch', 'head', 'options']

    def get_object(self):
        return self.request.user
