from django.urls import path
from .views import MeView, RegisterView

app_name = "users"

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("register/", RegisterView.as_view(), name="register"),
]
