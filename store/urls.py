from django.urls import path

from .views import StoreSettingsView

app_name = "store"

urlpatterns = [
    path("", StoreSettingsView.as_view(), name="store-settings"),
]
