"""Root URL configuration for pageeditor_tool."""

from django.urls import include, path

urlpatterns = [
    path('api/', include('pageeditor.urls')),
]
