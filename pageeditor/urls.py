"""URL configuration for the page editor API.

Routes are namespaced under ``pageeditor`` so the throttle middleware and
tests can refer to them by name.
"""

from django.urls import path

from . import views

app_name = 'pageeditor'

urlpatterns = [
    path('scan/', views.scan, name='scan'),
    path('update/', views.update, name='update'),
    path('highlight/', views.highlight, name='highlight'),
    path('analyze/', views.analyze, name='analyze'),
    path('suggestions/', views.suggestions, name='suggestions'),
    path('apply/', views.apply_suggestion, name='apply'),
]
