"""
URL configuration for cards app.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('api/card/', views.card_view, name='card'),
    path('api/card/<str:card_type>/', views.card_view, name='card_type'),
    path('c/', views.card_view, name='card_short'),
    path('api/github-stats/<str:username>/', views.github_stats_view, name='github_stats'),
    path('api/quote/', views.quote_view, name='quote'),
    path('api/health/', views.health_view, name='health'),
]
