"""
URL configuration for packsite.

Une seule page de démonstration : templates/home.html montre les tags de packs
(append dans un block enfant, rendu dans le layout).
"""
from django.urls import path
from django.views.generic import TemplateView

urlpatterns = [
    path("", TemplateView.as_view(template_name="home.html"), name="home"),
]
