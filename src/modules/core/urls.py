from django.urls import path

from modules.core.views import health_check, root

urlpatterns = [
    path("", root, name="root"),
    path("health", health_check, name="health_check"),
]
