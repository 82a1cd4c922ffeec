"""Main URL mapping configuration file.

All endpoints live under /api/; there is no admin site and no
server-rendered UI.
"""

from django.urls import include, path

urlpatterns = [
    path('api/', include('server.apps.api.urls', namespace='api')),
]
