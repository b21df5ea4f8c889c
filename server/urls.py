"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

It is also a good practice to keep a single URL to the root index page.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Apps:
    path('api/files/', include('server.apps.files.urls', namespace='files')),

    # Django admin:
    path('admin/', admin.site.urls),
]
