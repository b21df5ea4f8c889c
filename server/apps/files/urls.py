"""URL configuration for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('upload', views.upload_file, name='upload'),
    path('upload-folder', views.upload_folder, name='upload-folder'),
]
