from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'lists', views.UploadedListViewSet, basename='uploaded-list')

urlpatterns = [
    path('system-headers/', views.system_headers, name='system_headers'),
    path('mapping/validate/', views.validate_column_mapping, name='validate_mapping'),
    path('campaigns/<int:campaign_id>/lists/', views.campaign_lists, name='campaign_lists'),
    path('campaigns/<int:campaign_id>/lists/preview/', views.preview_list, name='preview_list'),
    path('', include(router.urls)),
]
