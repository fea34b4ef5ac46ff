from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'environments'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.EnvironmentViewSet, basename='environment')

urlpatterns = [
    # Environment ViewSet routes
    # GET    /api/environments/              - List owned (company) or joined (client)
    # POST   /api/environments/              - Create environment (company)
    # GET    /api/environments/{id}/         - Get environment details
    # PATCH  /api/environments/{id}/         - Rename environment (owner)

    # Custom environment actions
    # POST   /api/environments/{id}/join/    - Join (client)
    # POST   /api/environments/{id}/leave/   - Leave (client)
    # GET    /api/environments/{id}/members/ - List members (owner)

    # Additional endpoints
    path('memberships/', views.my_memberships, name='my-memberships'),

    # Include router URLs
    path('', include(router.urls)),
]
