from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'purchases'

router = DefaultRouter()
router.register(r'', views.PurchaseViewSet, basename='purchase')

urlpatterns = [
    # GET    /api/purchases/          - List purchases (own or in owned environments)
    # POST   /api/purchases/          - Record a purchase of a product
    # GET    /api/purchases/{id}/     - Get purchase details
    # POST   /api/purchases/scan/     - Record a purchase from a barcode
    path('', include(router.urls)),
]
