from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'products', views.ProductViewSet, basename='product')

urlpatterns = [
    # GET    /api/catalog/products/?environment={id} - List products
    # POST   /api/catalog/products/                  - Create product (company)
    # GET    /api/catalog/products/{id}/             - Get product
    # PATCH  /api/catalog/products/{id}/             - Update name/price (company)
    # DELETE /api/catalog/products/{id}/             - Delete product (company)
    path('lookup/', views.barcode_lookup, name='barcode-lookup'),

    path('', include(router.urls)),
]
