from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Environment analytics (owner company or member clients)
    path('environments/<uuid:environment_id>/ranking/', views.environment_ranking, name='environment-ranking'),
    path('environments/<uuid:environment_id>/top-products/', views.top_products, name='top-products'),
    path('environments/<uuid:environment_id>/statistics/', views.environment_statistics, name='environment-statistics'),
    path('environments/<uuid:environment_id>/me/', views.my_environment_statistics, name='my-environment-statistics'),

    # Company analytics
    path('company/statistics/', views.company_statistics, name='company-statistics'),

    # Client analytics
    path('me/summary/', views.my_summary, name='my-summary'),
]
