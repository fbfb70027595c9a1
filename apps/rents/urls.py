from django.urls import path
from . import views

app_name = 'rents'

urlpatterns = [
    # GET /api/rents/incoming/  - Rent owed to me (owner)
    # GET /api/rents/my/        - Rent I owe (tenant)
    path('incoming/', views.incoming_rents, name='incoming'),
    path('my/', views.my_rents, name='my'),
]
