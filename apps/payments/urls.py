from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'payments'

router = SimpleRouter()
router.register(r'', views.PaymentTransactionViewSet, basename='payment')

urlpatterns = [
    # POST   /api/payments/                          - Create/reuse booking payment (tenant)
    # POST   /api/payments/rent/                     - Create/reuse rent payment (tenant)
    # PATCH  /api/payments/{transactionId}/mark-paid/ - Mark paid (tenant)
    # PATCH  /api/payments/{transactionId}/verify/    - Verify (owner)
    # GET    /api/payments/my/                       - My payments (tenant)
    # GET    /api/payments/incoming/                 - Incoming payments (owner)
    path('', include(router.urls)),
]
