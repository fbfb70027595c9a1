from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'offers'

# SimpleRouter: an API root view at the empty prefix would shadow POST /api/offers/
router = SimpleRouter()
router.register(r'', views.OfferViewSet, basename='offer')

urlpatterns = [
    # POST   /api/offers/                                  - Submit offer (tenant)
    # GET    /api/offers/received/                         - Offers to my properties
    # GET    /api/offers/sent/                             - Offers I sent
    # GET    /api/offers/history/{propertyId}/{tenantId}/  - Negotiation history
    # PATCH  /api/offers/{id}/request-advance/             - Request booking advance
    # PATCH  /api/offers/{id}/status/                      - Change status
    # PATCH  /api/offers/{id}/confirm-move-in/             - Confirm move-in
    path('', include(router.urls)),
]
