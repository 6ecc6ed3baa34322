from fastapi import APIRouter

from turnos.api.routes import mercadopago_webhook
from turnos.domains.scheduling.api import routes as scheduling

api_router = APIRouter()

# API routes (all have /api/v1 prefix from the app factory)
api_router.include_router(scheduling.router)
api_router.include_router(scheduling.payments_router)
api_router.include_router(mercadopago_webhook.router, tags=["Mercado Pago Webhook"])
