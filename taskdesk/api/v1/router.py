from fastapi import APIRouter
from taskdesk.api.v1.endpoints import clients

# ============================================================
# Main API v1 Router
# ============================================================

api_router = APIRouter()

# Include client routes at /clients
api_router.include_router(
    clients.router,
    prefix="/clients"
)
