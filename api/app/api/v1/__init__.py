"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth, knowledge, card_types, cards, stats, change_requests
)

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(auth.router)
api_router.include_router(knowledge.router)
api_router.include_router(card_types.router)
api_router.include_router(cards.router)
api_router.include_router(stats.router)
api_router.include_router(change_requests.router)
