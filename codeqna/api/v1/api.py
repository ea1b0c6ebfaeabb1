"""API v1 router aggregator."""

from fastapi import APIRouter

from codeqna.api.v1.endpoints import auth, users, channels, messages, replies, ratings, forum

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(channels.router)
api_router.include_router(messages.router)
api_router.include_router(replies.router)
api_router.include_router(ratings.router)
api_router.include_router(forum.router)

__all__ = ["api_router"]
