"""Dispute Evidence Engine - API Routers"""
from .evidence import router as evidence_router
from .cover_letters import router as cover_letters_router

__all__ = [
    "evidence_router",
    "cover_letters_router",
]
