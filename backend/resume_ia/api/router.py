from fastapi import APIRouter
from resume_ia.api import accounts, flows, generate, preferences, saved

api_router = APIRouter()
api_router.include_router(generate.router, tags=["summaries"])
api_router.include_router(flows.router, tags=["flows"])
api_router.include_router(saved.router, tags=["saved summaries"])
api_router.include_router(accounts.router, tags=["accounts"])
api_router.include_router(preferences.router, tags=["preferences"])
