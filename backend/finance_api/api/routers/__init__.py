from fastapi import APIRouter

from finance_api.api.routers import auth, categories, health, transactions

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(transactions.router)
api_router.include_router(health.router)
