from fastapi import APIRouter

from crowallet.api.routers.v1 import prices

api_router = APIRouter()

api_router.include_router(prices.router, tags=["prices"])
