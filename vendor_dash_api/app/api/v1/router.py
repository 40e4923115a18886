"""
Main API router for v1.
"""

from fastapi import APIRouter
from app.api.v1 import products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
