"""
REST API main application.
Entry point for the FastAPI REST server.

Run with:
    uvicorn rest_api.main:app --reload --port 8000
"""

from fastapi import FastAPI

from rest_api.core import configure_cors, lifespan, register_middlewares
from rest_api.routers.admin import audit_router, users_router
from rest_api.routers.auth import router as auth_router
from rest_api.routers.content import (
    ingredients_router,
    mixes_router,
    purchasables_router,
    recipe_sheets_router,
)
from rest_api.routers.public import health_router


app = FastAPI(
    title="Ficha Técnica API",
    description="Cost sheets for recipes: ingredients, mixes and recipe costing",
    version="1.0.0",
    lifespan=lifespan,
)

register_middlewares(app)
configure_cors(app)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(ingredients_router)
app.include_router(mixes_router)
app.include_router(recipe_sheets_router)
app.include_router(purchasables_router)
app.include_router(users_router)
app.include_router(audit_router)
