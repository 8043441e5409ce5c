"""
Purchasables router: resolves an id the way recipe lines do.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import current_user
from rest_api.services.domain import lookup_purchasable
from shared.infrastructure.db import get_db
from shared.utils.catalog_schemas import PurchasableOutput


router = APIRouter(prefix="/api/insumos", tags=["insumos"])


@router.get("/{insumo_id}", response_model=PurchasableOutput)
def get_purchasable(
    insumo_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> PurchasableOutput:
    """Ingredient first, then mix; 404 when neither exists."""
    return lookup_purchasable(db, insumo_id)
