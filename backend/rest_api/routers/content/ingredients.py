"""
Ingredients router: base purchasable items with price, weight and
correction factor.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import CatalogFilters
from rest_api.routers._common import Page, PaginatedResponse, Pagination, current_user, get_pagination
from rest_api.services.domain import IngredientService
from shared.infrastructure.db import get_db
from shared.utils.catalog_schemas import IngredientCreate, IngredientOutput, IngredientUpdate
from shared.utils.schemas import StatusUpdate


router = APIRouter(prefix="/api/ingredientes", tags=["ingredientes"])


@router.get("", response_model=Page[IngredientOutput])
def list_ingredients(
    search: str | None = None,
    categoria: str | None = None,
    ativo: bool | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str = Query(default="asc", alias="sortOrder"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> dict:
    """
    List ingredients.

    `search` matches name, category and supplier; `categoria` narrows by
    category; `ativo` filters by status (both when omitted).
    """
    filters = CatalogFilters(
        limit=pagination.limit,
        offset=pagination.offset,
        ativo=ativo,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        categoria=categoria,
    )
    items, total = IngredientService(db).list_all(filters)
    return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()


@router.get("/{ingrediente_id}", response_model=IngredientOutput)
def get_ingredient(
    ingrediente_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> IngredientOutput:
    return IngredientService(db).get(ingrediente_id)


@router.post("", response_model=IngredientOutput, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    body: IngredientCreate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> IngredientOutput:
    """Create an ingredient. Names are unique regardless of case."""
    return IngredientService(db).create(body, user.id, user.email)


@router.patch("/{ingrediente_id}", response_model=IngredientOutput)
def update_ingredient(
    ingrediente_id: str,
    body: IngredientUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> IngredientOutput:
    """
    Update an ingredient.

    Mixes and recipe sheets using it keep their values until they are
    recalculated.
    """
    return IngredientService(db).update(ingrediente_id, body, user.id, user.email)


@router.patch("/{ingrediente_id}/status", response_model=IngredientOutput)
def set_ingredient_status(
    ingrediente_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> IngredientOutput:
    return IngredientService(db).set_status(ingrediente_id, body.ativo, user.id, user.email)
