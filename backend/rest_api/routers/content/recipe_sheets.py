"""
Recipe sheets router (fichas técnicas).

Costs are computed on write and returned as stored; reads never
recompute. /recalcular refreshes a sheet from current ingredient and mix
data, /calcular previews a calculation without saving.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import RepositoryFilters
from rest_api.routers._common import Page, PaginatedResponse, Pagination, current_user, get_pagination
from rest_api.services.domain import RecipeSheetService
from shared.infrastructure.db import get_db
from shared.utils.catalog_schemas import (
    CostPreviewOutput,
    CostPreviewRequest,
    RecipeSheetCreate,
    RecipeSheetOutput,
    RecipeSheetUpdate,
)
from shared.utils.schemas import StatusUpdate


router = APIRouter(prefix="/api/fichas", tags=["fichas"])


@router.get("", response_model=Page[RecipeSheetOutput])
def list_recipe_sheets(
    search: str | None = None,
    ativo: bool | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str = Query(default="asc", alias="sortOrder"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> dict:
    filters = RepositoryFilters(
        limit=pagination.limit,
        offset=pagination.offset,
        ativo=ativo,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items, total = RecipeSheetService(db).list_all(filters)
    return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()


@router.post("/calcular", response_model=CostPreviewOutput)
def preview_costs(
    body: CostPreviewRequest,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> CostPreviewOutput:
    """Resolve the lines and calculate costs. Nothing is saved."""
    return RecipeSheetService(db).preview(body)


@router.get("/{ficha_id}", response_model=RecipeSheetOutput)
def get_recipe_sheet(
    ficha_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> RecipeSheetOutput:
    return RecipeSheetService(db).get(ficha_id)


@router.post("", response_model=RecipeSheetOutput, status_code=status.HTTP_201_CREATED)
def create_recipe_sheet(
    body: RecipeSheetCreate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> RecipeSheetOutput:
    """
    Create a recipe sheet.

    Each line's `ingrediente_id` may reference an ingredient or a mix.
    Missing price inputs on a line are taken from the referenced item.
    """
    return RecipeSheetService(db).create(body, user.id, user.email)


@router.patch("/{ficha_id}", response_model=RecipeSheetOutput)
def update_recipe_sheet(
    ficha_id: str,
    body: RecipeSheetUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> RecipeSheetOutput:
    """Update a recipe sheet. Changing a cost field recomputes the costs."""
    return RecipeSheetService(db).update(ficha_id, body, user.id, user.email)


@router.patch("/{ficha_id}/status", response_model=RecipeSheetOutput)
def set_recipe_sheet_status(
    ficha_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> RecipeSheetOutput:
    return RecipeSheetService(db).set_status(ficha_id, body.ativo, user.id, user.email)


@router.post("/{ficha_id}/clonar", response_model=RecipeSheetOutput, status_code=status.HTTP_201_CREATED)
def clone_recipe_sheet(
    ficha_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> RecipeSheetOutput:
    return RecipeSheetService(db).clone(ficha_id, user.id, user.email)


@router.post("/{ficha_id}/recalcular", response_model=RecipeSheetOutput)
def recalculate_recipe_sheet(
    ficha_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> RecipeSheetOutput:
    """Refresh every line from current ingredient and mix data and recompute."""
    return RecipeSheetService(db).recalculate(ficha_id, user.id, user.email)
