"""
Mixes router: blends of ingredients with a derived price and correction
factor.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import CatalogFilters
from rest_api.routers._common import Page, PaginatedResponse, Pagination, current_user, get_pagination
from rest_api.services.domain import MixService
from shared.infrastructure.db import get_db
from shared.utils.catalog_schemas import MixCreate, MixOutput, MixUpdate
from shared.utils.schemas import StatusUpdate


router = APIRouter(prefix="/api/mixes", tags=["mixes"])


@router.get("", response_model=Page[MixOutput])
def list_mixes(
    search: str | None = None,
    categoria: str | None = None,
    ativo: bool | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str = Query(default="asc", alias="sortOrder"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> dict:
    filters = CatalogFilters(
        limit=pagination.limit,
        offset=pagination.offset,
        ativo=ativo,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        categoria=categoria,
    )
    items, total = MixService(db).list_all(filters)
    return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()


@router.get("/{mix_id}", response_model=MixOutput)
def get_mix(
    mix_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> MixOutput:
    return MixService(db).get(mix_id)


@router.post("", response_model=MixOutput, status_code=status.HTTP_201_CREATED)
def create_mix(
    body: MixCreate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> MixOutput:
    """
    Create a mix.

    preco_total is the sum of price x quantity over the entries and
    fator_correcao the mean of the ingredients' factors. Any unknown
    ingredient id rejects the request with 404.
    """
    return MixService(db).create(body, user.id, user.email)


@router.patch("/{mix_id}", response_model=MixOutput)
def update_mix(
    mix_id: str,
    body: MixUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> MixOutput:
    """Update a mix. Sending `ingredientes` replaces the list and recomputes."""
    return MixService(db).update(mix_id, body, user.id, user.email)


@router.patch("/{mix_id}/status", response_model=MixOutput)
def set_mix_status(
    mix_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> MixOutput:
    return MixService(db).set_status(mix_id, body.ativo, user.id, user.email)
