"""
Lookup of anything a recipe line can reference (ingredient or mix).
"""

from sqlalchemy.orm import Session

from rest_api.repositories import SqlCatalogStore
from rest_api.services.costing import PurchasableSnapshot, resolve_purchasable
from shared.utils.catalog_schemas import PurchasableOutput


def purchasable_output(snapshot: PurchasableSnapshot) -> PurchasableOutput:
    return PurchasableOutput(
        tipo=snapshot.kind,
        id=snapshot.id,
        nome=snapshot.name,
        unidade=snapshot.unit,
        preco_unitario=snapshot.unit_price,
        peso_compra=snapshot.purchase_weight,
        fator_correcao=snapshot.correction_factor,
        ativo=snapshot.active,
    )


def lookup_purchasable(db: Session, ref_id: str) -> PurchasableOutput:
    """Resolve an id the way recipe lines do. Raises NotFoundError."""
    return purchasable_output(resolve_purchasable(ref_id, SqlCatalogStore(db)))
