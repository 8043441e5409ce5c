"""
Recipe cost sheet models: RecipeSheet (ficha técnica), RecipeSheetLine.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import PUBLIC_ID_LENGTH, AuditMixin, Base, IdType, new_public_id


class RecipeSheet(AuditMixin, Base):
    """
    Recipe cost sheet.

    Stores the cost inputs and the computed outputs side by side; the
    outputs are written whenever a cost-relevant field changes and are
    not recomputed on read.
    Inherits: is_active, created_at, updated_at, deleted_at, *_by_id/email from AuditMixin.
    """

    __tablename__ = "ficha_tecnica"

    id: Mapped[str] = mapped_column(
        String(PUBLIC_ID_LENGTH), primary_key=True, default=new_public_id
    )
    nome_receita: Mapped[str] = mapped_column(String(200), nullable=False)
    nome_chave: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    rendimento: Mapped[float] = mapped_column(Float, nullable=False)
    unidade_rendimento: Mapped[str] = mapped_column(String(30), nullable=False)

    # Overheads
    gas_energia: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    embalagem: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    mao_obra: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    outros: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    margem_lucro: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Computed
    custo_total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    custo_por_unidade: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    preco_venda_sugerido: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    modo_preparo: Mapped[Optional[str]] = mapped_column(Text)
    observacoes: Mapped[Optional[str]] = mapped_column(Text)

    ingredientes: Mapped[list["RecipeSheetLine"]] = relationship(
        back_populates="ficha",
        cascade="all, delete-orphan",
        order_by="RecipeSheetLine.posicao",
    )

    __table_args__ = (
        CheckConstraint("rendimento > 0", name="ck_ficha_rendimento_positive"),
        CheckConstraint("margem_lucro >= 0", name="ck_ficha_margem_non_negative"),
    )


class RecipeSheetLine(Base):
    """
    One ingredient line of a recipe sheet.

    ingrediente_id points at an Ingredient or a Mix, so it carries no FK.
    nome, unidade and the three price inputs are a snapshot taken when the
    line was resolved; custo_calculado is the last computed line cost.
    """

    __tablename__ = "ficha_ingrediente"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    ficha_id: Mapped[str] = mapped_column(
        String(PUBLIC_ID_LENGTH),
        ForeignKey("ficha_tecnica.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    posicao: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    ingrediente_id: Mapped[str] = mapped_column(String(PUBLIC_ID_LENGTH), nullable=False, index=True)
    tipo: Mapped[str] = mapped_column(String(20), nullable=False)  # INGREDIENTE | MIX
    nome: Mapped[str] = mapped_column(String(200), nullable=False)
    unidade: Mapped[str] = mapped_column(String(30), nullable=False)

    quantidade_usada: Mapped[float] = mapped_column(Float, nullable=False)
    preco_unitario: Mapped[float] = mapped_column(Float, nullable=False)
    peso_compra: Mapped[float] = mapped_column(Float, nullable=False)
    fator_correcao: Mapped[float] = mapped_column(Float, nullable=False)
    custo_calculado: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    ficha: Mapped["RecipeSheet"] = relationship(back_populates="ingredientes")

    __table_args__ = (
        CheckConstraint("quantidade_usada > 0", name="ck_ficha_ingrediente_quantidade_positive"),
    )
