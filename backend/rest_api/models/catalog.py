"""
Purchasable catalog: Ingredient, Mix, MixEntry.

Ingredients and mixes share one id space (opaque hex ids), so a recipe
line can reference either one with a single id.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Limits

from .base import PUBLIC_ID_LENGTH, AuditMixin, Base, IdType, new_public_id


class Ingredient(AuditMixin, Base):
    """
    Base purchasable item with a purchase price for a purchase weight.
    Inherits: is_active, created_at, updated_at, deleted_at, *_by_id/email from AuditMixin.
    """

    __tablename__ = "ingrediente"

    id: Mapped[str] = mapped_column(
        String(PUBLIC_ID_LENGTH), primary_key=True, default=new_public_id
    )
    alimento: Mapped[str] = mapped_column(String(100), nullable=False)
    # Normalized name, unique backstop for concurrent creates
    nome_chave: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    unidade: Mapped[str] = mapped_column(String(30), nullable=False)
    preco: Mapped[float] = mapped_column(Float, nullable=False)
    # Free text ("1", "0,5", "1.5 kg"); parsed when a cost is computed
    peso: Mapped[str] = mapped_column(String(Limits.MAX_WEIGHT_TEXT_LENGTH), nullable=False)
    fator_correcao: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    categoria: Mapped[Optional[str]] = mapped_column(String(100), index=True)
    quantidade_estoque: Mapped[Optional[float]] = mapped_column(Float)
    data_validade: Mapped[Optional[date]] = mapped_column(Date)
    fornecedor: Mapped[Optional[str]] = mapped_column(String(200))

    __table_args__ = (
        CheckConstraint("preco >= 0", name="ck_ingrediente_preco_non_negative"),
        CheckConstraint("fator_correcao > 0", name="ck_ingrediente_fator_positive"),
    )


class Mix(AuditMixin, Base):
    """
    Named blend of ingredients with a derived price and averaged correction factor.
    preco_total and fator_correcao are always recomputed from the entries.
    Inherits: is_active, created_at, updated_at, deleted_at, *_by_id/email from AuditMixin.
    """

    __tablename__ = "mix"

    id: Mapped[str] = mapped_column(
        String(PUBLIC_ID_LENGTH), primary_key=True, default=new_public_id
    )
    nome: Mapped[str] = mapped_column(String(100), nullable=False)
    nome_chave: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    categoria: Mapped[str] = mapped_column(String(100), nullable=False, default="Mix")
    peso_total: Mapped[str] = mapped_column(String(Limits.MAX_WEIGHT_TEXT_LENGTH), nullable=False)
    unidade: Mapped[str] = mapped_column(String(30), nullable=False)
    preco_total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    fator_correcao: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    descricao: Mapped[Optional[str]] = mapped_column(Text)

    ingredientes: Mapped[list["MixEntry"]] = relationship(
        back_populates="mix",
        cascade="all, delete-orphan",
        order_by="MixEntry.posicao",
    )


class MixEntry(Base):
    """One ingredient of a mix, with the quantity used."""

    __tablename__ = "mix_ingrediente"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    mix_id: Mapped[str] = mapped_column(
        String(PUBLIC_ID_LENGTH), ForeignKey("mix.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingrediente_id: Mapped[str] = mapped_column(
        String(PUBLIC_ID_LENGTH), ForeignKey("ingrediente.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    posicao: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quantidade: Mapped[float] = mapped_column(Float, nullable=False)
    unidade: Mapped[str] = mapped_column(String(30), nullable=False)

    mix: Mapped["Mix"] = relationship(back_populates="ingredientes")
    ingrediente: Mapped["Ingredient"] = relationship()

    __table_args__ = (
        CheckConstraint("quantidade > 0", name="ck_mix_ingrediente_quantidade_positive"),
    )
