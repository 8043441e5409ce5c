"""
Pydantic schemas for ingredients, mixes, recipe sheets and users.

Kept outside the routers so services can build outputs without importing
router modules.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.config.constants import Limits
from shared.utils.validators import parse_decimal_text


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("não pode ser vazio")
    return value


def _weight_text(value: str | float | int) -> str:
    """Weights are stored as text; the number they hold must be positive."""
    text = str(value).strip()
    number = parse_decimal_text(text)
    if number is None or number <= 0:
        raise ValueError("peso deve conter um número maior que zero")
    return text


# =============================================================================
# Ingredient
# =============================================================================


class IngredientCreate(BaseModel):
    alimento: str = Field(min_length=1, max_length=Limits.MAX_INGREDIENT_NAME_LENGTH)
    unidade: str = Field(min_length=1, max_length=Limits.MAX_UNIT_LENGTH)
    preco: float = Field(ge=0, allow_inf_nan=False)
    peso: str = Field(max_length=Limits.MAX_WEIGHT_TEXT_LENGTH)
    fator_correcao: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    categoria: str | None = Field(default=None, max_length=Limits.MAX_CATEGORY_LENGTH)
    quantidade_estoque: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    data_validade: date | None = None
    fornecedor: str | None = Field(default=None, max_length=200)
    ativo: bool = True

    @field_validator("alimento", "unidade")
    @classmethod
    def strip_required(cls, value):
        return _strip_required(value)

    @field_validator("peso", mode="before")
    @classmethod
    def validate_peso(cls, value):
        return _weight_text(value)


class IngredientUpdate(BaseModel):
    alimento: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_INGREDIENT_NAME_LENGTH)
    unidade: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_UNIT_LENGTH)
    preco: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    peso: str | None = Field(default=None, max_length=Limits.MAX_WEIGHT_TEXT_LENGTH)
    fator_correcao: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    categoria: str | None = Field(default=None, max_length=Limits.MAX_CATEGORY_LENGTH)
    quantidade_estoque: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    data_validade: date | None = None
    fornecedor: str | None = Field(default=None, max_length=200)

    @field_validator("alimento", "unidade")
    @classmethod
    def strip_required(cls, value):
        return None if value is None else _strip_required(value)

    @field_validator("peso", mode="before")
    @classmethod
    def validate_peso(cls, value):
        return None if value is None else _weight_text(value)


class IngredientOutput(BaseModel):
    id: str
    alimento: str
    unidade: str
    preco: float
    peso: str
    fator_correcao: float
    categoria: str | None = None
    quantidade_estoque: float | None = None
    data_validade: date | None = None
    fornecedor: str | None = None
    ativo: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Mix
# =============================================================================


class MixEntryIn(BaseModel):
    ingrediente_id: str = Field(min_length=1)
    quantidade: float = Field(gt=0, allow_inf_nan=False)
    unidade: str = Field(min_length=1, max_length=Limits.MAX_UNIT_LENGTH)


class MixCreate(BaseModel):
    """preco_total and fator_correcao are derived; values sent by clients are ignored."""

    nome: str = Field(min_length=1, max_length=Limits.MAX_MIX_NAME_LENGTH)
    ingredientes: list[MixEntryIn] = Field(min_length=1)
    categoria: str = Field(default="Mix", max_length=Limits.MAX_CATEGORY_LENGTH)
    peso_total: str = Field(max_length=Limits.MAX_WEIGHT_TEXT_LENGTH)
    unidade: str = Field(min_length=1, max_length=Limits.MAX_UNIT_LENGTH)
    descricao: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    ativo: bool = True

    @field_validator("nome", "unidade")
    @classmethod
    def strip_required(cls, value):
        return _strip_required(value)

    @field_validator("peso_total", mode="before")
    @classmethod
    def validate_peso_total(cls, value):
        return _weight_text(value)


class MixUpdate(BaseModel):
    nome: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_MIX_NAME_LENGTH)
    ingredientes: list[MixEntryIn] | None = Field(default=None, min_length=1)
    categoria: str | None = Field(default=None, max_length=Limits.MAX_CATEGORY_LENGTH)
    peso_total: str | None = Field(default=None, max_length=Limits.MAX_WEIGHT_TEXT_LENGTH)
    unidade: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_UNIT_LENGTH)
    descricao: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)

    @field_validator("nome", "unidade")
    @classmethod
    def strip_required(cls, value):
        return None if value is None else _strip_required(value)

    @field_validator("peso_total", mode="before")
    @classmethod
    def validate_peso_total(cls, value):
        return None if value is None else _weight_text(value)


class MixEntryOut(BaseModel):
    ingrediente_id: str
    alimento: str | None = None
    quantidade: float
    unidade: str
    preco: float | None = None
    fator_correcao: float | None = None


class MixOutput(BaseModel):
    id: str
    nome: str
    ingredientes: list[MixEntryOut]
    categoria: str
    peso_total: str
    unidade: str
    preco_total: float
    fator_correcao: float
    descricao: str | None = None
    ativo: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Recipe sheet
# =============================================================================


class RecipeLineIn(BaseModel):
    """
    Draft recipe line.

    nome and unidade always come from the referenced ingredient or mix.
    The three price inputs default to the referenced item's current values.
    """

    model_config = ConfigDict(extra="ignore")

    ingrediente_id: str = Field(min_length=1)
    quantidade_usada: float
    preco_unitario: float | None = None
    peso_compra: float | None = None
    fator_correcao: float | None = None


class RecipeSheetCreate(BaseModel):
    """Numeric ranges are enforced by the cost calculator."""

    model_config = ConfigDict(extra="ignore")

    nome_receita: str = Field(
        min_length=Limits.MIN_RECIPE_NAME_LENGTH, max_length=Limits.MAX_RECIPE_NAME_LENGTH
    )
    ingredientes: list[RecipeLineIn]
    rendimento: float
    unidade_rendimento: str = Field(min_length=1, max_length=Limits.MAX_UNIT_LENGTH)
    gas_energia: float = 0.0
    embalagem: float = 0.0
    mao_obra: float = 0.0
    outros: float = 0.0
    margem_lucro: float = 0.0
    modo_preparo: str | None = None
    observacoes: str | None = None
    ativo: bool = True

    @field_validator("nome_receita", "unidade_rendimento")
    @classmethod
    def strip_required(cls, value):
        return _strip_required(value)


class RecipeSheetUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    nome_receita: str | None = Field(
        default=None,
        min_length=Limits.MIN_RECIPE_NAME_LENGTH,
        max_length=Limits.MAX_RECIPE_NAME_LENGTH,
    )
    ingredientes: list[RecipeLineIn] | None = None
    rendimento: float | None = None
    unidade_rendimento: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_UNIT_LENGTH)
    gas_energia: float | None = None
    embalagem: float | None = None
    mao_obra: float | None = None
    outros: float | None = None
    margem_lucro: float | None = None
    modo_preparo: str | None = None
    observacoes: str | None = None

    @field_validator("nome_receita", "unidade_rendimento")
    @classmethod
    def strip_required(cls, value):
        return None if value is None else _strip_required(value)


class CostPreviewRequest(BaseModel):
    """Calculation inputs without the descriptive fields of a sheet."""

    model_config = ConfigDict(extra="ignore")

    ingredientes: list[RecipeLineIn] = Field(default_factory=list)
    rendimento: float
    gas_energia: float = 0.0
    embalagem: float = 0.0
    mao_obra: float = 0.0
    outros: float = 0.0
    margem_lucro: float = 0.0


class RecipeLineOut(BaseModel):
    ingrediente_id: str
    tipo: str
    nome: str
    unidade: str
    quantidade_usada: float
    preco_unitario: float
    peso_compra: float
    fator_correcao: float
    custo_calculado: float


class RecipeSheetOutput(BaseModel):
    id: str
    nome_receita: str
    ingredientes: list[RecipeLineOut]
    rendimento: float
    unidade_rendimento: str
    gas_energia: float
    embalagem: float
    mao_obra: float
    outros: float
    margem_lucro: float
    custo_total: float
    custo_por_unidade: float
    preco_venda_sugerido: float
    modo_preparo: str | None = None
    observacoes: str | None = None
    ativo: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CostDetails(BaseModel):
    ingredientes: float
    gas_energia: float
    embalagem: float
    mao_obra: float
    outros: float


class CostPreviewOutput(BaseModel):
    """Result of a calculation that is not persisted."""

    custo_total: float
    custo_por_unidade: float
    preco_venda_sugerido: float
    detalhes_custos: CostDetails
    ingredientes: list[RecipeLineOut]


class PurchasableOutput(BaseModel):
    tipo: str
    id: str
    nome: str
    unidade: str
    preco_unitario: float
    peso_compra: float | None = None
    fator_correcao: float
    ativo: bool


# =============================================================================
# Users (admin)
# =============================================================================


class UserUpdate(BaseModel):
    nome: str | None = Field(default=None, min_length=2, max_length=200)
    email: EmailStr | None = None
    company: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=40)
