from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    ADMIN = "admin"
    DISTRIBUTOR = "distribuidor"

    @classmethod
    def parse(cls, value: object) -> "Role":
        if isinstance(value, Role):
            return value
        normalized = str(value or "").strip().lower()
        if normalized == "distributor":
            return cls.DISTRIBUTOR
        return cls(normalized)


class Identity(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    email: str | None = None
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: object) -> Role:
        return Role.parse(value)


class LoginResponse(Identity):
    token: str


class SessionData(BaseModel):
    token: str
    identity: Identity


class Category(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    # embedded references may carry only the id
    name: str = ""
    slug: str = ""
    description: str | None = None


class CategoryWithCount(Category):
    product_count: int = Field(default=0, alias="productCount")


class ProductImage(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: str
    public_id: str | None = Field(default=None, alias="publicId")


class Product(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    description: str | None = None
    category: Union[Category, str, None] = None
    distributor_price: float = Field(default=0.0, alias="distributorPrice")
    client_price: float | None = Field(default=None, alias="clientPrice")
    purchase_price: float | None = Field(default=None, alias="purchasePrice")
    suggested_price: float | None = Field(default=None, alias="suggestedPrice")
    featured: bool = False
    image: Optional[ProductImage] = None
    distributor_stock: int | None = Field(default=None, alias="distributorStock")

    @property
    def category_id(self) -> str | None:
        if isinstance(self.category, Category):
            return self.category.id
        return self.category or None

    @property
    def category_name(self) -> str | None:
        """Display name of the category; a bare reference is its own name."""
        if isinstance(self.category, Category):
            return self.category.name
        return self.category or None


class StockAssignment(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    # null when the referenced product was deleted
    product: Union[Product, str, None] = None
    quantity: int = Field(default=0, ge=0)
    low_stock_alert: int = Field(default=5, ge=0, alias="lowStockAlert")
    # server-side hint only; classification is always recomputed locally
    is_low_stock: bool | None = Field(default=None, alias="isLowStock")

    @property
    def product_detail(self) -> Product | None:
        return self.product if isinstance(self.product, Product) else None
