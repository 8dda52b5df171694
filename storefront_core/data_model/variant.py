from pydantic import BaseModel, Field


class ProductVariant(BaseModel):
    id: str
    product_id: str
    size: str
    color: str
    price: float = Field(..., ge=0)
    stock: int = Field(0, ge=0)
