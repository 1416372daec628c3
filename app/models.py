# app/models.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, Union


class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: Optional[str] = None
    price: Union[int, float]
    category: str
    inStock: bool = True
