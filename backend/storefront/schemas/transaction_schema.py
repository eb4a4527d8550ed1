import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class CheckoutIn(BaseModel):
    customer_name: str = ""
    customer_address: str = ""
    # raw form values; blank means 0
    discount: Optional[Union[int, str]] = None
    paid_amount: Optional[Union[int, str]] = None


class TransactionItemIn(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: int = Field(..., ge=0)


class TransactionIn(BaseModel):
    id: str = Field(..., min_length=1)
    date: datetime.date
    customer_name: str = Field(..., min_length=1)
    customer_address: Optional[str] = None
    total_amount: int = Field(..., ge=0)
    discount: Optional[int] = Field(None, ge=0)
    paid_amount: Optional[int] = Field(None, ge=0)
    settled: bool = False
    items: List[TransactionItemIn] = Field(..., min_length=1)


class TransactionEditIn(BaseModel):
    total_amount: int = Field(..., ge=0)
    paid_amount: int = Field(..., ge=0)
