"""Pydantic model for the read‑only service catalog."""

from typing import Optional

from pydantic import BaseModel, Field


class ServiceRead(BaseModel):
    id: int
    name: str = Field(..., examples=["Deep Cleaning"])
    description: Optional[str] = Field(None, examples=["Complete deep cleaning service"])
    price: Optional[float] = Field(None, examples=[150.0])

    model_config = {
        "from_attributes": True,
    }
