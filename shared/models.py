"""
Domain models for the order service.

Design decisions:
- Using Pydantic for validation and serialization
- JSON field names are camelCase (userId, productId) to match the public API,
  Python attributes are snake_case
- Orders are frozen once created - nothing in the service mutates them
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


# Loose RFC-5322 check - good enough to catch typos in the admin address
EMAIL_PATTERN = re.compile(r"^[\w.-]+@([\w-]+\.)+[\w-]{2,4}$")


# =============================================================================
# Enums
# =============================================================================

class OrderMode(str, Enum):
    """
    Order mode, set once at creation.
    """
    DRAFT = "draft"           # Saved but not yet confirmed
    APPROVED = "approved"     # Confirmed by the customer


# =============================================================================
# Order Models
# =============================================================================

class OrderInput(BaseModel):
    """
    The shape of a create-order request.

    Ids must be JSON integers; strings like "1" are rejected rather than
    coerced. Unknown fields are ignored.
    """
    user_id: StrictInt = Field(..., alias="userId", description="Reference to the ordering user")
    product_id: StrictInt = Field(..., alias="productId", description="Reference to the product")
    mode: OrderMode = Field(default=OrderMode.DRAFT, validate_default=True, description="Order mode")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", use_enum_values=True)


class Order(BaseModel):
    """
    A persisted order. The id is assigned by the order store.
    """
    id: int = Field(..., description="Unique order identifier")
    user_id: int = Field(..., alias="userId")
    product_id: int = Field(..., alias="productId")
    mode: OrderMode = Field(default=OrderMode.DRAFT)

    model_config = ConfigDict(populate_by_name=True, frozen=True, use_enum_values=True)


# =============================================================================
# External Entities
# =============================================================================

class User(BaseModel):
    """User as returned by the external user service. Read-only here."""
    id: int
    name: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# =============================================================================
# Notifications
# =============================================================================

class NotificationEvent(BaseModel):
    """
    An administrative email describing the outcome of a create-order call.

    Built per outcome and never persisted.
    """
    subject: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    recipient: str = Field(..., description="Administrator email address")

    model_config = ConfigDict(frozen=True)

    @field_validator("subject", "body")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("recipient")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError(f"not a valid email address: {value!r}")
        return value
