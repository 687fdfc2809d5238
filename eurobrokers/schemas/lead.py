# eurobrokers/schemas/lead.py

from pydantic import BaseModel
from datetime import datetime
from typing import Optional

# ────────────── Базовая схема ──────────────
class LeadBase(BaseModel):
    city: str
    psc: str
    type: str
    area: float
    layout: str = ""
    balcony: str = ""
    condition: str = ""
    first_name: str
    last_name: str
    email: str
    phone: str

# ────────────── Схема для CREATE (результат валидации формы) ──────────────
class LeadCreate(LeadBase):
    pass

# ────────────── Схема для чтения из базы ──────────────
class Lead(LeadBase):
    id: int
    # старые строки (до миграции) могут содержать NULL
    layout: Optional[str] = None
    balcony: Optional[str] = None
    condition: Optional[str] = None
    contacted: bool = False
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
