# eurobrokers/services/intake.py

"""
Валидация публичной формы.

Правила проверяются целиком: любая ошибка -> одно общее LeadRejected
без детализации по полям. При успехе все строки обрезаны, area приведена к float.
"""

import math
import re
from typing import Mapping

from eurobrokers.config import Settings, settings as default_settings
from eurobrokers.exceptions import LeadRejected
from eurobrokers.schemas.lead import LeadCreate

# значения поля type из формы ("byt", "pozemek") и их английские синонимы
APARTMENT_TYPES = frozenset({"byt", "apartment"})
LAND_TYPES = frozenset({"pozemek", "land/plot"})


def _field(form: Mapping, name: str) -> str:
    value = form.get(name)
    return value if isinstance(value, str) else ""


def parse_area(raw: str) -> float | None:
    try:
        area = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(area) or area <= 0:
        return None
    return area


def validate_lead(form: Mapping, settings: Settings = default_settings) -> LeadCreate:
    """
    Сырые поля формы -> нормализованный LeadCreate.

    :param form: поля формы (city, psc, type, area, layout, balcony, condition,
                 first_name, last_name, email, phone); отсутствующие = ""
    :param settings: источник шаблонов PSČ и телефона
    :raises LeadRejected: если хоть одно правило не выполнено
    """
    city = _field(form, "city").strip()
    psc = _field(form, "psc")
    property_type = _field(form, "type").strip().lower()
    area = parse_area(_field(form, "area"))
    first_name = _field(form, "first_name").strip()
    last_name = _field(form, "last_name").strip()
    email = _field(form, "email")
    phone = _field(form, "phone")

    psc_ok = re.fullmatch(settings.POSTAL_CODE_PATTERN, psc) is not None
    phone_ok = re.fullmatch(settings.PHONE_PATTERN, phone) is not None
    email_ok = "@" in email

    if not (city and psc_ok and property_type and area is not None
            and first_name and last_name and email_ok and phone_ok):
        raise LeadRejected()

    balcony = _field(form, "balcony").strip() if property_type in APARTMENT_TYPES else ""
    condition = _field(form, "condition").strip().lower()

    layout = _field(form, "layout").strip()
    if not layout and property_type in LAND_TYPES:
        layout = property_type

    return LeadCreate(
        city=city,
        psc=psc.strip(),
        type=property_type,
        area=area,
        layout=layout,
        balcony=balcony,
        condition=condition,
        first_name=first_name,
        last_name=last_name,
        email=email.strip(),
        phone=phone.strip(),
    )
