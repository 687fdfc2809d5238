# eurobrokers/models/lead.py

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Boolean
from sqlalchemy.sql import func, false
from eurobrokers.utils.database import Base

class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)  # автоинкремент
    city = Column(String, nullable=False)
    psc = Column(String, nullable=False)                # PSČ, "100 00" или "10000"
    type = Column(String, nullable=False)               # тип недвижимости, всегда в нижнем регистре
    area = Column(Float, nullable=False)                # площадь, м²
    layout = Column(String, nullable=True)              # планировка (2+kk, ...)
    balcony = Column(Text, nullable=True)               # только для "byt"
    condition = Column(Text, nullable=True)             # состояние, в нижнем регистре
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    contacted = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime, server_default=func.now())

leads_table = Lead.__table__
