# eurobrokers/models/user.py

from sqlalchemy import Column, Integer, String
from eurobrokers.utils.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, unique=True, nullable=False)     # регистр сохраняется как есть
    password_hash = Column(String, nullable=False)          # хэш passlib, не пароль

users_table = User.__table__
