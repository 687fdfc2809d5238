# eurobrokers/schemas/user.py

from pydantic import BaseModel


class User(BaseModel):
    """
    Учётная запись администратора, как она хранится в таблице users.
    """
    id: int
    email: str
    password_hash: str

    model_config = {
        "from_attributes": True
    }
