# eurobrokers/exceptions.py

"""
Доменные исключения.
Перевод в HTTP-ответы выполняется в роутерах и обработчиках исключений main.py.
"""


class DatabaseError(Exception):
    """Ошибка драйвера SQLite (диск, ограничения, соединение). Исходная ошибка в __cause__."""


class LeadRejected(Exception):
    """Данные формы не прошли валидацию."""

    def __init__(self, message: str = "Chybí požadované údaje nebo nejsou ve správném formátu."):
        super().__init__(message)
        self.message = message


class LeadNotFound(Exception):
    def __init__(self, lead_id: int):
        super().__init__(f"Lead {lead_id} not found")
        self.lead_id = lead_id


class InvalidCredentials(Exception):
    """Неверный email или пароль. Причина намеренно не уточняется."""

    def __init__(self, message: str = "Neplatné přihlašovací údaje."):
        super().__init__(message)
        self.message = message


class LoginRequired(Exception):
    """Запрос к админке без активной сессии."""
