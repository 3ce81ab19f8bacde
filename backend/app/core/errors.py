"""
Errores de la API con su forma JSON.

Cada error conoce su status HTTP y el cuerpo que se devuelve al cliente;
los handlers en error_handlers.py solo los traducen a JSONResponse.
"""
from typing import Any, Dict, List, Optional


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> Dict[str, Any]:
        return {"message": self.message}


class NotFoundError(ApiError):
    status_code = 404


class AuthError(ApiError):
    status_code = 401

    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(message)


class RequestValidationFailed(ApiError):
    """400 whose body is the field -> [messages] mapping itself."""

    status_code = 400

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__("The given data was invalid.")
        self.errors = errors

    def to_response(self) -> Dict[str, Any]:
        return self.errors
