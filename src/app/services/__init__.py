from .unit_of_work import UnitOfWork
from .pdf_service import PdfService
from .security import PasswordHasher, TokenService, InvalidTokenError

__all__ = [
    "UnitOfWork",
    "PdfService",
    "PasswordHasher",
    "TokenService",
    "InvalidTokenError",
]
