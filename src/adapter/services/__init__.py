from .unit_of_work import SqlAlchemyUnitOfWork
from .database import Database
from .pdf_service import ReportLabPdfService
from .security import BcryptPasswordHasher, JwtTokenService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "Database",
    "ReportLabPdfService",
    "BcryptPasswordHasher",
    "JwtTokenService",
]
