# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from app.db.repositories.post_repository import PostRepository
from app.db.repositories.term_repository import TermRepository

__all__ = ["PostRepository", "TermRepository"]
