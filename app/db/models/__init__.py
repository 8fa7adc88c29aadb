from app.db.models.post import Post, post_terms
from app.db.models.term import Term

__all__ = ["Post", "Term", "post_terms"]
