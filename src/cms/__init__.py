# CMS — post lifecycle on top of the writer, keyword stats and the store
from .service import PostService

__all__ = ["PostService"]
