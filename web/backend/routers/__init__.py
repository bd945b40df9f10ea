"""API route handlers."""

from .recommendations import router as recommendations_router
from .centers import router as centers_router
