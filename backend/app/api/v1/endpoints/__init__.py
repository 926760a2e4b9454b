# API endpoints
from . import auth, projects, uploads, analysis, health

__all__ = ["auth", "projects", "uploads", "analysis", "health"]
