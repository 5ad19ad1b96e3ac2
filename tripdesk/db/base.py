"""SQLAlchemy Base class for all models."""
from tripdesk.models.base import Base


def import_models():
    """Import all models to register them with SQLAlchemy."""
    import tripdesk.models  # noqa: F401


__all__ = ["Base", "import_models"]
