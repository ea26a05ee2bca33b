from app.models.project import Asset, Project
from app.models.supplier import Supplier
from app.models.quote import Quote

__all__ = [
    "Asset",
    "Project",
    "Quote",
    "Supplier",
]
