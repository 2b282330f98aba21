"""
ChefAcademy package

This package provides the progression engine of Pip's Kitchen Garden:
GROW -> BUY -> COOK -> FEED.  It separates the engines, domain objects,
static data tables, pure rules and a small text display into distinct
subpackages so the view layer and the storage layer stay collaborators.
"""

__all__ = ["core", "domain", "data", "rules", "ui"]
