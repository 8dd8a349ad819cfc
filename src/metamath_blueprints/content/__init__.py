"""Content model: items and projects scanned from a content root."""

from metamath_blueprints.content.model import Item, ItemInfo, ItemKind, ItemState, Project
from metamath_blueprints.content.scan import scan_projects

__all__ = ["Item", "ItemInfo", "ItemKind", "ItemState", "Project", "scan_projects"]
