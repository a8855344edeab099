from .grid_management import GridManagement, Navigator, SCROLL_THRESHOLD

__all__ = ["GridManagement", "Navigator", "SCROLL_THRESHOLD"]
