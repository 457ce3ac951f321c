"""API routers for the Drive Browser."""

from drive_browser.routers import health, listing

__all__ = ["health", "listing"]
