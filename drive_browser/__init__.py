"""Drive Browser: browse and search a cloud-drive snapshot."""

__version__ = "1.0.0"
