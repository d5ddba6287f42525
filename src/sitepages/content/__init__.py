"""Hugo content scanning."""

from sitepages.content.scanner import ContentError, ContentScanner

__all__ = ["ContentScanner", "ContentError"]
