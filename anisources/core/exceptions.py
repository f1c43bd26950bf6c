"""
Core Exceptions - Custom exception classes for anisources.

This module defines the exception hierarchy raised by document parsing,
source resolution and configuration handling. Extraction failures that
callers can recover from are reduced to ParseResult values by the
Extractor; only UnknownSourceError escapes it.
"""

from typing import Optional, Any


class AniSourcesError(Exception):
    """Base exception class for all anisources-specific errors."""
    
    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize anisources error.
        
        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details
    
    def __str__(self) -> str:
        return self.message


class ConfigurationError(AniSourcesError):
    """Raised when configuration-related errors occur."""
    
    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize configuration error.
        
        Args:
            message: Error description
            config_path: Path to the problematic configuration file
            details: Additional error context
        """
        super().__init__(message, details)
        self.config_path = config_path


class UnknownSourceError(AniSourcesError):
    """Raised when a source identifier does not name a registered adapter."""
    
    def __init__(self, source_id: Any, details: Optional[Any] = None):
        """
        Initialize unknown source error.
        
        Args:
            source_id: The identifier that failed to resolve
            details: Additional error context
        """
        super().__init__(f"Unknown source: {source_id!r}", details)
        self.source_id = source_id


class MalformedMarkupError(AniSourcesError):
    """Raised when raw text cannot be parsed as an HTML document."""


class MalformedJsonError(AniSourcesError):
    """Raised when raw text cannot be parsed as a JSON document."""


class SelectorMissError(AniSourcesError):
    """Raised when a required element or field is absent from a document."""
    
    def __init__(self, message: str, selector: Optional[str] = None, field_name: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize selector miss error.
        
        Args:
            message: Error description
            selector: CSS selector or JSON path that matched nothing
            field_name: Record field that could not be filled
            details: Additional error context
        """
        super().__init__(message, details)
        self.selector = selector
        self.field_name = field_name


class UnsupportedOperationError(AniSourcesError):
    """Raised when an adapter does not implement a document kind."""
    
    def __init__(self, source_id: Any, kind: Any, details: Optional[Any] = None):
        super().__init__(f"{source_id} does not support {kind} documents", details)
        self.source_id = source_id
        self.kind = kind


# Export all exception classes
__all__ = [
    "AniSourcesError",
    "ConfigurationError",
    "UnknownSourceError",
    "MalformedMarkupError",
    "MalformedJsonError",
    "SelectorMissError",
    "UnsupportedOperationError",
]
