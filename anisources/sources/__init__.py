"""
Sources - One adapter module per supported anime site.

Every module here except base and common defines a BaseSource subclass;
the SourceRegistry discovers them automatically.
"""

from anisources.sources.base import BaseSource, FieldPolicy, FilterOption, PayloadFormat, SearchRequest, SourceMetadata

__all__ = [
    "BaseSource",
    "SourceMetadata",
    "FieldPolicy",
    "FilterOption",
    "PayloadFormat",
    "SearchRequest",
]
