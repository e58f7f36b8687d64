"""Message source providers: locale to source resolvers.

Submodules:
    base    - MessageSourceProvider protocol
    static  - StaticMessageSourceProvider (fixed locale to source table)
    loading - LoadingMessageSourceProvider, MessageSourceLoader protocol,
              PathSourceLoader, SourceLoadResult, LoadSummary

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from msgsimple.provider.base import MessageSourceProvider
from msgsimple.provider.loading import (
    LoadingMessageSourceProvider,
    LoadSummary,
    MessageSourceLoader,
    PathSourceLoader,
    SourceLoadResult,
)
from msgsimple.provider.static import StaticMessageSourceProvider

__all__ = [
    # Protocols
    "MessageSourceProvider",
    "MessageSourceLoader",
    # Providers
    "StaticMessageSourceProvider",
    "LoadingMessageSourceProvider",
    # Loaders
    "PathSourceLoader",
    # Load tracking
    "LoadSummary",
    "SourceLoadResult",
]
