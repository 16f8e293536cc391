"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, repositories, and the provider
factory.

- Interfaces: the ProviderAdapter boundary and capability markers
- Models (DTOs): messages, attachments, call params, request descriptors
- Repositories: key and base URL resolution
- Factory: lazy creation of providers by canonical name
"""

from .models import (
    Role,
    Attachment,
    Message,
    ContextEntry,
    CallParams,
    RequestDescriptor,
    REDACTED,
)

from .interfaces import (
    ProviderAdapter,
    SupportsImageGeneration,
    join_url,
)

from .repositories.keys import KeysRepository, KeyResolution
from .factory import ProviderFactory, create_provider

__all__ = [
    # Models
    "Role",
    "Attachment",
    "Message",
    "ContextEntry",
    "CallParams",
    "RequestDescriptor",
    "REDACTED",
    # Interfaces
    "ProviderAdapter",
    "SupportsImageGeneration",
    "join_url",
    # Repositories
    "KeysRepository",
    "KeyResolution",
    # Factory
    "ProviderFactory",
    "create_provider",
]
