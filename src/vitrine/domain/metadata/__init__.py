"""Vitrine Metadata — key/value metadata on element relations."""

from vitrine.domain.metadata.element_metadata import (
    DEFAULT_DESTINATION_TYPE,
    ElementMetadata,
    MetadataOwner,
    MetadataReference,
)

__all__ = [
    "DEFAULT_DESTINATION_TYPE",
    "ElementMetadata",
    "MetadataOwner",
    "MetadataReference",
]
