"""Infrastructure layer for the metadata context."""

from vitrine.domain.metadata.infrastructure.metadata_repository import ElementMetadataRepository
from vitrine.domain.metadata.infrastructure.schema import metadata_obj, metadata_table

__all__ = ["ElementMetadataRepository", "metadata_obj", "metadata_table"]
