"""Filter service exposing the filter types available to product listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vitrine.foundation.domain.exceptions import UnsupportedError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from vitrine.domain.commerce.config import FilterTypeConfig


class FilterService:
    """Lookup of configured filter types by name.

    Args:
        filter_types: Mapping of filter type name to its configuration,
            either tenant specific or the global definitions.
    """

    def __init__(self, filter_types: Mapping[str, FilterTypeConfig]) -> None:
        self._filter_types = dict(filter_types)

    def get_filter_type_names(self) -> list[str]:
        return list(self._filter_types)

    def get_filter_type_config(self, name: str) -> FilterTypeConfig:
        """Return the filter type configured under ``name``.

        Raises:
            UnsupportedError: If no such filter type is configured.
        """
        try:
            return self._filter_types[name]
        except KeyError:
            raise UnsupportedError(
                f'Filter type "{name}" is not supported. Please check the configuration.',
                category="filter_type",
                key=name,
            ) from None
