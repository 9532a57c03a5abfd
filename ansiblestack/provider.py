"""The ansible provider: lists the playbook resource and inventory data source."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ansiblestack.inventory import InventoryDataSource
from ansiblestack.playbook import PlaybookResource

TYPE_NAME = "ansible"


class AnsibleProvider:
    """Provider with no configuration of its own."""

    type_name = TYPE_NAME

    def schema(self) -> dict[str, Any]:
        return {}

    def configure(self, config: Mapping[str, Any] | None = None) -> None:
        """Accept the provider configuration; it takes no attributes.

        Raises ValueError if ``config`` names attributes outside the schema.
        """
        unknown = sorted(set(config or {}) - set(self.schema()))
        if unknown:
            raise ValueError(f"unknown attributes: {', '.join(unknown)}")

    def resources(self) -> list[Callable[[], PlaybookResource]]:
        return [PlaybookResource]

    def data_sources(self) -> list[Callable[[], InventoryDataSource]]:
        return [InventoryDataSource]


def new() -> AnsibleProvider:
    """Return a new provider."""
    return AnsibleProvider()