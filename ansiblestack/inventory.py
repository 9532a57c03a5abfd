"""Ansible inventory data source: builds a YAML inventory from hosts and groups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

TYPE_NAME = "ansible_inventory"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _string_map(values: Mapping[str, Any] | None) -> dict[str, str]:
    return {str(key): _text(value) for key, value in (values or {}).items()}


def _string_list(values: Iterable[Any] | None) -> list[str]:
    return [_text(value) for value in (values or ())]


@dataclass(frozen=True)
class Host:
    """A host listed outside any group, with optional variables."""

    name: str
    vars: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Host:
        if data.get("name") is None:
            raise ValueError("host entry requires a name")
        return cls(name=_text(data["name"]), vars=_string_map(data.get("vars")))


@dataclass(frozen=True)
class Group:
    """A named group's member hosts, variables and child groups."""

    hosts: list[str] = field(default_factory=list)
    vars: dict[str, str] = field(default_factory=dict)
    children: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> Group:
        data = data or {}
        return cls(
            hosts=_string_list(data.get("hosts")),
            vars=_string_map(data.get("vars")),
            children=_string_list(data.get("children")),
        )


def _as_host(host: Host | Mapping[str, Any]) -> Host:
    return host if isinstance(host, Host) else Host.from_mapping(host)


def _as_group(group: Group | Mapping[str, Any] | None) -> Group:
    return group if isinstance(group, Group) else Group.from_mapping(group)


def build_inventory(
    hosts: Iterable[Host | Mapping[str, Any]] | None,
    groups: Mapping[str, Group | Mapping[str, Any]] | None,
) -> dict[str, Any]:
    """Return the inventory structure as nested dictionaries."""
    inventory: dict[str, Any] = {}

    host_list = [_as_host(host) for host in (hosts or ())]
    if host_list:
        inventory["ungrouped"] = {
            "hosts": {host.name: (dict(host.vars) or None) for host in host_list}
        }

    for name, raw_group in (groups or {}).items():
        group = _as_group(raw_group)
        entry: dict[str, Any] = {}
        if group.hosts:
            entry["hosts"] = dict.fromkeys(group.hosts)
        if group.vars:
            entry["vars"] = dict(group.vars)
        if group.children:
            entry["children"] = dict.fromkeys(group.children)
        inventory[name] = entry

    return inventory


def render_inventory(
    hosts: Iterable[Host | Mapping[str, Any]] | None,
    groups: Mapping[str, Group | Mapping[str, Any]] | None,
) -> str:
    """Return the inventory as a YAML document with sorted keys."""
    return yaml.safe_dump(
        build_inventory(hosts, groups),
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )


class InventoryDataSource:
    """Data source that computes inventory content from its configuration."""

    type_name = TYPE_NAME

    def schema(self) -> dict[str, Any]:
        return {
            "content": {"type": "string", "computed": True},
            "hosts": {
                "type": "list_nested",
                "optional": True,
                "attributes": {
                    "name": {"type": "string", "required": True},
                    "vars": {"type": "map", "element": "string", "optional": True},
                },
            },
            "groups": {
                "type": "map_nested",
                "optional": True,
                "attributes": {
                    "hosts": {"type": "list", "element": "string", "optional": True},
                    "vars": {"type": "map", "element": "string", "optional": True},
                    "children": {"type": "list", "element": "string", "optional": True},
                },
            },
        }

    def read(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """Return the state for ``config`` with ``content`` filled in."""
        hosts = config.get("hosts")
        groups = config.get("groups")
        return {
            "hosts": hosts,
            "groups": groups,
            "content": render_inventory(hosts, groups),
        }