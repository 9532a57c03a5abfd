"""Ansible playbook resource: runs ``ansible-playbook`` from a configuration."""

from __future__ import annotations

import os
import subprocess
import tempfile
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

TYPE_NAME = "ansible_playbook"
GENERATED_PLAYBOOK_NAME = "generated_playbook.yml"
ANSIBLE_PLAYBOOK = "ansible-playbook"

Runner = Callable[..., subprocess.CompletedProcess]


class AnsibleError(Exception):
    """Raised when ``ansible-playbook`` fails; carries its combined output."""

    def __init__(self, output: str) -> None:
        super().__init__(output)
        self.output = output


@dataclass
class PlaybookConfig:
    """Configuration of a playbook run; unset attributes are ``None``."""

    path: str | None = None
    roles: list[str] | None = None
    extra_vars: str | None = None
    inventory_content: str | None = None
    become: bool | None = None
    check_mode: bool | None = None
    limit: str | None = None
    tags: list[str] | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PlaybookConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown attributes: {', '.join(sorted(unknown))}")
        return cls(**dict(data))


def _as_config(config: PlaybookConfig | Mapping[str, Any]) -> PlaybookConfig:
    return config if isinstance(config, PlaybookConfig) else PlaybookConfig.from_mapping(config)


def build_args(config: PlaybookConfig) -> list[str]:
    """Return the ``ansible-playbook`` options for ``config``, without the playbook."""
    args = ["-i", "-"]
    if config.check_mode:
        args.append("--check")
    if config.limit:
        args += ["--limit", config.limit]
    if config.extra_vars:
        args += ["--extra-vars", config.extra_vars]
    if config.tags:
        args += ["--tags", ",".join(config.tags)]
    return args


def generate_playbook(roles: Iterable[str] | None, become: bool | None = None) -> str:
    """Return a single-play YAML playbook applying ``roles`` to all hosts."""
    play: dict[str, Any] = {
        "hosts": "all",
        "gather_facts": False,
        "roles": list(roles or ()),
    }
    if become:
        play["become"] = True
    return yaml.safe_dump([play], default_flow_style=False, sort_keys=True)


def write_generated_playbook(
    roles: Iterable[str] | None,
    become: bool | None = None,
    directory: str | os.PathLike[str] | None = None,
) -> str:
    """Write the generated playbook into ``directory`` (the temp dir by default)."""
    target = Path(directory if directory is not None else tempfile.gettempdir())
    path = target / GENERATED_PLAYBOOK_NAME
    path.write_text(generate_playbook(roles, become), encoding="utf-8")
    path.chmod(0o644)
    return str(path)


def resolve_playbook_path(
    config: PlaybookConfig, directory: str | os.PathLike[str] | None = None
) -> str:
    """Return the explicit path, or write a playbook from roles; else ``""``."""
    if config.path:
        return config.path
    if config.roles is not None:
        return write_generated_playbook(config.roles, config.become, directory)
    return ""


def _execute(
    config: PlaybookConfig,
    runner: Runner | None,
    directory: str | os.PathLike[str] | None,
) -> str:
    run = runner or subprocess.run
    command = [ANSIBLE_PLAYBOOK, *build_args(config), resolve_playbook_path(config, directory)]

    options: dict[str, Any] = {"stdout": subprocess.PIPE, "stderr": subprocess.STDOUT}
    if config.inventory_content is not None:
        options["input"] = config.inventory_content.encode("utf-8")
    else:
        options["stdin"] = subprocess.DEVNULL

    try:
        completed = run(command, **options)
    except OSError as exc:
        raise AnsibleError(str(exc)) from exc

    raw = completed.stdout or b""
    output = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else str(raw)
    if completed.returncode != 0:
        raise AnsibleError(output)
    return output


def run_playbook(config: PlaybookConfig, runner: Runner | None = None) -> str:
    """Run ``ansible-playbook`` and return its combined output.

    A playbook generated from roles is written to the temp directory.
    Raises AnsibleError if the command cannot start or exits non-zero.
    """
    return _execute(config, runner, None)


class PlaybookResource:
    """Resource that runs a playbook whenever it is created or updated."""

    type_name = TYPE_NAME

    def __init__(
        self,
        runner: Runner | None = None,
        directory: str | os.PathLike[str] | None = None,
    ) -> None:
        self.runner = runner
        self.directory = directory

    def schema(self) -> dict[str, Any]:
        return {
            "path": {"type": "string", "optional": True},
            "roles": {"type": "list", "element": "string", "optional": True},
            "extra_vars": {"type": "string", "optional": True},
            "inventory_content": {"type": "string", "optional": True},
            "become": {"type": "bool", "optional": True},
            "check_mode": {"type": "bool", "optional": True},
            "limit": {"type": "string", "optional": True},
            "tags": {"type": "list", "element": "string", "optional": True},
        }

    def create(self, config: PlaybookConfig | Mapping[str, Any]) -> PlaybookConfig:
        """Run the playbook and return the planned configuration as state."""
        planned = _as_config(config)
        _execute(planned, self.runner, self.directory)
        return planned

    def read(self, state: PlaybookConfig | Mapping[str, Any]) -> PlaybookConfig:
        """Return the stored state unchanged; nothing is queried remotely."""
        return _as_config(state)

    def update(self, config: PlaybookConfig | Mapping[str, Any]) -> PlaybookConfig:
        return self.create(config)

    def delete(self, state: PlaybookConfig | Mapping[str, Any]) -> None:
        """Forget the state; a playbook run cannot be undone.

        Raises ValueError if the state holds unknown attributes.
        """
        _as_config(state)