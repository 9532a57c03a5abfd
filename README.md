# ansiblestack

Build Ansible inventories from plain Python data and run `ansible-playbook`
against them. You can run an existing playbook file, or a small playbook
generated from a list of roles.

## Installation

```
pip install ansiblestack
```

Running playbooks requires `ansible-playbook` on your `PATH`.

## Inventories (`ansiblestack.inventory`)

`render_inventory(hosts, groups)` turns hosts and groups into YAML inventory
text, with the keys sorted. `build_inventory(hosts, groups)` returns the same
inventory as nested dictionaries, before it is encoded.

- `hosts` is a list of `Host(name, vars)` entries, or mappings with `name` and
  optional `vars`. A host without a name raises `ValueError`. These hosts go
  under the `ungrouped` group. A host with no variables maps to `null`.
- `groups` maps group names to `Group(hosts, vars, children)` entries, or to
  mappings with those keys. A part that is left empty does not appear in the
  output, so a group with nothing in it becomes an empty mapping.
- Variable values are converted to strings.

```python
from ansiblestack.inventory import Host, Group, render_inventory

print(render_inventory(
    [Host("web1", {"ansible_port": "2222"})],
    {"db": Group(hosts=["db1"], vars={"role": "primary"})},
))
```

`InventoryDataSource.read(config)` takes a mapping with `hosts` and `groups`.
It returns them together with the rendered `content`. Its `schema()` method
describes the attributes it accepts.

## Playbooks (`ansiblestack.playbook`)

`PlaybookConfig` has these fields: `path`, `roles`, `extra_vars`,
`inventory_content`, `become`, `check_mode`, `limit` and `tags`. Any field you
leave unset is `None`. `PlaybookConfig.from_mapping` raises `ValueError` for
unknown keys.

- `build_args(config)` returns the options for `ansible-playbook`. The
  inventory is always read from standard input (`-i -`). `--check`, `--limit`,
  `--extra-vars` and `--tags` (comma-joined) are added only when the matching
  field is set.
- `generate_playbook(roles, become)` returns a one-play YAML playbook. The play
  targets `all` hosts, sets `gather_facts: false`, and sets `become: true` only
  when `become` is requested.
- `write_generated_playbook(roles, become, directory)` writes that playbook to
  `generated_playbook.yml`. The file goes in `directory`, or in the system
  temporary directory when no directory is given. It returns the file's path.
- `resolve_playbook_path(config, directory)` chooses which playbook to use:
  1. `path` when it is set.
  2. Otherwise, a playbook generated from `roles` when `roles` is given.
  3. Otherwise, an empty string.
- `run_playbook(config, runner=None)` runs `ansible-playbook` and returns the
  combined standard output and standard error.
  - `inventory_content`, when set, is sent to the command's standard input.
  - If the command cannot start or exits with a non-zero status, it raises
    `AnsibleError`. The exception's `output` attribute holds the output.
  - `runner` defaults to `subprocess.run`. You can replace it, for example in
    tests.

`PlaybookResource(runner=None, directory=None)` follows a resource lifecycle:

- `create(config)` and `update(config)` run the playbook and return the
  configuration as state.
- `read(state)` returns the state unchanged.
- `delete(state)` only checks the state, because a playbook run cannot be
  undone.

## Provider (`ansiblestack.provider`)

`new()` returns an `AnsibleProvider`.

- `schema()` is empty.
- `configure(config)` rejects any attribute.
- `resources()` lists `PlaybookResource`.
- `data_sources()` lists `InventoryDataSource`.

## What this package does not do

This is a library only. It has no command-line program and no server, and it
does not talk to any infrastructure tool through a plugin protocol. You call
the classes and functions from your own code. Nothing is stored between
calls: a state is whatever you pass in.