import subprocess

import pytest
import yaml

from ansiblestack.playbook import (
    AnsibleError,
    PlaybookConfig,
    PlaybookResource,
    build_args,
    generate_playbook,
    resolve_playbook_path,
    run_playbook,
    write_generated_playbook,
)


class FakeRunner:
    def __init__(self, returncode=0, stdout=b"ok"):
        self.returncode = returncode
        self.stdout = stdout
        self.calls = []

    def __call__(self, command, **options):
        self.calls.append((command, options))
        return subprocess.CompletedProcess(command, self.returncode, stdout=self.stdout)


def test_default_args_read_inventory_from_stdin():
    assert build_args(PlaybookConfig()) == ["-i", "-"]


def test_all_options():
    config = PlaybookConfig(
        check_mode=True, limit="web", extra_vars="x=1", tags=["a", "b"]
    )
    assert build_args(config) == [
        "-i", "-", "--check", "--limit", "web", "--extra-vars", "x=1", "--tags", "a,b",
    ]


def test_empty_and_false_options_are_ignored():
    config = PlaybookConfig(check_mode=False, limit="", extra_vars="", tags=[])
    assert build_args(config) == ["-i", "-"]


def test_generated_playbook_structure():
    play = yaml.safe_load(generate_playbook(["common", "nginx"], True))
    assert play == [
        {"hosts": "all", "gather_facts": False, "roles": ["common", "nginx"], "become": True}
    ]


def test_generated_playbook_without_become():
    play = yaml.safe_load(generate_playbook(["common"], False))
    assert "become" not in play[0]
    assert play[0]["roles"] == ["common"]


def test_write_generated_playbook(tmp_path):
    path = write_generated_playbook(["common"], None, tmp_path)
    assert path == str(tmp_path / "generated_playbook.yml")
    with open(path, encoding="utf-8") as handle:
        assert handle.read() == generate_playbook(["common"], None)


def test_explicit_path_wins(tmp_path):
    config = PlaybookConfig(path="site.yml", roles=["common"])
    assert resolve_playbook_path(config, tmp_path) == "site.yml"
    assert not (tmp_path / "generated_playbook.yml").exists()


def test_roles_produce_generated_file(tmp_path):
    path = resolve_playbook_path(PlaybookConfig(roles=["common"]), tmp_path)
    assert path == str(tmp_path / "generated_playbook.yml")


def test_no_path_and_no_roles_gives_empty_path(tmp_path):
    assert resolve_playbook_path(PlaybookConfig(), tmp_path) == ""


def test_run_passes_inventory_on_stdin():
    runner = FakeRunner(stdout=b"done")
    config = PlaybookConfig(path="site.yml", inventory_content="[all]\nweb1\n", limit="web1")
    output = run_playbook(config, runner)
    command, options = runner.calls[0]
    assert output == "done"
    assert command == ["ansible-playbook", "-i", "-", "--limit", "web1", "site.yml"]
    assert options["input"] == b"[all]\nweb1\n"
    assert options["stderr"] == subprocess.STDOUT


def test_run_without_inventory_uses_devnull():
    runner = FakeRunner()
    run_playbook(PlaybookConfig(path="site.yml"), runner)
    _, options = runner.calls[0]
    assert options["stdin"] == subprocess.DEVNULL
    assert "input" not in options


def test_failed_run_raises_with_output():
    runner = FakeRunner(returncode=2, stdout=b"fatal: unreachable")
    with pytest.raises(AnsibleError) as info:
        run_playbook(PlaybookConfig(path="site.yml"), runner)
    assert info.value.output == "fatal: unreachable"


def test_missing_binary_raises_ansible_error():
    def runner(command, **options):
        raise FileNotFoundError(command[0])

    with pytest.raises(AnsibleError):
        run_playbook(PlaybookConfig(path="site.yml"), runner)


def test_resource_create_and_update_run_playbook(tmp_path):
    runner = FakeRunner()
    resource = PlaybookResource(runner=runner, directory=tmp_path)
    state = resource.create({"roles": ["common"], "become": True})
    assert state == PlaybookConfig(roles=["common"], become=True)
    assert runner.calls[0][0][-1] == str(tmp_path / "generated_playbook.yml")
    updated = resource.update(PlaybookConfig(path="site.yml"))
    assert updated.path == "site.yml"
    assert len(runner.calls) == 2


def test_resource_read_and_delete_do_not_run():
    runner = FakeRunner()
    resource = PlaybookResource(runner=runner)
    state = PlaybookConfig(path="site.yml")
    assert resource.read(state) is state
    assert resource.delete(state) is None
    assert runner.calls == []


def test_resource_create_propagates_failure():
    resource = PlaybookResource(runner=FakeRunner(returncode=1, stdout=b"boom"))
    with pytest.raises(AnsibleError):
        resource.create(PlaybookConfig(path="site.yml"))


def test_unknown_attribute_rejected():
    with pytest.raises(ValueError):
        PlaybookConfig.from_mapping({"playbook": "site.yml"})


def test_resource_schema_and_name():
    resource = PlaybookResource()
    assert resource.type_name == "ansible_playbook"
    assert set(resource.schema()) == {
        "path", "roles", "extra_vars", "inventory_content",
        "become", "check_mode", "limit", "tags",
    }