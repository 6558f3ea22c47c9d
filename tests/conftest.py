"""Shared fixtures: a fake terraform runner and definition files."""

import json
from pathlib import Path
import pytest
import yaml
from hclimport.utils.errors import TerraformError

ONELOGIN_PROVIDER = 'provider["registry.terraform.io/onelogin/onelogin"]'


class FakeTerraformRunner:
    """Records calls and appends imported resources to terraform.tfstate."""

    instances = []

    def __init__(self, working_dir, binary="terraform", env=None, timeout=None):
        self.working_dir = Path(working_dir)
        self.calls = []
        self.fail_on = None
        FakeTerraformRunner.instances.append(self)

    def init(self):
        self.calls.append(("init",))

    def import_resource(self, address, import_id):
        self.calls.append(("import", address, import_id))
        if address == self.fail_on:
            raise TerraformError(f"Problem executing terraform import {address}",
                                 ["terraform", "import", address, import_id])

        state_path = self.working_dir / "terraform.tfstate"
        if state_path.exists():
            state = json.loads(state_path.read_text(encoding="utf-8"))
        else:
            state = {"version": 4, "terraform_version": "1.5.7", "resources": []}
        resource_type, name = address.split(".", 1)
        state["resources"].append({
            "mode": "managed",
            "type": resource_type,
            "name": name,
            "provider": ONELOGIN_PROVIDER,
            "instances": [{"attributes": {"id": import_id, "name": f"App {import_id}", "visible": True}}],
        })
        state_path.write_text(json.dumps(state), encoding="utf-8")


@pytest.fixture
def fake_runner_cls():
    """FakeTerraformRunner class with a fresh instance registry."""
    FakeTerraformRunner.instances = []
    return FakeTerraformRunner


@pytest.fixture
def definitions_file(tmp_path):
    """Definitions export with a duplicate name."""
    data = {
        "onelogin_apps": [
            {"type": "onelogin_apps", "name": "salesforce", "provider": "onelogin", "import_id": 101},
            {"type": "onelogin_apps", "name": "slack", "provider": "onelogin", "import_id": "102"},
            {"type": "onelogin_apps", "name": "salesforce", "provider": "onelogin", "import_id": "103"},
        ],
        "onelogin_users": [
            {"type": "onelogin_users", "name": "jdoe", "provider": "onelogin", "import_id": "9"},
        ],
    }
    path = tmp_path / "definitions.yaml"
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep user-level config out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("HCLIMPORT_TERRAFORM_BINARY", raising=False)
    monkeypatch.delenv("HCLIMPORT_WORKDIR", raising=False)
    return home
