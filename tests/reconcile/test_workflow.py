"""Tests for the end-to-end import workflow."""

import pytest
from hclimport.config.models import ReconcileConfig, RenderConfig
from hclimport.importer.sources import FileImporter
from hclimport.reconcile.workflow import run_import, ImportStatus
from hclimport.scan.scanner import scan_file
from hclimport.utils.errors import TerraformError, StateLoadError


@pytest.fixture
def workdir(tmp_path):
    path = tmp_path / "infra"
    path.mkdir()
    return path


@pytest.fixture
def config(workdir):
    return ReconcileConfig(working_dir=workdir, auto_approve=True)


class TestRunImport:
    """Test import runs against a fake terraform."""

    def test_imports_and_rewrites_file(self, config, workdir, definitions_file, fake_runner_cls):
        """New resources are imported and main.tf is regenerated from state."""
        runner = fake_runner_cls(workdir)
        result = run_import("onelogin_apps", config, FileImporter(str(definitions_file)), runner)

        assert result.status == ImportStatus.IMPORTED
        assert result.resources == [
            "onelogin_apps.salesforce",
            "onelogin_apps.slack",
            "onelogin_apps._salesforce_0",
        ]
        assert result.providers == ["onelogin"]
        assert runner.calls == [
            ("init",),
            ("import", "onelogin_apps.salesforce", "101"),
            ("import", "onelogin_apps.slack", "102"),
            ("import", "onelogin_apps._salesforce_0", "103"),
        ]

        text = (workdir / "main.tf").read_text(encoding="utf-8")
        assert text.startswith('provider onelogin {\n\talias = "onelogin"\n}\n\n')
        assert "resource onelogin_apps _salesforce_0 {\n\tprovider = onelogin.onelogin\n" in text
        assert '\tname = "App 103"\n' in text
        assert "{}" not in text

    def test_second_run_imports_nothing(self, config, workdir, definitions_file, fake_runner_cls):
        """Rerunning against an unchanged remote finds everything declared."""
        importer = FileImporter(str(definitions_file))
        run_import("onelogin_apps", config, importer, fake_runner_cls(workdir))
        before = (workdir / "main.tf").read_text(encoding="utf-8")

        runner = fake_runner_cls(workdir)
        result = run_import("onelogin_apps", config, importer, runner)

        assert result.status == ImportStatus.NO_CHANGES
        assert runner.calls == []
        assert (workdir / "main.tf").read_text(encoding="utf-8") == before

    def test_new_kind_is_added(self, config, workdir, definitions_file, fake_runner_cls):
        """A later run for another kind keeps earlier resources that are in state."""
        importer = FileImporter(str(definitions_file))
        run_import("onelogin_apps", config, importer, fake_runner_cls(workdir))
        result = run_import("onelogin_users", config, importer, fake_runner_cls(workdir))

        assert result.resources == ["onelogin_users.jdoe"]
        assert result.providers == []
        index = scan_file(str(workdir / "main.tf"))
        assert index.has_resource("onelogin_apps.slack")
        assert index.has_resource("onelogin_users.jdoe")
        assert index.providers["onelogin"] == 1

    def test_declined_confirmation(self, workdir, definitions_file, fake_runner_cls):
        """Declining leaves the file untouched and never calls terraform."""
        (workdir / "main.tf").write_text("# existing\n", encoding="utf-8")
        config = ReconcileConfig(working_dir=workdir)
        asked = []

        def confirm(count):
            asked.append(count)
            return False

        runner = fake_runner_cls(workdir)
        result = run_import("onelogin_apps", config, FileImporter(str(definitions_file)), runner,
                            confirm=confirm)

        assert result.status == ImportStatus.ABORTED
        assert asked == [3]
        assert runner.calls == []
        assert (workdir / "main.tf").read_text(encoding="utf-8") == "# existing\n"

    def test_auto_approve_skips_prompt(self, config, workdir, definitions_file, fake_runner_cls):
        """auto_approve never calls the confirmation callback."""
        def confirm(count):
            raise AssertionError("should not ask")

        result = run_import("onelogin_users", config, FileImporter(str(definitions_file)),
                            fake_runner_cls(workdir), confirm=confirm)
        assert result.status == ImportStatus.IMPORTED

    def test_search_id(self, config, workdir, definitions_file, fake_runner_cls):
        """Only the requested resource is imported."""
        runner = fake_runner_cls(workdir)
        result = run_import("onelogin_apps", config, FileImporter(str(definitions_file)), runner,
                            search_id="103")
        assert result.resources == ["onelogin_apps.salesforce"]
        assert runner.calls[-1] == ("import", "onelogin_apps.salesforce", "103")

    def test_import_failure_is_fatal(self, config, workdir, definitions_file, fake_runner_cls):
        """A failed import stops the run and leaves only imported resources declared."""
        runner = fake_runner_cls(workdir)
        runner.fail_on = "onelogin_apps.slack"

        with pytest.raises(TerraformError):
            run_import("onelogin_apps", config, FileImporter(str(definitions_file)), runner)

        assert [c[1] for c in runner.calls if c[0] == "import"] == [
            "onelogin_apps.salesforce",
            "onelogin_apps.slack",
        ]
        index = scan_file(str(workdir / "main.tf"))
        assert index.resource_keys == ["onelogin_apps.salesforce"]
        text = (workdir / "main.tf").read_text(encoding="utf-8")
        assert '\tname = "App 101"\n' in text
        assert "{}" not in text

    def test_rerun_after_failure(self, config, workdir, definitions_file, fake_runner_cls):
        """Resources that failed or were never reached are imported on the next run."""
        importer = FileImporter(str(definitions_file))
        failing = fake_runner_cls(workdir)
        failing.fail_on = "onelogin_apps.slack"
        with pytest.raises(TerraformError):
            run_import("onelogin_apps", config, importer, failing)

        runner = fake_runner_cls(workdir)
        result = run_import("onelogin_apps", config, importer, runner)

        assert result.status == ImportStatus.IMPORTED
        assert result.resources == ["onelogin_apps.slack", "onelogin_apps._salesforce_0"]
        assert result.providers == []
        assert [c[1] for c in runner.calls if c[0] == "import"] == [
            "onelogin_apps.slack",
            "onelogin_apps._salesforce_0",
        ]
        index = scan_file(str(workdir / "main.tf"))
        assert index.resource_keys == [
            "onelogin_apps._salesforce_0",
            "onelogin_apps.salesforce",
            "onelogin_apps.slack",
        ]
        assert index.providers["onelogin"] == 1

    def test_missing_state_is_fatal(self, config, workdir, definitions_file):
        """If terraform leaves no state behind the run fails with StateLoadError."""
        class NoStateRunner:
            def init(self):
                pass

            def import_resource(self, address, import_id):
                pass

        with pytest.raises(StateLoadError):
            run_import("onelogin_users", config, FileImporter(str(definitions_file)), NoStateRunner())

    def test_init_failure_restores_file(self, config, workdir, definitions_file):
        """Placeholders are appended on a new line and removed again when init fails."""
        path = workdir / "main.tf"
        path.write_text("# no trailing newline", encoding="utf-8")
        seen = []

        class StopRunner:
            def init(self):
                seen.append(path.read_text(encoding="utf-8"))
                raise TerraformError("init failed", ["terraform", "init"])

        with pytest.raises(TerraformError):
            run_import("onelogin_users", config, FileImporter(str(definitions_file)), StopRunner())

        assert seen == [
            "# no trailing newline\n"
            'provider onelogin {\n\talias = "onelogin"\n}\n\n'
            "resource onelogin_users jdoe {}\n"
        ]
        assert path.read_text(encoding="utf-8") == "# no trailing newline"

    def test_failure_without_state_keeps_imported_placeholders(self, config, workdir, definitions_file):
        """Without a state file only the imported resources keep their placeholders."""
        (workdir / "main.tf").write_text("# hand written\n", encoding="utf-8")

        class FailSecondRunner:
            def __init__(self):
                self.imports = 0

            def init(self):
                pass

            def import_resource(self, address, import_id):
                self.imports += 1
                if self.imports == 2:
                    raise TerraformError(f"import of {address} failed")

        with pytest.raises(TerraformError):
            run_import("onelogin_apps", config, FileImporter(str(definitions_file)), FailSecondRunner())

        assert (workdir / "main.tf").read_text(encoding="utf-8") == (
            "# hand written\n"
            'provider onelogin {\n\talias = "onelogin"\n}\n\n'
            "resource onelogin_apps salesforce {}\n"
        )

    def test_shorter_output_truncates(self, workdir, definitions_file, fake_runner_cls):
        """Old bytes beyond the regenerated text are removed."""
        (workdir / "main.tf").write_text("#" * 5000 + "\n", encoding="utf-8")
        config = ReconcileConfig(working_dir=workdir, auto_approve=True,
                                 render=RenderConfig(excluded_attributes=["id", "name", "visible"]))

        run_import("onelogin_users", config, FileImporter(str(definitions_file)), fake_runner_cls(workdir))

        assert (workdir / "main.tf").read_text(encoding="utf-8") == (
            'provider onelogin {\n\talias = "onelogin"\n}\n\n'
            "resource onelogin_users jdoe {\n\tprovider = onelogin.onelogin\n}\n\n"
        )
