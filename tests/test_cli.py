"""Tests for the CLI."""

from pathlib import Path

from typer.testing import CliRunner

from shim_api.cli import app


runner = CliRunner()
EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


class TestCLI:
    """Tests for the top-level command."""

    def test_help(self):
        """Help should list the skip flags."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "--bound" in result.stdout
        assert "--multi" in result.stdout

    def test_version(self):
        """Version flag should work."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout

    def test_no_manifest_exits_1(self, tmp_path, monkeypatch):
        """Without modules or a pyproject.toml the exit status is 1."""
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [])
        assert result.exit_code == 1

    def test_manifest_without_name_exits_2(self, tmp_path, monkeypatch):
        """A pyproject.toml without a name gives exit status 2."""
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "0.1.0"\n')
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [])
        assert result.exit_code == 2


class TestValidateExamples:
    """End-to-end runs over the example packages."""

    def test_bound_example_passes(self, restore_itertools):
        """The batched example is a bound export and passes with --bound."""
        result = runner.invoke(app, [str(EXAMPLES_DIR / "batched_shim"), "--bound"])
        assert result.exit_code == 0, result.stdout
        assert "skipped" in result.stdout

    def test_bound_example_fails_without_flag(self, restore_itertools):
        """Without --bound the identity check fails."""
        result = runner.invoke(app, [str(EXAMPLES_DIR / "batched_shim"), "--skip-auto-shim"])
        assert result.exit_code == 1

    def test_multi_example_passes(self, restore_itertools):
        """The multi-package example passes with --multi --bound."""
        result = runner.invoke(app, [str(EXAMPLES_DIR / "seq_shims"), "--multi", "--bound"])
        assert result.exit_code == 0, result.stdout

    def test_tap_output(self, restore_itertools):
        """--tap emits a TAP stream with skip directives."""
        result = runner.invoke(
            app,
            [str(EXAMPLES_DIR / "batched_shim"), "--bound", "--skip-auto-shim", "--tap"],
        )
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "TAP version 13"
        assert any(line.startswith("ok ") and "# SKIP" in line for line in lines)
        assert "# ok" in lines

    def test_manifest_default_target(self, shim_factory, monkeypatch):
        """With no modules the package from pyproject.toml is checked."""
        package = shim_factory.single()
        (shim_factory.root / "pyproject.toml").write_text(
            f'[project]\nname = "{package.name}"\n\n[tool.shim-api]\nskip-auto-shim = true\n'
        )
        monkeypatch.chdir(shim_factory.root)

        result = runner.invoke(app, ["--tap"])

        assert result.exit_code == 0, result.stdout
        assert f"# shim-api : testing module: {package.name} (current directory)" in result.stdout

    def test_missing_module_fails(self):
        result = runner.invoke(app, ["shim_api_no_such_module_here", "--tap"])
        assert result.exit_code == 1
        assert "not ok 1 expected no error" in result.stdout
