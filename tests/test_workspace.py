import json
from pathlib import Path

from azdo_sdkgen.workspace import resolve_output_root, workspace_root


def test_pnpm_workspace_marker(tmp_path: Path) -> None:
    (tmp_path / "pnpm-workspace.yaml").write_text("packages: []\n", encoding="utf-8")
    nested = tmp_path / "tools" / "gen"
    nested.mkdir(parents=True)
    assert workspace_root(nested) == tmp_path.resolve()


def test_package_json_workspaces(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text(json.dumps({"workspaces": ["packages/*"]}), encoding="utf-8")
    nested = tmp_path / "a"
    nested.mkdir()
    (nested / "package.json").write_text(json.dumps({"name": "a"}), encoding="utf-8")
    assert workspace_root(nested) == tmp_path.resolve()


def test_relative_out_joins_workspace_root(tmp_path: Path) -> None:
    (tmp_path / "pnpm-workspace.yaml").write_text("", encoding="utf-8")
    nested = tmp_path / "x"
    nested.mkdir()
    assert resolve_output_root("packages/generated", nested) == tmp_path.resolve() / "packages" / "generated"


def test_absolute_out_is_kept(tmp_path: Path) -> None:
    target = tmp_path / "abs"
    assert resolve_output_root(target, tmp_path / "anywhere") == target
