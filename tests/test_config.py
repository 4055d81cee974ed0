from pathlib import Path

import pytest

from azdo_sdkgen.config import Settings, load_settings
from azdo_sdkgen.errors import ConfigError


def test_defaults_without_file(tmp_path: Path) -> None:
    settings = load_settings(cwd=tmp_path)
    assert settings == Settings()
    assert settings.preferred_patterns == ("{key}.json", "{key}s.json")


def test_default_file_in_cwd(tmp_path: Path) -> None:
    (tmp_path / "azdo-sdk-gen.yaml").write_text(
        "ref: releases/7.1\n"
        "cache_dir: /tmp/specs-cache\n"
        "generator:\n"
        "  name: typescript-axios\n"
        "  additional_properties:\n"
        "    supportsES6: true\n"
        "preferred_patterns: ['{key}-api.json']\n"
        "prerelease_markers: [preview]\n",
        encoding="utf-8",
    )
    settings = load_settings(cwd=tmp_path)
    assert settings.ref == "releases/7.1"
    assert settings.cache_dir == Path("/tmp/specs-cache")
    assert settings.generator.name == "typescript-axios"
    assert settings.generator.additional_properties == {"supportsES6": "true"}
    assert settings.generator.command == ("npx", "@openapitools/openapi-generator-cli")
    assert settings.preferred_patterns == ("{key}-api.json",)
    assert settings.prerelease_markers == ("preview",)


def test_explicit_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "missing.yaml")


def test_empty_file_is_defaults(tmp_path: Path) -> None:
    path = tmp_path / "c.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == Settings()


@pytest.mark.parametrize(
    "body",
    [
        "- a\n- b\n",
        "generator: [x]\n",
        "preferred_patterns: ['static.json']\n",
        "prerelease_markers: preview\n",
        "owner: ''\n",
        "ref: [unclosed\n",
    ],
)
def test_invalid_config(tmp_path: Path, body: str) -> None:
    path = tmp_path / "c.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(path)
