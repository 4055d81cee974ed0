"""
scaffold.py

Responsibility: write the packaging files around raw generator output so it
builds and publishes as an independent npm module.

Writes `package.json` directly and renders `README.md`, `index.ts` and
`tsconfig.json` from the `typescript-package` template.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from azdo_sdkgen.renderer import TEMPLATES_DIR, render_template_dir

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATE = TEMPLATES_DIR / "typescript-package"

# (module import path, files that reveal it relative to the top level or src/)
_KNOWN_MODULES: tuple[tuple[str, str], ...] = (
    ("apis/index.js", "apis/index.ts"),
    ("models/index.js", "models/index.ts"),
    ("configuration.js", "configuration.ts"),
    ("runtime.js", "runtime.ts"),
)


@dataclass(frozen=True)
class ScaffoldOptions:
    package_dir: Path
    package_name: str
    package_version: str
    description: str
    source_repo: str = "MicrosoftDocs/vsts-rest-api-specs"


@dataclass(frozen=True)
class ScaffoldResult:
    uses_src_layout: bool
    exports: tuple[str, ...]


def _exists_either(package_dir: Path, rel: str) -> bool:
    return (package_dir / rel).exists() or (package_dir / "src" / rel).exists()


def uses_src_layout(package_dir: Path) -> bool:
    src = package_dir / "src"
    return (src / "index.ts").exists() or (src / "apis").exists() or (src / "models").exists()


def detect_exports(package_dir: Path) -> tuple[bool, tuple[str, ...]]:
    """
    Return (uses_src_layout, re-export specifiers) for the generated sources.
    """
    src_layout = uses_src_layout(package_dir)
    prefix = "./src/" if src_layout else "./"
    exports = [f"{prefix}{module}" for module, marker in _KNOWN_MODULES if _exists_either(package_dir, marker)]
    if not exports and (package_dir / "src" / "index.ts").exists():
        exports.append("./src/index.js")
    return src_layout, tuple(exports)


def package_manifest(name: str, version: str, description: str) -> dict[str, Any]:
    return {
        "name": name,
        "version": version,
        "description": description,
        "type": "module",
        "main": "./dist/index.js",
        "types": "./dist/index.d.ts",
        "exports": {
            ".": {
                "types": "./dist/index.d.ts",
                "import": "./dist/index.js",
            }
        },
        "files": ["dist"],
        "scripts": {
            "build": "tsc -p tsconfig.json",
        },
        "dependencies": {},
    }


def scaffold_package(opts: ScaffoldOptions) -> ScaffoldResult:
    package_dir = Path(opts.package_dir)
    package_dir.mkdir(parents=True, exist_ok=True)

    src_layout, exports = detect_exports(package_dir)

    manifest = package_manifest(opts.package_name, opts.package_version, opts.description)
    (package_dir / "package.json").write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8", newline="\n")

    render_template_dir(
        template_dir=PACKAGE_TEMPLATE,
        destination_dir=package_dir,
        context={
            "package_name": opts.package_name,
            "source_repo": opts.source_repo,
            "exports": list(exports),
            "uses_src_layout": src_layout,
        },
    )
    if not exports:
        logger.warning("No known entrypoints detected in %s", package_dir)
    return ScaffoldResult(uses_src_layout=src_layout, exports=exports)
