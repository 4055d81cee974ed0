"""
generator.py

Responsibility: run the external OpenAPI generator as a subprocess.

The generator is treated as a black box: a spec file goes in, a directory of
sources comes out. Only the exit status is interpreted.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from azdo_sdkgen.errors import GeneratorFailedError

logger = logging.getLogger(__name__)

DEFAULT_GENERATOR = "typescript-fetch"
DEFAULT_COMMAND: tuple[str, ...] = ("npx", "@openapitools/openapi-generator-cli")
DEFAULT_ADDITIONAL_PROPERTIES: dict[str, str] = {
    "supportsES6": "true",
    "typescriptThreePlus": "true",
    "modelPropertyNaming": "original",
}


@dataclass(frozen=True)
class GeneratorOptions:
    input_spec_path: Path
    out_dir: Path
    generator: str = DEFAULT_GENERATOR
    additional_properties: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_ADDITIONAL_PROPERTIES))
    command: Sequence[str] = DEFAULT_COMMAND


def build_generator_command(opts: GeneratorOptions) -> list[str]:
    props = ",".join(f"{k}={v}" for k, v in opts.additional_properties.items())
    return [
        *opts.command,
        "generate",
        "-g",
        opts.generator,
        "-i",
        str(opts.input_spec_path),
        "-o",
        str(opts.out_dir),
        "--additional-properties",
        props,
        "--skip-validate-spec",
    ]


def run_openapi_generate(opts: GeneratorOptions) -> None:
    """
    Run the generator with inherited stdio, raising GeneratorFailedError on failure.
    """
    cmd = build_generator_command(opts)
    logger.info("Generating SDK (%s) into %s", opts.generator, opts.out_dir)
    logger.debug("Running: %s", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError as e:
        raise GeneratorFailedError(f"Generator executable not found: {cmd[0]}") from e
    except subprocess.CalledProcessError as e:
        raise GeneratorFailedError(f"openapi-generator failed (status {e.returncode})") from e
