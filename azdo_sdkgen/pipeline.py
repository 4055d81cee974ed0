"""
pipeline.py

Responsibility: orchestrate list -> resolve -> fetch/cache -> generate -> scaffold.

Stages are injected (client, cache, generator runner) so each piece stays
replaceable; the CLI wires the real ones.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from azdo_sdkgen.cache import SpecCache
from azdo_sdkgen.errors import AmbiguousSelectionError, NotFoundError, SdkGenError
from azdo_sdkgen.generator import DEFAULT_ADDITIONAL_PROPERTIES, DEFAULT_COMMAND, DEFAULT_GENERATOR, GeneratorOptions, run_openapi_generate
from azdo_sdkgen.github_client import SpecsRepoClient
from azdo_sdkgen.pipeline_types import FAILED, OK, SKIPPED, ApiOutcome, BulkReport, GeneratedPackage, ResolvedSpec
from azdo_sdkgen.scaffold import ScaffoldOptions, scaffold_package
from azdo_sdkgen.selection import DEFAULT_PREFERRED_PATTERNS, select_spec_file
from azdo_sdkgen.versions import DEFAULT_PRERELEASE_MARKERS, latest_version
from azdo_sdkgen.workspace import resolve_output_root

logger = logging.getLogger(__name__)

TMP_PREFIX = "azdo-sdk-gen-"

GeneratorRunner = Callable[[GeneratorOptions], None]


@dataclass(frozen=True)
class GenerateRequest:
    """Inputs shared by single and bulk generation."""

    ref: str = "master"
    out: str | Path = "packages/generated"
    scope: str = ""
    pkg_version: str = "0.1.0"
    generator: str = DEFAULT_GENERATOR
    generator_command: Sequence[str] = DEFAULT_COMMAND
    additional_properties: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ADDITIONAL_PROPERTIES))
    preferred_patterns: Sequence[str] = DEFAULT_PREFERRED_PATTERNS
    prerelease_markers: Sequence[str] = DEFAULT_PRERELEASE_MARKERS
    cwd: Path | None = None


def normalize_scope(scope: str | None) -> str:
    if not scope:
        return ""
    return scope if scope.startswith("@") else f"@{scope}"


def package_base_name(api: str, version: str) -> str:
    return f"azure-devops-{api}-{version}"


def package_name(api: str, version: str, scope: str | None) -> str:
    base = package_base_name(api, version)
    normalized = normalize_scope(scope)
    return f"{normalized}/{base}" if normalized else base


def resolve_spec(
    client: SpecsRepoClient,
    api: str,
    version: str,
    ref: str,
    file_override: str | None = None,
    patterns: Sequence[str] = DEFAULT_PREFERRED_PATTERNS,
) -> ResolvedSpec:
    listing = client.list_json_files(api, version, ref)
    chosen = select_spec_file(listing.jsons, api, file_override, patterns)
    return ResolvedSpec(
        api=api,
        version=version,
        ref=ref,
        file=chosen,
        url=client.raw_spec_url(api, version, chosen, ref),
    )


def _build_package(
    client: SpecsRepoClient,
    spec: ResolvedSpec,
    request: GenerateRequest,
    cache: SpecCache,
    run_generator: GeneratorRunner,
) -> GeneratedPackage:
    spec_path = cache.fetch(spec, client.fetch_text)

    # Left in place on failure so the generator output can be inspected.
    tmp_root = Path(tempfile.mkdtemp(prefix=TMP_PREFIX))
    gen_out = tmp_root / "gen"
    gen_out.mkdir(parents=True, exist_ok=True)

    run_generator(
        GeneratorOptions(
            input_spec_path=spec_path,
            out_dir=gen_out,
            generator=request.generator,
            additional_properties=dict(request.additional_properties),
            command=tuple(request.generator_command),
        )
    )

    name = package_name(spec.api, spec.version, request.scope)
    out_root = resolve_output_root(request.out, request.cwd or Path.cwd())
    out_root.mkdir(parents=True, exist_ok=True)

    final_dir = out_root / package_base_name(spec.api, spec.version)
    if final_dir.exists():
        shutil.rmtree(final_dir)
    shutil.copytree(gen_out, final_dir)
    shutil.rmtree(tmp_root)

    scaffold_package(
        ScaffoldOptions(
            package_dir=final_dir,
            package_name=name,
            package_version=request.pkg_version,
            description=(
                f"Azure DevOps {spec.api} SDK ({spec.version}) generated from "
                f"{client.repo} @ {spec.ref}"
            ),
            source_repo=f"{client.owner}/{client.repo}",
        )
    )
    return GeneratedPackage(directory=final_dir, name=name, version=request.pkg_version)


def generate_sdk(
    client: SpecsRepoClient,
    api: str,
    version: str,
    request: GenerateRequest,
    cache: SpecCache,
    *,
    file_override: str | None = None,
    run_generator: GeneratorRunner = run_openapi_generate,
) -> GeneratedPackage:
    spec = resolve_spec(client, api, version, request.ref, file_override, request.preferred_patterns)
    return _build_package(client, spec, request, cache, run_generator)


def _process_api(
    client: SpecsRepoClient,
    api: str,
    request: GenerateRequest,
    cache: SpecCache,
    run_generator: GeneratorRunner,
) -> ApiOutcome:
    versions = client.list_versions(api, request.ref)
    latest = latest_version(versions, request.prerelease_markers)
    if latest is None:
        return ApiOutcome(api=api, status=SKIPPED, message="no versions")

    try:
        spec = resolve_spec(client, api, latest, request.ref, None, request.preferred_patterns)
    except (AmbiguousSelectionError, NotFoundError) as e:
        return ApiOutcome(api=api, status=SKIPPED, version=latest, error_kind=type(e).__name__, message=str(e))

    package = _build_package(client, spec, request, cache, run_generator)
    return ApiOutcome(api=api, status=OK, version=latest, package=package)


def generate_latest(
    client: SpecsRepoClient,
    request: GenerateRequest,
    cache: SpecCache,
    *,
    run_generator: GeneratorRunner = run_openapi_generate,
) -> BulkReport:
    """
    Generate the latest stable version of every API, one at a time.

    Listing the APIs is fatal; anything that goes wrong for a single API is
    recorded in the report and the loop moves on.
    """
    report = BulkReport()
    for api in client.list_apis(request.ref):
        try:
            outcome = _process_api(client, api, request, cache, run_generator)
        except SdkGenError as e:
            logger.error("Error in %s: %s", api, e)
            outcome = ApiOutcome(api=api, status=FAILED, error_kind=type(e).__name__, message=str(e))
        if outcome.status == SKIPPED:
            logger.info("Skipping %s: %s", api, outcome.message)
        report.add(outcome)
    return report
