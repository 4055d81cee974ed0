"""
cli.py

Responsibility: CLI entrypoint for azdo-sdk-gen.

Commands:
- `list`: list APIs, or the versions of one API
- `resolve`: show which spec document would be used, and its raw URL
- `generate`: build one SDK package
- `generate-latest`: build the latest stable version of every API

This module wires configuration, the upstream client, the cache and the
pipeline together, and is the only place that turns errors into exit codes.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from azdo_sdkgen import __version__
from azdo_sdkgen.cache import SpecCache
from azdo_sdkgen.config import Settings, load_settings
from azdo_sdkgen.errors import SdkGenError
from azdo_sdkgen.github_client import SpecsRepoClient
from azdo_sdkgen.pipeline import GenerateRequest, generate_latest, generate_sdk, resolve_spec

logger = logging.getLogger(__name__)


def _client(args: argparse.Namespace, settings: Settings) -> SpecsRepoClient:
    token = args.github_token or os.environ.get("GITHUB_TOKEN")
    return SpecsRepoClient(token, owner=settings.owner, repo=settings.repo)


def _request(args: argparse.Namespace, settings: Settings) -> GenerateRequest:
    return GenerateRequest(
        ref=args.ref or settings.ref,
        out=args.out or settings.out,
        scope=args.scope or "",
        pkg_version=args.pkg_version,
        generator=settings.generator.name,
        generator_command=settings.generator.command,
        additional_properties=dict(settings.generator.additional_properties),
        preferred_patterns=settings.preferred_patterns,
        prerelease_markers=settings.prerelease_markers,
    )


def list_cmd(args: argparse.Namespace, settings: Settings) -> int:
    client = _client(args, settings)
    ref = args.ref or settings.ref
    names = client.list_versions(args.api, ref) if args.api else client.list_apis(ref)
    for name in names:
        print(name)
    return 0


def resolve_cmd(args: argparse.Namespace, settings: Settings) -> int:
    client = _client(args, settings)
    spec = resolve_spec(
        client,
        args.api,
        args.api_version,
        args.ref or settings.ref,
        args.file,
        settings.preferred_patterns,
    )
    print(spec.file)
    print(spec.url)
    return 0


def generate_cmd(args: argparse.Namespace, settings: Settings) -> int:
    client = _client(args, settings)
    cache = SpecCache(settings.cache_dir, enabled=args.cache)
    package = generate_sdk(
        client,
        args.api,
        args.api_version,
        _request(args, settings),
        cache,
        file_override=args.file,
    )
    print(f"Done: {package.directory}")
    print(f"Package: {package.name}@{package.version}")
    print(f"Next: (cd {package.directory} && pnpm i && pnpm build)")
    return 0


def generate_latest_cmd(args: argparse.Namespace, settings: Settings) -> int:
    client = _client(args, settings)
    cache = SpecCache(settings.cache_dir, enabled=args.cache)
    report = generate_latest(client, _request(args, settings), cache)
    for outcome in report.outcomes:
        if outcome.package is not None:
            print(f"{outcome.api}@{outcome.version} -> {outcome.package.directory}")
    for outcome in report.failed:
        print(f"Error in {outcome.api}: {outcome.message}", file=sys.stderr)
    print("Finished.")
    return 0


def _add_ref(p: argparse.ArgumentParser) -> None:
    p.add_argument("--ref", default=None, help="Git ref (branch, tag, commit; default from config: master)")


def _add_output_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--out", default=None, help="Output directory (default from config: packages/generated)")
    p.add_argument("--scope", default=None, help="npm scope (e.g. @acme)")
    p.add_argument("--pkg-version", default="0.1.0", help="Version of the generated npm package (default: 0.1.0)")
    p.add_argument("--no-cache", dest="cache", action="store_false", help="Ignore cached specs and download again")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="azdo-sdk-gen",
        description="TypeScript SDK generator for MicrosoftDocs/vsts-rest-api-specs",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (default: ./azdo-sdk-gen.yaml if present)")
    p.add_argument("--github-token", default=None, help="GitHub token (or set env GITHUB_TOKEN)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("list", help="List APIs, or the versions of one API")
    ls.add_argument("--api", default=None, help="API (graph, security, account, ...)")
    _add_ref(ls)
    ls.set_defaults(func=list_cmd)

    rs = sub.add_parser("resolve", help="Show which OpenAPI JSON file will be used")
    rs.add_argument("--api", required=True, help="API (graph, security, account, ...)")
    rs.add_argument("--api-version", required=True, help="API version (7.1, 7.2, ...)")
    _add_ref(rs)
    rs.add_argument("--file", default=None, help="Spec file override (e.g. accounts.json)")
    rs.set_defaults(func=resolve_cmd)

    gen = sub.add_parser("generate", help="Generate a TypeScript SDK from one spec")
    gen.add_argument("--api", required=True, help="API (graph, security, account, ...)")
    gen.add_argument("--api-version", required=True, help="API version (7.1, 7.2, ...)")
    _add_ref(gen)
    gen.add_argument("--file", default=None, help="Spec file override")
    _add_output_options(gen)
    gen.set_defaults(func=generate_cmd)

    latest = sub.add_parser("generate-latest", help="Generate SDKs for every API at its latest version")
    _add_ref(latest)
    _add_output_options(latest)
    latest.set_defaults(func=generate_latest_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        settings = load_settings(args.config)
        return int(args.func(args, settings))
    except SdkGenError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
