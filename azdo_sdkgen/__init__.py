"""
azdo_sdkgen package

Generates TypeScript SDK packages from the OpenAPI documents published in
MicrosoftDocs/vsts-rest-api-specs.

Key responsibilities are split across modules:
- `github_client.py`: upstream directory listings and raw file fetches
- `selection.py` / `versions.py`: choosing a spec file and the latest version
- `cache.py`: on-disk spec cache
- `generator.py`: the openapi-generator subprocess
- `scaffold.py` / `renderer.py`: packaging files around generated sources
- `pipeline.py`: single and bulk generation
- `cli.py`: CLI entrypoint and error reporting
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
