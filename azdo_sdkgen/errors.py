"""
errors.py

Responsibility: the error kinds raised by azdo-sdk-gen.

Every error is an `SdkGenError`, so the CLI (and the bulk loop in `pipeline.py`)
can treat them as "this unit of work failed" without catching unrelated bugs.
"""

from __future__ import annotations


class SdkGenError(RuntimeError):
    pass


class NotFoundError(SdkGenError):
    """A requested API, version, file or candidate does not exist."""


class AmbiguousSelectionError(SdkGenError):
    """Several spec documents are plausible and none is a safe default."""


class UpstreamRequestFailedError(SdkGenError):
    """The upstream API answered with a non-success status or an unexpected payload."""


class GeneratorFailedError(SdkGenError):
    """The OpenAPI generator subprocess could not be started or exited nonzero."""


class ConfigError(SdkGenError):
    pass


class RenderError(SdkGenError):
    pass
