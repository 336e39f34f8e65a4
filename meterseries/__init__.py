from . import (
    canon,
    exceptions,
    types,
    utils,
    config,
    validate,
    merge,
    classify,
    client,
    pipeline,
    annual,
    formats,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "utils",
    "config",
    "validate",
    "merge",
    "classify",
    "client",
    "pipeline",
    "annual",
    "formats",
]
