"""Hover and completion data for the AutoIt UDF libraries."""

from .signatures import (
    MODULE_ORDER as MODULE_ORDER,
    Parameter as Parameter,
    Signature as Signature,
    SignatureError as SignatureError,
)
from .hover import HoverEntry as HoverEntry, format_hover as format_hover
from .completion import (
    CompletionEntry as CompletionEntry,
    CompletionKind as CompletionKind,
    format_completions as format_completions,
)
from .registry import (
    Registry as Registry,
    RegistryError as RegistryError,
    UdfModule as UdfModule,
    aggregate as aggregate,
    build_registry as build_registry,
    default_registry as default_registry,
)

__version__ = "0.1.0"
