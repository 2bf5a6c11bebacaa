"""Global hover/completion registry for the UDF libraries.

Every module's signature table is formatted into hovers and completions,
then the per-module maps are folded together in MODULE_ORDER. On a name
collision the later module wins. The result is built once and never
mutated; lookups are case-insensitive and return None on a miss.
"""

from __future__ import annotations

import functools
import json
import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, TypeVar

from lsprotocol import types as lsp

from .completion import CompletionEntry, CompletionKind, format_completions
from .hover import HoverEntry, format_hover
from .signature_help import make_signature_help
from .signatures import (
    MODULE_ORDER,
    Signature,
    check_signature,
    module_path,
    parse_signature_table,
)

logger = logging.getLogger("udfdocs")

T = TypeVar("T")


class RegistryError(Exception):
    pass


@dataclass(frozen=True)
class UdfModule:
    """A named signature table plus its completion settings.

    ``include`` is the note appended to every completion's documentation,
    e.g. ``(Requires: `#include <Color.au3>`)``.
    """

    name: str
    signatures: Mapping[str, Signature] = field(default_factory=dict)
    include: str = ""
    kind: CompletionKind = CompletionKind.FUNCTION


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_module(name: str, data_dir: Optional[str] = None) -> UdfModule:
    """Load one UDF module from its JSON asset."""
    path = module_path(name, data_dir)
    if not os.path.exists(path):
        raise RegistryError(f"unknown module {name!r}: {path} does not exist")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (ValueError, UnicodeDecodeError) as e:
        raise RegistryError(f"module {name!r}: unreadable data file {path}: {e}") from e

    if not isinstance(data, Mapping) or not isinstance(data.get("signatures"), Mapping):
        raise RegistryError(
            f"module {name!r}: expected an object with a 'signatures' table"
        )

    module = UdfModule(
        name=name,
        signatures=parse_signature_table(data["signatures"], name),
        include=data.get("include") or "",
    )
    logger.debug("Loaded %s (%d signatures)", name, len(module.signatures))
    return module


def load_modules(
    names: Iterable[str] = MODULE_ORDER, data_dir: Optional[str] = None
) -> list[UdfModule]:
    """Load modules, preserving the given order."""
    return [load_module(n, data_dir) for n in names]


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def aggregate(
    module_outputs: Sequence[Mapping[str, T]],
    module_names: Optional[Sequence[str]] = None,
) -> dict[str, T]:
    """Fold per-module maps into one, in order. Later modules win.

    A module output that is not a mapping fails the whole build.
    """
    merged: dict[str, T] = {}
    for i, output in enumerate(module_outputs):
        where = module_names[i] if module_names and i < len(module_names) else f"#{i}"
        if not isinstance(output, Mapping):
            raise RegistryError(
                f"module {where}: expected a mapping, got {type(output).__name__}"
            )
        for key, value in output.items():
            if key in merged:
                logger.debug("%s overrides %r", where, key)
            merged[key] = value
    return merged


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Registry:
    """Read-only lookup tables keyed by lower-cased function name."""

    hovers: Mapping[str, HoverEntry]
    completions: Mapping[str, CompletionEntry]
    signatures: Mapping[str, Signature]
    modules: tuple[str, ...] = ()

    def lookup_hover(self, name: str) -> Optional[HoverEntry]:
        return self.hovers.get(name.lower())

    def lookup_completion(self, name: str) -> Optional[CompletionEntry]:
        return self.completions.get(name.lower())

    def lookup_signature(self, name: str) -> Optional[Signature]:
        return self.signatures.get(name.lower())

    def signature_help(
        self, name: str, active_parameter: int = 0
    ) -> Optional[lsp.SignatureHelp]:
        sig = self.lookup_signature(name)
        if sig is None:
            return None
        return make_signature_help(sig, active_parameter)

    def names(self) -> list[str]:
        return sorted(self.hovers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.hovers

    def __len__(self) -> int:
        return len(self.hovers)


def build_registry(
    modules: Optional[Sequence[UdfModule]] = None,
    *,
    commit_on_paren: bool = False,
) -> Registry:
    """Format and merge every module into one Registry.

    With no ``modules``, every module in MODULE_ORDER is loaded from the
    packaged data. Hovers, completions, and signatures all merge in the same
    order.
    """
    if modules is None:
        modules = load_modules(MODULE_ORDER)

    names = [m.name for m in modules]
    hover_maps = []
    completion_maps = []
    signature_maps = []
    for m in modules:
        if not isinstance(m.signatures, Mapping):
            raise RegistryError(
                f"module {m.name}: expected a mapping, "
                f"got {type(m.signatures).__name__}"
            )
        table = {k: check_signature(k, v, m.name) for k, v in m.signatures.items()}
        hover_maps.append(format_hover(table, m.name))
        completion_maps.append(
            format_completions(
                table,
                m.kind,
                m.include,
                module=m.name,
                commit_on_paren=commit_on_paren,
            )
        )
        signature_maps.append({k.lower(): sig for k, sig in table.items()})

    hovers = aggregate(hover_maps, names)
    completions = aggregate(completion_maps, names)
    signatures = aggregate(signature_maps, names)

    logger.debug(
        "Registry built from %d modules: %d hovers, %d completions",
        len(names), len(hovers), len(completions),
    )
    return Registry(
        hovers=MappingProxyType(hovers),
        completions=MappingProxyType(completions),
        signatures=MappingProxyType(signatures),
        modules=tuple(names),
    )


@functools.lru_cache(maxsize=None)
def default_registry() -> Registry:
    """The process-wide registry over all packaged modules, built on first use."""
    return build_registry()
