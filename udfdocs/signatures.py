"""Signature tables for the AutoIt UDF libraries.

Each UDF library (Array.au3, Date.au3, GUICtrlListView.au3, ...) ships as one
JSON asset under ``udfdocs/data``. A table maps a function name to its
signature record: documentation, the call-syntax label, and the ordered
parameter list.

Used by the hover, completion, and signature help formatters so that all
three read the same validated records.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional


DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


class SignatureError(ValueError):
    def __init__(self, name: str, module: str, reason: str):
        self.name = name
        self.module = module
        super().__init__(
            f"invalid signature for name={name} in module={module}: {reason}"
        )


@dataclass(frozen=True)
class Parameter:
    """One parameter of a UDF signature."""

    label: str
    documentation: str = ""


@dataclass(frozen=True)
class Signature:
    """Call syntax and documentation for one UDF."""

    name: str
    label: str
    documentation: str = ""
    params: tuple[Parameter, ...] = ()


# ---------------------------------------------------------------------------
# Module table
# ---------------------------------------------------------------------------

# Aggregation order. A name defined by more than one module resolves to the
# module that comes last here.
MODULE_ORDER: tuple[str, ...] = (
    "udf_array",
    "udf_clipboard",
    "udf_color",
    "udf_crypt",
    "udf_date",
    "udf_eventlog",
    "udf_excel",
    "udf_file",
    "udf_ftp",
    "udf_gdiplus",
    "udf_guictrlavi",
    "udf_guictrlbutton",
    "udf_guictrlcombobox",
    "udf_guictrlcomboboxex",
    "udf_guictrldtp",
    "udf_guictrledit",
    "udf_guictrlheader",
    "udf_guiimagelist",
    "udf_guictrlipaddress",
    "udf_guictrllistbox",
    "udf_guictrllistview",
    "udf_guictrlmenu",
    "udf_guictrlmonthcal",
    "udf_guictrlrebar",
    "udf_guictrlrichedit",
    "udf_guiscrollbars",
    "udf_guictrlslider",
    "udf_guictrlstatusbar",
    "udf_guictrltab",
    "udf_guictrltoolbar",
    "udf_guitooltip",
    "udf_guictrltreeview",
    "udf_ie",
    "udf_inet",
    "udf_math",
    "udf_memory",
    "udf_misc",
    "udf_namedpipes",
    "udf_netshare",
    "udf_process",
    "udf_screencapture",
    "udf_security",
    "udf_sendmessage",
    "udf_sound",
    "udf_sqlite",
    "udf_string",
    "udf_timers",
)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _parse_param(name: str, module: str, index: int, raw: Any) -> Parameter:
    if not isinstance(raw, Mapping):
        raise SignatureError(name, module, f"parameter {index} is not a mapping")
    label = raw.get("label")
    if not isinstance(label, str) or not label:
        raise SignatureError(name, module, f"parameter {index} has no label")
    doc = raw.get("documentation") or ""
    if not isinstance(doc, str):
        raise SignatureError(
            name, module, f"parameter {label} documentation is not a string"
        )
    return Parameter(label=label, documentation=doc)


def parse_signature(name: str, raw: Any, module: str = "<unknown>") -> Signature:
    """Validate one raw record and build a Signature.

    Missing ``documentation`` and ``params`` default to empty; a missing or
    blank ``label`` is an error.
    """
    if not isinstance(raw, Mapping):
        raise SignatureError(name, module, "record is not a mapping")

    label = raw.get("label")
    if not isinstance(label, str) or not label.strip():
        raise SignatureError(name, module, "missing label")

    doc = raw.get("documentation") or ""
    if not isinstance(doc, str):
        raise SignatureError(name, module, "documentation is not a string")

    raw_params = raw.get("params") or []
    if not isinstance(raw_params, (list, tuple)):
        raise SignatureError(name, module, "params is not a list")

    params = tuple(
        _parse_param(name, module, i, p) for i, p in enumerate(raw_params)
    )
    return Signature(name=name, label=label, documentation=doc, params=params)


def parse_signature_table(
    raw: Mapping[str, Any], module: str = "<unknown>"
) -> dict[str, Signature]:
    """Build a name -> Signature table, keeping the authored key case."""
    return {name: parse_signature(name, record, module) for name, record in raw.items()}


def module_path(name: str, data_dir: Optional[str] = None) -> str:
    return os.path.join(data_dir or DATA_DIR, f"{name}.json")


def check_signature(name: str, value: Any, module: str = "<unknown>") -> Signature:
    """Accept a built Signature or a raw record; reject blank labels.

    Raw records go through parse_signature.
    """
    if not isinstance(value, Signature):
        return parse_signature(name, value, module)
    if not isinstance(value.label, str) or not value.label.strip():
        raise SignatureError(name, module, "missing label")
    for i, param in enumerate(value.params):
        if not isinstance(param, Parameter) or not param.label:
            raise SignatureError(name, module, f"parameter {i} has no label")
    return value
