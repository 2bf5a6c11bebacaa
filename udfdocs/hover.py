"""Hover formatter for UDF signatures.

Renders each signature as markdown: the call syntax in a code block, the
function documentation, then one bullet per parameter.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from lsprotocol import types as lsp

from .signatures import Parameter, Signature


@dataclass(frozen=True)
class HoverEntry:
    """Rendered hover markdown for one function."""

    name: str
    value: str
    module: str = ""

    def to_lsp(self) -> lsp.Hover:
        return lsp.Hover(
            contents=lsp.MarkupContent(
                kind=lsp.MarkupKind.Markdown,
                value=self.value,
            ),
        )


def _format_param(param: Parameter) -> str:
    if param.documentation:
        return f"- `{param.label}`: {param.documentation}"
    return f"- `{param.label}`"


def render_hover(sig: Signature) -> str:
    """Format hover markdown for a single signature."""
    parts = [f"```autoit\n{sig.label}\n```"]
    if sig.documentation:
        parts.append(sig.documentation)
    if sig.params:
        parts.append("\n".join(_format_param(p) for p in sig.params))
    return "\n\n".join(parts)


def format_hover(
    signatures: Mapping[str, Signature], module: str = ""
) -> dict[str, HoverEntry]:
    """Build hover entries keyed by lower-cased function name.

    Keys that collide once lower-cased resolve to the later entry.
    """
    hovers: dict[str, HoverEntry] = {}
    for name, sig in signatures.items():
        key = name.lower()
        hovers[key] = HoverEntry(name=key, value=render_hover(sig), module=module)
    return hovers
