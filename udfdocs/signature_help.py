"""Signature help for UDF calls.

Turns a Signature into the parameter hints shown while the user types the
arguments of a call.
"""

from typing import Optional

from lsprotocol import types as lsp

from .signatures import Parameter, Signature


def _markdown(value: str) -> Optional[lsp.MarkupContent]:
    if not value:
        return None
    return lsp.MarkupContent(kind=lsp.MarkupKind.Markdown, value=value)


def _make_param_info(param: Parameter) -> lsp.ParameterInformation:
    return lsp.ParameterInformation(
        label=param.label, documentation=_markdown(param.documentation)
    )


def signature_information(
    sig: Signature, active_param: Optional[int] = None
) -> lsp.SignatureInformation:
    return lsp.SignatureInformation(
        label=sig.label,
        documentation=_markdown(sig.documentation),
        parameters=[_make_param_info(p) for p in sig.params],
        active_parameter=active_param,
    )


def make_signature_help(sig: Signature, active_param: int = 0) -> lsp.SignatureHelp:
    """Wrap one signature as SignatureHelp.

    The active parameter is clamped to the parameter range; 0 when the
    signature takes no parameters.
    """
    if sig.params:
        active = min(max(active_param, 0), len(sig.params) - 1)
    else:
        active = 0
    return lsp.SignatureHelp(
        signatures=[signature_information(sig, active)],
        active_signature=0,
        active_parameter=active,
    )
