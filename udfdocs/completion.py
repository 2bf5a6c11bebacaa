"""Completion formatter for UDF signatures.

Every signature in a module becomes one completion entry that inserts the
bare function name. The module's include note is appended to the
documentation so the user sees which library to ``#include``.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass

from lsprotocol import types as lsp

from .signatures import Signature


class CompletionKind(enum.Enum):
    """Completion item kinds used by the UDF tables."""

    FUNCTION = lsp.CompletionItemKind.Function
    KEYWORD = lsp.CompletionItemKind.Keyword
    CONSTANT = lsp.CompletionItemKind.Constant


@dataclass(frozen=True)
class CompletionEntry:
    """One completion suggestion."""

    name: str
    label: str
    kind: CompletionKind
    insert_text: str
    detail: str
    documentation: str
    signature_label: str = ""
    commit_characters: tuple[str, ...] = ()
    module: str = ""

    def to_lsp(self) -> lsp.CompletionItem:
        return lsp.CompletionItem(
            label=self.label,
            kind=self.kind.value,
            detail=self.detail,
            documentation=lsp.MarkupContent(
                kind=lsp.MarkupKind.Markdown,
                value=self.documentation,
            ),
            insert_text=self.insert_text,
            commit_characters=list(self.commit_characters) or None,
        )


def insert_text_for(label: str) -> str:
    """Return the callable name from a call-syntax label.

    ``_DateAdd ( $sType, $iNumber, $sDate )`` -> ``_DateAdd``. A label with
    no ``(`` is used whole.
    """
    head, _, _ = label.partition("(")
    return head.strip() or label.strip()


def _documentation(sig: Signature, note: str) -> str:
    if not note:
        return sig.documentation
    if not sig.documentation:
        return note
    return f"{sig.documentation}\n\n{note}"


def format_completions(
    signatures: Mapping[str, Signature],
    kind: CompletionKind = CompletionKind.FUNCTION,
    note: str = "",
    module: str = "",
    commit_on_paren: bool = False,
) -> dict[str, CompletionEntry]:
    """Build completion entries keyed by lower-cased function name.

    ``note`` is appended to every entry's documentation. With
    ``commit_on_paren``, function entries accept ``(`` as a commit character.
    """
    commit: tuple[str, ...] = (
        ("(",) if commit_on_paren and kind is CompletionKind.FUNCTION else ()
    )

    completions: dict[str, CompletionEntry] = {}
    for name, sig in signatures.items():
        key = name.lower()
        text = insert_text_for(sig.label)
        completions[key] = CompletionEntry(
            name=key,
            label=text,
            kind=kind,
            insert_text=text,
            detail=sig.documentation,
            documentation=_documentation(sig, note),
            signature_label=sig.label,
            commit_characters=commit,
            module=module,
        )
    return completions
