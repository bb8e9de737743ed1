"""Virtual model: evaluated output handed to a renderer.

The virtual stylesheet mirrors the CSS syntax tree, but every selector has
already been rewritten into scope-qualified text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from stencil.model.markup import Attribute


# ---------------------------------------------------------------------------
# Stylesheet
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StyleProperty:
    name: str
    value: str


@dataclass(frozen=True)
class CSSCharsetRule:
    value: str


@dataclass(frozen=True)
class CSSNamespaceRule:
    value: str


@dataclass(frozen=True)
class CSSFontFaceRule:
    style: list[StyleProperty] = field(default_factory=list)


@dataclass(frozen=True)
class CSSMediaRule:
    condition_text: str
    rules: list[CSSRule] = field(default_factory=list)


@dataclass(frozen=True)
class CSSSupportsRule:
    condition_text: str
    rules: list[CSSRule] = field(default_factory=list)


@dataclass(frozen=True)
class CSSDocumentRule:
    condition_text: str
    rules: list[CSSRule] = field(default_factory=list)
    keyword: str = "@document"


@dataclass(frozen=True)
class CSSPageRule:
    selector_text: str = ""
    style: list[StyleProperty] = field(default_factory=list)


@dataclass(frozen=True)
class CSSKeyframeRule:
    key: str
    style: list[StyleProperty] = field(default_factory=list)


@dataclass(frozen=True)
class CSSKeyframesRule:
    name: str
    rules: list[CSSKeyframeRule] = field(default_factory=list)
    keyword: str = "@keyframes"


@dataclass(frozen=True)
class CSSStyleRule:
    selector_text: str
    style: list[StyleProperty] = field(default_factory=list)


CSSRule = Union[
    CSSCharsetRule,
    CSSNamespaceRule,
    CSSFontFaceRule,
    CSSMediaRule,
    CSSSupportsRule,
    CSSDocumentRule,
    CSSPageRule,
    CSSKeyframesRule,
    CSSStyleRule,
]


@dataclass(frozen=True)
class CSSSheet:
    rules: list[CSSRule] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VirtualText:
    value: str


@dataclass(frozen=True)
class VirtualSlot:
    """Unevaluated slot expression."""

    script: str


@dataclass(frozen=True)
class VirtualElement:
    tag_name: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list[VirtualNode] = field(default_factory=list)


@dataclass(frozen=True)
class VirtualStyleElement:
    attributes: list[Attribute] = field(default_factory=list)
    sheet: CSSSheet = field(default_factory=CSSSheet)


@dataclass(frozen=True)
class VirtualFragment:
    children: list[VirtualNode] = field(default_factory=list)


VirtualNode = Union[
    VirtualText, VirtualSlot, VirtualElement, VirtualStyleElement, VirtualFragment
]
