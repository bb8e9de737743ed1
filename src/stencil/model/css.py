"""CSS syntax tree: sheets, rules, declarations, and selectors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Selector:
    """Base class of every selector node."""


@dataclass(frozen=True)
class AllSelector(Selector):
    """``*``"""


@dataclass(frozen=True)
class ElementSelector(Selector):
    tag_name: str


@dataclass(frozen=True)
class ClassSelector(Selector):
    class_name: str


@dataclass(frozen=True)
class IdSelector(Selector):
    id: str


@dataclass(frozen=True)
class AttributeSelector(Selector):
    """``[name]`` or ``[name<operator>value]``; ``value`` keeps its quotes."""

    name: str
    operator: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class PseudoElementSelector(Selector):
    """A pseudo-class or pseudo-element such as ``:hover`` or ``::before``."""

    name: str
    separator: str = ":"


@dataclass(frozen=True)
class PseudoParamElementSelector(Selector):
    """A functional pseudo such as ``:nth-child(2n+1)``; ``param`` is verbatim."""

    name: str
    param: str
    separator: str = ":"


@dataclass(frozen=True)
class NotSelector(Selector):
    selector: Selector


@dataclass(frozen=True)
class DescendantSelector(Selector):
    parent: Selector
    descendant: Selector


@dataclass(frozen=True)
class ChildSelector(Selector):
    parent: Selector
    child: Selector


@dataclass(frozen=True)
class AdjacentSelector(Selector):
    """``left + right``"""

    left: Selector
    right: Selector


@dataclass(frozen=True)
class SiblingSelector(Selector):
    """``left ~ right``"""

    left: Selector
    right: Selector


@dataclass(frozen=True)
class GroupSelector(Selector):
    """Comma separated selector list."""

    selectors: list[Selector] = field(default_factory=list)


@dataclass(frozen=True)
class ComboSelector(Selector):
    """Compound selector: simple selectors describing one element."""

    selectors: list[Selector] = field(default_factory=list)


SIMPLE_SELECTOR_TYPES: tuple[type[Selector], ...] = (
    AllSelector,
    ElementSelector,
    ClassSelector,
    IdSelector,
    AttributeSelector,
    PseudoElementSelector,
    PseudoParamElementSelector,
    NotSelector,
)

SELECTOR_TYPES: tuple[type[Selector], ...] = SIMPLE_SELECTOR_TYPES + (
    DescendantSelector,
    ChildSelector,
    AdjacentSelector,
    SiblingSelector,
    GroupSelector,
    ComboSelector,
)

# Combinator type -> (left field, right field).
COMBINATOR_FIELDS: dict[type[Selector], tuple[str, str]] = {
    DescendantSelector: ("parent", "descendant"),
    ChildSelector: ("parent", "child"),
    AdjacentSelector: ("left", "right"),
    SiblingSelector: ("left", "right"),
}


def unchain(selector: Selector) -> tuple[Selector, list[tuple[Selector, Selector]]]:
    """Split a combinator chain into its leftmost selector and its links.

    ``a > b c`` parses as ``Descendant(Child(a, b), c)``; this returns ``a``
    and ``[(child, b), (descendant, c)]`` in source order, where each link
    pairs the combinator node with the selector on its right. The left spine
    is walked with a loop, so long chains cost no recursion.
    """
    links: list[tuple[Selector, Selector]] = []
    while type(selector) in COMBINATOR_FIELDS:
        left_field, right_field = COMBINATOR_FIELDS[type(selector)]
        links.append((selector, getattr(selector, right_field)))
        selector = getattr(selector, left_field)
    links.reverse()
    return selector, links


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Declaration:
    """A ``name: value`` pair; the value is never interpreted."""

    name: str
    value: str


@dataclass(frozen=True)
class CharsetRule:
    value: str  # includes the quotes


@dataclass(frozen=True)
class NamespaceRule:
    value: str


@dataclass(frozen=True)
class FontFaceRule:
    declarations: list[Declaration] = field(default_factory=list)


@dataclass(frozen=True)
class MediaRule:
    condition_text: str
    rules: list[Rule] = field(default_factory=list)


@dataclass(frozen=True)
class SupportsRule:
    condition_text: str
    rules: list[Rule] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentRule:
    condition_text: str
    rules: list[Rule] = field(default_factory=list)
    keyword: str = "@document"


@dataclass(frozen=True)
class PageRule:
    selector_text: str = ""
    declarations: list[Declaration] = field(default_factory=list)


@dataclass(frozen=True)
class KeyframeRule:
    key: str
    declarations: list[Declaration] = field(default_factory=list)


@dataclass(frozen=True)
class KeyframesRule:
    name: str
    rules: list[KeyframeRule] = field(default_factory=list)
    keyword: str = "@keyframes"


@dataclass(frozen=True)
class StyleRule:
    selector: Selector
    declarations: list[Declaration] = field(default_factory=list)


Rule = Union[
    CharsetRule,
    NamespaceRule,
    FontFaceRule,
    MediaRule,
    SupportsRule,
    DocumentRule,
    PageRule,
    KeyframesRule,
    StyleRule,
]


@dataclass(frozen=True)
class Sheet:
    """A parsed stylesheet, rules in source order."""

    rules: list[Rule] = field(default_factory=list)
