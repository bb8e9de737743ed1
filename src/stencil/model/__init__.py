"""Stencil model layer -- public type re-exports."""

from stencil.model.css import (
    AdjacentSelector,
    AllSelector,
    AttributeSelector,
    CharsetRule,
    ChildSelector,
    ClassSelector,
    ComboSelector,
    Declaration,
    DescendantSelector,
    DocumentRule,
    ElementSelector,
    FontFaceRule,
    GroupSelector,
    IdSelector,
    KeyframeRule,
    KeyframesRule,
    MediaRule,
    NamespaceRule,
    NotSelector,
    PageRule,
    PseudoElementSelector,
    PseudoParamElementSelector,
    Rule,
    Selector,
    Sheet,
    SiblingSelector,
    StyleRule,
    SupportsRule,
)
from stencil.model.diagnostic import Diagnostic, Severity
from stencil.model.markup import Attribute, Element, Fragment, Node, Slot, StyleElement, Text
from stencil.model.virt import (
    CSSRule,
    CSSSheet,
    CSSStyleRule,
    StyleProperty,
    VirtualElement,
    VirtualFragment,
    VirtualNode,
    VirtualSlot,
    VirtualStyleElement,
    VirtualText,
)

__all__ = [
    # markup
    "Attribute",
    "Element",
    "Fragment",
    "Node",
    "Slot",
    "StyleElement",
    "Text",
    # css syntax
    "Sheet",
    "Rule",
    "Declaration",
    "CharsetRule",
    "NamespaceRule",
    "FontFaceRule",
    "MediaRule",
    "SupportsRule",
    "DocumentRule",
    "PageRule",
    "KeyframeRule",
    "KeyframesRule",
    "StyleRule",
    # selectors
    "Selector",
    "AllSelector",
    "ElementSelector",
    "ClassSelector",
    "IdSelector",
    "AttributeSelector",
    "PseudoElementSelector",
    "PseudoParamElementSelector",
    "NotSelector",
    "DescendantSelector",
    "ChildSelector",
    "AdjacentSelector",
    "SiblingSelector",
    "GroupSelector",
    "ComboSelector",
    # virtual
    "CSSSheet",
    "CSSRule",
    "CSSStyleRule",
    "StyleProperty",
    "VirtualElement",
    "VirtualFragment",
    "VirtualNode",
    "VirtualSlot",
    "VirtualStyleElement",
    "VirtualText",
    # diagnostic
    "Severity",
    "Diagnostic",
]
