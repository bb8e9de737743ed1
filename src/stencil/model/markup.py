"""Markup syntax tree: the nodes produced by the markup parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from stencil.model.css import Sheet


@dataclass(frozen=True)
class Attribute:
    """A single ``name`` or ``name="value"`` attribute, in source order."""

    name: str
    value: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Attribute name must be a non-empty string")


@dataclass(frozen=True)
class Text:
    """A literal run of text."""

    value: str


@dataclass(frozen=True)
class Slot:
    """A ``{{ ... }}`` placeholder; the expression is kept as raw text."""

    script: str


@dataclass(frozen=True)
class Element:
    """A markup element with ordered attributes and children."""

    tag_name: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.tag_name:
            raise ValueError("Element tag_name must be a non-empty string")


@dataclass(frozen=True)
class StyleElement:
    """A ``<style>`` element whose body has been parsed as CSS."""

    attributes: list[Attribute] = field(default_factory=list)
    sheet: Sheet = field(default_factory=Sheet)

    tag_name = "style"


@dataclass(frozen=True)
class Fragment:
    """Two or more sibling nodes at the top level."""

    children: list[Node] = field(default_factory=list)


Node = Union[Text, Slot, Element, StyleElement, Fragment]

NODE_TYPES: tuple[type, ...] = (Text, Slot, Element, StyleElement, Fragment)
