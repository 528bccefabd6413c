"""
# Nanami: nodes.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Syntax-tree nodes.

Nodes are frozen and hold their children in tuples, so a tree cannot be altered once built.
````
Document  { title, nlp_flag, content: Content }
Content   { cases: (Case, ...) }
Case      { name, url?, body: (Text | Case | Sources, ...) }
Text      { inline: (Ref | Link | Image | HtmlTag | Plain, ...) }
Sources   { has_footnotes }

Webography { entries: (Entry, ...) }
Entry      { title, link, name, date }
````
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Ref:
    name: str


@dataclass(frozen=True)
class Link:
    url: str
    text: str


@dataclass(frozen=True)
class Image:
    path: str
    alt: str


@dataclass(frozen=True)
class HtmlTag:
    """
    A passthrough HTML tag.

    Opening, closing (`</name>`) and self-closing (`<name/>`) tags are all represented by this node;
    `closing` and `self_closing` are never both true.
    """
    name: str
    attributes: tuple[tuple[str, Optional[str]], ...] = ()
    self_closing: bool = False
    closing: bool = False


@dataclass(frozen=True)
class Plain:
    text: str


InlineNode = Union[Ref, Link, Image, HtmlTag, Plain]


@dataclass(frozen=True)
class Text:
    inline: tuple[InlineNode, ...]


@dataclass(frozen=True)
class Sources:
    has_footnotes: bool = False


@dataclass(frozen=True)
class Case:
    name: str
    url: Optional[str] = None
    body: tuple['CaseBodyItem', ...] = ()


CaseBodyItem = Union[Text, Case, Sources]


@dataclass(frozen=True)
class Content:
    cases: tuple[Case, ...] = ()


@dataclass(frozen=True)
class Document:
    title: str
    content: Content
    nlp_flag: bool = False


@dataclass(frozen=True)
class Entry:
    title: str
    link: str
    name: str
    date: str


@dataclass(frozen=True)
class Webography:
    entries: tuple[Entry, ...] = ()
