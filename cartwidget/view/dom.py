"""Minimal document model the widget renders into.

Just enough of a browser DOM for the widget: element trees built from
markup, ``inner_html`` replacement, sibling navigation, simple selectors and
click events that bubble to listeners on ancestor elements.

Text is kept on leaf elements only; whitespace between tags is dropped, so
sibling navigation only ever sees elements.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Callable, Dict, List, Optional, Tuple

VOID_TAGS = {"br", "hr", "img", "input", "meta", "link"}


@dataclass
class ClickEvent:
    target: "Element"
    type: str = "click"
    current_target: Optional["Element"] = None


Listener = Callable[[ClickEvent], None]


@dataclass(eq=False)
class Element:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["Element"] = field(default_factory=list)
    parent: Optional["Element"] = field(default=None, repr=False)
    _text: str = field(default="", init=False)
    _listeners: Dict[str, List[Listener]] = field(
        default_factory=dict, init=False, repr=False
    )

    @property
    def id(self) -> Optional[str]:
        return self.attrs.get("id")

    @property
    def class_name(self) -> str:
        return self.attrs.get("class", "")

    def has_class(self, name: str) -> bool:
        return name in self.class_name.split()

    # text / markup

    @property
    def text_content(self) -> str:
        if not self.children:
            return self._text
        return "".join(c.text_content for c in self.children)

    @text_content.setter
    def text_content(self, value) -> None:
        for c in self.children:
            c.parent = None
        self.children = []
        self._text = str(value)

    @property
    def inner_html(self) -> str:
        if not self.children:
            return html.escape(self._text, quote=False)
        return "".join(c.outer_html for c in self.children)

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        self.text_content = ""
        for node in parse_fragment(markup):
            self.append(node)

    @property
    def outer_html(self) -> str:
        attrs = "".join(
            f' {k}="{html.escape(v, quote=True)}"' for k, v in self.attrs.items()
        )
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html}</{self.tag}>"

    def as_text(self, sep: str = " ") -> str:
        """Flatten leaf texts, e.g. ``Apple x 2 delete`` for a cart row."""
        if not self.children:
            return self._text.strip()
        parts = [c.as_text(sep) for c in self.children]
        return sep.join(p for p in parts if p)

    # tree

    def append(self, child: "Element") -> "Element":
        child.parent = self
        self.children.append(child)
        self._text = ""
        return child

    @property
    def next_element_sibling(self) -> Optional["Element"]:
        return self._sibling(1)

    @property
    def previous_element_sibling(self) -> Optional["Element"]:
        return self._sibling(-1)

    def _sibling(self, step: int) -> Optional["Element"]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        idx = siblings.index(self) + step
        if 0 <= idx < len(siblings):
            return siblings[idx]
        return None

    def nth_child(self, n: int) -> Optional["Element"]:
        """1-based, like ``:nth-child(n)``."""
        if 1 <= n <= len(self.children):
            return self.children[n - 1]
        return None

    def iter_descendants(self):
        for c in self.children:
            yield c
            yield from c.iter_descendants()

    def query_selector_all(self, selector: str) -> List["Element"]:
        parts = [_parse_simple(p) for p in selector.split()]
        if not parts:
            return []
        found = [e for e in self.iter_descendants() if _matches(e, parts[-1])]
        return [e for e in found if _ancestors_match(e, parts[:-1], self)]

    def query_selector(self, selector: str) -> Optional["Element"]:
        matches = self.query_selector_all(selector)
        return matches[0] if matches else None

    def get_element_by_id(self, element_id: str) -> Optional["Element"]:
        return next((e for e in self.iter_descendants() if e.id == element_id), None)

    # events

    def add_event_listener(self, event_type: str, cb: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(cb)

    def dispatch_event(self, event: ClickEvent) -> None:
        node: Optional[Element] = self
        while node is not None:
            for cb in list(node._listeners.get(event.type, [])):
                event.current_target = node
                cb(event)
            node = node.parent

    def click(self) -> None:
        self.dispatch_event(ClickEvent(target=self))


SimpleSelector = Tuple[Optional[str], Optional[str], List[str]]


def _parse_simple(token: str) -> SimpleSelector:
    """Split ``tag#id.cls`` into (tag, id, classes)."""
    tag: Optional[str] = None
    element_id: Optional[str] = None
    classes: List[str] = []
    buf, kind = "", "tag"
    for ch in token + ".":
        if ch in ".#":
            if buf:
                if kind == "tag":
                    tag = buf.lower()
                elif kind == "id":
                    element_id = buf
                else:
                    classes.append(buf)
            buf, kind = "", ("id" if ch == "#" else "class")
        else:
            buf += ch
    return tag, element_id, classes


def _matches(el: Element, sel: SimpleSelector) -> bool:
    tag, element_id, classes = sel
    if tag is not None and el.tag != tag:
        return False
    if element_id is not None and el.id != element_id:
        return False
    return all(el.has_class(c) for c in classes)


def _ancestors_match(el: Element, parts: List[SimpleSelector], root: Element) -> bool:
    node = el.parent
    remaining = list(parts)
    while remaining and node is not None and node is not root:
        if _matches(node, remaining[-1]):
            remaining.pop()
        node = node.parent
    return not remaining


class _TreeBuilder(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = Element("#fragment")
        self._stack: List[Element] = [self.root]

    def handle_starttag(self, tag, attrs):
        el = Element(tag, {k: (v if v is not None else "") for k, v in attrs})
        self._stack[-1].append(el)
        if tag not in VOID_TAGS:
            self._stack.append(el)

    def handle_startendtag(self, tag, attrs):
        el = Element(tag, {k: (v if v is not None else "") for k, v in attrs})
        self._stack[-1].append(el)

    def handle_endtag(self, tag):
        # close up to the matching open tag; stray end tags are ignored
        for i in range(len(self._stack) - 1, 0, -1):
            if self._stack[i].tag == tag:
                del self._stack[i:]
                return

    def handle_data(self, data):
        if not data.strip():
            return
        top = self._stack[-1]
        if not top.children:
            top._text += data.strip()


def parse_fragment(markup: str) -> List[Element]:
    builder = _TreeBuilder()
    builder.feed(markup)
    builder.close()
    nodes = list(builder.root.children)
    for n in nodes:
        n.parent = None
    return nodes


def parse_document(markup: str) -> Element:
    doc = Element("#document")
    for node in parse_fragment(markup):
        doc.append(node)
    return doc
