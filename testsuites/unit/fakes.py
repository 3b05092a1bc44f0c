"""
In-memory DOM and driver used by the unit tests.

FakeNode implements the NativeElement contract over a tiny tree; FakeDriver
implements the Driver contract and records every strategy query so tests can
assert on cascade order.

Supported CSS subset: `tag`, `#id`, `.class` compounds (e.g. `div#main.a.b`)
joined by descendant whitespace. Anything else matches nothing.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from webverify.framework.calling_information import LocatorStrategy, Point, Size

_COMPOUND = re.compile(r"^(?P<tag>[a-zA-Z][\w-]*)?(?P<id>#[\w-]+)?(?P<classes>(?:\.[\w-]+)*)$")


class DriverFault(Exception):
    """Stands in for a driver-level error (closed session, stale handle)."""


def _parse_compound(part: str) -> Optional[Tuple[str, str, List[str]]]:
    match = _COMPOUND.match(part)
    if not match or not part:
        return None
    tag = match.group("tag") or ""
    node_id = (match.group("id") or "")[1:]
    classes = [c for c in match.group("classes").split(".") if c]
    return tag, node_id, classes


class FakeNode:
    def __init__(
        self,
        tag: str,
        *children: "FakeNode",
        id: str = "",
        classes: str = "",
        text: str = "",
        enabled: bool = True,
        selected: bool = False,
        displayed: bool = True,
        box: Tuple[float, float, float, float] = (0, 0, 10, 10),
        attributes: Optional[Dict[str, str]] = None,
        css: Optional[Dict[str, str]] = None,
        properties: Optional[Dict[str, Any]] = None,
    ):
        self.tag = tag
        self.id = id
        self.classes = classes.split()
        self.own_text = text
        self.enabled = enabled
        self.selected = selected
        self.displayed = displayed
        self.box = box
        self.attributes = dict(attributes or {})
        if id:
            self.attributes.setdefault("id", id)
        if classes:
            self.attributes.setdefault("class", classes)
        self.css = dict(css or {})
        self.properties = dict(properties or {})
        self.value = ""
        self.actions: List[str] = []
        self.fault: Optional[str] = None
        self.parent: Optional[FakeNode] = None
        self.children = list(children)
        for child in self.children:
            child.parent = self

    def __repr__(self) -> str:
        return f"<FakeNode {self.tag}#{self.id}.{'.'.join(self.classes)} {self.own_text!r}>"

    # -- tree helpers ---------------------------------------------------------

    def descendants(self) -> List["FakeNode"]:
        result = []
        for child in self.children:
            result.append(child)
            result.extend(child.descendants())
        return result

    def _matches_compound(self, compound: Tuple[str, str, List[str]]) -> bool:
        tag, node_id, classes = compound
        if tag and self.tag != tag:
            return False
        if node_id and self.id != node_id:
            return False
        return all(c in self.classes for c in classes)

    def _matches_css(self, compounds: List[Tuple[str, str, List[str]]], scope: "FakeNode") -> bool:
        if not self._matches_compound(compounds[-1]):
            return False
        remaining = compounds[:-1]
        ancestor = self.parent
        while remaining and ancestor is not None and ancestor is not scope:
            if ancestor._matches_compound(remaining[-1]):
                remaining = remaining[:-1]
            ancestor = ancestor.parent
        return not remaining

    def _check(self) -> None:
        if self.fault:
            raise DriverFault(self.fault)

    # -- NativeElement --------------------------------------------------------

    def find(self, strategy: LocatorStrategy, value: str) -> List["FakeNode"]:
        self._check()
        if strategy == LocatorStrategy.XPATH:
            if value == ".." and self.parent is not None and self.parent.tag != "#document":
                return [self.parent]
            return []

        candidates = self.descendants()
        if strategy in (LocatorStrategy.CSS, LocatorStrategy.TAG):
            compounds = [_parse_compound(p) for p in value.split()]
            if not compounds or any(c is None for c in compounds):
                return []
            return [n for n in candidates if n._matches_css(compounds, self)]
        if strategy == LocatorStrategy.ID:
            return [n for n in candidates if n.id == value]
        if strategy == LocatorStrategy.CLASS:
            return [n for n in candidates if value in n.classes]
        if strategy == LocatorStrategy.TEXT:
            return [n for n in candidates if n.own_text and n.own_text.strip() == value]
        if strategy == LocatorStrategy.PARTIAL_TEXT:
            return [n for n in candidates if value in n.own_text]
        raise ValueError(f"Unsupported strategy {strategy}")

    def tag_name(self) -> str:
        self._check()
        return self.tag

    def text(self) -> str:
        self._check()
        return self.own_text

    def is_enabled(self) -> bool:
        self._check()
        return self.enabled

    def is_selected(self) -> bool:
        self._check()
        return self.selected

    def is_displayed(self) -> bool:
        self._check()
        return self.displayed

    def location(self) -> Point:
        self._check()
        return Point(self.box[0], self.box[1])

    def size(self) -> Size:
        self._check()
        return Size(self.box[2], self.box[3])

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        return self.attributes.get(name)

    def get_css_value(self, name: str) -> str:
        self._check()
        return self.css.get(name, "")

    def get_property(self, name: str) -> Any:
        self._check()
        return self.properties.get(name)

    def clear(self) -> None:
        self._check()
        self.value = ""
        self.actions.append("clear")

    def click(self) -> None:
        self._check()
        self.actions.append("click")

    def send_keys(self, text: str) -> None:
        self._check()
        self.value += text
        self.actions.append(f"send_keys:{text}")

    def submit(self) -> None:
        self._check()
        self.actions.append("submit")


class FakeDriver:
    """Driver over a FakeNode tree rooted at a synthetic document node."""

    def __init__(self, *nodes: FakeNode, title: str = "Fake Page"):
        self.document = FakeNode("#document", *nodes)
        self.queries: List[Tuple[LocatorStrategy, str]] = []
        self.visited: List[str] = []
        self.screenshots: List[Tuple[str, Optional[Dict[str, float]]]] = []
        self.closed = False
        self.fault: Optional[str] = None
        self._title = title

    def find(self, strategy: LocatorStrategy, value: str) -> List[FakeNode]:
        if self.fault:
            raise DriverFault(self.fault)
        self.queries.append((strategy, value))
        return self.document.find(strategy, value)

    def goto(self, url: str) -> None:
        self.visited.append(url)

    @property
    def url(self) -> str:
        return self.visited[-1] if self.visited else "about:blank"

    @property
    def title(self) -> str:
        return self._title

    @property
    def source(self) -> str:
        return "<html></html>"

    def screenshot(self, path: str, clip: Optional[Dict[str, float]] = None) -> bytes:
        self.screenshots.append((path, clip))
        return b"\x89PNG"

    def close(self) -> None:
        self.closed = True

    @property
    def strategies_tried(self) -> List[LocatorStrategy]:
        return [strategy for strategy, _ in self.queries]


def messages_at(records: List[dict], level: str) -> List[str]:
    """Messages of captured loguru records at one level."""
    return [r["message"] for r in records if r["level"].name == level]
