from bs4 import BeautifulSoup
from bs4.element import CData, PageElement, PreformattedString, Tag
from typing import Mapping, Optional, Sequence


class SoupNode:
    """
    Adapts a BeautifulSoup element to the read-only TreeNode interface used by the locator.
    Comments, doctypes and processing instructions are not exposed as children.
    """

    __slots__ = ("_element",)

    def __init__(self, element: PageElement):
        self._element = element

    @classmethod
    def wrap(cls, soup: BeautifulSoup | Tag) -> "SoupNode":
        return cls(soup)

    def tag_name(self) -> Optional[str]:
        # BeautifulSoup itself is a Tag named "[document]"
        if isinstance(self._element, BeautifulSoup):
            return "#document"
        if isinstance(self._element, Tag):
            return self._element.name.lower()
        return None

    def attributes(self) -> Mapping[str, str]:
        if not isinstance(self._element, Tag):
            return {}
        # multi-valued attributes (class, rel, ...) come back as lists
        return {
            str(k).lower(): " ".join(v) if isinstance(v, list) else str(v)
            for k, v in self._element.attrs.items()
        }

    def children(self) -> Sequence["SoupNode"]:
        if not isinstance(self._element, Tag):
            return ()
        return tuple(
            SoupNode(child)
            for child in self._element.children
            if isinstance(child, (Tag, CData)) or not isinstance(child, PreformattedString)
        )

    def text_content(self) -> str:
        if isinstance(self._element, Tag):
            return self._element.get_text()
        return str(self._element)

    def __repr__(self) -> str:
        return f"SoupNode({self.tag_name() or 'text'!r})"
