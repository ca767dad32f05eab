# src/accessibility_checker/dom/builder.py
import bisect
import logging
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from accessibility_checker.model import SourceRange
from .core import CommentNode, ElementNode, Node, TextNode
from .models import HTMLDocument

logger = logging.getLogger(__name__)


class SourceLocator:
    """
    Maps the parser's (line, column) start positions back to the raw markup
    to find where each opening tag ends.
    """

    def __init__(self, source: str):
        self.source = source
        self.line_starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self.line_starts.append(i + 1)

    def offset(self, line: int, column: int) -> Optional[int]:
        """Converts a 1-based line and 0-based column into a string offset."""
        if line < 1 or line > len(self.line_starts):
            return None
        offset = self.line_starts[line - 1] + column
        return offset if offset < len(self.source) else None

    def position(self, offset: int) -> tuple:
        """Converts a string offset into a zero-based (line, character) pair."""
        line = bisect.bisect_right(self.line_starts, offset) - 1
        return line, offset - self.line_starts[line]

    def start_tag_end(self, offset: int) -> Optional[int]:
        """
        Returns the offset just past the '>' closing the tag opened at `offset`.

        A quote only opens a value directly after '=' (whitespace allowed in
        between), so apostrophes inside unquoted values such as title=don't
        are plain characters.
        """
        if self.source[offset] != "<":
            return None
        quote = None
        expects_value = False
        for i in range(offset + 1, len(self.source)):
            ch = self.source[i]
            if quote:
                if ch == quote:
                    quote = None
                continue
            if ch == ">":
                return i + 1
            if ch in ('"', "'") and expects_value:
                quote = ch
            if not ch.isspace():
                expects_value = ch == "="
        return None

    def start_tag_range(self, tag: Tag) -> Optional[SourceRange]:
        line = getattr(tag, "sourceline", None)
        column = getattr(tag, "sourcepos", None)
        if line is None or column is None:
            return None

        start = self.offset(line, column)
        if start is None:
            return None
        end = self.start_tag_end(start)
        if end is None:
            return None

        start_line, start_char = self.position(start)
        end_line, end_char = self.position(end)
        return SourceRange.from_coords(start_line, start_char, end_line, end_char)


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into the HTMLDocument model
    consumed by the audit engine.

    Uses BeautifulSoup's built-in 'html.parser', which records where each tag
    starts; the end of the start tag is recovered from the raw source.
    """

    def parse_doc(self, html: str, path: str = "", title: Optional[str] = None) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            html (str): The raw HTML string.
            path (str): Where the document came from, used for reporting.
            title (Optional[str]): Display title. Defaults to the file name.

        Returns:
            HTMLDocument: The element tree with start-tag ranges.
        """
        display_title = title if title is not None else (Path(path).name if path else "")
        if not html:
            return HTMLDocument(path=path, title=display_title)

        # A leading BOM is not part of the markup
        clean_html = html.lstrip("\ufeff")
        soup = BeautifulSoup(clean_html, "html.parser", multi_valued_attributes=None)
        locator = SourceLocator(clean_html)

        nodes = [n for n in (self._build_node(child, locator) for child in soup.contents) if n is not None]
        return HTMLDocument(path=path, title=display_title, nodes=nodes)

    def parse_file(self, path: Union[str, Path], encoding: str = "utf-8") -> HTMLDocument:
        file_path = Path(path)
        html = file_path.read_text(encoding=encoding, errors="replace")
        return self.parse_doc(html, path=str(file_path), title=file_path.name)

    def _build_node(self, node, locator: SourceLocator) -> Optional[Node]:
        if isinstance(node, Tag):
            return self._build_tree(node, locator)
        return self._build_leaf(node)

    @staticmethod
    def _build_leaf(node) -> Optional[Node]:
        if isinstance(node, Comment):
            return CommentNode(data=str(node))
        if isinstance(node, (Doctype, Declaration, ProcessingInstruction)):
            return None
        if isinstance(node, NavigableString):
            return TextNode(data=str(node))
        return None

    def _build_tree(self, root: Tag, locator: SourceLocator) -> ElementNode:
        """
        Converts a BeautifulSoup Tag into an ElementNode.

        Uses an explicit stack of open tags so that deeply nested documents
        do not hit the recursion limit. An element is created once all of
        its children are built.
        """
        # (tag, remaining children, built children)
        stack = [(root, iter(root.children), [])]
        while True:
            tag, pending, children = stack[-1]
            child = next(pending, None)
            if child is None:
                stack.pop()
                element = self._make_element(tag, children, locator)
                if not stack:
                    return element
                stack[-1][2].append(element)
            elif isinstance(child, Tag):
                stack.append((child, iter(child.children), []))
            else:
                built = self._build_leaf(child)
                if built is not None:
                    children.append(built)

    @staticmethod
    def _make_element(tag: Tag, children: List[Node], locator: SourceLocator) -> ElementNode:
        attrs = {
            key: " ".join(value) if isinstance(value, list) else ("" if value is None else str(value))
            for key, value in tag.attrs.items()
        }

        return ElementNode(
            tag=tag.name.lower(),
            attrs=attrs,
            children=children,
            source_range=locator.start_tag_range(tag)
        )
