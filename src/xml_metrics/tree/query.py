"""QueryResolver: XPath compilation, root selection and dynamic naming.

Queries are evaluated with the parsed document as context, so absolute
(``/metrics/cpu``), descendant (``//cpu``) and relative (``metrics``) forms
all behave as they would against the document node.  The bare query ``"//"``
is accepted as shorthand for "every element in the document" and rewritten
to ``//*`` before compilation.

Compiled ``etree.XPath`` objects are kept in a per-resolver ``LRUCache`` so a
long-lived parser compiles each configured query once.  Both the cache and the
evaluation of cached XPath objects are guarded by a lock: lxml XPath objects
are not re-entrant.

Dynamic naming follows two shapes:

- ``<path>/@<attr>``: find the first element matching ``<path>`` and read its
  ``attr`` attribute (missing attribute reads as ``""``).
- anything else: find the first element matching the query and read its text.

Either way a blank result is an error, since every metric of the call needs
the name.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Final

from cachetools import LRUCache
from lxml import etree

from xml_metrics.errors import QueryCompileError, QueryResolutionError
from xml_metrics.tree import nodes
from xml_metrics.tree.classifier import trim_empty_chars

__all__ = [
    "ALL_ELEMENTS",
    "ATTRIBUTE_SELECTOR",
    "QueryResolver",
    "anchor_to_document",
    "compile_query",
]

logger = logging.getLogger(__name__)

ALL_ELEMENTS: Final = "//"
ATTRIBUTE_SELECTOR: Final = re.compile(r".*/@(?P<attr_name>.+)", re.DOTALL)

_FUNCTION_CALL: Final = re.compile(r"(?P<name>[A-Za-z_][\w.-]*(?::[A-Za-z_][\w.-]*)?)\s*\(")
_NODE_TESTS: Final = frozenset({"node", "text", "comment", "processing-instruction"})
_NON_PATH_START: Final = re.compile(r"[/($'\"0-9-]|\.[0-9]")


def anchor_to_document(expression: str) -> str:
    """Make a relative location path start from the document node.

    lxml evaluates a query against an ElementTree with the document element
    as context node, so ``metrics/cpu`` would look for ``metrics`` *below*
    ``<metrics>``.  Prefixing ``/`` moves the context up to the document.
    Absolute paths, expressions in parentheses, literals, variables and
    function calls are returned unchanged.
    """
    stripped = expression.lstrip()
    if not stripped or _NON_PATH_START.match(stripped):
        return expression
    call = _FUNCTION_CALL.match(stripped)
    if call is not None and call.group("name") not in _NODE_TESTS:
        return expression
    return f"/{stripped}"


def compile_query(query: str) -> etree.XPath:
    """Compile ``query`` into an XPath object without caching.

    Relative paths are anchored at the document node first.

    Raises:
        QueryCompileError: If the query is not valid XPath 1.0.
    """
    expression = "//*" if query == ALL_ELEMENTS else anchor_to_document(query)
    try:
        return etree.XPath(expression, smart_strings=False)
    except etree.XPathError as exc:
        raise QueryCompileError(query, str(exc)) from exc


class QueryResolver:
    """Compiles, caches and evaluates XPath queries against documents.

    Example::

        resolver = QueryResolver()
        doc = parse_document(b'<m name="cpu"><v>1</v></m>')
        resolver.select_roots(doc, "//v")         # [<Element v>]
        resolver.resolve_name(doc, "/m/@name")    # "cpu"
    """

    def __init__(self, max_cache_size: int = 128) -> None:
        self._cache: LRUCache[str, etree.XPath] = LRUCache(maxsize=max_cache_size)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_cache_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def cache_size(self) -> int:
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(self, query: str) -> etree.XPath:
        """Return the compiled form of ``query``, compiling it on first use."""
        with self._lock:
            return self._compile_locked(query)

    def select_roots(self, document: etree._ElementTree, query: str) -> list[etree._Element]:
        """Return every element ``query`` selects, in document order.

        An empty list is a normal result, not an error.

        Raises:
            QueryCompileError: Invalid XPath, or XPath that fails to evaluate
                (unknown function, undeclared namespace prefix).
            QueryResolutionError: The query yields a number, string or
                boolean instead of a node-set.
        """
        result = self._evaluate(document, query)
        if not isinstance(result, list):
            msg = f"Query {query!r} must select XML elements, but returns {type(result).__name__}"
            raise QueryResolutionError(query, msg)
        roots = [node for node in result if nodes.is_element(node)]
        logger.debug("query %r selected %d root element(s)", query, len(roots))
        return roots

    def select_single(self, document: etree._ElementTree, query: str) -> etree._Element:
        """Return the first element ``query`` selects.

        Raises:
            QueryResolutionError: The query matches no element.
        """
        result = self._evaluate(document, query)
        if isinstance(result, list):
            for node in result:
                if nodes.is_element(node):
                    return node
        msg = f"Query {query!r} must return XML object, but returns nothing"
        raise QueryResolutionError(query, msg)

    def resolve_name(self, document: etree._ElementTree, query: str) -> str:
        """Resolve a measurement query to the metric name for this document.

        Returns:
            The attribute value or element text, exactly as found (not trimmed).

        Raises:
            QueryCompileError: The query (or its element part) is invalid.
            QueryResolutionError: No element matched, or the value is blank.
        """
        match = ATTRIBUTE_SELECTOR.fullmatch(query)
        if match is not None:
            attr_name = match.group("attr_name")
            node_path = query.removesuffix(f"/@{attr_name}")
            element = self.select_single(document, node_path)
            value = dict(nodes.attributes(element)).get(attr_name, "")
        else:
            element = self.select_single(document, query)
            value = nodes.text(element)

        if trim_empty_chars(value) == "":
            msg = f"Query {query!r} must return value, but returns empty string"
            raise QueryResolutionError(query, msg)

        logger.debug("measurement query %r resolved to %r", query, value)
        return value

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _compile_locked(self, query: str) -> etree.XPath:
        compiled = self._cache.get(query)
        if compiled is None:
            compiled = compile_query(query)
            self._cache[query] = compiled
        return compiled

    def _evaluate(self, document: etree._ElementTree, query: str) -> Any:
        with self._lock:
            compiled = self._compile_locked(query)
            try:
                return compiled(document)
            except etree.XPathError as exc:
                raise QueryCompileError(query, str(exc)) from exc
