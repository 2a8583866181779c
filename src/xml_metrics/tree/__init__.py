"""Tree subpackage for XML document access.

Re-exports the public API for the tree module:
- parse_document: bytes -> lxml document, raising InputError on bad XML
- QueryResolver: cached XPath evaluation, root selection and dynamic naming
- ClassificationRules / classify: split one element into tags and fields
"""

from xml_metrics.tree.classifier import ClassificationRules, classify
from xml_metrics.tree.document import parse_document
from xml_metrics.tree.query import QueryResolver, compile_query

__all__ = [
    "ClassificationRules",
    "QueryResolver",
    "classify",
    "compile_query",
    "parse_document",
]
