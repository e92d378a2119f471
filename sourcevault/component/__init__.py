"""Component tree and depth-first traversal."""

from .builder import build_component_tree
from .crawler import CrawlerDepthLimit, DepthTraversalCrawler, Order, TypeAwareVisitor
from .tree import (
    Component,
    ComponentType,
    FileAttributes,
    ReportAttributes,
    component_uuid,
    file_key,
)

__all__ = [
    "Component",
    "ComponentType",
    "CrawlerDepthLimit",
    "DepthTraversalCrawler",
    "FileAttributes",
    "Order",
    "ReportAttributes",
    "TypeAwareVisitor",
    "build_component_tree",
    "component_uuid",
    "file_key",
]
