"""Depth-first traversal of the component tree with type-aware callbacks."""

from enum import Enum

from .tree import Component, ComponentType


class Order(Enum):
    PRE_ORDER = "PRE_ORDER"
    POST_ORDER = "POST_ORDER"


class CrawlerDepthLimit(Enum):
    """Deepest component type a crawler descends to."""

    PROJECT = ComponentType.PROJECT
    DIRECTORY = ComponentType.DIRECTORY
    FILE = ComponentType.FILE

    def is_deeper_than(self, component_type: ComponentType) -> bool:
        return self.value.depth > component_type.depth

    def is_higher_than(self, component_type: ComponentType) -> bool:
        return self.value.depth < component_type.depth


class TypeAwareVisitor:
    """Visitor with one no-op hook per component type.

    Subclasses override the hooks they care about.
    """

    def __init__(self, max_depth: CrawlerDepthLimit, order: Order):
        self.max_depth = max_depth
        self.order = order

    def visit_project(self, project: Component) -> None:
        pass

    def visit_directory(self, directory: Component) -> None:
        pass

    def visit_file(self, file: Component) -> None:
        pass

    def visit_any(self, component: Component) -> None:
        pass


class DepthTraversalCrawler:
    """Walks the tree depth first and dispatches to a TypeAwareVisitor."""

    def __init__(self, visitor: TypeAwareVisitor):
        self.visitor = visitor

    def visit(self, component: Component) -> None:
        if self.visitor.max_depth.is_higher_than(component.type):
            return

        if self.visitor.order is Order.PRE_ORDER:
            self._dispatch(component)

        if self.visitor.max_depth.is_deeper_than(component.type):
            for child in component.children:
                self.visit(child)

        if self.visitor.order is Order.POST_ORDER:
            self._dispatch(component)

    def _dispatch(self, component: Component) -> None:
        if component.type is ComponentType.PROJECT:
            self.visitor.visit_project(component)
        elif component.type is ComponentType.DIRECTORY:
            self.visitor.visit_directory(component)
        elif component.type is ComponentType.FILE:
            self.visitor.visit_file(component)
        self.visitor.visit_any(component)
