"""
Base model class for the document tree.

Tree helpers shared by the body, paragraphs and runs: ownership (parent and
ordered children), insertion, removal and hierarchical paths.
"""

import logging
import uuid
from typing import Iterator, List, Optional, Tuple, Type

logger = logging.getLogger(__name__)


class Models:
    """Base class for tree nodes that own an ordered list of children."""

    # node types accepted by add_child/insert_child; empty means "anything"
    allowed_children: Tuple[type, ...] = ()

    def __init__(self):
        self.parent: Optional['Models'] = None
        self.children: List[object] = []
        self.id: str = str(uuid.uuid4())

    def _check_child(self, child: object) -> None:
        if self.allowed_children and not isinstance(child, self.allowed_children):
            allowed = ", ".join(t.__name__ for t in self.allowed_children)
            raise TypeError(f"{type(self).__name__} accepts {allowed}, not {type(child).__name__}")
        if isinstance(child, Models) and child.parent is not None and child.parent is not self:
            raise ValueError(f"{type(child).__name__} already belongs to another {type(child.parent).__name__}")

    def add_child(self, child: object) -> object:
        """Append ``child`` and take ownership of it."""
        return self.insert_child(len(self.children), child)

    def insert_child(self, index: int, child: object) -> object:
        """
        Insert ``child`` at ``index`` (list semantics, negative indexes allowed).

        Returns:
            The inserted child
        """
        self._check_child(child)
        if isinstance(child, Models) and any(existing is child for existing in self.children):
            raise ValueError(f"{type(child).__name__} is already a child of this {type(self).__name__}")
        self.children.insert(index, child)
        if isinstance(child, Models):
            child.parent = self
        return child

    def index_of(self, child: object) -> int:
        """Position of ``child`` by identity."""
        for position, existing in enumerate(self.children):
            if existing is child:
                return position
        raise ValueError(f"{type(child).__name__} is not a child of this {type(self).__name__}")

    def remove_child(self, child: object) -> None:
        """Detach ``child``; its subtree is discarded with it."""
        del self.children[self.index_of(child)]
        if isinstance(child, Models):
            child.parent = None

    def remove(self) -> None:
        """Detach this node from its parent."""
        if self.parent is None:
            raise ValueError(f"{type(self).__name__} is not attached")
        self.parent.remove_child(self)

    def iter_children(self, type_filter: Optional[Type] = None) -> Iterator[object]:
        """Iterate over children, optionally filtered by type."""
        for child in self.children:
            if type_filter is None or isinstance(child, type_filter):
                yield child

    def get_path(self) -> str:
        """Hierarchical path such as ``body.paragraph[2].run[1]``."""
        parts = []
        current = self
        while current.parent is not None:
            index = current.parent.index_of(current)
            parts.append(f"{type(current).__name__.lower()}[{index}]")
            current = current.parent
        parts.append(type(current).__name__.lower())
        return ".".join(reversed(parts))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id[:8]}..., children={len(self.children)})"
