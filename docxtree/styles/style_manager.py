"""
Style catalog for DOCX documents.

Holds the document's styles keyed by (name, type), the document defaults and
the unmodelled content of the styles part (latent styles and the like).
"""

import logging
import re
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..exceptions import DuplicateStyleNameError, StyleInUseError
from ..models.fragment import OpaqueFragment
from ..utils.enums import StyleType
from .defaults import DocumentDefaults
from .style import Style

logger = logging.getLogger(__name__)

# Counts paragraph/run references to a style in the owning document
ReferenceCounter = Callable[[Style], int]

_ID_STRIP_RE = re.compile(r"[^0-9A-Za-z]")


def _style_id_base(name: str) -> str:
    base = _ID_STRIP_RE.sub("", name)
    return base or "Style"


class StyleManager:
    """
    Style catalog for document styles and their inheritance.

    Names are unique per style type, so a paragraph style and a character
    style may share a name. Style ids are unique across the whole catalog.

    Args:
        reference_counter: callback counting how many paragraphs and runs of
            the owning document reference a style; used by
            :meth:`remove_style`
    """

    def __init__(self, reference_counter: Optional[ReferenceCounter] = None):
        self._styles: Dict[tuple, Style] = {}
        self.defaults = DocumentDefaults()
        # unmodelled children of w:styles (w:latentStyles, ...)
        self.extra: List[OpaqueFragment] = []
        # w:styles root (namespaces, mc:Ignorable) from a loaded part
        self.shell: Optional[OpaqueFragment] = None
        self._reference_counter = reference_counter

        logger.debug("Style manager initialized")

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def add_style(self, name: str, style_type: Any, based_on: Optional[str] = None) -> Style:
        """
        Create a style with empty formatting.

        Args:
            name: style name, unique within ``style_type``
            style_type: StyleType or its XML string
            based_on: name of a parent style of the same type

        Returns:
            The new style, owned by this catalog

        Raises:
            ValueError: for an empty name
            DuplicateStyleNameError: if the name is taken for this type
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Style name must be a non-empty string")
        style_type = StyleType.coerce(style_type)
        if (name, style_type) in self._styles:
            raise DuplicateStyleNameError(name, style_type.value)
        style = Style(name, style_type, self._unique_style_id(name), based_on=based_on)
        self._styles[(name, style_type)] = style
        logger.debug(f"Added {style_type.value} style '{name}' (id={style.style_id})")
        return style

    def register(self, style: Style) -> Style:
        """
        Add an already-built style, keeping its id (used when loading).

        Raises:
            DuplicateStyleNameError: if the name is taken for this type
        """
        key = (style.name, style.style_type)
        if key in self._styles:
            raise DuplicateStyleNameError(style.name, style.style_type.value)
        if self.find_by_id(style.style_id) is not None:
            raise ValueError(f"Style id '{style.style_id}' is already used")
        self._styles[key] = style
        return style

    def _unique_style_id(self, name: str) -> str:
        base = _style_id_base(name)
        taken = {style.style_id for style in self._styles.values()}
        candidate = base
        counter = 1
        while candidate in taken:
            candidate = f"{base}{counter}"
            counter += 1
        return candidate

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get_style(self, name: str, style_type: Any) -> Optional[Style]:
        """Style by name and type, or None."""
        return self._styles.get((name, StyleType.coerce(style_type)))

    def has_style(self, name: str, style_type: Any) -> bool:
        return self.get_style(name, style_type) is not None

    def find_by_id(self, style_id: str, style_type: Any = None) -> Optional[Style]:
        wanted = StyleType.coerce(style_type) if style_type is not None else None
        for style in self._styles.values():
            if style.style_id == style_id and (wanted is None or style.style_type is wanted):
                return style
        return None

    def get_styles_by_type(self, style_type: Any) -> List[Style]:
        wanted = StyleType.coerce(style_type)
        return [style for style in self._styles.values() if style.style_type is wanted]

    def default_style(self, style_type: Any) -> Optional[Style]:
        """The style flagged as default for ``style_type``, if any."""
        for style in self.get_styles_by_type(style_type):
            if style.is_default:
                return style
        return None

    def set_default_style(self, name: str, style_type: Any) -> Style:
        """Make ``name`` the single default style of its type."""
        style = self.get_style(name, style_type)
        if style is None:
            raise KeyError(f"No {StyleType.coerce(style_type).value} style named '{name}'")
        for other in self.get_styles_by_type(style.style_type):
            other.is_default = other is style
        return style

    def resolve_style_chain(self, style: Style) -> List[Style]:
        """
        ``style`` followed by its ``based_on`` ancestors.

        Stops at a missing parent or at the first style seen twice; the caller
        decides how to report either.
        """
        chain = [style]
        seen = {id(style)}
        current = style
        while current.based_on:
            parent = self.get_style(current.based_on, current.style_type)
            if parent is None or id(parent) in seen:
                break
            chain.append(parent)
            seen.add(id(parent))
            current = parent
        return chain

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------
    def count_references(self, style: Style) -> int:
        """Paragraphs, runs and styles that reference ``style``."""
        count = 0
        for other in self._styles.values():
            if other is style:
                continue
            if other.style_type is style.style_type and other.based_on == style.name:
                count += 1
            if style.style_type is StyleType.PARAGRAPH and other.next_style == style.name:
                count += 1
        if self._reference_counter is not None:
            count += self._reference_counter(style)
        return count

    def remove_style(self, name: str, style_type: Any) -> Style:
        """
        Remove a style from the catalog.

        Raises:
            KeyError: if there is no such style
            StyleInUseError: while anything still references the style
        """
        style_type = StyleType.coerce(style_type)
        style = self._styles.get((name, style_type))
        if style is None:
            raise KeyError(f"No {style_type.value} style named '{name}'")
        references = self.count_references(style)
        if references:
            raise StyleInUseError(name, style_type.value, references)
        del self._styles[(name, style_type)]
        logger.debug(f"Removed {style_type.value} style '{name}'")
        return style

    # ------------------------------------------------------------------
    @property
    def styles(self) -> List[Style]:
        return list(self._styles.values())

    def __iter__(self) -> Iterator[Style]:
        return iter(list(self._styles.values()))

    def __len__(self) -> int:
        return len(self._styles)

    def __repr__(self) -> str:
        return f"StyleManager(styles={len(self._styles)})"
