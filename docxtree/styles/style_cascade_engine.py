"""
Style cascade engine for DOCX documents.

Computes effective formatting by walking an ordered list of sources and
taking, per field, the first value that is set:

paragraphs
    direct formatting, paragraph style and its ``based_on`` chain (or the
    default paragraph style), document defaults, fallback constants
runs
    direct formatting, character style chain (or the default character
    style), the paragraph's style chain run formatting, document defaults,
    fallback constants

Resolution never mutates the tree or the catalog.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from ..exceptions import UnknownStyleReferenceError
from ..models.formatting import FormattingSet, ParagraphFormatting, RunFormatting
from ..models.paragraph import Paragraph
from ..models.run import Run
from ..utils.enums import StyleType
from .defaults import fallback_paragraph_formatting, fallback_run_formatting
from .style import Style
from .style_manager import StyleManager

logger = logging.getLogger(__name__)

Source = Tuple[str, FormattingSet]


class EffectiveParagraphFormatting(ParagraphFormatting):
    """
    Resolved paragraph formatting.

    Attributes:
        sources: field name -> label of the source that supplied it
        diagnostics: non-fatal problems met during resolution
    """

    def __init__(self, **fields):
        super().__init__(**fields)
        self.sources: Dict[str, str] = {}
        self.diagnostics: List[UnknownStyleReferenceError] = []


class EffectiveRunFormatting(RunFormatting):
    """Resolved run formatting; see :class:`EffectiveParagraphFormatting`."""

    def __init__(self, **fields):
        super().__init__(**fields)
        self.sources: Dict[str, str] = {}
        self.diagnostics: List[UnknownStyleReferenceError] = []


class StyleCascadeEngine:
    """
    Resolve effective formatting against a style catalog.

    Args:
        styles: the document's style catalog
        strict: raise :class:`UnknownStyleReferenceError` instead of
            reporting it in ``diagnostics``
    """

    def __init__(self, styles: StyleManager, strict: bool = False) -> None:
        self.styles = styles
        self.strict = strict

    # ------------------------------------------------------------------
    def resolve_paragraph(self, paragraph: Paragraph) -> EffectiveParagraphFormatting:
        result = EffectiveParagraphFormatting()
        sources: List[Source] = [("direct", paragraph.properties)]
        for style in self._style_chain(paragraph.style_name, StyleType.PARAGRAPH, result.diagnostics):
            sources.append((f"style:{style.name}", style.paragraph_formatting))
        sources.append(("defaults", self.styles.defaults.paragraph_formatting))
        sources.append(("fallback", fallback_paragraph_formatting()))
        self._first_match(result, sources)
        return result

    def resolve_run(self, run: Run) -> EffectiveRunFormatting:
        result = EffectiveRunFormatting()
        sources: List[Source] = [("direct", run.properties)]
        for style in self._style_chain(run.style_name, StyleType.CHARACTER, result.diagnostics):
            sources.append((f"style:{style.name}", style.run_formatting))
        paragraph = run.parent if isinstance(run.parent, Paragraph) else None
        if paragraph is not None:
            for style in self._style_chain(paragraph.style_name, StyleType.PARAGRAPH, result.diagnostics):
                sources.append((f"paragraph-style:{style.name}", style.run_formatting))
        else:
            for style in self._style_chain(None, StyleType.PARAGRAPH, result.diagnostics):
                sources.append((f"paragraph-style:{style.name}", style.run_formatting))
        sources.append(("defaults", self.styles.defaults.run_formatting))
        sources.append(("fallback", fallback_run_formatting()))
        self._first_match(result, sources)
        return result

    # ------------------------------------------------------------------
    def _style_chain(self, name: Optional[str], style_type: StyleType,
                     diagnostics: List[UnknownStyleReferenceError]) -> List[Style]:
        if name is None:
            default = self.styles.default_style(style_type)
            if default is None:
                return []
            style = default
        else:
            style = self.styles.get_style(name, style_type)
            if style is None:
                self._report(UnknownStyleReferenceError(name, style_type.value), diagnostics)
                return []

        chain = self.styles.resolve_style_chain(style)
        last = chain[-1]
        if last.based_on:
            parent = self.styles.get_style(last.based_on, style_type)
            if parent is None:
                detail = f"based_on of '{last.name}'"
                self._report(UnknownStyleReferenceError(last.based_on, style_type.value, detail), diagnostics)
            else:
                detail = f"based_on cycle at '{last.name}'"
                self._report(UnknownStyleReferenceError(last.based_on, style_type.value, detail), diagnostics)
        return chain

    def _report(self, error: UnknownStyleReferenceError,
                diagnostics: List[UnknownStyleReferenceError]) -> None:
        if self.strict:
            raise error
        logger.warning(f"{error}; falling back to document defaults")
        diagnostics.append(error)

    @staticmethod
    def _first_match(result: FormattingSet, sources: List[Source]) -> None:
        resolved_at: Dict[str, int] = {}
        for name in result.field_names():
            exclusive = getattr(type(result), name).clears
            for index, (label, formatting) in enumerate(sources):
                value = getattr(formatting, name)
                if value is None:
                    continue
                # first-line and hanging indents exclude each other; the
                # higher-priority source keeps its field
                rivals = [resolved_at[other] for other in exclusive if other in resolved_at]
                if rivals and min(rivals) <= index:
                    break
                for other in exclusive:
                    resolved_at.pop(other, None)
                    result.sources.pop(other, None)  # type: ignore[attr-defined]
                setattr(result, name, value)
                resolved_at[name] = index
                result.sources[name] = label  # type: ignore[attr-defined]
                break
