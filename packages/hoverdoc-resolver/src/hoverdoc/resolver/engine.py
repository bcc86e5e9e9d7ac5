import logging
from pathlib import Path
from typing import Optional

from hoverdoc.asdoc import StructuredComment
from hoverdoc.spec import (
    FailureKind,
    Lookup,
    ParameterSymbolProtocol,
    SymbolProtocol,
)
from .context import ResolverContext, create_resolver_context

log = logging.getLogger(__name__)


class DocumentationEngine:
    """
    Resolves hover and signature-help documentation for symbols.

    A symbol's own inline comment always wins. Symbols loaded from a library
    archive fall back to the archive's embedded metadata, then to the locale
    and bundled sources of the fallback locator. Every failure is folded into
    a `None` result here; nothing is raised to the caller.
    """

    def __init__(self, context: ResolverContext):
        self.context = context

    def resolve_symbol_documentation(
        self,
        symbol: SymbolProtocol,
        use_markdown: bool,
        allow_archive_fallback: bool = True,
    ) -> Optional[str]:
        if not symbol.is_documentable:
            return None

        comment = self._fold(self._find_comment(symbol, allow_archive_fallback), symbol)
        if comment is None:
            return None
        comment.compile(use_markdown)
        return comment.description

    def resolve_parameter_documentation(
        self, parameter: ParameterSymbolProtocol, use_markdown: bool
    ) -> Optional[str]:
        function = parameter.parent
        if function is None or not function.is_callable:
            return None

        comment = self._fold(self._find_comment(function, True), function)
        if comment is None:
            return None
        comment.compile(use_markdown)
        return comment.get_parameter_description(
            parameter.base_name, tag_name=self.context.config.param_tag
        )

    def _find_comment(
        self, symbol: SymbolProtocol, allow_archive_fallback: bool
    ) -> Lookup[StructuredComment]:
        raw_comment = symbol.explicit_comment
        if raw_comment is not None:
            return Lookup.hit(StructuredComment(raw_comment))

        archive_path = symbol.containing_file_path
        if (
            not allow_archive_fallback
            or not archive_path
            or not archive_path.lower().endswith(self.context.config.archive_extension)
        ):
            return Lookup.miss(FailureKind.NOT_FOUND, "no inline comment")
        if not Path(archive_path).is_file():
            return Lookup.miss(FailureKind.NOT_FOUND, f"{archive_path} does not exist")

        result = self.context.archive_index.get(archive_path, symbol.qualified_name)
        if result.found or result.failure is FailureKind.UNDOCUMENTED:
            return result
        # A missing or unreadable metadata list only disables its own tier.
        fallback = self.context.locator.locate(archive_path, symbol.qualified_name)
        if fallback.found or fallback.is_terminal:
            return fallback
        return result

    @staticmethod
    def _fold(
        lookup: Lookup[StructuredComment], symbol: SymbolProtocol
    ) -> Optional[StructuredComment]:
        if lookup.value is None:
            log.debug(
                "No documentation for %s (%s): %s",
                symbol.qualified_name,
                lookup.failure.value if lookup.failure else "unknown",
                lookup.detail,
            )
        return lookup.value


def create_documentation_engine(
    context: Optional[ResolverContext] = None,
) -> DocumentationEngine:
    """
    Factory function to create a DocumentationEngine.
    Without a context, a default one is created; hosts that serve several
    engines should share a single context so the caches are shared too.
    """
    return DocumentationEngine(context or create_resolver_context())
