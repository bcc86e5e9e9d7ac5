from .bundled import BundledReferenceIndex, bundled_document_path
from .config import ResolverConfig, load_config_from_path
from .context import ResolverContext, create_resolver_context
from .engine import DocumentationEngine, create_documentation_engine
from .locator import FallbackLocator

__all__ = [
    "BundledReferenceIndex",
    "bundled_document_path",
    "ResolverConfig",
    "load_config_from_path",
    "ResolverContext",
    "create_resolver_context",
    "DocumentationEngine",
    "create_documentation_engine",
    "FallbackLocator",
]
