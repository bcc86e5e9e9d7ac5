from .archive import SpyArchiveLoader
from .dita import dita_classifier, dita_map, dita_operation, dita_package, dita_value
from .sdk import SdkFactory
from .symbols import StubParameter, StubSymbol

__all__ = [
    "SpyArchiveLoader",
    "dita_classifier",
    "dita_map",
    "dita_operation",
    "dita_package",
    "dita_value",
    "SdkFactory",
    "StubParameter",
    "StubSymbol",
]
