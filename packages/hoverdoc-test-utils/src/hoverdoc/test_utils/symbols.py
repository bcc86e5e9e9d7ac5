from dataclasses import dataclass
from typing import Optional


@dataclass
class StubSymbol:
    qualified_name: str
    explicit_comment: Optional[str] = None
    containing_file_path: Optional[str] = None
    is_documentable: bool = True
    is_callable: bool = False


@dataclass
class StubParameter:
    base_name: str
    parent: Optional[StubSymbol] = None
