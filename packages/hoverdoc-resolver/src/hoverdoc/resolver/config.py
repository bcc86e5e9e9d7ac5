import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, List

try:
    import tomllib
except ImportError:
    import tomli as tomllib

log = logging.getLogger(__name__)


@dataclass
class ResolverConfig:
    archive_extension: str = ".swc"
    # Matched against archive paths after '\' has been normalised to '/'.
    library_path_signatures: List[str] = field(
        default_factory=lambda: ["/frameworks/libs/"]
    )
    frameworks_dir_name: str = "frameworks"
    locale_dir_name: str = "locale"
    default_locale: str = "en_US"
    locale_archive_suffix: str = "_rb"
    global_library_names: List[str] = field(
        default_factory=lambda: ["playerglobal", "airglobal"]
    )
    bundled_docs_dir: str = "playerglobal_docs"
    bundled_docs_file: str = "packages.dita"
    param_tag: str = "param"


def _coerce(value: Any, default: Any) -> Any:
    if isinstance(default, list):
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return list(value)
    elif isinstance(value, type(default)):
        return value
    raise TypeError(f"expected {type(default).__name__}, got {type(value).__name__}")


def load_config_from_path(root_path: Path) -> ResolverConfig:
    """
    Loads `[tool.hoverdoc]` from `<root_path>/pyproject.toml`.

    Missing files and tables yield the defaults. Unknown keys and values of the
    wrong type are logged and ignored.
    """
    config = ResolverConfig()
    pyproject_path = root_path / "pyproject.toml"
    if not pyproject_path.is_file():
        return config

    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError, OSError) as e:
        log.warning(f"Could not read {pyproject_path}: {e}")
        return config

    tool = data.get("tool", {})
    section: Any = tool.get("hoverdoc", {}) if isinstance(tool, dict) else tool
    if not isinstance(section, dict):
        log.warning(f"Ignoring 'tool.hoverdoc' in {pyproject_path}: not a table")
        return config

    known = {f.name for f in fields(ResolverConfig)}
    for key, value in section.items():
        if key not in known:
            log.warning(f"Unknown option 'tool.hoverdoc.{key}' in {pyproject_path}")
            continue
        try:
            setattr(config, key, _coerce(value, getattr(config, key)))
        except TypeError as e:
            log.warning(f"Ignoring 'tool.hoverdoc.{key}' in {pyproject_path}: {e}")
    return config
