import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .dita import dita_map


class SdkFactory:
    """
    Builds an SDK-like directory tree of SWC archives and documentation files.

    Example:
        root = (
            SdkFactory(tmp_path)
            .with_swc("sdk/frameworks/libs/framework.swc")
            .with_swc("sdk/frameworks/locale/en_US/framework_rb.swc", [package_xml])
            .build()
        )
    """

    TOOL_DIR = "tool"

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: Dict[str, bytes] = {}
        self._swcs: Dict[str, Optional[List[str]]] = {}

    @property
    def tool_location(self) -> Path:
        """A location whose grandparent is the tool's install directory."""
        return self.root_path / self.TOOL_DIR / "bin" / "server.py"

    def with_file(self, relative_path: str, content: Union[str, bytes]) -> "SdkFactory":
        data = content.encode("utf-8") if isinstance(content, str) else content
        self._files[relative_path] = data
        return self

    def with_swc(
        self, relative_path: str, packages: Optional[Sequence[str]] = None
    ) -> "SdkFactory":
        """
        Adds a SWC archive. With `packages` (apiPackage XML strings) the archive
        embeds a `docs/packages.dita` map; without it, it has no documentation.
        """
        self._swcs[relative_path] = list(packages) if packages is not None else None
        return self

    def with_bundled_docs(self, packages: Sequence[str]) -> "SdkFactory":
        docs_dir = f"{self.TOOL_DIR}/playerglobal_docs"
        hrefs = [f"package{i}.xml" for i in range(len(packages))]
        self.with_file(f"{docs_dir}/packages.dita", dita_map(*hrefs))
        for href, package_xml in zip(hrefs, packages):
            self.with_file(f"{docs_dir}/{href}", package_xml)
        return self

    def build(self) -> Path:
        for relative_path, data in self._files.items():
            target = self.root_path / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        for relative_path, packages in self._swcs.items():
            target = self.root_path / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(target, "w") as zf:
                zf.writestr("catalog.xml", "<swc/>")
                zf.writestr("library.swf", b"FWS")
                if packages is not None:
                    hrefs = [f"package{i}.xml" for i in range(len(packages))]
                    zf.writestr("docs/packages.dita", dita_map(*hrefs))
                    for href, package_xml in zip(hrefs, packages):
                        zf.writestr(f"docs/{href}", package_xml)
        return self.root_path
