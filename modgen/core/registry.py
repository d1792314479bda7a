"""
MODGEN Core - Registry Patcher

Keeps the resource provider file (src/module/resource.provider.ts) in sync
with the generated modules:

    import { BarangModule } from './master/barang/barang.module';
    export const resourceProviders = [BarangModule];

The file stays hand-editable TypeScript. It is parsed just enough to find
the provider array, modified, and written back with everything else intact.

Limitations:
    - The array must be flat. The first ']' after the first '[' that follows
      the marker closes it, so nested brackets are not supported.
    - There is no locking. Run one generator at a time.
"""

import logging
from pathlib import Path
from typing import List, Optional

from modgen.config import Config
from .errors import DuplicateBindingError, MarkerNotFoundError
from .schema import ModuleSpec


logger = logging.getLogger(__name__)

REGISTRY_MARKER = Config.Internal.REGISTRY_MARKER


def module_import_line(module: ModuleSpec) -> str:
    """Import statement for a module, relative to the registry file."""
    file = module.file_name
    return f"import {{ {module.binding_name} }} from './{module.folder_name}/{file}/{file}.module';"


class RegistryDocument:
    """
    Registry text split around the provider array.

    Usage:
        document = RegistryDocument.parse(text)
        if document.add("BarangModule", import_line):
            text = document.render()
    """

    def __init__(self, head: str, marker_to_array: str, body: str, tail: str,
                 marker: str = REGISTRY_MARKER, source: Optional[Path] = None,
                 newline: str = "\n"):
        self.head = head                        # Everything before the marker
        self.marker_to_array = marker_to_array  # Marker up to and including '['
        self.body = body                        # Between '[' and ']'
        self.tail = tail                        # ']' and everything after
        self.marker = marker
        self.source = source
        self.newline = newline
        self.entries: List[str] = [entry.strip() for entry in body.split(",") if entry.strip()]
        self._imports: List[str] = []
        self._changed = False

    @classmethod
    def parse(cls, text: str, marker: str = REGISTRY_MARKER, source: Optional[Path] = None) -> "RegistryDocument":
        """
        Locate the marker and its array.

        The line ending of the file (LF or CRLF) is kept for inserted lines.

        Raises:
            MarkerNotFoundError: If the marker or the array brackets are missing
        """
        marker_at = text.find(marker)
        if marker_at == -1:
            raise MarkerNotFoundError(source or "<registry>", marker)

        array_start = text.find("[", marker_at)
        if array_start == -1:
            raise MarkerNotFoundError(source or "<registry>", marker, "no '[' after the marker")

        array_end = text.find("]", array_start)
        if array_end == -1:
            raise MarkerNotFoundError(source or "<registry>", marker, "no ']' closing the array")

        return cls(
            head=text[:marker_at],
            marker_to_array=text[marker_at:array_start + 1],
            body=text[array_start + 1:array_end],
            tail=text[array_end:],
            marker=marker,
            source=source,
            newline="\r\n" if "\r\n" in text else "\n",
        )

    def has_import(self, import_line: str) -> bool:
        return import_line in self.head or import_line in self._imports

    def add(self, binding_name: str, import_line: str) -> bool:
        """
        Register a binding and its import.

        Returns:
            False if the import line is already present (nothing changes)

        Raises:
            DuplicateBindingError: If the binding is already in the array
                without this import line
        """
        if self.has_import(import_line):
            return False
        if binding_name in self.entries:
            raise DuplicateBindingError(self.source or "<registry>", binding_name, import_line)

        self._imports.append(import_line)
        self.entries.append(binding_name)
        self._changed = True
        return True

    def _render_body(self) -> str:
        if not self._changed:
            return self.body
        if not self.entries:
            return ""

        # Multi-line arrays keep one entry per line, ']' on its own line
        if "\n" in self.body:
            lines = [line for line in self.body.split("\n")[1:] if line.strip()]
            indent = lines[0][:len(lines[0]) - len(lines[0].lstrip())] if lines else "    "
            closing = self.body[self.body.rfind("\n") + 1:]
            if closing.strip():
                closing = ""
            entries = "".join(f"{self.newline}{indent}{entry}," for entry in self.entries)
            return f"{entries}{self.newline}{closing}"

        return ", ".join(self.entries)

    def render(self) -> str:
        """Reassemble the registry text, new imports directly before the marker."""
        imports = "".join(f"{line}{self.newline}" for line in self._imports)
        return f"{self.head}{imports}{self.marker_to_array}{self._render_body()}{self.tail}"


def register_binding(registry_path, binding_name: str, import_line: str,
                     marker: str = REGISTRY_MARKER) -> bool:
    """
    Add a module to the registry file, at most once.

    The file is read, validated and only then written; a malformed registry
    is never partially modified. Line endings are preserved.

    Args:
        registry_path: Path to the registry file
        binding_name: Symbol appended to the provider array (e.g. BarangModule)
        import_line: Full import statement for the symbol
        marker: Text that starts the provider array declaration

    Returns:
        True if the file was modified, False if the import was already present

    Raises:
        MarkerNotFoundError: If the registry has no provider array
        DuplicateBindingError: If the symbol is registered from another path
        OSError: If the file cannot be read or written
    """
    registry_path = Path(registry_path)
    with open(registry_path, "r", encoding="utf-8", newline="") as f:
        text = f.read()

    if import_line in text:
        logger.info(f"{binding_name} is already registered in {registry_path}")
        return False

    document = RegistryDocument.parse(text, marker=marker, source=registry_path)
    document.add(binding_name, import_line)
    with open(registry_path, "w", encoding="utf-8", newline="") as f:
        f.write(document.render())

    logger.info(f"Registered {binding_name} in {registry_path}")
    return True
