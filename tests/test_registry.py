"""
Unit tests for the resource provider registry patcher
"""

import pytest

from modgen.core.errors import DuplicateBindingError, MarkerNotFoundError
from modgen.core.registry import (
    REGISTRY_MARKER,
    RegistryDocument,
    module_import_line,
    register_binding,
)
from modgen.core.schema import build_module_spec


BAR_IMPORT = "import { BarModule } from './master/bar/bar.module';"
BAZ_IMPORT = "import { BazModule } from './master/baz/baz.module';"


@pytest.fixture
def registry(tmp_path):
    path = tmp_path / "resource.provider.ts"
    path.write_text(
        "import { FooModule } from './master/foo/foo.module';\n"
        "\n"
        "export const resourceProviders = [FooModule];\n",
        encoding="utf-8",
    )
    return path


class TestRegisterBinding:
    """register_binding() on disk"""

    def test_appends_binding_and_import(self, registry):
        assert register_binding(registry, "BarModule", BAR_IMPORT) is True

        assert registry.read_text(encoding="utf-8") == (
            "import { FooModule } from './master/foo/foo.module';\n"
            "\n"
            f"{BAR_IMPORT}\n"
            "export const resourceProviders = [FooModule, BarModule];\n"
        )

    def test_second_registration_is_a_no_op(self, registry):
        register_binding(registry, "BarModule", BAR_IMPORT)
        before = registry.read_bytes()

        assert register_binding(registry, "BarModule", BAR_IMPORT) is False
        assert registry.read_bytes() == before

    def test_empty_array(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        path.write_text("export const resourceProviders = [];\n", encoding="utf-8")

        register_binding(path, "BarModule", BAR_IMPORT)

        assert path.read_text(encoding="utf-8") == (
            f"{BAR_IMPORT}\nexport const resourceProviders = [BarModule];\n"
        )

    def test_multi_line_array_keeps_layout(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        path.write_text(
            "export const resourceProviders = [\n"
            "    FooModule,\n"
            "];\n",
            encoding="utf-8",
        )

        register_binding(path, "BarModule", BAR_IMPORT)

        assert path.read_text(encoding="utf-8") == (
            f"{BAR_IMPORT}\n"
            "export const resourceProviders = [\n"
            "    FooModule,\n"
            "    BarModule,\n"
            "];\n"
        )

    def test_entry_on_closing_bracket_line(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        path.write_text(
            "export const resourceProviders = [FooModule,\n"
            "    BarModule];\n",
            encoding="utf-8",
        )

        register_binding(path, "BazModule", BAZ_IMPORT)

        assert path.read_text(encoding="utf-8") == (
            f"{BAZ_IMPORT}\n"
            "export const resourceProviders = [\n"
            "    FooModule,\n"
            "    BarModule,\n"
            "    BazModule,\n"
            "];\n"
        )

    def test_entry_on_opening_bracket_line(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        path.write_text(
            "export const resourceProviders = [FooModule,\n"
            "    BarModule,\n"
            "];\n",
            encoding="utf-8",
        )

        register_binding(path, "BazModule", BAZ_IMPORT)

        text = path.read_text(encoding="utf-8")
        assert text.count("BarModule") == 1
        assert text.endswith(
            "export const resourceProviders = [\n"
            "    FooModule,\n"
            "    BarModule,\n"
            "    BazModule,\n"
            "];\n"
        )

    def test_crlf_line_endings_are_kept(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        path.write_bytes(
            b"import { FooModule } from './master/foo/foo.module';\r\n"
            b"\r\n"
            b"export const resourceProviders = [\r\n"
            b"    FooModule,\r\n"
            b"];\r\n"
        )

        register_binding(path, "BarModule", BAR_IMPORT)

        assert path.read_bytes() == (
            b"import { FooModule } from './master/foo/foo.module';\r\n"
            b"\r\n"
            + BAR_IMPORT.encode() + b"\r\n"
            b"export const resourceProviders = [\r\n"
            b"    FooModule,\r\n"
            b"    BarModule,\r\n"
            b"];\r\n"
        )

    def test_crlf_registration_is_idempotent(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        path.write_bytes(b"export const resourceProviders = [];\r\n")

        register_binding(path, "BarModule", BAR_IMPORT)
        before = path.read_bytes()

        assert register_binding(path, "BarModule", BAR_IMPORT) is False
        assert path.read_bytes() == before
        assert b"\n" not in before.replace(b"\r\n", b"")

    def test_binding_registered_from_another_path(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        original = (
            "import { BarModule } from './history/bar/bar.module';\n"
            "export const resourceProviders = [BarModule];\n"
        )
        path.write_text(original, encoding="utf-8")

        with pytest.raises(DuplicateBindingError) as exc_info:
            register_binding(path, "BarModule", BAR_IMPORT)

        assert exc_info.value.error_code == "R002"
        assert path.read_text(encoding="utf-8") == original

    def test_missing_marker_leaves_file_untouched(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        original = "export const providers = [FooModule];\n"
        path.write_text(original, encoding="utf-8")

        with pytest.raises(MarkerNotFoundError) as exc_info:
            register_binding(path, "BarModule", BAR_IMPORT)

        assert exc_info.value.error_code == "R001"
        assert path.read_text(encoding="utf-8") == original

    def test_missing_closing_bracket(self, tmp_path):
        path = tmp_path / "resource.provider.ts"
        original = "export const resourceProviders = [FooModule\n"
        path.write_text(original, encoding="utf-8")

        with pytest.raises(MarkerNotFoundError):
            register_binding(path, "BarModule", BAR_IMPORT)
        assert path.read_text(encoding="utf-8") == original

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            register_binding(tmp_path / "missing.ts", "BarModule", BAR_IMPORT)

    def test_custom_marker(self, tmp_path):
        path = tmp_path / "app.ts"
        path.write_text("export const modules = [];\n", encoding="utf-8")

        register_binding(path, "BarModule", BAR_IMPORT, marker="export const modules")

        assert "export const modules = [BarModule];" in path.read_text(encoding="utf-8")


class TestRegistryDocument:
    """In-memory parse / add / render"""

    def test_render_without_changes_is_identity(self):
        text = "// header\nexport const resourceProviders = [ A,B ];\n// footer\n"
        assert RegistryDocument.parse(text).render() == text

    def test_add_is_idempotent(self):
        document = RegistryDocument.parse(f"{REGISTRY_MARKER} = [];\n")

        assert document.add("BarModule", BAR_IMPORT) is True
        assert document.add("BarModule", BAR_IMPORT) is False
        assert document.entries == ["BarModule"]
        assert document.render().count(BAR_IMPORT) == 1

    def test_existing_import_is_detected(self):
        document = RegistryDocument.parse(f"{BAR_IMPORT}\n{REGISTRY_MARKER} = [BarModule];\n")
        assert document.has_import(BAR_IMPORT)
        assert document.add("BarModule", BAR_IMPORT) is False

    def test_insertion_order(self):
        document = RegistryDocument.parse(f"{REGISTRY_MARKER} = [];\n")
        document.add("AModule", "import { AModule } from './a';")
        document.add("BModule", "import { BModule } from './b';")

        assert document.render() == (
            "import { AModule } from './a';\n"
            "import { BModule } from './b';\n"
            f"{REGISTRY_MARKER} = [AModule, BModule];\n"
        )

    def test_parse_without_marker(self):
        with pytest.raises(MarkerNotFoundError):
            RegistryDocument.parse("const x = [];\n")


def test_module_import_line():
    spec = build_module_spec("Master", "tm_kode_group", {})
    assert module_import_line(spec) == (
        "import { KodeGroupModule } from './master/kode-group/kode-group.module';"
    )
