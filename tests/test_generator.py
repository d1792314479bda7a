"""
Integration tests for ModuleGenerator
"""

import pytest

from modgen.core.errors import GenerationError, InvalidIdentifierError
from modgen.core.generator import ModuleGenerator
from modgen.core.schema import build_module_spec, build_module_specs


def _registry(project):
    return (project / "src" / "module" / "resource.provider.ts").read_text(encoding="utf-8")


class TestGenerateAll:
    """Generating the sample description into a project"""

    def test_layout(self, project, sample_models):
        generator = ModuleGenerator(project_root=project)
        results = generator.generate_all(build_module_specs(sample_models))

        assert [r.module.canonical_name for r in results] == ["Barang", "KodeGroup", "Jual"]
        assert all(r.registered for r in results)

        module_root = project / "src" / "module" / "master" / "kode-group"
        assert (module_root / "kode-group.module.ts").is_file()
        assert (module_root / "repository" / "kode-group.mongo-entity.ts").is_file()
        assert (module_root / "controller" / "dto").is_dir()
        assert (project / "src" / "module" / "transaction" / "jual" / "jual.module.ts").is_file()

    def test_plan_matches_written_files(self, project, sample_models):
        generator = ModuleGenerator(project_root=project)
        spec = build_module_specs(sample_models)[0]

        result = generator.generate(spec)

        assert sorted(result.materialized.files_created) == sorted(generator.plan(spec))

    def test_registry_contents(self, project, sample_models):
        ModuleGenerator(project_root=project).generate_all(build_module_specs(sample_models))
        registry = _registry(project)

        assert "import { BarangModule } from './master/barang/barang.module';" in registry
        assert "import { KodeGroupModule } from './master/kode-group/kode-group.module';" in registry
        assert "import { JualModule } from './transaction/jual/jual.module';" in registry
        assert "export const resourceProviders = [BarangModule, KodeGroupModule, JualModule];" in registry

    def test_second_run_converges(self, project, sample_models):
        generator = ModuleGenerator(project_root=project)
        generator.generate_all(build_module_specs(sample_models))
        registry = _registry(project)

        results = generator.generate_all(build_module_specs(sample_models))

        assert not any(r.registered for r in results)
        assert _registry(project) == registry

    def test_callback_receives_each_result(self, project, sample_models):
        seen = []
        ModuleGenerator(project_root=project).generate_all(
            build_module_specs(sample_models), on_module=seen.append
        )
        assert [r.module.collection_name for r in seen] == ["tm_barang", "tm_kode_group", "tt_jual"]

    def test_custom_layout(self, tmp_path):
        registry = tmp_path / "app" / "providers.ts"
        registry.parent.mkdir()
        registry.write_text("export const resourceProviders = [];\n", encoding="utf-8")

        generator = ModuleGenerator(project_root=tmp_path, modules_dir="app", registry_file="app/providers.ts")
        generator.generate(build_module_spec("master", "tm_barang", {}))

        assert (tmp_path / "app" / "master" / "barang" / "barang.module.ts").is_file()
        assert "[BarangModule]" in registry.read_text(encoding="utf-8")


class TestFailures:
    """Abort-on-first-failure policy"""

    def test_missing_marker_fails_during_register(self, project, sample_models):
        registry = project / "src" / "module" / "resource.provider.ts"
        registry.write_text("// no providers here\n", encoding="utf-8")

        with pytest.raises(GenerationError) as exc_info:
            ModuleGenerator(project_root=project).generate_all(build_module_specs(sample_models))

        error = exc_info.value
        assert error.collection_name == "tm_barang"
        assert error.step == "register"
        assert error.error_code == "R001"
        assert registry.read_text(encoding="utf-8") == "// no providers here\n"
        # Later modules are never attempted
        assert not (project / "src" / "module" / "master" / "kode-group").exists()

    def test_missing_registry_file(self, tmp_path):
        with pytest.raises(GenerationError) as exc_info:
            ModuleGenerator(project_root=tmp_path).generate(build_module_spec("master", "tm_barang", {}))

        assert exc_info.value.step == "register"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.suggestion

    def test_invalid_identifier_writes_nothing(self, project, sample_models):
        models = list(sample_models) + [{"other": [{"xx_foo": {"a": "string"}}]}]
        before = _registry(project)

        with pytest.raises(InvalidIdentifierError):
            ModuleGenerator(project_root=project).generate_all(build_module_specs(models))

        assert _registry(project) == before
        assert sorted(p.name for p in (project / "src" / "module").iterdir()) == ["resource.provider.ts"]

    def test_symbol_registered_from_another_folder(self, project):
        registry = project / "src" / "module" / "resource.provider.ts"
        registry.write_text(
            "import { BarangModule } from './history/barang/barang.module';\n"
            "export const resourceProviders = [BarangModule];\n",
            encoding="utf-8",
        )

        with pytest.raises(GenerationError) as exc_info:
            ModuleGenerator(project_root=project).generate(build_module_spec("master", "tm_barang", {}))

        assert exc_info.value.step == "register"
        assert exc_info.value.error_code == "R002"
        assert registry.read_text(encoding="utf-8").count("import { BarangModule }") == 1
