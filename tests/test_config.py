# ============================================================================
# CONFIGURATION TESTS
# ============================================================================
# STATUS: Tests - Generator configuration
# PURPOSE: Verify defaults, environment overrides, config files and merging
# CREATED: 14 OCT 2026
# ============================================================================
"""
Configuration Tests

Run with:
    pytest tests/test_config.py -v
"""

import json

import pytest

from core.config import ConfigError, GeneratorConfig


class TestDefaults:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.url == "env(DATABASE_URL)"
        assert config.dialect is None
        assert config.camel_case is False
        assert config.type_only_imports is True
        assert config.include_views is True
        assert config.partitions is False
        assert config.type_mapping == {}
        assert config.log_level == "info"

    def test_frozen(self):
        config = GeneratorConfig()
        with pytest.raises(AttributeError):
            config.camel_case = True

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError):
            GeneratorConfig(log_level="loud")


class TestFromEnv:
    def test_empty_environment(self):
        assert GeneratorConfig.from_env({}) == GeneratorConfig()

    def test_values(self):
        config = GeneratorConfig.from_env({
            "SCHEMA_TYPEGEN_URL": "./app.db",
            "SCHEMA_TYPEGEN_DIALECT": "sqlite",
            "SCHEMA_TYPEGEN_CAMEL_CASE": "true",
            "SCHEMA_TYPEGEN_INCLUDE_VIEWS": "0",
            "SCHEMA_TYPEGEN_TYPE_MAPPING": '{"timestamptz": "Temporal.Instant"}',
            "SCHEMA_TYPEGEN_LOG_LEVEL": "debug",
        })
        assert config.url == "./app.db"
        assert config.dialect == "sqlite"
        assert config.camel_case is True
        assert config.include_views is False
        assert config.type_mapping == {"timestamptz": "Temporal.Instant"}
        assert config.log_level == "debug"

    def test_invalid_boolean(self):
        with pytest.raises(ConfigError, match="SCHEMA_TYPEGEN_VERIFY"):
            GeneratorConfig.from_env({"SCHEMA_TYPEGEN_VERIFY": "maybe"})

    def test_invalid_mapping(self):
        with pytest.raises(ConfigError):
            GeneratorConfig.from_env({"SCHEMA_TYPEGEN_OVERRIDES": "[1, 2]"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("SCHEMA_TYPEGEN_OUT_FILE", "db.d.ts")
        assert GeneratorConfig.from_env().out_file == "db.d.ts"


class TestFromFile:
    def test_snake_and_camel_keys(self, tmp_path):
        path = tmp_path / "typegen.json"
        path.write_text(json.dumps({
            "outFile": "src/db.d.ts",
            "camel_case": True,
            "customImports": {"InstantRange": "./custom-types#CustomInstantRange"},
        }))
        config = GeneratorConfig.from_file(str(path))
        assert config.out_file == "src/db.d.ts"
        assert config.camel_case is True
        assert config.custom_imports == {"InstantRange": "./custom-types#CustomInstantRange"}

    def test_layers_over_base(self, tmp_path):
        path = tmp_path / "typegen.json"
        path.write_text(json.dumps({"dialect": "postgres"}))
        base = GeneratorConfig(url="postgres://localhost/app", camel_case=True)
        config = GeneratorConfig.from_file(str(path), base=base)
        assert config.url == "postgres://localhost/app"
        assert config.camel_case is True
        assert config.dialect == "postgres"

    def test_unknown_keys(self, tmp_path):
        path = tmp_path / "typegen.json"
        path.write_text(json.dumps({"outDir": "src"}))
        with pytest.raises(ConfigError, match="outDir"):
            GeneratorConfig.from_file(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="could not be found"):
            GeneratorConfig.from_file(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "typegen.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            GeneratorConfig.from_file(str(path))

    def test_non_object(self, tmp_path):
        path = tmp_path / "typegen.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            GeneratorConfig.from_file(str(path))

    @pytest.mark.parametrize("data, key", [
        ({"typeMapping": ["text"]}, "typeMapping"),
        ({"overrides": {"users.status": 5}}, "overrides"),
        ({"custom_imports": "./ids"}, "custom_imports"),
        ({"camelCase": "yes"}, "camelCase"),
        ({"includeViews": 1}, "includeViews"),
        ({"outFile": 42}, "outFile"),
        ({"logLevel": 3}, "logLevel"),
        ({"url": None}, "url"),
    ])
    def test_wrong_value_type(self, tmp_path, data, key):
        path = tmp_path / "typegen.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError, match=key):
            GeneratorConfig.from_file(str(path))

    def test_null_optional_value_keeps_base(self, tmp_path):
        path = tmp_path / "typegen.json"
        path.write_text(json.dumps({"outFile": None}))
        config = GeneratorConfig.from_file(str(path), base=GeneratorConfig(out_file="db.d.ts"))
        assert config.out_file == "db.d.ts"


class TestMerged:
    def test_none_values_ignored(self):
        config = GeneratorConfig(camel_case=True).merged(camel_case=None, out_file="db.d.ts")
        assert config.camel_case is True
        assert config.out_file == "db.d.ts"

    def test_false_values_applied(self):
        config = GeneratorConfig(include_views=True).merged(include_views=False)
        assert config.include_views is False

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            GeneratorConfig().merged(colour="red")

    def test_wrong_value_type(self):
        with pytest.raises(ConfigError, match="type_mapping"):
            GeneratorConfig().merged(type_mapping=[("text", "string")])

    def test_constructor_checks_types(self):
        with pytest.raises(ConfigError, match="camel_case"):
            GeneratorConfig(camel_case="true")
