"""
Tests for the static catalogs, command lister, and default env templates.
"""

from pathlib import Path

from ignite.core.data import DataRegistry
from ignite.core.models.env_file import DATABASE_SECTION, EnvFile
from ignite.core.services.command_list import CommandLister
from ignite.core.services.env_defaults import base_template_for, default_env_template


class TestDataRegistry:
    def test_roles_in_order(self):
        assert DataRegistry().roles == ["frontend", "backend", "mobile"]

    def test_frameworks_for_role(self):
        registry = DataRegistry()
        assert registry.frameworks_for("backend") == ["nodejs", "laravel", "django"]
        assert registry.frameworks_for("astronaut") == []

    def test_framework_entries(self):
        registry = DataRegistry()
        for role in registry.roles:
            for name in registry.frameworks_for(role):
                entry = registry.framework(name)
                assert entry is not None, name
                assert entry["ecosystem"] in ("node", "php", "python", "dart")
                assert registry.role_of(name) == role

    def test_requires_database(self):
        registry = DataRegistry()
        assert registry.requires_database("django")
        assert not registry.requires_database("react")
        assert not registry.requires_database("unknown")

    def test_role_label(self):
        assert DataRegistry().role_label("mobile") == "Mobile Developer"


class TestCommandLister:
    def test_every_framework_has_commands(self):
        registry = DataRegistry()
        lister = CommandLister(registry)
        for role in registry.roles:
            for name in registry.frameworks_for(role):
                assert lister.has_commands(name), name
                assert lister.list_commands(name)

    def test_groups(self):
        groups = CommandLister().groups("laravel")
        assert groups[0].title
        assert any("php artisan serve" in line for g in groups for line in g.lines)

    def test_unknown_framework_gets_generic_list(self):
        lister = CommandLister()
        assert not lister.has_commands("cobol")
        assert lister.list_commands("cobol") == lister.list_commands("_generic")
        assert lister.list_commands("cobol")


class TestDefaultTemplates:
    def test_database_section_is_last(self, secrets):
        text = default_env_template("nodejs", secrets=secrets)
        env = EnvFile.from_text(text)
        before, section = env.find_section(DATABASE_SECTION)
        assert section is not None
        assert section.as_dict()["DB_PASSWORD"] == "dev_password"
        assert env.get("JWT_SECRET") == bytes(range(32)).hex()

    def test_production_values(self, secrets):
        env = EnvFile.from_text(default_env_template("nodejs", is_production=True, secrets=secrets))
        assert env.get("NODE_ENV") == "production"
        assert env.get("DB_PASSWORD") == "AAECAwQFBgcICQoL"
        assert env.get("LOG_LEVEL") == "info"

    def test_laravel(self, secrets):
        env = EnvFile.from_text(default_env_template("laravel", secrets=secrets))
        assert env.get("APP_DEBUG") == "true"
        assert env.get("APP_ENV") == "local"

    def test_frontend(self, secrets):
        env = EnvFile.from_text(default_env_template("vue", secrets=secrets))
        assert env.get("VUE_APP_API_URL") == "http://localhost:3000/api"

    def test_prefers_env_example(self, tmp_path: Path, secrets):
        (tmp_path / ".env.example").write_text("FROM_EXAMPLE=1\n")
        text, source = base_template_for(tmp_path, "django", secrets=secrets)
        assert text == "FROM_EXAMPLE=1\n"
        assert source == ".env.example"

    def test_falls_back_to_default(self, tmp_path: Path, secrets):
        text, source = base_template_for(tmp_path, "django", secrets=secrets)
        assert source == "default"
        assert "SECRET_KEY=" in text
