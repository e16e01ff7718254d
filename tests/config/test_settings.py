"""Tests for WikiSettings — CLI, env, TOML and default layering."""

from pathlib import Path

import click
import pytest

from wikipage.config.settings import WikiSettings


@pytest.fixture
def wiki_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("WIKIPAGE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestWikiSettings:
    def test_defaults(self, wiki_root: Path) -> None:
        settings = WikiSettings.from_cli()
        assert settings.wiki_root == wiki_root
        assert settings.config_path is None
        assert settings.content_root == wiki_root / "content"
        assert settings.pages.default_format == "toml"

    def test_toml_file(self, wiki_root: Path) -> None:
        (wiki_root / "wikipage.toml").write_text('[pages]\ndefault_format = "yaml"\n')
        settings = WikiSettings.from_cli()
        assert settings.config_path == wiki_root / "wikipage.toml"
        assert settings.pages.default_format == "yaml"

    def test_root_is_config_parent(self, wiki_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (wiki_root / "wikipage.toml").write_text("")
        nested = wiki_root / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = WikiSettings.from_cli()
        assert settings.wiki_root == wiki_root

    def test_env_overrides_toml(self, wiki_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (wiki_root / "wikipage.toml").write_text('[pages]\ndefault_format = "yaml"\n')
        monkeypatch.setenv("WIKIPAGE_PAGES__DEFAULT_FORMAT", "json")
        assert WikiSettings.from_cli().pages.default_format == "json"

    def test_cli_overrides_merge_with_toml(self, wiki_root: Path) -> None:
        (wiki_root / "wikipage.toml").write_text('[store]\nsuffix = ".txt"\n')
        settings = WikiSettings.from_cli(store={"content_dir": "docs"})
        assert settings.store.content_dir == "docs"
        assert settings.store.suffix == ".txt"

    def test_flags(self, wiki_root: Path) -> None:
        settings = WikiSettings.from_cli(json_output=True, verbose=True)
        assert settings.json_output
        assert settings.verbose
        assert not settings.quiet

    def test_explicit_config_path(self, wiki_root: Path) -> None:
        path = wiki_root / "custom.toml"
        path.write_text('[store]\ncontent_dir = "pages"\n')
        settings = WikiSettings.from_cli(config_path=str(path))
        assert settings.content_root == wiki_root / "pages"

    def test_invalid_toml(self, wiki_root: Path) -> None:
        (wiki_root / "wikipage.toml").write_text("[store\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            WikiSettings.from_cli()

    def test_invalid_section_value(self, wiki_root: Path) -> None:
        (wiki_root / "wikipage.toml").write_text('[pages]\ndefault_format = "xml"\n')
        with pytest.raises(click.ClickException, match="Invalid config"):
            WikiSettings.from_cli()

    def test_file_values_are_normalized(self, wiki_root: Path) -> None:
        (wiki_root / "wikipage.toml").write_text('[store]\nsuffix = "txt"\n')
        assert WikiSettings.from_cli().store.suffix == ".txt"
