"""Tests for environment, mapping and properties-file sources."""

from __future__ import annotations

from unittest.mock import patch

from envbind import EnvSource, MappingSource, PropertySource


class TestEnvSource:
    def test_reads_live_process_environment(self):
        source = EnvSource()
        with patch.dict("os.environ", {"ENVBIND_PROBE": "on"}):
            assert source.get("ENVBIND_PROBE") == "on"
        assert source.get("ENVBIND_PROBE") is None

    def test_lookup_is_case_sensitive(self):
        source = EnvSource({"Port": "1"})
        assert source.get("Port") == "1"
        assert source.get("PORT") is None

    def test_empty_value_is_present(self):
        """An empty variable is still a hit, distinct from an unset one."""
        assert EnvSource({"HOST": ""}).get("HOST") == ""
        assert EnvSource().name == "environment"


class TestMappingSource:
    def test_get_and_len(self):
        source = MappingSource({"a": "1", "b": "2"}, name="inline")
        assert source.get("a") == "1"
        assert source.get("missing") is None
        assert len(source) == 2
        assert source.name == "inline"
        assert repr(source) == "MappingSource('inline', keys=2)"


class TestPropertySourceFromFile:
    def test_parses_properties_lines(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text(
            "# comment line\n"
            "! bang comment\n"
            "PORT=9090\n"
            "HOST: db.internal\n"
            "REGION eu-west\n"
            "PASSWORD=abc #123\n"
            'QUOTED="two words"\n'
            "EMPTY=\n",
            encoding="utf-8",
        )

        source = PropertySource.from_file(path)

        assert source is not None
        assert source.path == path
        assert source.name == "properties"
        assert source.get("PORT") == "9090"
        assert source.get("HOST") == "db.internal"
        assert source.get("REGION") == "eu-west"
        assert source.get("EMPTY") == ""
        assert source.get("comment") is None
        assert len(source) == 6

    def test_values_are_kept_verbatim(self, tmp_path):
        """Inline # and quotes are part of the value, not syntax."""
        path = tmp_path / "app.properties"
        path.write_text('PASSWORD=abc #123\nQUOTED="two words"\nURL=http://h:80/p?q=1\n', encoding="utf-8")

        source = PropertySource.from_file(path)

        assert source.get("PASSWORD") == "abc #123"
        assert source.get("QUOTED") == '"two words"'
        assert source.get("URL") == "http://h:80/p?q=1"

    def test_line_continuations_are_joined(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("HOSTS=alpha,\\\n      beta,\\\n      gamma\nNEXT=1\n", encoding="utf-8")

        source = PropertySource.from_file(path)

        assert source.get("HOSTS") == "alpha,beta,gamma"
        assert source.get("NEXT") == "1"

    def test_key_without_value_is_empty(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("BARE_KEY\nSET=1\n", encoding="utf-8")

        source = PropertySource.from_file(path)

        assert source.get("BARE_KEY") == ""
        assert source.get("SET") == "1"

    def test_unicode_escapes(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("SIGN=\\u00e9t\\u00e9\n", encoding="utf-8")

        assert PropertySource.from_file(path).get("SIGN") == "été"

    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("GREETING=héllo wörld\n", encoding="utf-8")

        assert PropertySource.from_file(str(path)).get("GREETING") == "héllo wörld"

    def test_missing_file_returns_none(self, tmp_path):
        assert PropertySource.from_file(tmp_path / "absent.properties") is None

    def test_directory_returns_none(self, tmp_path):
        assert PropertySource.from_file(tmp_path) is None

    def test_undecodable_file_returns_none(self, tmp_path, caplog):
        path = tmp_path / "app.properties"
        path.write_bytes(b"KEY=\xff\xfe\xfa\n")

        with caplog.at_level("WARNING", logger="envbind.sources"):
            assert PropertySource.from_file(path) is None

        assert "Ignoring unreadable properties file" in caplog.text
