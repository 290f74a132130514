"""Unit tests for env_utils."""
from src.utils.env_utils import read_env_file


class TestReadEnvFile:
    """Test read_env_file()."""

    def test_missing_file(self, tmp_path):
        assert read_env_file(tmp_path / ".env", ["A"]) == {}

    def test_filters_and_strips(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text(
            '# comment\n\nA = "one"\nB=\'two\'\nC=three\nnot a pair\n  # A=ignored\n',
            encoding="utf-8",
        )

        assert read_env_file(path, ["A", "B"]) == {"A": "one", "B": "two"}

    def test_value_may_contain_equals(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("URL=http://x?a=1\n", encoding="utf-8")

        assert read_env_file(path, ["URL"]) == {"URL": "http://x?a=1"}

    def test_empty_value(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("A=\n", encoding="utf-8")

        assert read_env_file(path, ["A"]) == {"A": ""}
