"""Tests for the chatport command line."""

import json

import pytest
from click.testing import CliRunner

from chatport.cli import cli

MARKDOWN = "# Chat\n## 👤 User\nhello\n## 🤖 Assistant\nhi there"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def chat_file(tmp_path):
    path = tmp_path / "chat.md"
    path.write_text(MARKDOWN, encoding="utf-8")
    return path


class TestDetect:
    def test_by_extension(self, runner, chat_file):
        result = runner.invoke(cli, ["detect", str(chat_file)])
        assert result.exit_code == 0
        assert result.output.strip() == "markdown"

    def test_content_only(self, runner, tmp_path):
        path = tmp_path / "chat.txt"
        path.write_text(MARKDOWN, encoding="utf-8")

        result = runner.invoke(cli, ["detect", str(path)])
        assert result.output.strip() == "plain_text"

        result = runner.invoke(cli, ["detect", "--content-only", str(path)])
        assert result.output.strip() == "markdown"


class TestImport:
    def test_writes_json(self, runner, chat_file, tmp_path):
        out = tmp_path / "out.json"
        result = runner.invoke(cli, ["import", str(chat_file), "-o", str(out)])

        assert result.exit_code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data) == 1
        assert data[0]["title"] == "Chat"
        assert [m["sender"] for m in data[0]["messages"]] == ["user", "ai"]

    def test_unsupported_format(self, runner, tmp_path):
        path = tmp_path / "chat.csv"
        path.write_text("role,content\nuser,hi\n", encoding="utf-8")

        result = runner.invoke(cli, ["import", str(path)])
        assert result.exit_code == 1
        assert "No converter" in result.output


class TestExport:
    def test_single_conversation(self, runner, tmp_path, sample_conversation):
        src = tmp_path / "conv.json"
        src.write_text(json.dumps(sample_conversation.model_dump(mode="json")), encoding="utf-8")
        out = tmp_path / "conv.md"

        result = runner.invoke(cli, ["export", str(src), "-o", str(out)])

        assert result.exit_code == 0
        text = out.read_text(encoding="utf-8")
        assert text.startswith("---\ntitle: Python questions\n")
        assert "## 🤖 Assistant" in text

    def test_many_conversations(self, runner, tmp_path, sample_conversation):
        data = [sample_conversation.model_dump(mode="json")] * 2
        src = tmp_path / "convs.json"
        src.write_text(json.dumps(data), encoding="utf-8")
        out = tmp_path / "convs.md"

        result = runner.invoke(cli, ["export", str(src), "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8").startswith("# Chat History Export\n")

    def test_invalid_json(self, runner, tmp_path):
        src = tmp_path / "bad.json"
        src.write_text("{nope", encoding="utf-8")

        result = runner.invoke(cli, ["export", str(src)])
        assert result.exit_code == 1
        assert "Not valid JSON" in result.output


class TestUnreadableFiles:
    @pytest.mark.parametrize("command", ["detect", "import", "export"])
    def test_non_utf8_file(self, runner, tmp_path, command):
        path = tmp_path / "latin1.md"
        path.write_bytes(b"caf\xe9")

        result = runner.invoke(cli, [command, str(path)])
        assert result.exit_code == 1
        assert "Not a UTF-8 text file" in result.output
