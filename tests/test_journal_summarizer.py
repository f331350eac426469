"""
JournalSummarizerのテスト
"""

from unittest.mock import MagicMock

import pytest

from src.daybook.exceptions import UpstreamError, ValidationError
from src.journal.summarizer import JournalSummarizer


class TestJournalSummarizer:
    """JournalSummarizerのテストクラス"""

    @pytest.fixture
    def mock_ollama_client(self):
        """OllamaClientのモック"""
        return MagicMock()

    @pytest.fixture
    def summarizer(self, mock_ollama_client):
        return JournalSummarizer(ollama_client=mock_ollama_client)

    def test_empty_entries_rejected_before_llm_call(self, summarizer, mock_ollama_client):
        """空のエントリはLLMを呼ぶ前に拒否される"""
        with pytest.raises(ValidationError, match="No entries provided"):
            summarizer.summarize([], "yesterday")
        mock_ollama_client.chat.assert_not_called()

    def test_yesterday_single_entry(self, summarizer, mock_ollama_client):
        """1件のエントリがそのままプロンプトに渡る"""
        mock_ollama_client.chat.return_value = "You've noted that you slept badly."

        summary = summarizer.summarize(
            [{"date": "2024-01-01", "content": "slept badly"}], "yesterday"
        )

        assert summary == "You've noted that you slept badly."
        assert len(summary) <= 1000
        assert "?" not in summary
        mock_ollama_client.chat.assert_called_once()
        messages = mock_ollama_client.chat.call_args.args[0]
        assert len(messages) == 1
        prompt = messages[0]["content"]
        assert "Date: 2024-01-01\nContent: slept badly" in prompt
        assert prompt.count("Date: ") == 1
        assert "the last entry" in prompt
        assert "Keep it brief" in prompt

    def test_weekly_prompt_mentions_themes(self, summarizer):
        prompt = summarizer.build_prompt(
            [
                {"date": "2024-01-01", "content": "a"},
                {"date": "2024-01-02", "content": "b"},
            ],
            "last week",
        )
        assert "from last week" in prompt
        assert "the past week" in prompt
        assert "themes" in prompt
        assert "1000 characters" in prompt

    def test_summary_is_bounded(self, summarizer, mock_ollama_client):
        """出力は1000文字以内に切り詰められる"""
        mock_ollama_client.chat.return_value = "You've written " + "word " * 400

        summary = summarizer.summarize([{"date": "2024-01-01", "content": "x"}], "yesterday")

        assert len(summary) <= 1000
        assert summary.startswith("You've written")
        assert not summary.endswith(" ")

    def test_surrounding_quotes_and_whitespace_removed(self, summarizer, mock_ollama_client):
        mock_ollama_client.chat.return_value = '  "It seems the day was calm."\n'
        summary = summarizer.summarize([{"date": "2024-01-01", "content": "x"}], "yesterday")
        assert summary == "It seems the day was calm."

    def test_llm_failure_surfaces_message(self, summarizer, mock_ollama_client):
        """LLM失敗時はメッセージをそのまま含むUpstreamError"""
        mock_ollama_client.chat.side_effect = Exception("connection refused")

        with pytest.raises(UpstreamError) as excinfo:
            summarizer.summarize([{"date": "2024-01-01", "content": "x"}], "yesterday")

        assert str(excinfo.value) == "Failed to generate summary: connection refused"

    def test_custom_max_chars(self, mock_ollama_client):
        summarizer = JournalSummarizer(ollama_client=mock_ollama_client, max_chars=20)
        mock_ollama_client.chat.return_value = "You've mentioned many different things today."
        summary = summarizer.summarize([{"date": "2024-01-01", "content": "x"}], "yesterday")
        assert len(summary) <= 20
