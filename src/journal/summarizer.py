"""
JournalSummarizer: LLMベースの振り返りサマリー生成器

設計方針:
- 呼び出し側が期間で絞り込んだエントリ（date, content）を受け取る
- OllamaClientで自然言語の振り返りを1回だけ生成（リトライ・キャッシュなし）
- 出力は最大文字数（既定1000文字）に収める

関連:
- src/journal/timeframe.py: 期間によるエントリ選択
- src/daybook/ollama_client.py: LLM推論
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from src.daybook.exceptions import UpstreamError, ValidationError
from src.daybook.ollama_client import OllamaClient

from .timeframe import YESTERDAY

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 1000

SINGLE_ENTRY_EXAMPLE = "You've expressed worry about how quickly your coding has improved."
WEEKLY_EXAMPLE = (
    "Throughout the week, you've written about the new contract at work and the relief "
    "it brought. Poor sleep came up on several days, eased by evening walks. You've "
    "returned to sketching and started planning time for it in your routine."
)


class JournalSummarizer:
    """ジャーナルエントリの振り返りサマリー生成器"""

    def __init__(
        self,
        ollama_client: Optional[OllamaClient] = None,
        max_chars: int = DEFAULT_MAX_CHARS,
    ):
        """
        初期化

        Args:
            ollama_client: Ollamaクライアント（テスト用にDI可能）
            max_chars: サマリーの最大文字数
        """
        self.ollama_client = ollama_client or OllamaClient()
        self.max_chars = max_chars

    def summarize(self, entries: Sequence[Mapping[str, Any]], timeframe: str) -> str:
        """
        エントリ群の振り返りを生成

        Args:
            entries: {"date": ..., "content": ...} のシーケンス（空は不可）
            timeframe: "yesterday" または複数日を表すラベル

        Returns:
            max_chars以内の自然言語サマリー

        Raises:
            ValidationError: エントリが空の場合（LLMは呼ばれない）
            UpstreamError: LLM呼び出しが失敗した場合
        """
        if not entries:
            raise ValidationError("No entries provided")
        if not timeframe:
            raise ValidationError("timeframe is required")

        logger.info("Generating %s summary from %d entries", timeframe, len(entries))
        messages = [{"role": "user", "content": self.build_prompt(entries, timeframe)}]

        try:
            response = self.ollama_client.chat(messages, return_json=False)
        except Exception as e:
            logger.error(f"Error generating LLM summary: {e}")
            raise UpstreamError(f"Failed to generate summary: {e}") from e

        return self._bound(str(response))

    def build_prompt(self, entries: Sequence[Mapping[str, Any]], timeframe: str) -> str:
        """プロンプト文字列を構築"""
        entries_text = "\n\n".join(
            f"Date: {entry['date']}\nContent: {entry['content']}" for entry in entries
        )
        single = timeframe == YESTERDAY
        scope = "the last entry" if single else "the past week"
        detail = (
            "Keep it brief and to the point."
            if single
            else "Cover the main themes, notable moments and any shifts in thoughts or "
            "feelings across the days, in the same direct style."
        )
        example = SINGLE_ENTRY_EXAMPLE if single else WEEKLY_EXAMPLE

        return (
            f"Here are my journal entries from {timeframe}:\n\n{entries_text}\n\n"
            f"Reflect back what was expressed in {scope}. {detail} "
            f"Use at most {self.max_chars} characters and only as many as needed.\n\n"
            "Rules:\n"
            "- Begin directly with an observation such as \"You've...\" or \"It seems...\"\n"
            "- Only mirror what was written, make no assumptions\n"
            "- No greeting or closing\n"
            "- No questions, advice or suggestions\n"
            "- No commentary such as \"that's great\"\n\n"
            f"Example: \"{example}\""
        )

    def _bound(self, text: str) -> str:
        """前後の空白と引用符を除き、最大文字数で単語境界に切り詰める"""
        summary = text.strip().strip('"').strip()
        if len(summary) <= self.max_chars:
            return summary
        cut = summary[: self.max_chars]
        space = cut.rfind(" ")
        if space > self.max_chars // 2:
            cut = cut[:space]
        return cut.rstrip(" ,;:")
