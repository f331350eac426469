"""
Ollama APIクライアントモジュール

関連クラス:
  - config.Config: Ollama設定を提供
  - src.journal.summarizer.JournalSummarizer: このクライアントを使用
"""

import json
import logging
from typing import Any, Dict, List, Union

import ollama


class OllamaClient:
    """Ollama APIクライアント"""

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "qwen3:8b",
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ):
        """
        初期化

        Args:
            host: OllamaサーバーのURL
            model: 使用するモデル名
            temperature: 生成温度（0.0-1.0）
            max_tokens: 最大トークン数
        """
        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logging.getLogger(__name__)

        self.client = ollama.Client(host=host)

    def chat(
        self,
        messages: List[Dict[str, str]],
        return_json: bool = False,
    ) -> Union[str, Dict[str, Any]]:
        """
        チャット形式で会話

        Args:
            messages: メッセージのリスト [{"role": "user", "content": "..."}]
            return_json: JSON形式でレスポンスを返すか

        Returns:
            テキスト文字列（return_json=Falseの場合）
            またはJSON形式の辞書オブジェクト（return_json=Trueの場合）
        """
        try:
            response = self.client.chat(
                model=self.model,
                messages=messages,
                stream=False,
                format="json" if return_json else "",
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                },
            )
            content = response["message"]["content"]
            if return_json:
                return json.loads(content)
            return content

        except json.JSONDecodeError as e:
            self.logger.error(f"JSON decode error: {e}")
            raise ValueError(f"Ollamaからの応答がJSON形式ではありません: {e}")
        except Exception as e:
            self.logger.error(f"Ollama chat error: {e}")
            raise
