"""
設定管理モジュール

関連クラス:
  - ollama_client.OllamaClient: Ollama API設定を使用
  - src.server.dependencies: この設定からリポジトリ・クライアントを構築
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class OllamaConfig:
    """Ollama API設定"""

    host: str = "http://localhost:11434"
    model: str = "qwen3:8b"


@dataclass
class AuthConfig:
    """認証プロバイダ（GoTrue互換）設定"""

    enabled: bool = False
    supabase_url: str = ""
    supabase_anon_key: str = ""
    cookie_name: str = "daybook-access-token"


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # Ollama設定
    ollama: OllamaConfig = None  # type: ignore

    # 認証設定
    auth: AuthConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/daybook.log"

    # DB設定（空の場合は data/daybook.db）
    db_path: Optional[str] = None

    # 日付境界の計算に使うタイムゾーン（空の場合はサーバーのローカル時刻）
    timezone: Optional[str] = None

    # 単一テナント運用時のTODO所有者
    todo_owner_id: str = "placeholder"

    # AI生成設定
    max_tokens: int = 1024
    temperature: float = 0.7
    summary_max_chars: int = 1000

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.ollama is None:
            self.ollama = OllamaConfig()
        if self.auth is None:
            self.auth = AuthConfig()

    @staticmethod
    def default_path() -> Path:
        project_root = Path(__file__).parent.parent.parent
        return project_root / "config" / "app_config.yaml"

    @classmethod
    def load(cls) -> "Config":
        """YAMLがあればYAMLから、無ければ環境変数から読み込む"""
        env_path = os.getenv("DAYBOOK_CONFIG")
        config_path = Path(env_path) if env_path else cls.default_path()
        if config_path.exists():
            return cls.from_yaml(config_path)
        return cls.from_env()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            config_path = cls.default_path()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        # YAML構造から設定を抽出
        ollama_data = yaml_data.get("ollama", {})
        auth_data = yaml_data.get("auth", {})
        log_data = yaml_data.get("log", {})
        ai_data = yaml_data.get("ai", {})
        db_data = yaml_data.get("database", {})
        journal_data = yaml_data.get("journal", {})
        todo_data = yaml_data.get("todo", {})

        return cls(
            ollama=OllamaConfig(
                host=ollama_data.get("host", "http://localhost:11434"),
                model=ollama_data.get("model", "qwen3:8b"),
            ),
            auth=AuthConfig(
                enabled=bool(auth_data.get("enabled", False)),
                supabase_url=auth_data.get("supabase_url", ""),
                supabase_anon_key=auth_data.get("supabase_anon_key", ""),
                cookie_name=auth_data.get("cookie_name", "daybook-access-token"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/daybook.log"),
            # 環境変数DAYBOOK_DB_PATHが優先
            db_path=os.getenv("DAYBOOK_DB_PATH") or db_data.get("path") or None,
            timezone=journal_data.get("timezone") or None,
            todo_owner_id=todo_data.get("owner_id", "placeholder"),
            max_tokens=ai_data.get("max_tokens", 1024),
            temperature=ai_data.get("temperature", 0.7),
            summary_max_chars=ai_data.get("summary_max_chars", 1000),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            ollama=OllamaConfig(
                host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
                model=os.getenv("OLLAMA_MODEL", "qwen3:8b"),
            ),
            auth=AuthConfig(
                enabled=os.getenv("DAYBOOK_AUTH_ENABLED", "false").lower() in ("1", "true", "yes"),
                supabase_url=os.getenv("SUPABASE_URL", ""),
                supabase_anon_key=os.getenv("SUPABASE_ANON_KEY", ""),
                cookie_name=os.getenv("DAYBOOK_COOKIE_NAME", "daybook-access-token"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/daybook.log"),
            db_path=os.getenv("DAYBOOK_DB_PATH") or None,
            timezone=os.getenv("DAYBOOK_TIMEZONE") or None,
            todo_owner_id=os.getenv("DAYBOOK_TODO_OWNER", "placeholder"),
            max_tokens=int(os.getenv("MAX_TOKENS", "1024")),
            temperature=float(os.getenv("TEMPERATURE", "0.7")),
            summary_max_chars=int(os.getenv("SUMMARY_MAX_CHARS", "1000")),
        )
