"""
ロギング設定モジュール
"""

import logging
from pathlib import Path

# Ollama(httpx) と GoTrue(requests/urllib3) のリクエスト毎のログ
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3")


def setup_logger(log_level: str = "INFO", log_file: str = "logs/daybook.log") -> None:
    """
    ロガーのセットアップ

    ファイルとコンソールの両方へ出力する。DEBUG以外では外部APIクライアントの
    リクエストログを WARNING 以上に絞る。

    Args:
        log_level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: ログファイルのパス
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )

    client_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)
