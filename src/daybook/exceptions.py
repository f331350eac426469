"""Daybookのカスタム例外定義

サービス層はこの例外を送出し、HTTP層（src.server.errors）が
ステータスコードと ``{"error": ...}`` 形式のレスポンスに変換します。
"""


class DaybookError(Exception):
    """Daybook基底例外"""

    status_code = 500


class ValidationError(DaybookError):
    """必須フィールドの欠落など、入力値のエラー"""

    status_code = 400


class NotFoundError(DaybookError):
    """対象レコードが存在しない"""

    status_code = 404


class UpstreamError(DaybookError):
    """ストアや外部APIへの到達・応答エラー"""

    status_code = 500


class AuthError(DaybookError):
    """認証プロバイダがセッションを拒否した"""

    status_code = 401
