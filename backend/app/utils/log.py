"""
ロギング設定。

アプリ内の各モジュールは logging.getLogger(__name__) を使い、
ハンドラ / フォーマットの設定はここで 1 回だけ行う。
"""

import logging

from .config import get_env

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """
    LOG_LEVEL（デフォルト: INFO）でルートロガーを設定する。

    既にハンドラが設定済み（uvicorn / pytest 等）の場合は basicConfig は何もしない。
    """
    level_name = (get_env("LOG_LEVEL", default="INFO", required=False) or "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("app").setLevel(level)
