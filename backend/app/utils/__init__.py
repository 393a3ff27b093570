"""
共通ユーティリティ（環境変数の読み取り / ロギング設定）。
"""
