"""
Notion ページ描画結果のスキーマ定義。
"""

from pydantic import BaseModel, Field


class RenderedPage(BaseModel):
    """
    1 リクエスト分の描画結果。

    キャッシュはせず、リクエストごとに作り直す。
    """

    page_id: str = Field(..., description="Notion ページ ID")
    title: str = Field(..., description="ページタイトル（取得できない場合は Untitled）")
    html: str = Field(..., description="notion-page コンテナで包んだ HTML 文字列")
    block_count: int = Field(..., ge=0, description="取得した直下ブロック数（未対応種別を含む）")
