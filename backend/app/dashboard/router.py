# backend/app/dashboard/router.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .config import get_page_handler
from .errors import DashboardError
from .handler import NotionPageHandler
from .schemas import ErrorEnvelope, HtmlEnvelope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["dashboard"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def error_response(message: str) -> JSONResponse:
    """どの失敗種別でも 400 + {"error": message}。"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorEnvelope(error=message).model_dump(),
        headers=CORS_HEADERS,
    )


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    """
    DashboardError を error envelope に変換する例外ハンドラ。

    create_app() で app.add_exception_handler に登録する。
    """
    logger.warning(
        "get-notion-page failed: kind=%s path=%s message=%s",
        exc.kind.value,
        request.url.path,
        exc.message,
    )
    return error_response(exc.message)


@router.options("/get-notion-page", include_in_schema=False)
def get_notion_page_preflight() -> Response:
    """CORS プリフライト。認証なしで空ボディを返す。"""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(
    "/get-notion-page",
    response_model=HtmlEnvelope,
    responses={400: {"model": ErrorEnvelope}},
    summary="ログインユーザーの Notion ページを HTML で取得",
)
async def get_notion_page(
    request: Request,
    authorization: Optional[str] = Header(None),
    handler: NotionPageHandler = Depends(get_page_handler),
) -> JSONResponse:
    """
    Bearer トークンで認証し、lookup → Notion 取得 → HTML 変換を行う。

    - 正常系: 200 + {"html": "..."}
    - 異常系: 認証 / lookup / 取得 / ボディ解析のどれでも 400 + {"error": "..."}
    """
    body = await request.body()

    try:
        # Notion / Supabase への同期 I/O はスレッドプールで実行する
        envelope = await run_in_threadpool(handler.handle, authorization, body)
    except DashboardError:
        raise
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error while rendering Notion page.")
        return error_response("Internal error while rendering Notion page.")

    return JSONResponse(content=envelope.model_dump(), headers=CORS_HEADERS)
