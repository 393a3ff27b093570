"""
ページ取得パイプラインのオーケストレーション。

状態は一方向に進む:
  Authenticating → (body 解析) → Resolving → Fetching → Rendering → Responded

どこかで失敗したら DashboardError を送出し、以降の処理は行わない
（認証に失敗した場合は lookup も Notion 取得も呼ばれない）。
"""

import json
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from app.auth import AuthenticatedUser, CredentialError, CredentialValidator, parse_bearer_token
from app.notion import NotionPageService, RenderedPage
from app.notion.client import NotionClientError
from app.pages import PageLookupService, PageNotFoundError
from app.supabase_rest import SupabaseClientError
from app.utils.config import EnvVarMissingError

from .errors import (
    BadRequestError,
    ConfigError,
    FetchFailedError,
    NotFoundError,
    UnauthorizedError,
)
from .schemas import HtmlEnvelope, PageRequest

logger = logging.getLogger(__name__)


class NotionPageHandler:
    """
    1 リクエスト分の処理を行うハンドラ。

    NotionPageService は初回の Fetching 時に生成して使い回す
    （NOTION_API_KEY が無い場合はその時点で ConfigError）。
    それ以外にリクエストをまたぐ状態は持たない。
    """

    def __init__(
        self,
        *,
        validator: CredentialValidator,
        lookup: PageLookupService,
        notion_service: Optional[NotionPageService] = None,
        notion_service_factory: Callable[[], NotionPageService] = NotionPageService,
    ) -> None:
        self._validator = validator
        self._lookup = lookup
        self._notion_service = notion_service
        self._notion_service_factory = notion_service_factory

    def handle(self, authorization: Optional[str], body: bytes) -> HtmlEnvelope:
        user = self.authenticate(authorization)
        request = self.parse_body(body)
        page_id = self.resolve(user, request.page_id)
        rendered = self.fetch_and_render(page_id)
        return HtmlEnvelope(html=rendered.html)

    def authenticate(self, authorization: Optional[str]) -> AuthenticatedUser:
        try:
            token = parse_bearer_token(authorization)
            user = self._validator.validate(token)
        except CredentialError as exc:
            raise UnauthorizedError(f"Unauthorized: {exc}") from exc

        logger.info("Authenticated user %s", user.id)
        return user

    @staticmethod
    def parse_body(body: bytes) -> PageRequest:
        """
        リクエストボディを解析する。空ボディは「pageId 指定なし」として扱う。
        """
        if not body or not body.strip():
            return PageRequest()

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise BadRequestError("Invalid request body") from exc

        if not isinstance(payload, dict):
            raise BadRequestError("Invalid request body")

        try:
            request = PageRequest.model_validate(payload)
        except ValidationError as exc:
            raise BadRequestError("Invalid request body: pageId must be a string") from exc

        if request.page_id is not None and not request.page_id.strip():
            raise BadRequestError("No page ID provided")
        return request

    def resolve(self, user: AuthenticatedUser, page_id: Optional[str] = None) -> str:
        try:
            return self._lookup.resolve(user.email, page_id.strip() if page_id else None)
        except PageNotFoundError as exc:
            raise NotFoundError(str(exc)) from exc
        except SupabaseClientError as exc:
            raise FetchFailedError(f"Failed to look up Notion page: {exc}") from exc
        except ValidationError as exc:
            raise FetchFailedError(
                f"Failed to look up Notion page: invalid lookup record ({exc.error_count()} errors)"
            ) from exc

    def _get_notion_service(self) -> NotionPageService:
        if self._notion_service is None:
            try:
                self._notion_service = self._notion_service_factory()
            except EnvVarMissingError as exc:
                raise ConfigError(f"Server misconfigured: {exc}") from exc
        return self._notion_service

    def fetch_and_render(self, page_id: str) -> RenderedPage:
        service = self._get_notion_service()
        try:
            return service.render_page(page_id)
        except NotionClientError as exc:
            raise FetchFailedError(f"Failed to fetch Notion page: {exc}") from exc
