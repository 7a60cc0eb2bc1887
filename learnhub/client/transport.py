"""Cliente HTTP para la API de módulos."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from learnhub.config.settings import get_settings
from learnhub.errors import NotFoundError, TransportError, ValidationError
from learnhub.models.module_model import LearningModule, PageResult, QueryParams

logger = logging.getLogger(__name__)


class ModulesTransport:
    """Transporte asíncrono sobre httpx; traduce respuestas a errores de dominio."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout or settings.http_timeout)

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> ModulesTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def fetch_page(self, params: QueryParams) -> PageResult:
        """GET /modules con los parámetros dados."""
        data = await self._request("GET", "/modules", params=params.to_query())
        return self._decode(PageResult, data)

    async def update_completed(self, module_id: str, completed: bool) -> LearningModule:
        """PATCH /modules/{id} con {completed}."""
        data = await self._request(
            "PATCH", f"/modules/{module_id}", json={"completed": completed}, module_id=module_id
        )
        return self._decode(LearningModule, data)

    async def _request(
        self,
        method: str,
        path: str,
        module_id: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} falló: {e}") from e

        if response.status_code == 404 and module_id is not None:
            raise NotFoundError(module_id, self._detail(response))
        if response.status_code == 400:
            raise ValidationError(self._detail(response))
        if response.is_error:
            raise TransportError(
                f"{method} {path} respondió {response.status_code}: {self._detail(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"{method} {path} devolvió un cuerpo no JSON") from e

    @staticmethod
    def _decode(model: Any, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError(f"Respuesta inválida para {model.__name__}: {e}") from e

    @staticmethod
    def _detail(response: httpx.Response) -> str:
        try:
            return str(response.json().get("detail", response.text))
        except (ValueError, AttributeError):
            return response.text
