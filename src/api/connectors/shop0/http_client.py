"""Cliente HTTP resiliente para a Admin API da Shop0.

Comportamentos:
- Valida o domínio da loja na construção
- Compõe User-Agent (header do chamador | prefixo configurado | biblioteca)
- Codifica body conforme DataType (JSON, URL-encoded, GraphQL)
- Classifica falhas: 429 throttling, 5xx interno, demais não-2xx
- Retry apenas para erros retentáveis, dentro do orçamento `tries`
- Deduplica avisos de depreciação por janela de 5 minutos

Cada tentativa produz um resultado etiquetado (ResponseResult ou erro da
taxonomia); apenas `request` levanta exceções para o chamador.
"""

from __future__ import annotations

import json
import logging
import math
import platform
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from api.connectors.shop0.deprecations import DEPRECATION_HEADER, DeprecationTracker
from api.connectors.shop0.http_base import (
    RETRY_AFTER_MAX_SECONDS,
    HttpClientConfig,
    retry_sleep,
    send_once,
)
from api.connectors.shop0.models import DataType, Method, RequestSpec, ResponseResult
from api.connectors.shop0.shop_validator import validate_shop
from config.settings import LIBRARY_NAME, LIBRARY_VERSION
from utils.errors import (
    HttpInternalError,
    HttpMaxRetriesError,
    HttpRequestError,
    HttpResponseError,
    HttpRetriableError,
    HttpThrottlingError,
    InvalidShopError,
    Shop0Error,
)

if TYPE_CHECKING:
    import httpx

    from config.settings import Shop0Settings

logger: logging.Logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
RETRY_AFTER_HEADER = "Retry-After"

_BODY_METHODS = frozenset({Method.POST, Method.PUT})

Outcome = ResponseResult | Shop0Error


class Shop0HttpClient:
    """Cliente HTTP para uma loja Shop0.

    Estado: apenas o cache de avisos de depreciação desta instância.
    """

    def __init__(
        self,
        domain: str,
        config: HttpClientConfig | None = None,
        deprecations: DeprecationTracker | None = None,
    ) -> None:
        if not validate_shop(domain):
            raise InvalidShopError(f"Domain {domain} is not valid")

        self.domain = domain
        self._config = config or HttpClientConfig()
        self._deprecations = deprecations or DeprecationTracker()

    async def get(
        self,
        path: str,
        *,
        query: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
        tries: int = 1,
    ) -> ResponseResult:
        """Executa GET no path informado."""
        return await self.request(
            RequestSpec(
                method=Method.GET,
                path=path,
                query=query,
                extra_headers=dict(extra_headers or {}),
                tries=tries,
            )
        )

    async def post(
        self,
        path: str,
        *,
        data: dict[str, Any] | str | None = None,
        type: DataType = DataType.JSON,
        query: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
        tries: int = 1,
    ) -> ResponseResult:
        """Executa POST no path informado."""
        return await self.request(
            RequestSpec(
                method=Method.POST,
                path=path,
                query=query,
                data=data,
                type=type,
                extra_headers=dict(extra_headers or {}),
                tries=tries,
            )
        )

    async def put(
        self,
        path: str,
        *,
        data: dict[str, Any] | str | None = None,
        type: DataType = DataType.JSON,
        query: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
        tries: int = 1,
    ) -> ResponseResult:
        """Executa PUT no path informado."""
        return await self.request(
            RequestSpec(
                method=Method.PUT,
                path=path,
                query=query,
                data=data,
                type=type,
                extra_headers=dict(extra_headers or {}),
                tries=tries,
            )
        )

    async def delete(
        self,
        path: str,
        *,
        query: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
        tries: int = 1,
    ) -> ResponseResult:
        """Executa DELETE no path informado."""
        return await self.request(
            RequestSpec(
                method=Method.DELETE,
                path=path,
                query=query,
                extra_headers=dict(extra_headers or {}),
                tries=tries,
            )
        )

    async def request(self, spec: RequestSpec) -> ResponseResult:
        """Executa a requisição com retry para erros retentáveis.

        Raises:
            HttpThrottlingError | HttpInternalError: Retentável com tries == 1
            HttpMaxRetriesError: Retentável esgotou tries > 1
            HttpResponseError | HttpRequestError: Sem retry
        """
        url = self._build_url(spec)
        headers, content = self._build_payload(spec)

        attempts = 0
        while True:
            outcome = await self._attempt(spec.method, url, headers, content)
            if isinstance(outcome, ResponseResult):
                return outcome

            attempts += 1
            if not isinstance(outcome, HttpRetriableError):
                raise outcome

            if attempts < spec.tries:
                await retry_sleep(self._wait_seconds(outcome))
                continue

            # tries == 1 não embrulha o erro original
            if spec.tries > 1:
                raise HttpMaxRetriesError(
                    f"Exceeded maximum retry count of {spec.tries}. "
                    f"Last message: {outcome}"
                ) from outcome
            raise outcome

    def user_agent(self, extra_headers: dict[str, str]) -> str:
        """Compõe o User-Agent, consumindo o header do chamador se houver."""
        user_agent = f"{LIBRARY_NAME} v{LIBRARY_VERSION} | Python {platform.python_version()}"
        if self._config.user_agent_prefix:
            user_agent = f"{self._config.user_agent_prefix} | {user_agent}"

        for key in list(extra_headers):
            if key.lower() == "user-agent":
                user_agent = f"{extra_headers.pop(key)} | {user_agent}"
                break
        return user_agent

    def _build_url(self, spec: RequestSpec) -> str:
        query_string = f"?{urlencode(spec.query, doseq=True)}" if spec.query else ""
        return f"https://{self.domain.rstrip('/')}{spec.path}{query_string}"

    def _build_payload(self, spec: RequestSpec) -> tuple[dict[str, str], str | None]:
        caller_headers = dict(spec.extra_headers)
        user_agent = self.user_agent(caller_headers)

        content: str | None = None
        content_headers: dict[str, str] = {}
        if spec.method in _BODY_METHODS and spec.data is not None:
            content = _encode_body(spec.data, spec.type)
            content_headers = {
                "Content-Type": spec.type.value,
                "Content-Length": str(len(content.encode("utf-8"))),
            }

        headers = {
            **self._config.default_headers,
            **content_headers,
            **caller_headers,
            "User-Agent": user_agent,
        }
        return headers, content

    async def _attempt(
        self,
        method: Method,
        url: str,
        headers: dict[str, str],
        content: str | None,
    ) -> Outcome:
        try:
            response = await send_once(self._config, method.value, url, headers, content)
        except HttpRequestError as exc:
            logger.warning("shop0_request_failed", extra={"method": method.value})
            return exc
        return self._to_outcome(response, method, url)

    def _to_outcome(self, response: httpx.Response, method: Method, url: str) -> Outcome:
        try:
            body = response.json() if response.content else {}
        except ValueError as exc:
            error = HttpRequestError(f"Failed to make Shop0 HTTP request: {exc}")
            error.__cause__ = exc
            return error

        if response.is_success:
            deprecation = response.headers.get(DEPRECATION_HEADER)
            if deprecation:
                self._deprecations.notify(deprecation, url)
            logger.debug(
                "shop0_request_ok",
                extra={"method": method.value, "status_code": response.status_code},
            )
            return ResponseResult(body=body, headers=response.headers)

        logger.warning(
            "shop0_request_error_response",
            extra={
                "method": method.value,
                "status_code": response.status_code,
                "request_id": response.headers.get(REQUEST_ID_HEADER),
            },
        )
        return classify_error_response(response, body)

    def _wait_seconds(self, error: HttpRetriableError) -> float:
        if isinstance(error, HttpThrottlingError) and error.retry_after:
            return error.retry_after
        return self._config.retry_wait_seconds


def classify_error_response(response: httpx.Response, body: Any) -> Shop0Error:
    """Mapeia uma resposta não-2xx para a taxonomia de erros."""
    details = _error_details(response, body)
    status_code = response.status_code

    if status_code == 429:
        return HttpThrottlingError(
            f"Shop0 is throttling requests{details}",
            retry_after=_parse_retry_after(response.headers.get(RETRY_AFTER_HEADER)),
        )
    if status_code >= 500:
        return HttpInternalError(f"Shop0 internal error{details}")
    return HttpResponseError(
        f"Received an error response ({status_code} {response.reason_phrase}) "
        f"from Shop0{details}",
        code=status_code,
        status_text=response.reason_phrase,
    )


def _error_details(response: httpx.Response, body: Any) -> str:
    messages: list[str] = []
    if isinstance(body, dict) and body.get("errors"):
        errors = body["errors"]
        messages.append(errors if isinstance(errors, str) else json.dumps(errors))

    request_id = response.headers.get(REQUEST_ID_HEADER)
    if request_id:
        messages.append(f"If you report this error, please include this id: {request_id}")

    return f": {'. '.join(messages)}" if messages else ""


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    # inf, nan e negativos caem no intervalo padrão
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return min(seconds, RETRY_AFTER_MAX_SECONDS)


def _encode_body(data: dict[str, Any] | str, data_type: DataType) -> str:
    if data_type is DataType.JSON:
        return data if isinstance(data, str) else json.dumps(data)
    if data_type is DataType.URL_ENCODED:
        return data if isinstance(data, str) else urlencode(data, doseq=True)
    return str(data)


def create_shop0_http_client(
    domain: str,
    settings: Shop0Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Shop0HttpClient:
    """Factory para criar cliente HTTP com config derivada das settings.

    Args:
        domain: Domínio da loja (ex: loja.myshop0.com)
        settings: Shop0Settings opcional. Se None, carrega do ambiente.
        transport: Transporte httpx opcional (testes, proxies)
    """
    from config.settings import get_shop0_settings

    shop0 = settings or get_shop0_settings()
    return Shop0HttpClient(domain, config=http_config_from_settings(shop0, transport))


def http_config_from_settings(
    settings: Shop0Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClientConfig:
    """Timeout e prefixo de User-Agent configurados para o app."""
    return HttpClientConfig(
        timeout_seconds=settings.request_timeout_seconds,
        user_agent_prefix=settings.user_agent_prefix,
        transport=transport,
    )
