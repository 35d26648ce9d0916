"""HTTP client for the product/order API.

Two calls are exposed to the storefront core: ``fetch_catalog`` (once at
startup) and ``submit_order`` (on the contacts step). Every failure, be it
transport, HTTP status or an unexpected body, surfaces as ``ApiError``.
"""

from typing import Any, Protocol

import requests
import structlog
from pydantic import ValidationError as SchemaError

from storefront.api.schemas import CatalogResponse, OrderRequest, OrderResponse
from storefront.catalogue.product import Product
from storefront.checkout.order import OrderForm, OrderResult

logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """A failed call to the product/order API."""

    def __init__(self, message: str, status: int | None = None, code: str | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details


class CatalogApi(Protocol):
    """What the presenter needs from the backend."""

    def fetch_catalog(self) -> list[Product]: ...

    def submit_order(self, order: OrderForm) -> OrderResult: ...


class StorefrontApi:
    """``requests`` based implementation of :class:`CatalogApi`.

    ``session`` may be any object with requests-compatible ``get``/``post``
    methods; it defaults to a fresh ``requests.Session``.
    """

    def __init__(self, base_url: str, cdn_url: str = "", session=None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.cdn_url = cdn_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._headers = {"Content-Type": "application/json"}

    # -------------------------------------------------------------------
    # Storefront calls
    # -------------------------------------------------------------------
    def fetch_catalog(self) -> list[Product]:
        data = self._get("/product")
        try:
            catalog = CatalogResponse.model_validate(data)
        except SchemaError as exc:
            raise ApiError("Malformed catalog response", code="malformed_response", details=exc.errors()) from exc

        logger.debug("Catalog fetched", product_count=len(catalog.items))
        return [
            Product(
                id=item.id,
                title=item.title,
                description=item.description,
                price=item.price,
                category=item.category,
                image_url=self._image_url(item.image),
            )
            for item in catalog.items
        ]

    def submit_order(self, order: OrderForm) -> OrderResult:
        try:
            payload = OrderRequest(**order.model_dump()).model_dump()
        except SchemaError as exc:
            raise ApiError("Order cannot be submitted", code="invalid_order", details=exc.errors()) from exc

        data = self._post("/order", payload)
        try:
            response = OrderResponse.model_validate(data)
        except SchemaError as exc:
            raise ApiError("Malformed order response", code="malformed_response", details=exc.errors()) from exc

        logger.info("Order accepted", order_id=response.id, total=response.total)
        return OrderResult(id=response.id, total=response.total)

    def _image_url(self, image: str) -> str:
        if not self.cdn_url:
            return image
        return f"{self.cdn_url}/{image.lstrip('/')}"

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------
    def _get(self, uri: str) -> Any:
        return self._request("get", uri)

    def _post(self, uri: str, data: dict) -> Any:
        return self._request("post", uri, json=data)

    def _request(self, method: str, uri: str, **kwargs) -> Any:
        url = self.base_url + uri
        try:
            response = getattr(self._session, method)(url, headers=self._headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"Request to {url} failed: {exc}", code="transport_error") from exc

        return self._handle_response(response)

    def _handle_response(self, response) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = None

        if 200 <= response.status_code < 300:
            if body is None:
                raise ApiError("Response body is not JSON", status=response.status_code, code="malformed_response")
            return body

        message = None
        if isinstance(body, dict):
            message = body.get("error") or body.get("message") or body.get("detail")
        raise ApiError(
            str(message) if message else f"HTTP error! Status: {response.status_code}",
            status=response.status_code,
            code=body.get("code") if isinstance(body, dict) else None,
            details=body,
        )
