from storefront.api.client import ApiError, CatalogApi, StorefrontApi

__all__ = ["ApiError", "CatalogApi", "StorefrontApi"]
