from storefront.views.contracts import Panel, StorefrontViews

__all__ = ["Panel", "StorefrontViews"]
