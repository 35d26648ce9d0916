from storefront.state.store import StateStore

__all__ = ["StateStore"]
