from storefront.cart.coordinator import CartCoordinator

__all__ = ["CartCoordinator"]
