from storefront.events.bus import EventBus, Handler

__all__ = ["EventBus", "Handler"]
