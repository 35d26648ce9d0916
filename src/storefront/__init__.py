"""Storefront: event-driven catalog, cart and checkout wizard core.

The package wires a synchronous publish/subscribe bus, a single state store
that announces every mutation, a cart coordinator guarding line-item
uniqueness, and a presenter that drives the two-step checkout wizard.
Rendering and HTTP are collaborators plugged in through ``storefront.views``
and ``storefront.api``.
"""

__version__ = "0.1.0"
