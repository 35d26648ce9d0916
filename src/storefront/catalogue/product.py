"""Product: an immutable catalog entry as loaded from the product API."""

from pydantic import BaseModel, ConfigDict


class Product(BaseModel):
    """A catalog product.

    ``price`` is ``None`` for priceless products, which can be previewed
    but never put into the cart.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    price: float | None
    category: str
    image_url: str

    @property
    def is_priceless(self) -> bool:
        return self.price is None
