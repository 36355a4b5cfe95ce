"""Cart endpoints."""

from fastapi import APIRouter

from furnish.application.cart import Cart
from furnish.application.store import ConfigurationStore
from furnish.domain.value_objects import FurnitureType
from furnish.web.dependencies import CartDep, CatalogDep, SettingsDep
from furnish.web.schemas.requests import CartLineItemRequest
from furnish.web.schemas.responses import CartLineItemSchema, CartSchema

router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(cart: Cart) -> CartSchema:
    return CartSchema(
        items=[CartLineItemSchema.model_validate(item.to_dict()) for item in cart.items],
        item_count=cart.item_count,
        total=cart.total,
    )


@router.get("", response_model=CartSchema)
async def get_cart(cart: CartDep) -> CartSchema:
    """List the cart contents."""
    return _cart_response(cart)


@router.post("/line-items", response_model=CartSchema, status_code=201)
async def add_line_item(
    request: CartLineItemRequest,
    cart: CartDep,
    settings: SettingsDep,
    catalog: CatalogDep,
) -> CartSchema:
    """Snapshot the configuration a query describes into the cart.

    The line item is priced and laid out at the moment it is added; later
    changes to the link do not affect it.
    """
    store = ConfigurationStore.from_query(
        request.query,
        FurnitureType.parse(request.furniture_type),
        settings=settings,
        catalog=catalog,
    )
    cart.add_configuration(store, request.name)
    return _cart_response(cart)
