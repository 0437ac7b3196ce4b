"""Purchase Routes: record purchases and read them in another currency.

Invariants:
    - POST answers 201 with a Location header pointing at the new purchase
    - GET answers 404 for unknown ids, 400 for missing currency or failed conversion
    - Routes only translate HTTP <-> requests; the mediator does the rest
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from purchase_service.api.deps import get_mediator
from purchase_service.core.domain_types import PurchaseId
from purchase_service.core.errors import ResourceNotFoundError
from purchase_service.mediator.mediator import Mediator
from purchase_service.schemas.purchase import (
    ConvertedPurchaseResponse, PurchaseCreate, PurchaseResponse,
)
from purchase_service.services.purchase_requests import (
    CreatePurchaseCommand, GetPurchaseQuery,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/purchases", tags=["purchases"])


@router.post(
    "", response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_purchase(
    body: PurchaseCreate,
    response: Response,
    mediator: Mediator = Depends(get_mediator),
):
    """Record a purchase in USD."""
    purchase = await mediator.send(CreatePurchaseCommand(
        description=body.description,
        transaction_date=body.transaction_date,
        amount=body.amount,
    ))
    response.headers["Location"] = f"{router.prefix}/{purchase.id}"
    return PurchaseResponse.model_validate(purchase)


@router.get("/{purchase_id}", response_model=ConvertedPurchaseResponse)
async def get_purchase(
    purchase_id: UUID,
    currency: str | None = Query(None),
    mediator: Mediator = Depends(get_mediator),
):
    """Return a purchase converted into `currency`."""
    result = await mediator.send(GetPurchaseQuery(
        purchase_id=PurchaseId(purchase_id), currency=currency or "",
    ))
    if result is None:
        raise ResourceNotFoundError("Purchase", str(purchase_id))
    return ConvertedPurchaseResponse.model_validate(result)
