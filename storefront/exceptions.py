"""
Error kinds raised by the store services and the handler that renders them.

Each business error is an ``APIException`` so DRF maps it to a status code;
``context`` carries the identifiers the client needs to act on the error
(the product that ran out, the order that was not found, ...).
"""
import logging

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class StoreError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be completed."
    default_code = "store_error"

    def __init__(self, detail=None, **context):
        super().__init__(detail=detail)
        self.context = context


class EmptyCart(StoreError):
    default_detail = "Cart is empty"
    default_code = "empty_cart"


class InsufficientStock(StoreError):
    default_code = "insufficient_stock"

    def __init__(self, product_id, name=None):
        detail = f"Insufficient stock for {name}" if name else "Insufficient stock"
        super().__init__(detail, product_id=product_id)
        self.product_id = product_id


class NotFound(StoreError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
    default_code = "not_found"


class OrderNotFound(NotFound):
    def __init__(self, order_id):
        super().__init__("Order not found", order_id=order_id)
        self.order_id = order_id


class InvalidTransition(StoreError):
    default_code = "invalid_transition"

    def __init__(self, from_status, to_status):
        super().__init__(
            f"Cannot move order from {from_status} to {to_status}",
            from_status=from_status,
            to_status=to_status,
        )
        self.from_status = from_status
        self.to_status = to_status


class InvalidStatus(StoreError):
    default_code = "invalid_status"

    def __init__(self, value):
        super().__init__("Invalid status", status=value)
        self.value = value


class ProductInUse(StoreError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "product_in_use"

    def __init__(self, product_id):
        super().__init__("Product is referenced by existing orders", product_id=product_id)
        self.product_id = product_id


class TransactionAborted(StoreError):
    """The database gave up on the transaction; nothing was written, retry is safe."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The operation conflicted with a concurrent request, please retry."
    default_code = "transaction_aborted"


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc)
        return Response(
            {"detail": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(response.data, dict):
        if isinstance(exc, APIException):
            codes = exc.get_codes()
            if isinstance(codes, str):
                response.data.setdefault("code", codes)
        elif isinstance(exc, Http404):
            response.data.setdefault("code", "not_found")
        if isinstance(exc, StoreError):
            response.data.update(exc.context)

    return response
