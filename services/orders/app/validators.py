"""
Business rule validation for the Orders service.

Each validator returns a (is_valid, error_message) tuple; the service layer
turns failures into errors.ValidationError.
"""
from typing import List, Optional, Tuple
from . import schemas

PRODUCT_NAME_MAX_LENGTH = 200
PAYMENT_ID_MAX_LENGTH = 100
OBSERVATION_MAX_LENGTH = 500


def validate_order_items(items: List[schemas.OrderItemCreate]) -> Tuple[bool, str]:
    """
    Validate order items for business rules.

    Args:
        items: List of order items

    Returns:
        Tuple of (is_valid, error_message)
    """
    for item in items:
        if not item.product_name or not item.product_name.strip():
            return False, f"Item for product {item.product_id}: product name is required"

        if len(item.product_name) > PRODUCT_NAME_MAX_LENGTH:
            return False, f"Item for product {item.product_id}: product name exceeds {PRODUCT_NAME_MAX_LENGTH} characters"

        if item.quantity <= 0:
            return False, f"Item for product {item.product_id}: quantity must be positive"

        if item.unit_price < 0:
            return False, f"Item for product {item.product_id}: unit price cannot be negative"

    return True, ""


def validate_order_details(payment_id: Optional[str], observation: Optional[str]) -> Tuple[bool, str]:
    """
    Validate the free-text fields of an order.

    Args:
        payment_id: Payment gateway reference
        observation: Customer note

    Returns:
        Tuple of (is_valid, error_message)
    """
    if payment_id is not None and len(payment_id) > PAYMENT_ID_MAX_LENGTH:
        return False, f"Payment ID exceeds {PAYMENT_ID_MAX_LENGTH} characters"

    if observation is not None and len(observation) > OBSERVATION_MAX_LENGTH:
        return False, f"Observation exceeds {OBSERVATION_MAX_LENGTH} characters"

    return True, ""
