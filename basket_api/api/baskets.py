"""
Basket API Endpoints

Provides RESTful operations for shopping baskets: line items, discount
codes, shipping destination and VAT-inclusive/exclusive totals.
Baskets are created on first reference, so no endpoint answers 404 for an
unknown basket id.
"""

import json
from decimal import Decimal

from flask import Blueprint, request, jsonify, current_app

from ..domain.errors import ValidationError
from ..forms import BasketItemForm, DiscountCodeForm, ShippingForm
from ..utils.money import format_money, format_decimal

# Create API blueprint
baskets_api = Blueprint('baskets_api', __name__, url_prefix='/api/basket')


def _basket_service():
    return current_app.extensions['basket_service']


def _json_payload():
    """Decode the request body as a JSON object, reading numbers as Decimal."""
    raw = request.get_data(as_text=True)
    if not raw:
        raise ValidationError(message='JSON data required')
    try:
        payload = json.loads(raw, parse_float=Decimal)
    except ValueError as exc:
        raise ValidationError(message='Malformed JSON body') from exc
    if not isinstance(payload, dict):
        raise ValidationError(message='JSON object required')
    return payload


def serialize_item(item):
    """Convert a basket item to API response format."""
    return {
        'id': item.id,
        'name': item.name,
        'unitPrice': format_money(item.unit_price),
        'quantity': item.quantity,
        'isDiscounted': item.is_discounted,
        'discountPercentage': format_decimal(item.discount_percentage),
        'totalPrice': format_money(item.total_price),
        'totalPriceWithDiscount': format_money(item.total_price_with_discount),
    }


def serialize_basket(basket):
    """Convert a basket snapshot to the summary response format."""
    return {
        'basketId': basket.id,
        'items': [serialize_item(item) for item in basket.items],
        'discountCode': basket.discount_code,
        'discountCodePercentage': format_decimal(basket.discount_code_percentage),
        'shippingCountry': basket.shipping_country,
        'subtotalExcludingVat': format_money(basket.subtotal_excluding_vat),
        'shippingCost': format_money(basket.shipping_cost),
        'vatAmount': format_money(basket.vat_amount),
        'totalExcludingVat': format_money(basket.total_excluding_vat),
        'totalIncludingVat': format_money(basket.total_including_vat),
    }


def serialize_discount_code(discount):
    return {
        'code': discount.code,
        'percentage': format_decimal(discount.percentage),
        'isActive': discount.is_active,
        'description': discount.description,
    }


def _success(data):
    return jsonify({
        'status': 'success',
        'data': data
    }), 200


@baskets_api.route('/discount-codes', methods=['GET'])
def get_discount_codes():
    """Get all active discount codes."""
    codes = [serialize_discount_code(code) for code in _basket_service().list_discount_codes()]
    return jsonify({
        'status': 'success',
        'data': codes,
        'count': len(codes)
    }), 200


@baskets_api.route('/<basket_id>', methods=['GET'])
def get_basket(basket_id):
    """Get a basket with its cost breakdown."""
    basket = _basket_service().get_basket(basket_id)
    return _success(serialize_basket(basket))


@baskets_api.route('/<basket_id>/items', methods=['POST'])
def add_item(basket_id):
    """Add a single item to a basket."""
    form = BasketItemForm.from_payload(_json_payload()).validate_or_raise()
    basket = _basket_service().add_item(basket_id, form.to_item())
    return _success(serialize_basket(basket))


@baskets_api.route('/<basket_id>/items/bulk', methods=['POST'])
def add_items(basket_id):
    """Add several items to a basket, in order."""
    raw_items = _json_payload().get('items')
    if not isinstance(raw_items, list):
        raise ValidationError({'items': ['A list of items is required']})

    # Validate every item before touching the basket
    items = []
    errors = {}
    for index, raw_item in enumerate(raw_items):
        if not isinstance(raw_item, dict):
            errors[f'items[{index}]'] = ['Item must be a JSON object']
            continue
        form = BasketItemForm.from_payload(raw_item)
        if form.validate():
            items.append(form.to_item())
        else:
            for field_name, messages in form.wire_errors().items():
                errors[f'items[{index}].{field_name}'] = messages
    if errors:
        raise ValidationError(errors)

    basket = _basket_service().add_items(basket_id, items)
    return _success(serialize_basket(basket))


@baskets_api.route('/<basket_id>/items/<item_id>', methods=['DELETE'])
def remove_item(basket_id, item_id):
    """Remove an item from a basket. Removing an absent item is not an error."""
    basket = _basket_service().remove_item(basket_id, item_id)
    return _success(serialize_basket(basket))


@baskets_api.route('/<basket_id>/total-with-vat', methods=['GET'])
def get_total_with_vat(basket_id):
    """Get the total including VAT and shipping."""
    return _success(format_money(_basket_service().total_including_vat(basket_id)))


@baskets_api.route('/<basket_id>/total-without-vat', methods=['GET'])
def get_total_without_vat(basket_id):
    """Get the total excluding VAT but including shipping."""
    return _success(format_money(_basket_service().total_excluding_vat(basket_id)))


@baskets_api.route('/<basket_id>/discount-code', methods=['POST'])
def apply_discount_code(basket_id):
    """Apply a discount code to a basket."""
    form = DiscountCodeForm.from_payload(_json_payload()).validate_or_raise()
    basket = _basket_service().apply_discount_code(basket_id, str(form.discount_code.data))
    return _success(serialize_basket(basket))


@baskets_api.route('/<basket_id>/shipping', methods=['POST'])
def set_shipping(basket_id):
    """Set the shipping destination for a basket."""
    form = ShippingForm.from_payload(_json_payload()).validate_or_raise()
    basket = _basket_service().set_shipping_destination(basket_id, str(form.country.data))
    return _success(serialize_basket(basket))
