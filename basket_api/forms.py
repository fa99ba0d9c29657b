"""
Request validation forms for the basket API.

The forms are fed decoded JSON (not form posts), so field data arrives
already typed. Wire names are camelCase; `from_payload` maps them onto the
form's field names and `wire_errors` maps error keys back.
"""

from decimal import Decimal, InvalidOperation

from wtforms import Form, StringField, BooleanField, IntegerField, DecimalField
from wtforms.validators import DataRequired, NumberRange, ValidationError

from .domain.errors import ValidationError as RequestValidationError
from .domain.models import BasketItem, MAX_QUANTITY, MAX_UNIT_PRICE


class JsonDecimalField(DecimalField):
    """DecimalField that accepts JSON numbers and numeric strings as object data."""

    def process_data(self, value):
        if value is None:
            self.data = None
            return
        try:
            if isinstance(value, bool):
                raise InvalidOperation
            number = Decimal(str(value))
            if not number.is_finite():
                raise InvalidOperation
        except (InvalidOperation, ValueError) as exc:
            self.data = None
            raise ValueError(self.gettext("Not a valid decimal value.")) from exc
        self.data = number


class JsonIntegerField(IntegerField):
    """IntegerField that rejects booleans and fractional numbers."""

    def process_data(self, value):
        if value is None:
            self.data = None
            return
        try:
            if isinstance(value, bool):
                raise InvalidOperation
            number = Decimal(str(value))
            if not number.is_finite() or number != number.to_integral_value():
                raise InvalidOperation
        except (InvalidOperation, ValueError) as exc:
            self.data = None
            raise ValueError(self.gettext("Not a valid integer value.")) from exc
        self.data = int(number)


class JsonBooleanField(BooleanField):
    """BooleanField that only accepts JSON true/false as object data."""

    def process_data(self, value):
        if not isinstance(value, bool):
            self.data = False
            raise ValueError(self.gettext("Not a valid boolean value."))
        self.data = value


class JsonForm(Form):
    # wire name -> field name
    field_aliases = {}

    @classmethod
    def from_payload(cls, payload):
        data = {cls.field_aliases.get(key, key): value for key, value in payload.items()}
        return cls(data=data)

    def wire_errors(self):
        reverse = {field: wire for wire, field in self.field_aliases.items()}
        return {reverse.get(name, name): list(messages) for name, messages in self.errors.items()}

    def validate_or_raise(self):
        if not self.validate():
            raise RequestValidationError(self.wire_errors())
        return self


class BasketItemForm(JsonForm):
    field_aliases = {
        'id': 'item_id',
        'unitPrice': 'unit_price',
        'isDiscounted': 'is_discounted',
        'discountPercentage': 'discount_percentage',
    }

    item_id = StringField('Id', validators=[DataRequired(message='Id is required')])
    name = StringField('Name', validators=[DataRequired(message='Name is required')])
    unit_price = JsonDecimalField('Unit price')
    quantity = JsonIntegerField('Quantity', default=1)
    is_discounted = JsonBooleanField('Is discounted', default=False)
    discount_percentage = JsonDecimalField('Discount percentage', default=Decimal('0'), validators=[
        NumberRange(min=0, max=100, message='Discount percentage must be between 0 and 100')
    ])

    def validate_unit_price(self, field):
        if field.data is None:
            if not field.process_errors:
                raise ValidationError('Unit price is required')
            return
        if field.data <= 0:
            raise ValidationError('Unit price must be greater than 0')
        if field.data > MAX_UNIT_PRICE:
            raise ValidationError(f'Unit price must not exceed {MAX_UNIT_PRICE}')

    def validate_quantity(self, field):
        # Compared as ints; NumberRange would coerce very large values to float
        if field.data is None:
            if not field.process_errors:
                raise ValidationError('Quantity must be at least 1')
            return
        if field.data < 1:
            raise ValidationError('Quantity must be at least 1')
        if field.data > MAX_QUANTITY:
            raise ValidationError(f'Quantity must not exceed {MAX_QUANTITY}')

    def to_item(self) -> BasketItem:
        return BasketItem(
            id=str(self.item_id.data),
            name=str(self.name.data),
            unit_price=self.unit_price.data,
            quantity=self.quantity.data,
            is_discounted=bool(self.is_discounted.data),
            discount_percentage=self.discount_percentage.data,
        )


class DiscountCodeForm(JsonForm):
    field_aliases = {'discountCode': 'discount_code'}

    discount_code = StringField('Discount code', validators=[DataRequired(message='Discount code is required')])


class ShippingForm(JsonForm):
    country = StringField('Country', validators=[DataRequired(message='Country is required')])
