from flask_wtf import FlaskForm
from wtforms import BooleanField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional
from wtforms.widgets import HiddenInput


class AddToCartForm(FlaskForm):
    product_id = IntegerField("Product", widget=HiddenInput(), validators=[InputRequired()])
    quantity = IntegerField("Quantity", default=1, validators=[InputRequired(), NumberRange(min=1)])
    submit = SubmitField("Add to Cart")


class CartQuantityForm(FlaskForm):
    quantity = IntegerField("Quantity", validators=[InputRequired(), NumberRange(min=1)])
    submit = SubmitField("Update")


class FavoriteForm(FlaskForm):
    product_id = IntegerField("Product", widget=HiddenInput(), validators=[InputRequired()])
    submit = SubmitField("Add to Favorites")


class ActionForm(FlaskForm):
    """Bare form for POST-only buttons (remove, clear) so they carry a CSRF token."""
    submit = SubmitField("Submit")


class ReviewForm(FlaskForm):
    rating = SelectField(
        "Rating",
        choices=[(5, "5 - Excellent"), (4, "4 - Good"), (3, "3 - Average"), (2, "2 - Poor"), (1, "1 - Terrible")],
        coerce=int,
        validators=[InputRequired()],
    )
    title = StringField("Title", validators=[Optional(), Length(max=255)])
    comment = TextAreaField("Comment", validators=[Optional()])
    submit = SubmitField("Submit Review")


class CheckoutForm(FlaskForm):
    shipping_street = StringField("Street", validators=[DataRequired()])
    shipping_city = StringField("City", validators=[DataRequired()])
    shipping_state = StringField("State", validators=[DataRequired()])
    shipping_zip_code = StringField("ZIP code", validators=[DataRequired()])
    shipping_country = StringField("Country", default="United States", validators=[DataRequired()])

    same_as_shipping = BooleanField("Billing address same as shipping", default=True)

    billing_street = StringField("Street")
    billing_city = StringField("City")
    billing_state = StringField("State")
    billing_zip_code = StringField("ZIP code")
    billing_country = StringField("Country", default="United States")

    card_number = StringField("Card number", validators=[DataRequired(), Length(min=16, message="Card number must be at least 16 digits")])
    expiry_date = StringField("Expiry (MM/YY)", validators=[DataRequired(), Length(min=5, message="Expiry must look like MM/YY")])
    cvv = StringField("CVV", validators=[DataRequired(), Length(min=3, message="CVV must be at least 3 digits")])
    cardholder_name = StringField("Cardholder name", validators=[DataRequired()])

    submit = SubmitField("Place Order")

    def validate(self, extra_validators=None) -> bool:
        valid = super().validate(extra_validators)
        if not self.same_as_shipping.data:
            for name in ("street", "city", "state", "zip_code", "country"):
                field = getattr(self, f"billing_{name}")
                if not (field.data or "").strip():
                    field.errors.append("This field is required.")
                    valid = False
        return valid

    def address(self, prefix: str) -> dict:
        return {
            "street": getattr(self, f"{prefix}_street").data.strip(),
            "city": getattr(self, f"{prefix}_city").data.strip(),
            "state": getattr(self, f"{prefix}_state").data.strip(),
            "zipCode": getattr(self, f"{prefix}_zip_code").data.strip(),
            "country": getattr(self, f"{prefix}_country").data.strip(),
        }

    def details(self) -> dict:
        shipping = self.address("shipping")
        return {
            "shipping_address": shipping,
            "billing_address": shipping if self.same_as_shipping.data else self.address("billing"),
            "payment_method": "card",
            "payment_status": "pending",
        }
