from typing import Any, Dict, List, Optional as Opt

from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    DateField,
    DecimalField,
    IntegerField,
    SelectField,
    StringField,
    SubmitField,
    TextAreaField,
)
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional

from shophub.models import DISCOUNT_TYPES, ORDER_STATUSES, Category, Product


def _lines(text: Opt[str]) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def _csv(text: Opt[str]) -> List[str]:
    return [part.strip() for part in (text or "").split(",") if part.strip()]


class ProductForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    slug = StringField("Slug", validators=[Optional(), Length(max=255)], description="Derived from the name when empty")
    description = TextAreaField("Description", validators=[Optional()])
    price = DecimalField("Price", places=2, validators=[InputRequired(), NumberRange(min=0)])
    original_price = DecimalField("Original price", places=2, validators=[Optional(), NumberRange(min=0)])
    sku = StringField("SKU", validators=[DataRequired(), Length(max=100)])
    category_id = SelectField("Category", coerce=int, default=0)
    stock = IntegerField("Stock", default=0, validators=[InputRequired(), NumberRange(min=0)])
    images = TextAreaField("Image URLs", description="One URL per line")
    tags = StringField("Tags", description="Comma separated")
    is_active = BooleanField("Active", default=True)
    is_featured = BooleanField("Featured")
    submit = SubmitField("Save")

    def set_categories(self, categories: List[Category]) -> "ProductForm":
        self.category_id.choices = [(0, "-- none --")] + [(c.id, c.name) for c in categories]
        return self

    def fill(self, product: Product) -> "ProductForm":
        self.name.data = product.name
        self.slug.data = product.slug
        self.description.data = product.description
        self.price.data = product.price
        self.original_price.data = product.original_price
        self.sku.data = product.sku
        self.category_id.data = product.category_id or 0
        self.stock.data = product.stock
        self.images.data = "\n".join(product.images or [])
        self.tags.data = ", ".join(product.tags or [])
        self.is_active.data = product.is_active
        self.is_featured.data = product.is_featured
        return self

    def values(self) -> Dict[str, Any]:
        return {
            "name": self.name.data.strip(),
            "slug": (self.slug.data or "").strip() or None,
            "description": self.description.data or None,
            "price": self.price.data,
            "original_price": self.original_price.data,
            "sku": self.sku.data.strip(),
            "category_id": self.category_id.data or None,
            "stock": self.stock.data,
            "images": _lines(self.images.data),
            "tags": _csv(self.tags.data),
            "is_active": self.is_active.data,
            "is_featured": self.is_featured.data,
        }


class CategoryForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    slug = StringField("Slug", validators=[Optional(), Length(max=255)])
    description = TextAreaField("Description", validators=[Optional()])
    image = StringField("Image URL", validators=[Optional()])
    submit = SubmitField("Add Category")

    def values(self) -> Dict[str, Any]:
        return {
            "name": self.name.data.strip(),
            "slug": (self.slug.data or "").strip() or None,
            "description": self.description.data or None,
            "image": self.image.data or None,
        }


class CouponForm(FlaskForm):
    code = StringField("Code", validators=[DataRequired(), Length(max=50)])
    description = StringField("Description", validators=[Optional()])
    discount_type = SelectField("Type", choices=[(t, t.capitalize()) for t in DISCOUNT_TYPES])
    discount_value = DecimalField("Value", places=2, default=0, validators=[InputRequired(), NumberRange(min=0)])
    min_order_amount = DecimalField("Minimum order", places=2, default=0, validators=[InputRequired(), NumberRange(min=0)])
    max_uses = IntegerField("Max uses", validators=[Optional(), NumberRange(min=1)], description="Empty for unlimited")
    expires_at = DateField("Expires on", validators=[Optional()])
    is_active = BooleanField("Active", default=True)
    submit = SubmitField("Add Coupon")


class OrderStatusForm(FlaskForm):
    status = SelectField("Status", choices=[(s, s.capitalize()) for s in ORDER_STATUSES])
    submit = SubmitField("Update")


class ActionForm(FlaskForm):
    submit = SubmitField("Submit")
