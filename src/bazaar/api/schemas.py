"""Pydantic request/response schemas for the marketplace API.

Money goes over the wire as strings with two decimals ("120.00").
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from bazaar.shared.money import money_str

# --- Users ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Verma",
                    "phone": "9876543210",
                    "address": "12 Station Road",
                    "city": "Dhamtari",
                    "pincode": "493773",
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=10)


class UserResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    phone: str | None = None
    city: str | None = None
    pincode: str | None = None
    role: str
    approval_status: str | None = None
    is_active: bool

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            phone=user.phone,
            city=user.city,
            pincode=user.pincode,
            role=user.role,
            approval_status=user.approval_status,
            is_active=user.is_active,
        )


class AccountResponse(BaseModel):
    kind: str
    approval_status: str | None = None
    can_sell: bool = False
    can_deliver: bool = False


class MeResponse(BaseModel):
    user: UserResponse
    account: AccountResponse


# --- Catalog ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Groceries", "name_hindi": "किराना", "slug": "groceries", "sort_order": 1}]
        }
    }

    name: str = Field(..., max_length=100)
    name_hindi: str | None = Field(None, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    sort_order: int = 0


class CategoryResponse(BaseModel):
    id: str
    name: str
    name_hindi: str | None = None
    slug: str
    description: str | None = None
    image: str | None = None
    sort_order: int

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            name_hindi=category.name_hindi,
            slug=category.slug,
            description=category.description,
            image=category.image,
            sort_order=category.sort_order,
        )


class ListProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "category_id": "b4f1c0e2-...",
                    "name": "Basmati Rice",
                    "name_hindi": "बासमती चावल",
                    "price": "50.00",
                    "unit": "kg",
                    "stock": 40,
                    "max_order_qty": 10,
                }
            ]
        }
    }

    category_id: str
    name: str = Field(..., max_length=200)
    name_hindi: str | None = Field(None, max_length=200)
    description: str | None = None
    description_hindi: str | None = None
    price: str
    original_price: str | None = None
    image: str | None = Field(None, max_length=500)
    unit: str | None = Field(None, max_length=20)
    brand: str | None = Field(None, max_length=100)
    stock: int = Field(0, ge=0)
    min_order_qty: int = Field(1, ge=1)
    max_order_qty: int = Field(100, ge=1)


class UpdatePriceRequest(BaseModel):
    price: str
    original_price: str | None = None


class RestockRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class ProductResponse(BaseModel):
    id: str
    seller_id: str
    category_id: str
    name: str
    name_hindi: str | None = None
    description: str | None = None
    description_hindi: str | None = None
    price: str
    original_price: str | None = None
    image: str | None = None
    unit: str
    brand: str | None = None
    stock: int
    min_order_qty: int
    max_order_qty: int
    is_active: bool

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            seller_id=str(product.seller_id),
            category_id=str(product.category_id),
            name=product.name,
            name_hindi=product.name_hindi,
            description=product.description,
            description_hindi=product.description_hindi,
            price=money_str(product.price),
            original_price=money_str(product.original_price) if product.original_price is not None else None,
            image=product.image,
            unit=product.unit,
            brand=product.brand,
            stock=product.stock,
            min_order_qty=product.min_order_qty,
            max_order_qty=product.max_order_qty,
            is_active=product.is_active,
        )


# --- Cart ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "b4f1c0e2-...", "quantity": 2}]}}

    product_id: str
    quantity: int = 1
    session_id: str | None = None


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    name: str
    name_hindi: str | None = None
    price: str
    image: str | None = None
    unit: str
    line_total: str

    @classmethod
    def from_line(cls, line) -> CartLineResponse:
        return cls(
            item_id=line.item_id,
            product_id=line.product_id,
            quantity=line.quantity,
            name=line.name,
            name_hindi=line.name_hindi,
            price=money_str(line.price),
            image=line.image,
            unit=line.unit,
            line_total=money_str(line.line_total),
        )


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    item_count: int
    subtotal: str

    @classmethod
    def from_snapshot(cls, snapshot) -> CartResponse:
        return cls(
            items=[CartLineResponse.from_line(line) for line in snapshot.lines],
            item_count=snapshot.item_count,
            subtotal=money_str(snapshot.subtotal),
        )


# --- Orders ---


class DeliveryAddressSchema(BaseModel):
    full_name: str = Field(..., max_length=200)
    address_line1: str = Field(..., max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    city: str = Field(..., max_length=100)
    pincode: str = Field(..., max_length=6)
    landmark: str | None = Field(None, max_length=255)
    phone: str = Field(..., max_length=20)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "payment_method": "cod",
                    "delivery_address": {
                        "full_name": "Asha Verma",
                        "address_line1": "12 Station Road",
                        "city": "Dhamtari",
                        "pincode": "493773",
                        "phone": "9876543210",
                    },
                    "delivery_instructions": "Ring the bell twice",
                }
            ]
        }
    }

    payment_method: str
    delivery_address: DeliveryAddressSchema
    delivery_instructions: str | None = None
    promo_code: str | None = Field(None, max_length=30)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"status": "out_for_delivery", "location": "Sihawa Chowk"}]
        }
    }

    status: str
    message: str | None = None
    message_hindi: str | None = None
    location: str | None = Field(None, max_length=255)
    estimated_delivery_at: datetime | None = None


class CancelOrderRequest(BaseModel):
    reason: str | None = None


class AssignPartnerRequest(BaseModel):
    partner_id: str


class RecordPaymentRequest(BaseModel):
    payment_status: str


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    seller_id: str
    product_name: str
    quantity: int
    unit_price: str
    total_price: str


class TrackingEntryResponse(BaseModel):
    sequence: int
    status: str
    message: str | None = None
    message_hindi: str | None = None
    location: str | None = None
    recorded_at: datetime


class OrderResponse(BaseModel):
    id: str
    order_number: str
    customer_id: str
    status: str
    subtotal: str
    delivery_charge: str
    discount: str
    total: str
    payment_method: str
    payment_status: str
    promo_code: str | None = None
    delivery_partner_id: str | None = None
    delivery_address: DeliveryAddressSchema
    delivery_instructions: str | None = None
    placed_at: datetime | None = None
    estimated_delivery_at: datetime | None = None
    delivered_at: datetime | None = None
    items: list[OrderItemResponse]
    tracking: list[TrackingEntryResponse]

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        address = order.delivery_address
        return cls(
            id=str(order.id),
            order_number=order.order_number,
            customer_id=str(order.customer_id),
            status=order.status,
            subtotal=money_str(order.subtotal),
            delivery_charge=money_str(order.delivery_charge),
            discount=money_str(order.discount),
            total=money_str(order.total),
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            promo_code=order.promo_code,
            delivery_partner_id=str(order.delivery_partner_id) if order.delivery_partner_id else None,
            delivery_address=DeliveryAddressSchema(
                full_name=address.full_name,
                address_line1=address.address_line1,
                address_line2=address.address_line2,
                city=address.city,
                pincode=address.pincode,
                landmark=address.landmark,
                phone=address.phone,
            ),
            delivery_instructions=order.delivery_instructions,
            placed_at=order.placed_at,
            estimated_delivery_at=order.estimated_delivery_at,
            delivered_at=order.delivered_at,
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    seller_id=str(item.seller_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=money_str(item.unit_price),
                    total_price=money_str(item.total_price),
                )
                for item in order.items
            ],
            tracking=[
                TrackingEntryResponse(
                    sequence=entry.sequence,
                    status=entry.status,
                    message=entry.message,
                    message_hindi=entry.message_hindi,
                    location=entry.location,
                    recorded_at=entry.recorded_at,
                )
                for entry in order.timeline()
            ],
        )


# --- Sellers and delivery partners ---


class ApplyAsSellerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "store_name": "Verma General Store",
                    "store_type": "grocery",
                    "address": "Main Market",
                    "city": "Dhamtari",
                    "pincode": "493773",
                    "phone": "9876543210",
                    "gst_number": "22AAAAA0000A1Z5",
                }
            ]
        }
    }

    store_name: str = Field(..., max_length=200)
    store_type: str | None = Field(None, max_length=50)
    address: str | None = None
    city: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=10)
    phone: str | None = Field(None, max_length=20)
    license_number: str | None = Field(None, max_length=100)
    gst_number: str | None = Field(None, max_length=50)


class RejectRequest(BaseModel):
    reason: str | None = None


class SellerResponse(BaseModel):
    id: str
    store_name: str
    store_type: str | None = None
    address: str | None = None
    city: str | None = None
    pincode: str | None = None
    phone: str | None = None
    license_number: str | None = None
    gst_number: str | None = None
    status: str
    rejection_reason: str | None = None
    applied_at: datetime | None = None
    decided_at: datetime | None = None

    @classmethod
    def from_seller(cls, seller) -> SellerResponse:
        return cls(
            id=str(seller.user_id),
            store_name=seller.store_name,
            store_type=seller.store_type,
            address=seller.address,
            city=seller.city,
            pincode=seller.pincode,
            phone=seller.phone,
            license_number=seller.license_number,
            gst_number=seller.gst_number,
            status=seller.status,
            rejection_reason=seller.rejection_reason,
            applied_at=seller.applied_at,
            decided_at=seller.decided_at,
        )


class RegisterPartnerRequest(BaseModel):
    vehicle_type: str
    vehicle_number: str | None = Field(None, max_length=20)
    license_number: str | None = Field(None, max_length=50)


class PartnerResponse(BaseModel):
    id: str
    vehicle_type: str
    vehicle_number: str | None = None
    status: str
    is_available: bool
    rating: str
    total_deliveries: int

    @classmethod
    def from_partner(cls, partner) -> PartnerResponse:
        return cls(
            id=str(partner.user_id),
            vehicle_type=partner.vehicle_type,
            vehicle_number=partner.vehicle_number,
            status=partner.status,
            is_available=partner.is_available,
            rating=money_str(partner.rating),
            total_deliveries=partner.total_deliveries,
        )


class DeliveryAreaRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "area_name": "Ward 12",
                    "pincode": "493773",
                    "city": "Dhamtari",
                    "delivery_charge": "20.00",
                    "free_delivery_above": "499.00",
                }
            ]
        }
    }

    area_name: str = Field(..., max_length=100)
    pincode: str = Field(..., max_length=6)
    city: str = Field(..., max_length=100)
    delivery_charge: str
    free_delivery_above: str | None = None


class DeliveryAreaResponse(BaseModel):
    id: str
    area_name: str
    pincode: str
    city: str
    delivery_charge: str
    free_delivery_above: str | None = None

    @classmethod
    def from_area(cls, area) -> DeliveryAreaResponse:
        return cls(
            id=str(area.id),
            area_name=area.area_name,
            pincode=area.pincode,
            city=area.city,
            delivery_charge=money_str(area.delivery_charge),
            free_delivery_above=money_str(area.free_delivery_above) if area.free_delivery_above is not None else None,
        )


# --- Promotions ---


class CreatePromoCodeRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "DIWALI10",
                    "description": "10% off, up to 50",
                    "discount_type": "percentage",
                    "discount_value": "10",
                    "max_discount": "50.00",
                    "valid_from": "2026-10-01T00:00:00Z",
                    "valid_until": "2026-11-15T23:59:59Z",
                }
            ]
        }
    }

    code: str = Field(..., max_length=30)
    description: str
    discount_type: str
    discount_value: str
    min_order_amount: str | None = None
    max_discount: str | None = None
    usage_limit: int | None = Field(None, ge=1)
    valid_from: datetime
    valid_until: datetime


class PromoCodeResponse(BaseModel):
    id: str
    code: str


# --- Reviews ---


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"product_id": "b4f1c0e2-...", "order_id": "0c9d...", "rating": 5, "comment": "Fresh stock"}]
        }
    }

    product_id: str
    order_id: str
    rating: int
    comment: str | None = None


class ReviewResponse(BaseModel):
    id: str
    customer_id: str
    product_id: str
    order_id: str
    rating: int
    comment: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            id=str(review.id),
            customer_id=str(review.customer_id),
            product_id=str(review.product_id),
            order_id=str(review.order_id),
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )


class RatingSummary(BaseModel):
    average_rating: float
    total_reviews: int
    rating_distribution: dict[str, int]


class ProductReviewsResponse(BaseModel):
    summary: RatingSummary
    reviews: list[ReviewResponse]


# --- Common ---


class IdResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: str = "ok"
