from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class ProductShipping(BaseModel):
    lengthCm: Optional[float] = None
    widthCm: Optional[float] = None
    heightCm: Optional[float] = None
    weightKg: Optional[float] = None


class Product(BaseModel):
    id: str
    slug: str = ""
    name: str
    price: int = Field(..., description="Unit price in CLP")
    image: Optional[str] = None
    description: Optional[str] = None
    soldOut: bool = False
    shipping: Optional[ProductShipping] = None


class CartItem(BaseModel):
    product: Product
    quantity: int = Field(1, ge=1)


class Parcel(BaseModel):
    lengthCm: int
    widthCm: int
    heightCm: int
    weightKg: float


class PackageDimensions(BaseModel):
    lengthCm: Optional[float] = None
    widthCm: Optional[float] = None
    heightCm: Optional[float] = None
    weightKg: Optional[float] = None


class ShippingQuoteRequest(BaseModel):
    originComuna: str = ""
    destinationComuna: str = ""
    package: Optional[PackageDimensions] = None
    declaredValueCLP: Optional[float] = None
    items: Optional[List[CartItem]] = Field(
        default=None,
        description="Cart items used to build the package when it is not sent",
    )


class ShippingOption(BaseModel):
    id: int
    displayName: str
    deliveryType: str
    serviceType: str
    price: int = Field(..., description="Shipping price in CLP")
    etaDays: Optional[int] = None
    paymentType: Optional[str] = None
    commitmentDate: Optional[str] = None


class ShippingQuoteResponse(BaseModel):
    ok: bool = True
    provider: str
    originComuna: str
    destinationComuna: str
    options: List[ShippingOption]
    recommended: Optional[ShippingOption] = None
    estimated: bool = False


class OrderItem(BaseModel):
    id: str = ""
    name: str = ""
    price: float = 0
    quantity: int = 0


class Customer(BaseModel):
    name: str = ""
    phone: str = ""
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class CourierOptionMeta(BaseModel):
    displayName: Optional[str] = None
    deliveryType: Optional[str] = None
    serviceType: Optional[str] = None


class Delivery(BaseModel):
    method: str = ""
    destinationComuna: Optional[str] = None
    pickupCourse: Optional[str] = None
    shippingCost: Optional[float] = None
    etaDays: Optional[int] = None
    courierMeta: Optional[CourierOptionMeta] = None


class CashDetails(BaseModel):
    institution: str = ""
    course: str = ""


class Payment(BaseModel):
    method: str = ""
    cash: Optional[CashDetails] = None


class OrderPayload(BaseModel):
    items: List[OrderItem] = []
    customer: Optional[Customer] = None
    delivery: Optional[Delivery] = None
    payment: Optional[Payment] = None
    total: float = 0
    createdAt: Optional[str] = None


class OrderCreatedResponse(BaseModel):
    ok: bool = True
    id: str
    stored: bool = True
    warning: Optional[str] = None
    whatsappUrl: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None


class OrderStatus(BaseModel):
    id: str
    status: str


class OrderStatusResponse(BaseModel):
    ok: bool = True
    order: OrderStatus


class CompactOrderItem(BaseModel):
    name: str
    qty: int


class CompactOrder(BaseModel):
    id: str
    name: str
    phone: str
    items: List[CompactOrderItem]
    total: float
    status: str
    createdAt: Optional[str]


class OrderRecord(BaseModel):
    id: str
    status: str
    createdAt: Optional[str]
    payload: Dict[str, Any]


class OrdersResponse(BaseModel):
    ok: bool = True
    orders: List[Union[CompactOrder, OrderRecord]]
