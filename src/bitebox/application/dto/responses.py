from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PartySummaryResponse(BaseModel):
    id: str
    name: str
    email: str | None = None
    phoneNumber: str | None = None


class MenuItemSnapshotResponse(BaseModel):
    name: str
    price: Decimal
    isAvailable: bool


class OrderItemResponse(BaseModel):
    menuItemId: str
    name: str
    quantity: int
    price: Decimal
    lineTotal: Decimal
    menuItem: MenuItemSnapshotResponse | None = None


class OrderResponse(BaseModel):
    orderId: str
    user: PartySummaryResponse
    vendor: PartySummaryResponse
    userPhoneNumber: str | None = None
    items: list[OrderItemResponse] = Field(default_factory=list)
    totalAmount: Decimal
    paymentMethod: str
    paymentStatus: str
    status: str
    createdAt: datetime
    updatedAt: datetime


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)


class MenuItemResponse(BaseModel):
    itemId: str
    name: str
    description: str | None = None
    price: Decimal
    category: str
    type: str
    isAvailable: bool


class MenuCategoryResponse(BaseModel):
    category: str
    items: list[MenuItemResponse] = Field(default_factory=list)


class VendorMenuResponse(BaseModel):
    vendorId: str
    restaurantName: str
    categories: list[MenuCategoryResponse] = Field(default_factory=list)


class AccountResponse(BaseModel):
    id: str
    username: str
    email: str
    phoneNumber: str | None = None
    role: str
    walletBalance: Decimal
    restaurantName: str | None = None
    rating: float | None = None
    numReviews: int | None = None


class ReviewResponse(BaseModel):
    reviewId: str
    userId: str
    vendorId: str
    name: str
    rating: int
    comment: str
    createdAt: datetime


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse] = Field(default_factory=list)
    rating: float
    numReviews: int
