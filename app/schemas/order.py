from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Union
from pydantic import BaseModel, BeforeValidator, Field, model_validator
from models.enums import OrderStatus, WHOLESALER_SETTABLE_STATUSES
from .common import parse_iso_datetime


def _settable_status(value):
    try:
        status = OrderStatus(value)
    except ValueError:
        raise ValueError("Invalid status update")
    if status not in WHOLESALER_SETTABLE_STATUSES:
        raise ValueError("Invalid status update")
    return status


def _status_filter(value):
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValueError("Invalid status filter")


def _date_filter(value):
    return parse_iso_datetime(value, "Invalid date filter")


def _total_filter(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError("Invalid order total filter")


def _delivery_date(value):
    if value in (None, ""):
        return None
    return parse_iso_datetime(value, "Invalid delivery date")


class CreateOrderRequest(BaseModel):
    retailerId: str
    products: List[Dict[str, Any]] = Field(min_length=1)
    deliveryAddress: Union[str, Dict[str, Any]]
    orderTotal: float = Field(gt=0)
    deliveryDate: Annotated[Optional[datetime], BeforeValidator(_delivery_date)] = None
    paymentMethod: Optional[str] = None
    notes: Optional[str] = None
    vehicleNumber: Optional[str] = Field(default=None, max_length=20)


class UpdateOrderStatusRequest(BaseModel):
    status: Annotated[OrderStatus, BeforeValidator(_settable_status)]
    cancellationReason: Optional[str] = None
    notes: Optional[str] = None


class OrderSearchParams(BaseModel):
    status: Annotated[Optional[OrderStatus], BeforeValidator(_status_filter)] = None
    retailerId: Optional[str] = None
    fromDate: Annotated[Optional[datetime], BeforeValidator(_date_filter)] = None
    toDate: Annotated[Optional[datetime], BeforeValidator(_date_filter)] = None
    minTotal: Annotated[Optional[float], BeforeValidator(_total_filter)] = None
    maxTotal: Annotated[Optional[float], BeforeValidator(_total_filter)] = None
    paymentMethod: Optional[str] = None
    vehicleNumber: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_blank(cls, data):
        # an empty query parameter means "no filter"
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v not in (None, "")}
        return data
