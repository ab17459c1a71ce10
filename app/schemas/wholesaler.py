import json
import re
from typing import Annotated, Dict
from pydantic import BaseModel, AfterValidator, BeforeValidator

SHOP_NAME_PATTERN = re.compile(r"[a-zA-Z0-9\s]{2,100}")
SHOP_NUMBER_PATTERN = re.compile(r"[a-zA-Z0-9\s\-/]{1,50}")
TIME_PATTERN = re.compile(r"(0?[1-9]|1[0-2]):[0-5][0-9] (AM|PM)")
GST_PATTERN = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]")
PINCODE_PATTERN = re.compile(r"[0-9]{6}")

DAY_GROUPS = ("monToSat", "sunday")
HOURS_FORMAT_MESSAGE = "Invalid business hours format (e.g., '08:00 AM')"


def _check_shop_name(value: str) -> str:
    if not SHOP_NAME_PATTERN.fullmatch(value):
        raise ValueError("Invalid shop name (2-100 characters, alphanumeric and spaces)")
    return value


def _check_shop_number(value: str) -> str:
    if not SHOP_NUMBER_PATTERN.fullmatch(value):
        raise ValueError("Invalid shop number format")
    return value


def _check_shop_address(value: str) -> str:
    if not 5 <= len(value) <= 200:
        raise ValueError("Shop address must be 5-200 characters")
    return value


def _valid_time(value) -> bool:
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def parse_business_hours(raw) -> Dict[str, Dict[str, str]]:
    """Decode the JSON-encoded hours field and check all four times."""
    if isinstance(raw, str):
        try:
            hours = json.loads(raw)
        except ValueError:
            raise ValueError("Invalid business hours format: must be a valid JSON string")
    else:
        hours = raw
    if not isinstance(hours, dict):
        raise ValueError(HOURS_FORMAT_MESSAGE)
    parsed = {}
    for group in DAY_GROUPS:
        slot = hours.get(group)
        if not isinstance(slot, dict):
            raise ValueError(HOURS_FORMAT_MESSAGE)
        if not (_valid_time(slot.get("open")) and _valid_time(slot.get("close"))):
            raise ValueError(HOURS_FORMAT_MESSAGE)
        parsed[group] = {"open": slot["open"], "close": slot["close"]}
    return parsed


def _check_gst(value: str) -> str:
    if not GST_PATTERN.fullmatch(value):
        raise ValueError("Invalid GST number format")
    return value


def _check_mandi_region(value: str) -> str:
    if not 2 <= len(value) <= 100:
        raise ValueError("Mandi region must be 2-100 characters")
    return value


def _check_pincode(value: str) -> str:
    if not PINCODE_PATTERN.fullmatch(value):
        raise ValueError("Invalid pincode format (6 digits)")
    return value


class ShopProfileRequest(BaseModel):
    # declaration order is the order fields are checked and reported
    shopName: Annotated[str, AfterValidator(_check_shop_name)]
    shopNumber: Annotated[str, AfterValidator(_check_shop_number)]
    shopAddress: Annotated[str, AfterValidator(_check_shop_address)]
    businessHours: Annotated[Dict[str, Dict[str, str]], BeforeValidator(parse_business_hours)]
    gstNumber: Annotated[str, AfterValidator(_check_gst)]
    mandiRegion: Annotated[str, AfterValidator(_check_mandi_region)]
    pincode: Annotated[str, AfterValidator(_check_pincode)]
