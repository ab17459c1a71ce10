import logging
from models import db, is_valid_id
from models.account import Account
from models.enums import Role
from models.wholesaler import WholesalerProfile
from app.exceptions import Conflict, Forbidden, NotFound, UploadError, ValidationError
from app.schemas.wholesaler import ShopProfileRequest
from app.utils import DuplicateKeyError, has_required_fields, parse_payload, transactional

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "shopName",
    "shopNumber",
    "shopAddress",
    "businessHours",
    "gstNumber",
    "mandiRegion",
    "pincode",
)
CERTIFICATE_CATEGORY = "business-certificates"
DUPLICATE_GST_MESSAGE = "GST number already exists"


def _validate(wholesaler_id, form, certificate) -> ShopProfileRequest:
    if not is_valid_id(wholesaler_id):
        raise ValidationError("Invalid wholesaler ID")
    if not has_required_fields(form, PROFILE_FIELDS) or not certificate:
        raise ValidationError("All shop profile fields and business certificate file are required")
    return parse_payload(ShopProfileRequest, {k: form[k] for k in PROFILE_FIELDS})


def create_shop_profile(wholesaler_id, form: dict, certificate, uploader) -> WholesalerProfile:
    """Fill in the empty profile created at signup and mark the account complete.

    Only the first call succeeds; later calls hit the ``has_shop_detail`` check.
    """
    req = _validate(wholesaler_id, form, certificate)

    wholesaler = Account.query.filter_by(id=wholesaler_id, role=Role.wholesaler).first()
    if not wholesaler:
        raise NotFound("Wholesaler not found")
    if not wholesaler.is_phone_verified:
        raise Forbidden("Phone number not verified")
    if wholesaler.has_shop_detail:
        raise Conflict("Shop profile already created")

    profile = WholesalerProfile.query.filter_by(wholesaler_id=wholesaler_id).first()
    if not profile:
        raise NotFound("Shop profile not found for this wholesaler")

    taken = WholesalerProfile.query.filter(
        WholesalerProfile.gst_number == req.gstNumber,
        WholesalerProfile.id != profile.id,
    ).first()
    if taken:
        raise Conflict(DUPLICATE_GST_MESSAGE)

    try:
        certificate_url = uploader.upload(certificate, CERTIFICATE_CATEGORY)
    except UploadError as e:
        raise UploadError(f"Failed to upload business certificate: {e.message}") from e

    profile.shop_name = req.shopName
    profile.shop_number = req.shopNumber
    profile.shop_address = req.shopAddress
    profile.business_hours = req.businessHours
    profile.gst_number = req.gstNumber
    profile.mandi_region = req.mandiRegion
    profile.pincode = req.pincode
    profile.business_certificate_url = certificate_url
    wholesaler.has_shop_detail = True
    try:
        with transactional("Failed to update shop profile"):
            db.session.add(profile)
            db.session.add(wholesaler)
    except DuplicateKeyError:
        raise Conflict(DUPLICATE_GST_MESSAGE)

    logger.info("Shop profile completed for wholesaler %s", wholesaler_id)
    return profile
