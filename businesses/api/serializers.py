"""Businesses API serializers.

Read serializers expose the derived `status` and `rating {average, count}`.
The write serializer only accepts owner-editable attributes; moderation and
derived fields are never writable here (see `businesses.services`).
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from businesses.models import MAX_IMAGES, MAX_VIDEOS, WEEKDAYS, Business, BusinessClaim
from categories.models import Category
from profiles.models import display_name

User = get_user_model()


# --------------------------- helpers (pure functions) ---------------------------

def _ensure_str_list(value, field, max_items=None):
    if not isinstance(value, list):
        raise serializers.ValidationError({field: "Must be an array of strings."})
    if any(not isinstance(x, str) for x in value):
        raise serializers.ValidationError({field: "All entries must be strings."})
    if max_items is not None and len(value) > max_items:
        raise serializers.ValidationError({field: f"At most {max_items} entries are allowed."})


def _clean_tags(tags):
    """Trim, drop blanks and de-duplicate (case-insensitive), keeping first-seen order."""
    seen, cleaned = set(), []
    for tag in tags:
        tag = tag.strip()
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            cleaned.append(tag)
    return cleaned


def _clean_hours(hours):
    """Weekday -> {open, close, closed}; unknown days or malformed slots are rejected."""
    if not isinstance(hours, dict):
        raise serializers.ValidationError({"hours": "Must be an object keyed by weekday."})
    cleaned = {}
    for day, slot in hours.items():
        key = str(day).strip().lower()
        if key not in WEEKDAYS:
            raise serializers.ValidationError({"hours": f"Unknown weekday '{day}'."})
        if not isinstance(slot, dict):
            raise serializers.ValidationError({"hours": f"Hours for {key} must be an object."})
        opens, closes = slot.get("open") or "", slot.get("close") or ""
        if not isinstance(opens, str) or not isinstance(closes, str):
            raise serializers.ValidationError({"hours": f"Opening times for {key} must be strings."})
        cleaned[key] = {"open": opens.strip(), "close": closes.strip(), "closed": bool(slot.get("closed", False))}
    return cleaned


# --------------------------------- nested reads ---------------------------------

class BusinessCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "icon"]


class BusinessOwnerSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email"]

    def get_name(self, obj):
        return display_name(obj)


# --------------------------------- serializers ---------------------------------

class BusinessListSerializer(serializers.ModelSerializer):
    """Compact card used by listings, search results and category previews."""

    category = BusinessCategorySerializer(read_only=True)
    rating = serializers.SerializerMethodField()
    status = serializers.CharField(read_only=True)

    class Meta:
        model = Business
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "category",
            "address",
            "city",
            "state",
            "zip_code",
            "phone",
            "website",
            "logo",
            "images",
            "tags",
            "is_verified",
            "is_featured",
            "views",
            "rating",
            "status",
            "created_at",
        ]
        read_only_fields = fields

    def get_rating(self, obj):
        return {"average": round(float(obj.rating_average or 0), 1), "count": obj.rating_count}


class BusinessDetailSerializer(BusinessListSerializer):
    """Full listing including moderation fields and the owner."""

    owner = BusinessOwnerSerializer(read_only=True)

    class Meta(BusinessListSerializer.Meta):
        fields = BusinessListSerializer.Meta.fields + [
            "owner",
            "country",
            "latitude",
            "longitude",
            "email",
            "hours",
            "videos",
            "is_active",
            "claimed_at",
            "rejection_reason",
            "rejected_at",
            "approved_at",
            "updated_at",
        ]
        read_only_fields = fields


class BusinessWriteSerializer(serializers.ModelSerializer):
    """Owner-editable attributes for submission, updates and resubmission."""

    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        error_messages={
            "required": "Please select a category.",
            "null": "Please select a category.",
            "does_not_exist": "Selected category does not exist.",
            "incorrect_type": "Category must be a category id.",
        },
    )

    class Meta:
        model = Business
        fields = [
            "name",
            "description",
            "category",
            "address",
            "city",
            "state",
            "zip_code",
            "country",
            "latitude",
            "longitude",
            "phone",
            "email",
            "website",
            "hours",
            "tags",
            "logo",
            "images",
            "videos",
        ]

    def validate_hours(self, value):
        return _clean_hours(value)

    def validate_tags(self, value):
        _ensure_str_list(value, "tags")
        return _clean_tags(value)

    def validate_images(self, value):
        _ensure_str_list(value, "images", MAX_IMAGES)
        return value

    def validate_videos(self, value):
        _ensure_str_list(value, "videos", MAX_VIDEOS)
        return value


class AdminBusinessCreateSerializer(BusinessWriteSerializer):
    """Admin variant: may assign an existing user as owner."""

    owner = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True
    )

    class Meta(BusinessWriteSerializer.Meta):
        fields = BusinessWriteSerializer.Meta.fields + ["owner"]


class RejectBusinessSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(
        allow_blank=True,
        required=False,
        default="",
        max_length=2000,
    )


class BusinessClaimSerializer(serializers.ModelSerializer):
    business = serializers.SerializerMethodField()
    user = BusinessOwnerSerializer(read_only=True)
    decided_by = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = BusinessClaim
        fields = ["id", "business", "user", "message", "status", "decided_by", "decided_at", "created_at"]
        read_only_fields = fields

    def get_business(self, obj):
        return {"id": obj.business_id, "name": obj.business.name, "slug": obj.business.slug}


class ClaimRequestSerializer(serializers.Serializer):
    message = serializers.CharField(allow_blank=True, required=False, default="", max_length=2000)
