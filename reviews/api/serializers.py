"""Reviews API serializers.

Provide serializers for creating a review, returning review data, partially
updating a review and answering one as the business owner. The one-review-per-
business rule and the approval workflow live in `reviews.services`.
"""

from rest_framework import serializers

from businesses.models import Business
from profiles.models import display_name
from reviews.models import Review

MAX_REVIEW_IMAGES = 5


def _validate_images(value):
    if not isinstance(value, list) or any(not isinstance(x, str) for x in value):
        raise serializers.ValidationError("Must be an array of strings.")
    if len(value) > MAX_REVIEW_IMAGES:
        raise serializers.ValidationError(f"At most {MAX_REVIEW_IMAGES} images are allowed.")
    return value


class ReviewCreateSerializer(serializers.Serializer):
    """Input serializer for creating a new review."""

    business = serializers.PrimaryKeyRelatedField(
        queryset=Business.objects.filter(is_active=True),
        error_messages={"does_not_exist": "Business not found."},
    )
    rating = serializers.IntegerField(min_value=1, max_value=5)
    title = serializers.CharField(max_length=100, allow_blank=True, required=False, default="")
    comment = serializers.CharField(max_length=1000)
    images = serializers.JSONField(required=False, default=list)

    def validate_images(self, value):
        return _validate_images(value)


class ReviewPatchSerializer(serializers.ModelSerializer):
    """Patch serializer for rating, title, comment and images."""

    images = serializers.JSONField(required=False)

    class Meta:
        model = Review
        fields = ["rating", "title", "comment", "images"]

    def validate_images(self, value):
        return _validate_images(value)


class ReviewOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a review."""

    business = serializers.SerializerMethodField()
    user = serializers.SerializerMethodField()
    helpful_count = serializers.SerializerMethodField()
    response = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            "id",
            "business",
            "user",
            "rating",
            "title",
            "comment",
            "images",
            "helpful_count",
            "response",
            "is_approved",
            "is_reported",
            "created_at",
            "updated_at",
        ]

    def get_business(self, obj):
        return {"id": obj.business_id, "name": obj.business.name, "slug": obj.business.slug}

    def get_user(self, obj):
        profile = getattr(obj.user, "profile", None)
        return {"id": obj.user_id, "name": display_name(obj.user), "avatar": getattr(profile, "avatar", "")}

    def get_helpful_count(self, obj):
        annotated = getattr(obj, "_helpful_count", None)
        return annotated if annotated is not None else obj.helpful_by.count()

    def get_response(self, obj):
        if not obj.response_comment:
            return None
        return {"comment": obj.response_comment, "responded_at": obj.responded_at}


class ReviewResponseSerializer(serializers.Serializer):
    comment = serializers.CharField(max_length=1000)
