"""Activities API serializers.

Referenced entities are resolved for display; a reference whose target is
gone is rendered as null.
"""

from rest_framework import serializers

from activities.models import Activity
from profiles.models import display_name


class ActivitySerializer(serializers.ModelSerializer):
    """Read serializer for the admin activity feed."""

    user = serializers.SerializerMethodField()
    business = serializers.SerializerMethodField()
    review = serializers.SerializerMethodField()
    category = serializers.SerializerMethodField()

    class Meta:
        model = Activity
        fields = ["id", "type", "description", "user", "business", "review", "category", "metadata", "created_at"]

    def get_user(self, obj):
        u = obj.user
        if u is None:
            return None
        return {"id": u.id, "name": display_name(u), "email": u.email}

    def get_business(self, obj):
        b = obj.business
        return {"id": b.id, "name": b.name, "slug": b.slug} if b is not None else None

    def get_review(self, obj):
        r = obj.review
        return {"id": r.id, "title": r.title, "rating": r.rating} if r is not None else None

    def get_category(self, obj):
        c = obj.category
        return {"id": c.id, "name": c.name} if c is not None else None
