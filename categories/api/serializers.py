"""Categories API serializers.

`business_count` is filled from a count map the view aggregates once per
request and passes through the serializer context.
"""

from django.utils.text import slugify
from rest_framework import serializers

from categories.models import Category
from common.exceptions import ConflictError


class CategorySerializer(serializers.ModelSerializer):
    """Read/write serializer for categories (writes are admin-only at the view level)."""

    business_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = [
            "id",
            "name",
            "slug",
            "icon",
            "description",
            "is_active",
            "order",
            "business_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["slug", "created_at", "updated_at"]
        extra_kwargs = {"name": {"validators": []}}

    def get_business_count(self, obj):
        counts = self.context.get("business_counts") or {}
        return counts.get(obj.id, 0)

    def validate_name(self, value):
        """Names are trimmed and must be unique (also after slugifying)."""
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Please provide a category name.")
        slug = slugify(value)
        if not slug:
            raise serializers.ValidationError("Category name must contain letters or digits.")

        others = Category.objects.all()
        if self.instance is not None:
            others = others.exclude(pk=self.instance.pk)
        if others.filter(name__iexact=value).exists() or others.filter(slug=slug).exists():
            raise ConflictError("A category with this name already exists.")
        return value

    def create(self, validated_data):
        validated_data["slug"] = slugify(validated_data["name"])
        return super().create(validated_data)

    def update(self, instance, validated_data):
        name = validated_data.get("name")
        if name and name != instance.name:
            validated_data["slug"] = slugify(name)
        return super().update(instance, validated_data)
