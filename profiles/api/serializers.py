"""Profiles API serializers.

Contains serializers for:
- partially updating the caller's own profile (name, phone, avatar URL),
- the admin user list,
- admin changes to a user's role and active flag.

String fields never return `null` in responses, but empty strings instead.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from user_auth_app.api.serializers import UserSerializer
from ..models import Profile

User = get_user_model()


class ProfilePatchSerializer(serializers.Serializer):
    """Partial update of the caller's own profile; unknown keys are ignored."""

    name = serializers.CharField(max_length=150, required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    avatar = serializers.URLField(max_length=255, required=False, allow_blank=True, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name must not be empty.")
        return value


class AdminUserSerializer(UserSerializer):
    """User row in the admin list, with the number of businesses and reviews."""

    business_count = serializers.IntegerField(read_only=True)
    review_count = serializers.IntegerField(read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["business_count", "review_count"]
        read_only_fields = fields


class AdminUserPatchSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Profile.Role.choices, required=False)
    is_active = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide role and/or is_active.")
        return attrs
