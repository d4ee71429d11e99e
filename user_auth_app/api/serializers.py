"""Auth API serializers.

Provides serializers for registration, login, password change and the user
payload returned by the auth endpoints. Users sign in with their e-mail
address; the username is the lower-cased e-mail.
"""

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from common.permissions import user_role

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public shape of a user account, including the directory role."""

    name = serializers.CharField(source="first_name", read_only=True)
    role = serializers.SerializerMethodField()
    phone = serializers.SerializerMethodField()
    avatar = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "phone", "avatar", "is_active", "date_joined", "last_login"]
        read_only_fields = fields

    def _profile(self, obj):
        return getattr(obj, "profile", None)

    def get_role(self, obj):
        return user_role(obj)

    def get_phone(self, obj):
        return getattr(self._profile(obj), "phone", "")

    def get_avatar(self, obj):
        return getattr(self._profile(obj), "avatar", "")


class RegistrationSerializer(serializers.Serializer):
    """Validate and create a new user account."""

    name = serializers.CharField(max_length=150, error_messages={"blank": _("Name is required")})
    email = serializers.EmailField(error_messages={"invalid": _("Please provide a valid email")})
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        error_messages={"min_length": _("Password must be at least 6 characters")},
    )

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists() or User.objects.filter(username=value).exists():
            raise serializers.ValidationError(_("User already exists with this email"))
        return value

    def validate(self, attrs):
        validate_password(attrs["password"], User(username=attrs["email"], email=attrs["email"]))
        return attrs

    def create(self, validated_data):
        return User.objects.create_user(
            username=validated_data["email"],
            email=validated_data["email"],
            password=validated_data["password"],
            first_name=validated_data["name"].strip(),
        )


class LoginSerializer(serializers.Serializer):
    """Authenticate e-mail/password and attach the user to validated data."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get("request"),
            username=attrs["email"].strip().lower(),
            password=attrs["password"],
        )
        if not user:
            raise serializers.ValidationError({"detail": _("Invalid credentials")})
        attrs["user"] = user
        return attrs


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=6)

    def validate_current_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError(_("Current password is incorrect"))
        return value

    def validate(self, attrs):
        validate_password(attrs["new_password"], self.context["request"].user)
        return attrs
