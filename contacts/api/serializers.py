"""Contacts API serializers."""

from rest_framework import serializers

from contacts.models import ContactTicket


class ContactCreateSerializer(serializers.ModelSerializer):
    """Public contact form; every field is required and trimmed."""

    class Meta:
        model = ContactTicket
        fields = ["name", "email", "subject", "message"]
        extra_kwargs = {
            "name": {"error_messages": {"blank": "Name is required", "required": "Name is required"}},
            "email": {"error_messages": {"invalid": "Valid email is required", "required": "Valid email is required"}},
            "subject": {"error_messages": {"blank": "Subject is required", "required": "Subject is required"}},
            "message": {"error_messages": {"blank": "Message is required", "required": "Message is required"}},
        }


class ContactTicketSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactTicket
        fields = [
            "id",
            "name",
            "email",
            "subject",
            "message",
            "status",
            "is_read",
            "replied_at",
            "resolved_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ContactStatusSerializer(serializers.Serializer):
    """Admin update: the status and an optional 'replied' marker."""

    status = serializers.ChoiceField(choices=ContactTicket.Status.choices, required=False)
    replied = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide a status or the replied flag.")
        return attrs
