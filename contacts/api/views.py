"""Contacts API views.

Anyone may submit the contact form. Signed-in users see the tickets sent
from their e-mail address; admins list, update and delete all tickets.
"""

from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from common.pagination import AdminPagination
from common.permissions import IsAdminRole
from contacts import services
from contacts.models import ContactTicket
from .serializers import ContactCreateSerializer, ContactStatusSerializer, ContactTicketSerializer


class ContactCreateAPIView(generics.CreateAPIView):
    """POST: submit the contact form (no authentication required)."""

    serializer_class = ContactCreateSerializer
    permission_classes = [AllowAny]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = services.submit_ticket(serializer.validated_data, actor=request.user)
        return Response(
            {
                "message": "Your message has been sent successfully. We will respond within 24 hours.",
                "contact": ContactTicketSerializer(ticket).data,
            },
            status=status.HTTP_201_CREATED,
        )


class MyTicketsAPIView(generics.ListAPIView):
    """GET: tickets whose e-mail matches the caller's (case-insensitive)."""

    serializer_class = ContactTicketSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return ContactTicket.objects.filter(email__iexact=self.request.user.email)

    def list(self, request, *args, **kwargs):
        data = self.get_serializer(self.get_queryset(), many=True).data
        return Response({"contacts": data, "count": len(data)}, status=status.HTTP_200_OK)


class AdminContactListAPIView(generics.ListAPIView):
    """GET: all tickets, optionally ?status=new|read|in_progress|resolved."""

    serializer_class = ContactTicketSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    pagination_class = AdminPagination
    results_key = "contacts"

    def get_queryset(self):
        qs = ContactTicket.objects.all()
        value = self.request.query_params.get("status")
        if value:
            if value not in ContactTicket.Status.values:
                raise ValidationError({"status": f"Allowed values: {', '.join(ContactTicket.Status.values)}."})
            qs = qs.filter(status=value)
        return qs


class AdminContactDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single ticket (admin only). PATCH takes status and/or replied."""

    queryset = ContactTicket.objects.all()
    serializer_class = ContactTicketSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def update(self, request, *args, **kwargs):
        ticket = self.get_object()
        if not isinstance(request.data, dict):
            raise ValidationError({"detail": "Expected a JSON object."})
        extra = set(request.data.keys()) - {"status", "replied"}
        if extra:
            raise ValidationError({"detail": f"Only status and replied may be updated. Invalid: {', '.join(sorted(extra))}."})
        ser = ContactStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        ticket = services.update_ticket(
            ticket,
            status=ser.validated_data.get("status"),
            replied=ser.validated_data.get("replied", False),
        )
        return Response(
            {"message": "Ticket updated", "contact": ContactTicketSerializer(ticket).data},
            status=status.HTTP_200_OK,
        )

    def destroy(self, request, *args, **kwargs):
        self.get_object().delete()
        return Response({"message": "Ticket deleted"}, status=status.HTTP_200_OK)
