from django.urls import path
from .views import AdminContactDetailAPIView, AdminContactListAPIView, ContactCreateAPIView, MyTicketsAPIView

urlpatterns = [
    path("contact/", ContactCreateAPIView.as_view(), name="contact"),
    path("contact/my-tickets/", MyTicketsAPIView.as_view(), name="contact-my-tickets"),
    path("admin/contacts/", AdminContactListAPIView.as_view(), name="admin-contacts"),
    path("admin/contacts/<int:pk>/", AdminContactDetailAPIView.as_view(), name="admin-contact-detail"),
]
