from django.urls import path

from . import views

app_name = "signature"

urlpatterns = [
    path("pending/", views.list_pending_documents, name="list_pending"),
    path(
        "<str:kind>/<int:document_id>/",
        views.get_document_signatures,
        name="document_signatures",
    ),
    path("<str:kind>/<int:document_id>/sign/", views.sign_document, name="sign"),
    path("<str:kind>/<int:document_id>/reject/", views.reject_document, name="reject"),
]
