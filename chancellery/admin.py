from django.contrib import admin

from .models import (
    Contact,
    Decree,
    DecreeType,
    DocumentStatus,
    Instruction,
    InstructionType,
    Letter,
    LetterType,
    Organization,
    Report,
    ReportType,
)


@admin.register(DocumentStatus)
class DocumentStatusAdmin(admin.ModelAdmin):
    """Référentiel alimenté par les migrations : lecture seule"""

    list_display = ["id", "code", "name"]
    search_fields = ["code", "name"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ["id", "name"]
    search_fields = ["name"]


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ["id", "full_name", "organization", "user"]
    search_fields = ["full_name"]
    list_select_related = ["organization", "user"]


@admin.register(DecreeType, ReportType, LetterType, InstructionType)
class DocumentTypeAdmin(admin.ModelAdmin):
    list_display = ["id", "name"]
    search_fields = ["name"]


class ChancelleryDocumentAdmin(admin.ModelAdmin):
    """
    Admin commun aux quatre types de documents.

    Le statut est en lecture seule : il ne change que via le workflow de
    signature (signature.workflow).
    """

    list_display = [
        "id",
        "name",
        "number",
        "document_date",
        "type",
        "status",
        "executor_contact",
        "due_date",
        "created_at",
    ]
    list_filter = ["status", "type", "document_date"]
    search_fields = ["name", "number"]
    list_select_related = ["status", "type", "executor_contact"]
    readonly_fields = ["created_at", "updated_at", "updated_by"]
    date_hierarchy = "document_date"

    def get_readonly_fields(self, request, obj=None):
        # Statut initial choisi à la création, figé ensuite
        if obj is None:
            return self.readonly_fields
        return ["status", *self.readonly_fields]

    fieldsets = (
        ("Document", {"fields": ("name", "number", "document_date", "type", "description")}),
        ("Rattachement", {"fields": ("organization", "responsible_contact")}),
        ("Signature", {"fields": ("status", "executor_contact", "due_date")}),
        (
            "Audit",
            {
                "fields": ("created_at", "created_by", "updated_at", "updated_by"),
                "classes": ("collapse",),
            },
        ),
    )


admin.site.register(Decree, ChancelleryDocumentAdmin)
admin.site.register(Report, ChancelleryDocumentAdmin)
admin.site.register(Letter, ChancelleryDocumentAdmin)
admin.site.register(Instruction, ChancelleryDocumentAdmin)
