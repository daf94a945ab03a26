from django.contrib import admin

from signature.models import DocumentSignature


@admin.register(DocumentSignature)
class DocumentSignatureAdmin(admin.ModelAdmin):
    """Admin en lecture seule du journal des signatures"""

    list_display = [
        'id',
        'document_type',
        'document_id',
        'action',
        'signed_by_display',
        'signed_at',
    ]

    list_filter = [
        'document_type',
        'action',
        'signed_at',
    ]

    search_fields = [
        'document_id',
        'resolution_text',
        'rejection_reason',
    ]

    list_select_related = ['signed_by', 'assigned_executor']

    fieldsets = (
        ('Document', {
            'fields': (
                'document_type',
                'document_id',
                'action',
            )
        }),
        ('Résolution', {
            'fields': (
                'resolution_text',
                'rejection_reason',
                'assigned_executor',
                'assigned_due_date',
            )
        }),
        ('Signataire', {
            'fields': (
                'signed_by',
                'signed_at',
            )
        }),
    )

    def signed_by_display(self, obj):
        """Affiche le signataire (nom du contact si disponible)"""
        contact = getattr(obj.signed_by, 'contact', None)
        if contact:
            return contact.full_name
        return obj.signed_by.get_username()
    signed_by_display.short_description = "Signataire"

    # Le journal est en ajout seul : aucune écriture depuis l'admin
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
