from rest_framework import serializers

from chancellery.models import Contact

from .models import SignatureAction


class SignDocumentSerializer(serializers.Serializer):
    """
    Corps de la requête de signature.

    La date d'échéance reste une chaîne : son format (YYYY-MM-DD) est validé
    par le workflow, comme pour tout autre appelant.
    """

    resolution_text = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )
    assigned_executor_id = serializers.IntegerField(required=False, allow_null=True)
    assigned_due_date = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )

    def validate_assigned_executor_id(self, value):
        """L'exécutant doit être un contact existant"""
        if value is not None and not Contact.objects.filter(pk=value).exists():
            raise serializers.ValidationError(f"Contact introuvable: {value}")
        return value


class RejectDocumentSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class StatusInfoSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()


class ShortSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField(allow_null=True)


class SignatureEntrySerializer(serializers.Serializer):
    """Entrée de l'historique de signature d'un document"""

    id = serializers.IntegerField()
    document_type = serializers.CharField()
    document_id = serializers.IntegerField()
    action = serializers.ChoiceField(choices=SignatureAction.choices)
    resolution_text = serializers.CharField(allow_null=True)
    rejection_reason = serializers.CharField(allow_null=True)
    assigned_executor = ShortSerializer(allow_null=True)
    assigned_due_date = serializers.DateField(allow_null=True)
    signed_by = ShortSerializer(allow_null=True)
    signed_at = serializers.DateTimeField()


class PendingDocumentSerializer(serializers.Serializer):
    """Document en attente de signature (boîte de réception unifiée)"""

    document_type = serializers.CharField()
    document_id = serializers.IntegerField()
    name = serializers.CharField()
    number = serializers.CharField(allow_null=True)
    document_date = serializers.DateField()
    type_id = serializers.IntegerField()
    type_name = serializers.CharField()
    organization = serializers.CharField(allow_null=True)
    organization_id = serializers.IntegerField(allow_null=True)
    responsible_name = serializers.CharField(allow_null=True)
    responsible_id = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField()
    created_by = serializers.CharField(allow_null=True)
