from rest_framework import serializers
from .models import Campaign


class CampaignSerializer(serializers.ModelSerializer):
    user = serializers.PrimaryKeyRelatedField(read_only=True)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    total_records = serializers.SerializerMethodField()

    class Meta:
        model = Campaign
        fields = ('id', 'user', 'name', 'description', 'created_at', 'total_records')
        read_only_fields = ('created_at',)

    def get_total_records(self, obj):
        return obj.records.count()

    def validate_description(self, value):
        # Empty descriptions are stored as NULL
        return value or None
