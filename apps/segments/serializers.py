from rest_framework import serializers

from apps.campaigns.models import Campaign
from .filters import InvalidFilterCondition, parse_conditions
from .models import Segment
from . import services


class CampaignOwnedField(serializers.PrimaryKeyRelatedField):
    def get_queryset(self):
        request = self.context.get('request')
        if request is None:
            return Campaign.objects.none()
        return Campaign.objects.filter(user=request.user)


class SegmentSerializer(serializers.ModelSerializer):
    campaign = CampaignOwnedField()
    user = serializers.PrimaryKeyRelatedField(read_only=True)
    filter_conditions = serializers.ListField(
        child=serializers.DictField(), required=False, default=list
    )

    class Meta:
        model = Segment
        fields = ('id', 'campaign', 'user', 'name', 'filter_conditions', 'created_at')
        read_only_fields = ('created_at',)

    def validate_filter_conditions(self, value):
        try:
            conditions = parse_conditions(value)
        except InvalidFilterCondition as e:
            raise serializers.ValidationError(str(e))
        return [condition.to_dict() for condition in conditions]

    def validate_campaign(self, value):
        if self.instance is not None and value.pk != self.instance.campaign_id:
            raise serializers.ValidationError('A segment cannot move to another campaign')
        return value

    def create(self, validated_data):
        return services.create_segment(
            validated_data['campaign'],
            validated_data['user'],
            validated_data['name'],
            validated_data.get('filter_conditions', []),
        )

    def update(self, instance, validated_data):
        return services.update_segment(
            instance.pk,
            validated_data.get('name', instance.name),
            validated_data.get('filter_conditions', instance.filter_conditions),
        )
