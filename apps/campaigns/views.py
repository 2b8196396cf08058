import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.authentication.permissions import IsOwner
from apps.lists.catalog import header_labels
from apps.lists.exports import export_response
from apps.lists.mapping import export_columns
from apps.lists.serializers import RecordSerializer
from apps.lists.services import available_fields, list_by_campaign, lists_by_campaign
from .models import Campaign
from .serializers import CampaignSerializer
from .services import delete_campaign

logger = logging.getLogger(__name__)


class CampaignViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated, IsOwner]
    serializer_class = CampaignSerializer

    def get_queryset(self):
        return Campaign.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    def destroy(self, request, *args, **kwargs):
        campaign = self.get_object()
        if not delete_campaign(campaign.pk):
            return Response({
                'error': 'Failed to delete campaign'
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def records(self, request, pk=None):
        campaign = self.get_object()
        records = list_by_campaign(campaign.pk)
        return Response(RecordSerializer(records, many=True).data)

    @action(detail=True, methods=['get'])
    def fields(self, request, pk=None):
        """Data keys a segment condition can filter on"""
        campaign = self.get_object()
        labels = header_labels()
        return Response([
            {'key': key, 'label': labels.get(key, key)}
            for key in available_fields(list_by_campaign(campaign.pk))
        ])

    @action(detail=True, methods=['get'])
    def download(self, request, pk=None):
        """Master list export using the latest list's mapping"""
        campaign = self.get_object()

        records = list_by_campaign(campaign.pk)
        if not records:
            return Response({
                'error': 'No records found in this campaign'
            }, status=status.HTTP_404_NOT_FOUND)

        lists = lists_by_campaign(campaign.pk)
        if not lists:
            return Response({
                'error': 'No lists found in this campaign'
            }, status=status.HTTP_404_NOT_FOUND)

        columns = export_columns(lists[0].mapped_headers)
        return export_response(
            [record.data for record in records],
            columns,
            header_labels(),
            f"campaign-{campaign.pk}-master",
            request.query_params.get('file_format', 'csv'),
        )
