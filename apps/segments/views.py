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
from apps.lists.services import available_fields, lists_by_campaign
from .models import Segment
from .serializers import SegmentSerializer
from .services import delete_segment, evaluate_segment

logger = logging.getLogger(__name__)


class SegmentViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated, IsOwner]
    serializer_class = SegmentSerializer

    def get_queryset(self):
        queryset = Segment.objects.filter(user=self.request.user)
        campaign_id = self.request.query_params.get('campaign')
        if campaign_id is not None:
            if not campaign_id.isdigit():
                return queryset.none()
            queryset = queryset.filter(campaign_id=campaign_id)
        return queryset

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    def destroy(self, request, *args, **kwargs):
        segment = self.get_object()
        if not delete_segment(segment.pk):
            return Response({
                'error': 'Failed to delete segment'
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def records(self, request, pk=None):
        """Records currently matching the segment"""
        segment = self.get_object()
        return Response(RecordSerializer(evaluate_segment(segment), many=True).data)

    @action(detail=True, methods=['get'])
    def export(self, request, pk=None):
        segment = self.get_object()
        records = evaluate_segment(segment)

        lists = lists_by_campaign(segment.campaign_id)
        if lists:
            columns = export_columns(lists[0].mapped_headers)
        else:
            columns = available_fields(records)

        return export_response(
            [record.data for record in records],
            columns,
            header_labels(),
            f"segment-{segment.pk}",
            request.query_params.get('file_format', 'csv'),
        )
