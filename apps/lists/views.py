import logging

from django.conf import settings
from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.authentication.permissions import IsOwner
from apps.campaigns.models import Campaign
from .catalog import get_system_headers
from .mapping import suggest_mapping, validate_mapping
from .models import UploadedList
from .parsers import FileParseError, UnsupportedFileFormat, parse_upload
from .serializers import (
    ListUploadSerializer,
    MappingValidationSerializer,
    RecordSerializer,
    SystemHeaderSerializer,
    UploadedListSerializer,
)
from .services import commit_upload, delete_by_list, list_by_list, lists_by_campaign

logger = logging.getLogger(__name__)


def _read_upload(request):
    """Parse the uploaded file, or return an error Response."""
    if 'file' not in request.FILES:
        return None, None, Response({
            'error': 'No file uploaded'
        }, status=status.HTTP_400_BAD_REQUEST)

    serializer = ListUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    upload = serializer.validated_data['file']

    try:
        parsed = parse_upload(upload.name, upload.read())
    except UnsupportedFileFormat:
        return None, None, Response({
            'error': 'Unsupported file format'
        }, status=status.HTTP_400_BAD_REQUEST)
    except FileParseError as e:
        logger.warning(f"Could not parse upload {upload.name}: {str(e)}")
        return None, None, Response({
            'error': 'Could not read file'
        }, status=status.HTTP_400_BAD_REQUEST)

    return serializer.validated_data, parsed, None


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def system_headers(request):
    return Response(SystemHeaderSerializer(get_system_headers(), many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def validate_column_mapping(request):
    """Required-field check for a mapping in progress"""
    serializer = MappingValidationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    validation = validate_mapping(
        serializer.validated_data['mapping'],
        get_system_headers(),
        serializer.validated_data.get('headers'),
    )
    return Response({
        'valid': validation.valid,
        'missing_fields': validation.missing_fields,
        'unknown_headers': validation.unknown_headers,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def preview_list(request, campaign_id):
    """Parse an upload and suggest a mapping without storing anything"""
    get_object_or_404(Campaign, pk=campaign_id, user=request.user)

    validated, parsed, error = _read_upload(request)
    if error is not None:
        return error

    catalog = get_system_headers()
    mapping = suggest_mapping(parsed.headers, catalog, validated.get('mapping'))
    validation = validate_mapping(mapping, catalog, parsed.headers)

    return Response({
        'filename': validated['file'].name,
        'headers': parsed.headers,
        'preview': parsed.preview(settings.LIST_PREVIEW_ROWS),
        'row_count': len(parsed.rows),
        'mapping': mapping,
        'missing_fields': validation.missing_fields,
        'unknown_headers': validation.unknown_headers,
    })


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def campaign_lists(request, campaign_id):
    campaign = get_object_or_404(Campaign, pk=campaign_id, user=request.user)

    if request.method == 'GET':
        return Response(UploadedListSerializer(lists_by_campaign(campaign.pk), many=True).data)

    validated, parsed, error = _read_upload(request)
    if error is not None:
        return error

    catalog = get_system_headers()
    mapping = suggest_mapping(parsed.headers, catalog, validated.get('mapping'))
    result = commit_upload(campaign, request.user, validated['file'].name, parsed, mapping, catalog)

    if result.unknown_headers:
        return Response({
            'error': 'Mapping references columns not in the file',
            'unknown_headers': result.unknown_headers,
            'missing_fields': result.missing_fields,
        }, status=status.HTTP_400_BAD_REQUEST)

    if not result.ok:
        return Response({
            'error': 'Missing required fields',
            'missing_fields': result.missing_fields,
        }, status=status.HTTP_400_BAD_REQUEST)

    return Response(UploadedListSerializer(result.uploaded_list).data, status=status.HTTP_201_CREATED)


class UploadedListViewSet(mixins.RetrieveModelMixin,
                          mixins.DestroyModelMixin,
                          viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated, IsOwner]
    serializer_class = UploadedListSerializer

    def get_queryset(self):
        return UploadedList.objects.filter(user=self.request.user)

    def destroy(self, request, *args, **kwargs):
        uploaded_list = self.get_object()
        if not delete_by_list(uploaded_list.pk):
            return Response({
                'error': 'Failed to delete list'
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def records(self, request, pk=None):
        uploaded_list = self.get_object()
        return Response(RecordSerializer(list_by_list(uploaded_list.pk), many=True).data)
