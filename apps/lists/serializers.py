import json

from django.conf import settings
from rest_framework import serializers
from rest_framework.fields import empty
from rest_framework.utils import html
from .models import Record, SystemHeader, UploadedList


class SystemHeaderSerializer(serializers.ModelSerializer):
    class Meta:
        model = SystemHeader
        fields = ('id', 'name', 'is_required')


class UploadedListSerializer(serializers.ModelSerializer):
    record_count = serializers.SerializerMethodField()

    class Meta:
        model = UploadedList
        fields = ('id', 'campaign', 'user', 'filename', 'original_headers', 'mapped_headers',
                  'created_at', 'record_count')
        read_only_fields = fields

    def get_record_count(self, obj):
        return obj.records.count()


class RecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = Record
        fields = ('id', 'uploaded_list', 'campaign', 'user', 'data', 'created_at')
        read_only_fields = fields


class ColumnMappingField(serializers.DictField):
    """file header -> system header id; blank targets mean 'do not import'"""

    child = serializers.CharField(allow_blank=True, allow_null=True)

    def get_value(self, dictionary):
        if html.is_html_input(dictionary):
            return dictionary.get(self.field_name, empty)
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        if isinstance(data, str):
            # Multipart forms send the mapping as a JSON string
            try:
                data = json.loads(data)
            except ValueError:
                raise serializers.ValidationError('Mapping must be a JSON object')
        mapping = super().to_internal_value(data)
        return {header: target for header, target in mapping.items() if target}


class MappingValidationSerializer(serializers.Serializer):
    mapping = ColumnMappingField()
    headers = serializers.ListField(child=serializers.CharField(), required=False)


class ListUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    mapping = ColumnMappingField(required=False)

    def validate_file(self, value):
        if value.size > settings.MAX_UPLOAD_SIZE:
            raise serializers.ValidationError('File is too large')
        return value
