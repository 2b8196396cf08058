import uuid

from django.conf import settings
from django.db import models


class SystemHeader(models.Model):
    """Canonical field that uploaded columns are mapped onto."""

    class Meta:
        app_label = 'lists'
        ordering = ['name']

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    is_required = models.BooleanField(default=False)

    def __str__(self):
        return self.name


class UploadedList(models.Model):
    class Meta:
        app_label = 'lists'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['campaign', 'created_at'], name='list_campaign_created_idx'),
        ]

    campaign = models.ForeignKey('campaigns.Campaign', on_delete=models.CASCADE, related_name='lists')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='lists')
    filename = models.CharField(max_length=255)
    original_headers = models.JSONField(default=list)
    mapped_headers = models.JSONField(default=dict)  # file header -> SystemHeader id
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.filename


class Record(models.Model):
    class Meta:
        app_label = 'lists'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['campaign', 'created_at'], name='record_campaign_created_idx'),
        ]

    uploaded_list = models.ForeignKey(UploadedList, on_delete=models.CASCADE, related_name='records')
    campaign = models.ForeignKey('campaigns.Campaign', on_delete=models.CASCADE, related_name='records')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='records')
    data = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)
