from django.conf import settings
from django.db import models

from .filters import parse_conditions


class Segment(models.Model):
    """Saved filter over a campaign's records, re-evaluated on every read."""

    class Meta:
        app_label = 'segments'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['campaign', 'created_at'], name='segment_campaign_created_idx'),
        ]

    campaign = models.ForeignKey('campaigns.Campaign', on_delete=models.CASCADE, related_name='segments')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='segments')
    name = models.CharField(max_length=200)
    filter_conditions = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name

    def get_conditions(self):
        return parse_conditions(self.filter_conditions)
