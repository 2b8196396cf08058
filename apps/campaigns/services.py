import logging

from django.db import DatabaseError, transaction

from apps.lists.models import Record, UploadedList
from apps.segments.models import Segment
from .models import Campaign

logger = logging.getLogger(__name__)


def get_campaign(campaign_id):
    return Campaign.objects.filter(pk=campaign_id).first()


def delete_campaign(campaign_id) -> bool:
    """Delete a campaign with its segments, lists and records.

    Runs in one transaction, a failing step rolls the earlier ones back.
    """
    try:
        with transaction.atomic():
            segments, _ = Segment.objects.filter(campaign_id=campaign_id).delete()
            records, _ = Record.objects.filter(uploaded_list__campaign_id=campaign_id).delete()
            lists, _ = UploadedList.objects.filter(campaign_id=campaign_id).delete()
            Campaign.objects.filter(pk=campaign_id).delete()
    except DatabaseError as e:
        logger.error(f"Error deleting campaign {campaign_id}: {str(e)}")
        return False

    logger.info(
        f"Deleted campaign {campaign_id}: {segments} segments, {lists} lists, {records} records"
    )
    return True
