import csv
import io

from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import User
from apps.campaigns.models import Campaign
from apps.lists.models import SystemHeader
from apps.segments.models import Segment


class SegmentAPITest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='owner', email='owner@test.com', password='testpass123'
        )
        self.other_user = User.objects.create_user(
            username='other', email='other@test.com', password='testpass123'
        )
        self.client.force_authenticate(user=self.user)
        self.campaign = Campaign.objects.create(user=self.user, name='Spring')
        self.email_id = str(SystemHeader.objects.get(name='Email').id)
        self.city_id = str(SystemHeader.objects.get(name='City').id)

        self.client.post(reverse('campaign_lists', args=[self.campaign.pk]), {
            'file': SimpleUploadedFile(
                'contacts.csv',
                b"Email,City\na@x.com,Boston\nb@y.com,Austin\nc@x.com,boston\n",
                content_type='text/csv',
            ),
        }, format='multipart')

    def create_segment(self, conditions, name='Boston'):
        return self.client.post(reverse('segment-list'), {
            'campaign': self.campaign.pk,
            'name': name,
            'filter_conditions': conditions,
        }, format='json')

    def test_create_segment(self):
        conditions = [{'field': self.city_id, 'operator': 'equals', 'value': 'Boston'}]
        response = self.create_segment(conditions)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['filter_conditions'], conditions)
        self.assertEqual(response.data['user'], self.user.pk)
        segment = Segment.objects.get()
        self.assertEqual(segment.campaign, self.campaign)

    def test_unknown_operator_rejected(self):
        response = self.create_segment([{'field': self.city_id, 'operator': 'gt', 'value': '1'}])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('filter_conditions', response.data)
        self.assertFalse(Segment.objects.exists())

    def test_other_users_campaign_rejected(self):
        campaign = Campaign.objects.create(user=self.other_user, name='Not mine')
        response = self.client.post(reverse('segment-list'), {
            'campaign': campaign.pk, 'name': 'Sneaky', 'filter_conditions': [],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('campaign', response.data)

    def test_list_filtered_by_campaign(self):
        other = Campaign.objects.create(user=self.user, name='Autumn')
        self.create_segment([], name='Everyone')
        Segment.objects.create(campaign=other, user=self.user, name='Elsewhere')

        response = self.client.get(reverse('segment-list'), {'campaign': self.campaign.pk})
        self.assertEqual([item['name'] for item in response.data], ['Everyone'])

        response = self.client.get(reverse('segment-list'), {'campaign': 'abc'})
        self.assertEqual(response.data, [])

    def test_matching_records(self):
        segment_id = self.create_segment(
            [{'field': self.city_id, 'operator': 'equals', 'value': 'Boston'}]
        ).data['id']
        response = self.client.get(reverse('segment-records', args=[segment_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['data'][self.email_id] for item in response.data], ['a@x.com'])

    def test_update_replaces_conditions(self):
        segment_id = self.create_segment(
            [{'field': self.city_id, 'operator': 'equals', 'value': 'Boston'}]
        ).data['id']
        response = self.client.put(reverse('segment-detail', args=[segment_id]), {
            'campaign': self.campaign.pk,
            'name': 'Any Boston',
            'filter_conditions': [{'field': self.city_id, 'operator': 'contains', 'value': 'BOSTON'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get(reverse('segment-records', args=[segment_id]))
        self.assertEqual(
            [item['data'][self.email_id] for item in response.data], ['a@x.com', 'c@x.com']
        )

    def test_missing_segment(self):
        response = self.client.get(reverse('segment-records', args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_export_csv(self):
        segment_id = self.create_segment(
            [{'field': self.email_id, 'operator': 'endsWith', 'value': '@X.COM'}]
        ).data['id']
        response = self.client.get(reverse('segment-export', args=[segment_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn(f'segment-{segment_id}.csv', response['Content-Disposition'])

        rows = list(csv.reader(io.StringIO(response.content.decode('utf-8'))))
        self.assertEqual(rows, [['Email', 'City'], ['a@x.com', 'Boston'], ['c@x.com', 'boston']])

    def test_delete_segment(self):
        segment_id = self.create_segment([]).data['id']
        response = self.client.delete(reverse('segment-detail', args=[segment_id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Segment.objects.exists())
