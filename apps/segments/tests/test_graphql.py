from types import SimpleNamespace

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from apps.authentication.models import User
from apps.campaigns.models import Campaign
from apps.lists.models import Record, SystemHeader, UploadedList
from apps.segments.models import Segment
from core.graphql.schema import schema


class GraphQLTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='owner', email='owner@test.com', password='testpass123'
        )
        self.campaign = Campaign.objects.create(user=self.user, name='Spring')
        self.city_id = str(SystemHeader.objects.get(name='City').id)
        uploaded_list = UploadedList.objects.create(
            campaign=self.campaign, user=self.user, filename='contacts.csv',
            original_headers=['City'], mapped_headers={'City': self.city_id},
        )
        for city in ('Boston', 'Austin'):
            Record.objects.create(
                uploaded_list=uploaded_list, campaign=self.campaign, user=self.user,
                data={self.city_id: city},
            )

    def execute(self, query, user=None, variables=None):
        context = SimpleNamespace(request=SimpleNamespace(user=user or self.user))
        return schema.execute_sync(query, variable_values=variables, context_value=context)

    def test_campaigns_are_scoped_to_user(self):
        other = User.objects.create_user(
            username='other', email='other@test.com', password='testpass123'
        )
        Campaign.objects.create(user=other, name='Not mine')

        result = self.execute('{ campaigns { name } }')
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['campaigns'], [{'name': 'Spring'}])

    def test_anonymous_user_sees_nothing(self):
        result = self.execute('{ campaigns { name } }', user=AnonymousUser())
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['campaigns'], [])

    def test_system_headers(self):
        result = self.execute('{ systemHeaders { name isRequired } }')
        self.assertIsNone(result.errors)
        required = [h['name'] for h in result.data['systemHeaders'] if h['isRequired']]
        self.assertEqual(required, ['Email'])

    def test_create_segment_and_read_records(self):
        mutation = """
            mutation Create($input: SegmentInput!) {
                createSegment(input: $input) { id name }
            }
        """
        result = self.execute(mutation, variables={'input': {
            'campaignId': str(self.campaign.pk),
            'name': 'Boston',
            'filterConditions': [{'field': self.city_id, 'operator': 'equals', 'value': 'Boston'}],
        }})
        self.assertIsNone(result.errors)
        segment_id = result.data['createSegment']['id']

        result = self.execute(
            'query Records($id: ID!) { segmentRecords(segmentId: $id) { data } }',
            variables={'id': segment_id},
        )
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['segmentRecords'], [{'data': {self.city_id: 'Boston'}}])

    def test_create_segment_with_bad_operator(self):
        mutation = """
            mutation Create($input: SegmentInput!) {
                createSegment(input: $input) { id }
            }
        """
        result = self.execute(mutation, variables={'input': {
            'campaignId': str(self.campaign.pk),
            'name': 'Broken',
            'filterConditions': [{'field': self.city_id, 'operator': 'between', 'value': 'x'}],
        }})
        self.assertIsNotNone(result.errors)
        self.assertFalse(Segment.objects.exists())

    def test_create_campaign(self):
        result = self.execute('mutation { createCampaign(input: {name: " Autumn "}) { name } }')
        self.assertIsNone(result.errors)
        self.assertEqual(result.data['createCampaign'], {'name': 'Autumn'})
        self.assertTrue(Campaign.objects.filter(user=self.user, name='Autumn').exists())

    def test_non_numeric_ids_return_empty_results(self):
        result = self.execute('{ segments(campaignId: "abc") { id } segmentRecords(segmentId: "abc") { id } }')
        self.assertIsNone(result.errors)
        self.assertEqual(result.data, {'segments': [], 'segmentRecords': []})

        result = self.execute('{ campaign(id: "abc") { name } }')
        self.assertIsNone(result.errors)
        self.assertIsNone(result.data['campaign'])
