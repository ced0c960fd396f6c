# modularsite/app/locations/tests.py
from django.test import TestCase
from django.urls import reverse

from core.models import SiteSetting
from inventory.models import InventoryItem
from .models import Location


class LocationModelTests(TestCase):
    def test_state_is_upper_cased_and_slug_generated(self):
        location = Location.objects.create(city='San Luis Obispo', state='ca')
        self.assertEqual(location.state, 'CA')
        self.assertEqual(location.slug, 'san-luis-obispo')
        self.assertEqual(location.get_absolute_url(), '/locations/ca/san-luis-obispo/')

    def test_same_city_in_two_states(self):
        Location.objects.create(city='Portland', state='OR')
        maine = Location.objects.create(city='Portland', state='ME')
        self.assertEqual(maine.slug, 'portland')

    def test_blank_fields_fall_back_to_site_settings(self):
        site_settings = SiteSetting.load()
        site_settings.default_hours = 'Mo-Sa 07:00-18:00'
        site_settings.contact_phone = '+15595550100'
        site_settings.save()

        location = Location.objects.create(city='Fresno', state='CA')
        self.assertEqual(location.display_hours(site_settings), 'Mo-Sa 07:00-18:00')
        self.assertEqual(str(location.display_phone(site_settings)), '+15595550100')
        self.assertIn('Fresno, CA', location.display_description(site_settings))

        location.description = '<p>Our Central Valley yard.</p>'
        self.assertEqual(location.display_description(site_settings), '<p>Our Central Valley yard.</p>')


class LocationViewTests(TestCase):
    def setUp(self):
        self.fresno = Location.objects.create(city='Fresno', state='CA', latitude='36.737800', longitude='-119.787100')
        self.sacramento = Location.objects.create(city='Sacramento', state='CA')
        self.reno = Location.objects.create(city='Reno', state='NV', is_active=False)

    def test_location_list_groups_by_state(self):
        response = self.client.get(reverse('locations:location_list'))
        self.assertEqual(response.status_code, 200)
        groups = response.context['locations_by_state']
        self.assertEqual([state for state, _ in groups], ['CA'])
        self.assertEqual(groups[0][1], [self.fresno, self.sacramento])

    def test_state_detail(self):
        response = self.client.get(reverse('locations:state_detail', args=['ca']))
        self.assertEqual(response.status_code, 200)
        collection = response.context['structured_data'][0]
        self.assertEqual(collection['@type'], 'CollectionPage')
        self.assertEqual(collection['mainEntity']['numberOfItems'], 2)

    def test_state_without_locations_is_404(self):
        self.assertEqual(self.client.get(reverse('locations:state_detail', args=['nv'])).status_code, 404)

    def test_location_detail(self):
        item = InventoryItem.objects.create(title='Used Office', width_ft=24, length_ft=60, location=self.fresno)
        response = self.client.get(self.fresno.get_absolute_url())

        self.assertEqual(response.status_code, 200)
        business = response.context['structured_data'][0]
        self.assertEqual(business['@type'], 'LocalBusiness')
        self.assertEqual(business['geo']['latitude'], '36.737800')
        self.assertEqual(list(response.context['available_items']), [item])
        self.assertContains(response, 'Modular buildings for rent, sale and lease in Fresno, CA')

    def test_inactive_location_is_404(self):
        self.assertEqual(self.client.get('/locations/nv/reno/').status_code, 404)
