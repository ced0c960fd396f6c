# modularsite/app/inventory/tests.py
import json
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from locations.models import Location
from .forms import InventoryFilterForm
from .models import InventoryItem


class InventoryTestCase(TestCase):
    def setUp(self):
        self.fresno = Location.objects.create(city='Fresno', state='CA')
        self.reno = Location.objects.create(city='Reno', state='NV')
        self.office = InventoryItem.objects.create(
            title='Used Office', width_ft=24, length_ft=60, monthly_rate=Decimal('950.00'),
            building_type=InventoryItem.BuildingType.OFFICE, location=self.fresno,
            features=['HVAC', 'ADA ramp'],
        )
        self.classroom = InventoryItem.objects.create(
            title='Portable Classroom', width_ft=24, length_ft=40, monthly_rate=Decimal('700.00'),
            building_type=InventoryItem.BuildingType.CLASSROOM, condition=InventoryItem.Condition.NEW,
            location=self.reno,
        )
        self.storage = InventoryItem.objects.create(
            title='Storage Container', width_ft=8, length_ft=20,
            building_type=InventoryItem.BuildingType.STORAGE, status=InventoryItem.Status.RENTED,
        )


class InventoryItemModelTests(InventoryTestCase):
    def test_size(self):
        self.assertEqual(self.office.square_feet, 1440)
        self.assertEqual(self.office.size_label, "24' x 60'")

    def test_slugs_are_unique(self):
        twin = InventoryItem.objects.create(title='Used Office', width_ft=24, length_ft=60)
        self.assertEqual(twin.slug, 'used-office-24x60-1')

    def test_structured_data(self):
        from core.models import SiteSetting
        data = self.storage.structured_data(SiteSetting.load())
        self.assertEqual(data['availability'], 'https://schema.org/OutOfStock')
        self.assertIsNone(data['price'])
        self.assertTrue(data['url'].endswith('/inventory/storage-container-8x20/'))


class InventoryFilterFormTests(InventoryTestCase):
    def filtered(self, **params):
        form = InventoryFilterForm(params)
        self.assertTrue(form.is_valid(), form.errors)
        return list(form.filter_queryset(InventoryItem.objects.all()))

    def test_filters(self):
        self.assertEqual(self.filtered(building_type='CLASSROOM'), [self.classroom])
        self.assertEqual(self.filtered(condition='NEW'), [self.classroom])
        self.assertEqual(self.filtered(status='RENTED'), [self.storage])
        self.assertEqual(self.filtered(location=self.fresno.pk), [self.office])
        self.assertEqual(self.filtered(q='container'), [self.storage])

    def test_sorting(self):
        self.assertEqual(self.filtered(sort='price_asc'), [self.classroom, self.office, self.storage])
        self.assertEqual(self.filtered(sort='price_desc'), [self.office, self.classroom, self.storage])
        self.assertEqual(self.filtered(sort='size_desc'), [self.office, self.classroom, self.storage])

    def test_unknown_sort_is_invalid(self):
        self.assertFalse(InventoryFilterForm({'sort': 'random'}).is_valid())


class InventoryViewTests(InventoryTestCase):
    def test_list_shows_active_items(self):
        self.storage.is_active = False
        self.storage.save()

        response = self.client.get(reverse('inventory:inventory_list'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Used Office')
        self.assertNotIn(self.storage, list(response.context['items']))
        self.assertNotContains(response, self.storage.get_absolute_url())

    def test_list_filters_from_query_string(self):
        response = self.client.get(reverse('inventory:inventory_list'), {'building_type': 'OFFICE'})
        self.assertEqual(list(response.context['items']), [self.office])

    def test_detail_has_product_structured_data(self):
        response = self.client.get(self.office.get_absolute_url())
        self.assertEqual(response.status_code, 200)
        product = response.context['structured_data'][0]
        self.assertEqual(product['@type'], 'Product')
        self.assertEqual(product['offers']['price'], '950.00')
        self.assertContains(response, '"@type": "Product"', html=False)

    def test_inactive_detail_is_404(self):
        self.office.is_active = False
        self.office.save()
        self.assertEqual(self.client.get(self.office.get_absolute_url()).status_code, 404)


class InventoryStaffViewTests(InventoryTestCase):
    def setUp(self):
        super().setUp()
        User = get_user_model()
        self.client.force_login(User.objects.create_user('staff', 'staff@example.com', 'pass', is_staff=True))

    def test_api_requires_ajax(self):
        response = self.client.get(reverse('inventory:api_manage_inventory'))
        self.assertEqual(response.status_code, 400)

    def test_api_lists_items(self):
        response = self.client.get(
            reverse('inventory:api_manage_inventory'), {'status': 'AVAILABLE'},
            HTTP_X_REQUESTED_WITH='XMLHttpRequest'
        )
        payload = json.loads(response.content)
        self.assertEqual({item['slug'] for item in payload['items']}, {self.office.slug, self.classroom.slug})
        self.assertEqual(payload['pagination']['current_page'], 1)

    def test_export_csv(self):
        response = self.client.get(reverse('inventory:export_inventory_csv'))
        self.assertEqual(response['Content-Type'], 'text/csv')
        content = response.content.decode()
        self.assertIn('used-office-24x60', content)
        self.assertIn('Fresno, CA', content)
