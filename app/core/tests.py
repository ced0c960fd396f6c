# modularsite/app/core/tests.py
from django.contrib.auth import get_user_model
from django.template import Context, Template
from django.test import TestCase, override_settings
from django.urls import reverse

from core.models import SiteSetting, DEFAULT_LOCATION_TEMPLATE
from seo.models import PageMetadata


class SiteSettingTests(TestCase):
    def test_load_is_a_singleton(self):
        self.assertEqual(SiteSetting.load().pk, SiteSetting.load().pk)
        SiteSetting(site_name='Another').save()
        self.assertEqual(SiteSetting.objects.count(), 1)
        self.assertEqual(SiteSetting.load().site_name, 'Another')

    @override_settings(SITE_URL='https://fallback.example.com/')
    def test_base_url(self):
        site_settings = SiteSetting.load()
        self.assertEqual(site_settings.base_url, 'https://fallback.example.com')
        site_settings.site_url = 'https://www.example.com/'
        self.assertEqual(site_settings.base_url, 'https://www.example.com')

    def test_location_description_template(self):
        site_settings = SiteSetting(location_description_template="Rentals in {city}, {state}. {Not a placeholder}")
        self.assertEqual(
            site_settings.render_location_description('Fresno', 'CA'),
            "Rentals in Fresno, CA. {Not a placeholder}"
        )
        self.assertIn('{city}', DEFAULT_LOCATION_TEMPLATE)

    def test_organization_data(self):
        site_settings = SiteSetting(
            site_name='Acme Modular', site_url='https://acme.example.com',
            contact_phone='+15595550100', facebook_url='https://facebook.com/acme',
        )
        data = site_settings.organization_data()
        self.assertEqual(data['name'], 'Acme Modular')
        self.assertEqual(data['telephone'], '+15595550100')
        self.assertEqual(data['social_links'], ['https://facebook.com/acme'])


class DashboardTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'pass', is_staff=True)
        self.customer = User.objects.create_user('customer', 'customer@example.com', 'pass')

    def test_non_staff_are_sent_home(self):
        self.client.force_login(self.customer)
        response = self.client.get(reverse('core:manage_dashboard'))
        self.assertRedirects(response, reverse('core:home'))

    def test_anonymous_users_must_log_in(self):
        response = self.client.get(reverse('core:manage_dashboard'))
        self.assertEqual(response.status_code, 302)
        self.assertIn('/admin/login/', response['Location'])

    def test_summary_counts_failing_pages(self):
        PageMetadata.objects.create(page_name='Broken', page_path='/broken/')
        self.client.force_login(self.staff)

        response = self.client.get(reverse('core:manage_dashboard'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['page_count'], 1)
        self.assertEqual(response.context['failing_count'], 1)
        self.assertContains(response, '/broken/')


class HomeTests(TestCase):
    def test_home_renders_with_site_defaults(self):
        response = self.client.get(reverse('core:home'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '<title>Modular Building Rentals</title>', html=False)
        self.assertContains(response, '"@type": "WebSite"', html=False)


class FormTagsTests(TestCase):
    def test_add_class_merges_classes(self):
        from seo.forms import RobotsTxtForm
        rendered = Template('{% load form_tags %}{{ form.content|add_class:"mt-1 font-mono" }}').render(
            Context({'form': RobotsTxtForm()})
        )
        self.assertIn('mt-1', rendered)
        self.assertEqual(rendered.count('font-mono'), 1)

    def test_score_color(self):
        rendered = Template('{% load form_tags %}{{ 90|score_color }} {{ 10|score_color }}').render(Context())
        self.assertEqual(rendered, 'text-green-600 text-red-600')
