# modularsite/app/seo/tests/test_middleware.py
from django.test import TestCase

from seo.models import Redirect


class RedirectMiddlewareTests(TestCase):
    def test_permanent_redirect(self):
        Redirect.objects.create(source_path='/old-inventory/', destination_path='/inventory/')
        response = self.client.get('/old-inventory/')

        self.assertEqual(response.status_code, 301)
        self.assertEqual(response['Location'], '/inventory/')
        self.assertEqual(Redirect.objects.get().hit_count, 1)

    def test_temporary_redirect(self):
        Redirect.objects.create(
            source_path='/sale/', destination_path='https://example.com/promo/',
            redirect_type=Redirect.RedirectType.TEMPORARY,
        )
        response = self.client.get('/sale/')
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], 'https://example.com/promo/')

    def test_inactive_redirect_is_ignored(self):
        Redirect.objects.create(source_path='/gone/', destination_path='/inventory/', is_active=False)
        self.assertEqual(self.client.get('/gone/').status_code, 404)
        self.assertEqual(Redirect.objects.get().hit_count, 0)

    def test_admin_paths_are_never_redirected(self):
        Redirect.objects.create(source_path='/admin/', destination_path='/')
        response = self.client.get('/admin/')
        self.assertEqual(response.status_code, 302)
        self.assertIn('/admin/login/', response['Location'])
