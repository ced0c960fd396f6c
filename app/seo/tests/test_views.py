# modularsite/app/seo/tests/test_views.py
import json

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse

from seo.models import PageMetadata, Redirect, SEOSettings

AJAX = {'HTTP_X_REQUESTED_WITH': 'XMLHttpRequest'}

TITLE = "Modular Office Rentals and Sales | Fresno, CA"
DESCRIPTION = ("Portable classrooms and modular offices delivered across California. " * 2).strip()


class StaffViewTestCase(TestCase):
    def setUp(self):
        User = get_user_model()
        self.staff = User.objects.create_user('staff', 'staff@example.com', 'pass', is_staff=True)
        self.client.force_login(self.staff)


class ValidateApiTests(StaffViewTestCase):
    def test_json_body_returns_report(self):
        response = self.client.post(
            reverse('seo:api_validate_seo'),
            data=json.dumps({'seo_title': '', 'seo_description': 'A short site.', 'seo_keywords': []}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        report = response.json()
        self.assertFalse(report['is_valid'])
        self.assertEqual(report['score'], 60)
        self.assertEqual(report['issues'][0]['field'], 'seo_title')

    def test_bad_json_ld_is_a_finding_not_an_error(self):
        response = self.client.post(reverse('seo:api_validate_seo'), {'custom_json_ld': '{nope'})
        self.assertEqual(response.status_code, 200)
        fields = [issue['field'] for issue in response.json()['issues']]
        self.assertIn('custom_json_ld', fields)

    def test_deeply_nested_json_ld_is_a_finding_not_an_error(self):
        response = self.client.post(
            reverse('seo:api_validate_seo'),
            data=json.dumps({'seo_title': TITLE, 'seo_description': DESCRIPTION, 'custom_json_ld': '[' * 100000}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([issue['field'] for issue in response.json()['issues']], ['custom_json_ld'])

    def test_deeply_nested_body_is_rejected(self):
        body = '{"a": ' * 100000 + '1' + '}' * 100000
        response = self.client.post(reverse('seo:api_validate_seo'), data=body, content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_unparseable_body_is_rejected(self):
        response = self.client.post(reverse('seo:api_validate_seo'), data='{oops', content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_non_object_body_is_rejected(self):
        response = self.client.post(reverse('seo:api_validate_seo'), data='[1, 2]', content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_requires_staff(self):
        self.client.logout()
        response = self.client.post(reverse('seo:api_validate_seo'), {})
        self.assertEqual(response.status_code, 302)


class ManageSeoTests(StaffViewTestCase):
    def test_create_rejects_critical_issues(self):
        response = self.client.post(
            reverse('seo:manage_seo_create'),
            {'page_name': 'Home', 'page_path': '/', 'page_type': 'homepage', 'seo_title': '',
             'seo_description': DESCRIPTION, 'structured_data_type': 'WebPage', 'is_active': 'on'},
            **AJAX
        )
        self.assertEqual(response.status_code, 400)
        payload = response.json()
        self.assertIn('seo_title', payload['errors'])
        self.assertFalse(payload['report']['is_valid'])
        self.assertFalse(PageMetadata.objects.exists())

    def test_create_saves_when_valid(self):
        response = self.client.post(
            reverse('seo:manage_seo_create'),
            {'page_name': 'Home', 'page_path': '/', 'page_type': 'homepage', 'seo_title': TITLE,
             'seo_description': DESCRIPTION, 'seo_keywords': 'modular, portable, trailers',
             'structured_data_type': 'WebPage', 'is_active': 'on', 'robots_index': 'on', 'robots_follow': 'on'},
            **AJAX
        )
        self.assertEqual(response.status_code, 200)
        metadata = PageMetadata.objects.get(page_path='/')
        self.assertEqual(metadata.seo_keywords, ['modular', 'portable', 'trailers'])
        self.assertEqual(metadata.optimization_score, response.json()['report']['score'])

    def test_create_rejects_relative_path(self):
        response = self.client.post(
            reverse('seo:manage_seo_create'),
            {'page_name': 'About', 'page_path': 'about/', 'page_type': 'company', 'seo_title': TITLE,
             'seo_description': DESCRIPTION, 'structured_data_type': 'WebPage'},
            **AJAX
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('page_path', response.json()['errors'])

    def test_edit_get_returns_data_and_report(self):
        metadata = PageMetadata.objects.create(page_name='About', page_path='/about/', seo_title=TITLE)
        response = self.client.get(reverse('seo:manage_seo_edit', args=[metadata.id]), **AJAX)
        payload = response.json()
        self.assertEqual(payload['page_path'], '/about/')
        self.assertIn('seo_description', [i['field'] for i in payload['report']['issues']])

    def test_edit_page_renders(self):
        metadata = PageMetadata.objects.create(page_name='About', page_path='/about/', seo_title=TITLE)
        response = self.client.get(reverse('seo:manage_seo_edit', args=[metadata.id]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Optimization score')

    def test_delete(self):
        metadata = PageMetadata.objects.create(page_name='About', page_path='/about/')
        response = self.client.post(reverse('seo:manage_seo_delete', args=[metadata.id]), **AJAX)
        self.assertEqual(response.json(), {'success': True})
        self.assertFalse(PageMetadata.objects.exists())

    def test_api_list_filters_invalid_pages(self):
        PageMetadata.objects.create(page_name='Broken', page_path='/broken/')
        PageMetadata.objects.create(page_name='Good', page_path='/good/', seo_title=TITLE, seo_description=DESCRIPTION)

        response = self.client.get(reverse('seo:api_manage_seo'), {'invalid': '1'}, **AJAX)
        items = response.json()['items']
        self.assertEqual([item['page_path'] for item in items], ['/broken/'])

        response = self.client.get(reverse('seo:api_manage_seo'), {'search': 'good'}, **AJAX)
        self.assertEqual(response.json()['pagination']['total_pages'], 1)
        self.assertEqual(response.json()['items'][0]['is_valid'], True)


class RedirectApiTests(StaffViewTestCase):
    def test_create_redirect(self):
        response = self.client.post(
            reverse('seo:api_create_redirect'),
            {'source_path': '/old/', 'destination_path': '/new/', 'redirect_type': 301, 'is_active': 'on'},
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(Redirect.objects.filter(source_path='/old/').exists())

    def test_self_redirect_is_rejected(self):
        response = self.client.post(
            reverse('seo:api_create_redirect'),
            {'source_path': '/same/', 'destination_path': '/same/', 'redirect_type': 301},
        )
        self.assertEqual(response.status_code, 400)

    def test_loop_is_rejected(self):
        Redirect.objects.create(source_path='/b/', destination_path='/a/')
        response = self.client.post(
            reverse('seo:api_create_redirect'),
            {'source_path': '/a/', 'destination_path': '/b/', 'redirect_type': 301, 'is_active': 'on'},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('loop', str(response.json()['errors']))

    def test_delete_redirect(self):
        redirect = Redirect.objects.create(source_path='/b/', destination_path='/a/')
        self.client.post(reverse('seo:manage_redirect_delete', args=[redirect.id]))
        self.assertFalse(Redirect.objects.exists())


@override_settings(SITE_URL='https://example.com')
class RobotsTxtTests(StaffViewTestCase):
    def test_default_robots_txt(self):
        response = self.client.get('/robots.txt')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/plain; charset=utf-8')
        self.assertEqual(response['Cache-Control'], 'public, max-age=3600')
        self.assertContains(response, 'Disallow: /admin/')
        self.assertContains(response, 'Sitemap: https://example.com/sitemap.xml')

    def test_stored_robots_txt_is_served(self):
        seo_settings = SEOSettings.load()
        seo_settings.robots_txt = 'User-agent: *\nDisallow: /\n'
        seo_settings.save()
        self.assertEqual(self.client.get('/robots.txt').content.decode(), 'User-agent: *\nDisallow: /\n')

    def test_manage_robots_validates(self):
        response = self.client.post(reverse('seo:manage_robots'), {'content': 'Disallow /x/'}, **AJAX)
        self.assertEqual(response.status_code, 400)
        self.assertIn('Line 1', response.json()['errors']['content'][0])
        self.assertEqual(SEOSettings.load().robots_txt, '')

    def test_manage_robots_saves(self):
        response = self.client.post(reverse('seo:manage_robots'), {'content': 'User-agent: *\nDisallow: /tmp/'}, **AJAX)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(SEOSettings.load().robots_txt, 'User-agent: *\nDisallow: /tmp/\n')

    def test_blank_content_restores_generated_default(self):
        seo_settings = SEOSettings.load()
        seo_settings.robots_txt = 'User-agent: *\nDisallow: /\n'
        seo_settings.save()

        response = self.client.post(reverse('seo:manage_robots'), {'content': '   '}, **AJAX)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['is_default'])
        self.assertEqual(SEOSettings.load().robots_txt, '')
        self.assertContains(self.client.get('/robots.txt'), 'User-agent: Googlebot')

    def test_preview(self):
        payload = self.client.get(reverse('seo:api_robots_preview')).json()
        self.assertEqual(payload['errors'], [])
        self.assertIn('User-agent: Googlebot', payload['content'])


class SitemapTests(TestCase):
    def test_only_active_indexable_pages_are_listed(self):
        PageMetadata.objects.create(page_name='Home', page_path='/', page_type='homepage')
        PageMetadata.objects.create(page_name='Hidden', page_path='/hidden/', robots_index=False)
        PageMetadata.objects.create(page_name='Off', page_path='/off/', is_active=False)

        response = self.client.get('/sitemap.xml')
        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn('<priority>1.0</priority>', content)
        self.assertNotIn('/hidden/', content)
        self.assertNotIn('/off/', content)


class SeoHeadTagTests(TestCase):
    def test_page_metadata_is_rendered_in_head(self):
        PageMetadata.objects.create(
            page_name='Inventory', page_path='/inventory/', page_type='inventory',
            seo_title=TITLE, seo_description=DESCRIPTION, og_image='https://example.com/og.jpg',
            robots_follow=False,
        )
        response = self.client.get('/inventory/')

        self.assertContains(response, f'<title>{TITLE}</title>', html=False)
        self.assertContains(response, '<meta name="robots" content="index, nofollow">', html=False)
        self.assertContains(response, '<meta property="og:image" content="https://example.com/og.jpg">', html=False)
        self.assertContains(response, '"@type": "BreadcrumbList"', html=False)

    def test_custom_json_ld_replaces_generated_blocks(self):
        PageMetadata.objects.create(
            page_name='Home', page_path='/', seo_title=TITLE,
            custom_json_ld='{"@context": "https://schema.org", "@type": "Event", "name": "Open <house>"}',
        )
        response = self.client.get('/')
        content = response.content.decode()
        self.assertIn('"@type": "Event"', content)
        self.assertIn('Open \\u003Chouse\\u003E', content)
        self.assertNotIn('"@type": "WebSite"', content)
