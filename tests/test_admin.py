import unittest

from agriconnect import db
from agriconnect.catalog import CATEGORIES, PROVINCES
from agriconnect.models import User
from support import ApiTestCase


class AdminTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.farmer = self.register(user_type='farmer')
        self.buyer = self.register(user_type='buyer')

    def make_admin(self):
        with self.app.app_context():
            admin_user = User(
                username='admin', email='admin@example.cd',
                first_name='Admin', last_name='RDC', user_type='admin',
            )
            admin_user.set_password('secret123')
            db.session.add(admin_user)
            db.session.commit()
            return admin_user.id

    def test_users_listed_newest_first_without_password(self):
        response = self.client.get('/api/admin/users')
        self.assertEqual(response.status_code, 200)
        users = response.get_json()
        self.assertEqual([user['id'] for user in users], [self.buyer['id'], self.farmer['id']])
        for user in users:
            self.assertNotIn('password', user)

    def test_admin_products_include_pending_active_products(self):
        pending = self.create_product(self.farmer['id'], approve=False)
        approved = self.create_product(self.farmer['id'])
        hidden = self.create_product(self.farmer['id'])
        self.client.put(f"/api/products/{hidden['id']}", json={'isActive': False})

        products = self.client.get('/api/admin/products').get_json()
        self.assertEqual([product['id'] for product in products], [approved['id'], pending['id']])

    def test_approve_missing_product_returns_404(self):
        response = self.client.put('/api/admin/products/999/approve')
        self.assertEqual(response.status_code, 404)

    def test_toggle_active(self):
        url = f"/api/admin/users/{self.buyer['id']}/toggle-active"
        self.assertFalse(self.client.put(url).get_json()['isActive'])
        self.assertTrue(self.client.put(url).get_json()['isActive'])

    def test_admin_cannot_be_suspended(self):
        admin_id = self.make_admin()
        response = self.client.put(f'/api/admin/users/{admin_id}/toggle-active')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['message'], 'Impossible de désactiver un administrateur')

    def test_seeded_admin_can_login(self):
        self.app.config['SEED_ADMIN_EMAIL'] = 'root@example.cd'
        self.app.config['SEED_ADMIN_PASSWORD'] = 'racine123'
        from agriconnect import seed_admin
        with self.app.app_context():
            seed_admin(self.app)
            seed_admin(self.app)
            self.assertEqual(User.query.filter_by(user_type='admin').count(), 1)

        response = self.client.post('/api/login', json={
            'email': 'root@example.cd', 'password': 'racine123'
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['userType'], 'admin')

    def test_seed_admin_when_admin_username_taken(self):
        self.register(username='admin')
        self.app.config['SEED_ADMIN_EMAIL'] = 'root@example.cd'
        self.app.config['SEED_ADMIN_PASSWORD'] = 'racine123'
        from agriconnect import seed_admin
        with self.app.app_context():
            seed_admin(self.app)
            seeded = User.query.filter_by(email='root@example.cd').one()
            self.assertEqual(seeded.username, 'root')
            self.assertEqual(seeded.user_type, 'admin')

    def test_seed_admin_skipped_when_no_username_free(self):
        self.register(username='admin')
        self.register(username='root')
        self.app.config['SEED_ADMIN_EMAIL'] = 'root@example.cd'
        self.app.config['SEED_ADMIN_PASSWORD'] = 'racine123'
        from agriconnect import seed_admin
        with self.app.app_context():
            seed_admin(self.app)
            self.assertIsNone(User.query.filter_by(email='root@example.cd').first())
            self.assertEqual(User.query.filter_by(user_type='admin').count(), 0)

        response = self.client.get('/api/admin/users')
        self.assertEqual(response.status_code, 200)


class StatsTests(ApiTestCase):
    def test_counts(self):
        farmer = self.register(user_type='farmer')
        self.register(user_type='farmer')
        buyer = self.register(user_type='buyer')

        listed = self.create_product(farmer['id'], province='Kinshasa')
        self.create_product(farmer['id'], province='Sud-Kivu', approve=False)
        self.create_product(farmer['id'], province='Kinshasa')
        self.place_order(buyer['id'], listed['id'], 2)

        response = self.client.get('/api/stats')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {
            'totalFarmers': 2,
            'totalProducts': 2,
            'totalOrders': 1,
            'totalProvinces': 2,
        })

    def test_empty_platform(self):
        self.assertEqual(self.client.get('/api/stats').get_json(), {
            'totalFarmers': 0,
            'totalProducts': 0,
            'totalOrders': 0,
            'totalProvinces': 0,
        })


class ReferenceDataTests(ApiTestCase):
    def test_categories(self):
        response = self.client.get('/api/categories')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), CATEGORIES)
        self.assertIn('Tubercules', response.get_json())

    def test_provinces(self):
        provinces = self.client.get('/api/provinces').get_json()
        self.assertEqual(provinces, PROVINCES)
        self.assertEqual(len(provinces), 26)
        self.assertIn('Kinshasa', provinces)

    def test_health(self):
        self.assertEqual(self.client.get('/api/health').get_json(), {'status': 'ok'})

    def test_unknown_route_returns_json_404(self):
        response = self.client.get('/api/nothing-here')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {'message': 'Ressource non trouvée'})

    def test_wrong_method_returns_json_405(self):
        response = self.client.delete('/api/stats')
        self.assertEqual(response.status_code, 405)


if __name__ == '__main__':
    unittest.main()
