"""Shared fixtures for the API tests."""
import unittest

from agriconnect import create_app, db


class ApiTestCase(unittest.TestCase):
    """Fresh app and in-memory database for every test."""

    def setUp(self):
        self.app = create_app('testing')
        self.client = self.app.test_client()
        self._counter = 0

    def tearDown(self):
        with self.app.app_context():
            db.session.remove()
            db.drop_all()

    def register(self, user_type='buyer', **overrides):
        self._counter += 1
        payload = {
            'username': f'user{self._counter}',
            'email': f'user{self._counter}@example.cd',
            'password': 'motdepasse',
            'firstName': 'Jean',
            'lastName': f'Mukendi{self._counter}',
            'phone': '+243810000000',
            'userType': user_type,
            'location': 'Kinshasa',
        }
        payload.update(overrides)
        response = self.client.post('/api/register', json=payload)
        self.assertEqual(response.status_code, 200, response.get_json())
        return response.get_json()

    def create_product(self, farmer_id, approve=True, **overrides):
        payload = {
            'farmerId': farmer_id,
            'name': 'Manioc frais',
            'description': 'Récolte de la semaine',
            'category': 'Tubercules',
            'price': '2500',
            'unit': 'kg',
            'quantity': 10,
            'saleMode': 'direct',
            'location': 'Kisantu',
            'province': 'Kongo-Central',
        }
        payload.update(overrides)
        response = self.client.post('/api/products', json=payload)
        self.assertEqual(response.status_code, 200, response.get_json())
        product = response.get_json()
        if approve:
            response = self.client.put(f"/api/admin/products/{product['id']}/approve")
            self.assertEqual(response.status_code, 200)
            product = response.get_json()
        return product

    def place_order(self, buyer_id, product_id, quantity, **extra):
        payload = {'buyerId': buyer_id, 'productId': product_id, 'quantity': quantity}
        payload.update(extra)
        return self.client.post('/api/orders', json=payload)

    def get_product(self, product_id):
        response = self.client.get(f'/api/products/{product_id}')
        self.assertEqual(response.status_code, 200)
        return response.get_json()
