import unittest

from agriconnect import db
from agriconnect.models import User
from support import ApiTestCase


class RegisterTests(ApiTestCase):
    def test_register_returns_user_without_password(self):
        user = self.register(user_type='farmer', email='kabila@example.cd')
        self.assertEqual(user['email'], 'kabila@example.cd')
        self.assertEqual(user['userType'], 'farmer')
        self.assertTrue(user['isActive'])
        self.assertNotIn('password', user)

    def test_password_is_hashed(self):
        user = self.register()
        with self.app.app_context():
            stored = db.session.get(User, user['id'])
            self.assertNotEqual(stored.password, 'motdepasse')
            self.assertTrue(stored.check_password('motdepasse'))

    def test_duplicate_email_returns_400_and_creates_no_row(self):
        self.register(email='dup@example.cd')
        response = self.client.post('/api/register', json={
            'username': 'other',
            'email': 'dup@example.cd',
            'password': 'motdepasse',
            'firstName': 'Marie',
            'lastName': 'Kasongo',
            'userType': 'buyer',
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['message'], 'Un utilisateur avec cet email existe déjà')
        with self.app.app_context():
            self.assertEqual(User.query.count(), 1)

    def test_duplicate_username_returns_400(self):
        self.register(username='mama_ngozi')
        response = self.client.post('/api/register', json={
            'username': 'mama_ngozi',
            'email': 'other@example.cd',
            'password': 'motdepasse',
            'firstName': 'Marie',
            'lastName': 'Kasongo',
            'userType': 'buyer',
        })
        self.assertEqual(response.status_code, 400)
        with self.app.app_context():
            self.assertEqual(User.query.count(), 1)

    def test_admin_cannot_self_register(self):
        response = self.client.post('/api/register', json={
            'username': 'boss',
            'email': 'boss@example.cd',
            'password': 'motdepasse',
            'firstName': 'Big',
            'lastName': 'Boss',
            'userType': 'admin',
        })
        self.assertEqual(response.status_code, 400)
        body = response.get_json()
        self.assertEqual(body['message'], "Erreur lors de l'inscription")
        self.assertIn('userType', [error['field'] for error in body['errors']])

    def test_missing_fields_rejected(self):
        response = self.client.post('/api/register', json={'email': 'x@example.cd'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['message'], "Erreur lors de l'inscription")

    def test_non_json_body_rejected(self):
        response = self.client.post('/api/register', data='not json')
        self.assertEqual(response.status_code, 400)


class LoginTests(ApiTestCase):
    def test_login_returns_user_without_password(self):
        created = self.register(email='buyer@example.cd')
        response = self.client.post('/api/login', json={
            'email': 'buyer@example.cd', 'password': 'motdepasse'
        })
        self.assertEqual(response.status_code, 200)
        user = response.get_json()
        self.assertEqual(user['id'], created['id'])
        self.assertNotIn('password', user)

    def test_wrong_password_returns_401(self):
        self.register(email='buyer@example.cd')
        response = self.client.post('/api/login', json={
            'email': 'buyer@example.cd', 'password': 'mauvais'
        })
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()['message'], 'Email ou mot de passe incorrect')

    def test_unknown_email_returns_401(self):
        response = self.client.post('/api/login', json={
            'email': 'nobody@example.cd', 'password': 'motdepasse'
        })
        self.assertEqual(response.status_code, 401)

    def test_suspended_user_cannot_login(self):
        user = self.register(email='buyer@example.cd')
        self.client.put(f"/api/admin/users/{user['id']}/toggle-active")
        response = self.client.post('/api/login', json={
            'email': 'buyer@example.cd', 'password': 'motdepasse'
        })
        self.assertEqual(response.status_code, 401)


class ProfileTests(ApiTestCase):
    def test_update_profile_and_password(self):
        user = self.register(email='farmer@example.cd', user_type='farmer')
        response = self.client.put(f"/api/users/{user['id']}", json={
            'location': 'Bukavu',
            'password': 'nouveaupass',
            'userType': 'admin',
        })
        self.assertEqual(response.status_code, 200)
        updated = response.get_json()
        self.assertEqual(updated['location'], 'Bukavu')
        self.assertEqual(updated['userType'], 'farmer')

        response = self.client.post('/api/login', json={
            'email': 'farmer@example.cd', 'password': 'nouveaupass'
        })
        self.assertEqual(response.status_code, 200)

    def test_get_user(self):
        user = self.register()
        response = self.client.get(f"/api/users/{user['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['email'], user['email'])

    def test_unknown_user_returns_404(self):
        self.assertEqual(self.client.get('/api/users/99').status_code, 404)
        response = self.client.put('/api/users/99', json={'location': 'Goma'})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['message'], 'Utilisateur non trouvé')


if __name__ == '__main__':
    unittest.main()
