from expense_api.extensions import db
from expense_api.models import User
from tests.base import BaseTestCase


class TestRegisterAndLogin(BaseTestCase):

    def test_register_returns_user_and_token(self):
        response = self.client.post(
            '/api/register',
            json={'username': 'alice', 'email': 'alice@example.com', 'password': 'pw'},
        )
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body['user']['username'], 'alice')
        self.assertEqual(body['user']['email'], 'alice@example.com')
        self.assertNotIn('password', body['user'])
        self.assertNotIn('password_hash', body['user'])

        with self.app.app_context():
            self.assertEqual(self.services().tokens.verify(body['token']), body['user']['id'])

    def test_register_duplicate_fails(self):
        self.register('alice')
        for payload in (
            {'username': 'alice', 'email': 'new@example.com', 'password': 'pw'},
            {'username': 'other', 'email': 'alice@example.com', 'password': 'pw'},
        ):
            response = self.client.post('/api/register', json=payload)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.get_json(), {'error': 'Registration failed'})

    def test_register_missing_fields(self):
        response = self.client.post('/api/register', json={'username': 'alice'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {'error': 'Registration failed'})

        response = self.client.post('/api/register', data='not json')
        self.assertEqual(response.status_code, 400)

    def test_login(self):
        user, _ = self.register('alice', password='pw')
        response = self.client.post('/api/login', json={'email': 'alice@example.com', 'password': 'pw'})
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body['user']['id'], user['id'])

        check = self.client.get('/api/categories', headers=self.auth(body['token']))
        self.assertEqual(check.status_code, 200)

    def test_login_failures_share_one_shape(self):
        self.register('alice', password='pw')
        wrong_password = self.client.post('/api/login', json={'email': 'alice@example.com', 'password': 'x'})
        unknown_email = self.client.post('/api/login', json={'email': 'bob@example.com', 'password': 'pw'})
        missing = self.client.post('/api/login', json={})

        for response in (wrong_password, unknown_email, missing):
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.get_json(), {'error': 'Login failed'})


class TestAuthenticationGate(BaseTestCase):

    def assertUnauthenticated(self, response):
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json(), {'error': 'Please authenticate'})

    def test_missing_header(self):
        self.assertUnauthenticated(self.client.get('/api/categories'))
        self.assertUnauthenticated(self.client.get('/api/expenses'))
        self.assertUnauthenticated(self.client.post('/api/expenses', json={}))
        self.assertUnauthenticated(self.client.patch('/api/expenses/1', json={}))
        self.assertUnauthenticated(self.client.delete('/api/expenses/1'))

    def test_malformed_header(self):
        _, token = self.register()
        for header in (token, f'Token {token}', 'Bearer', 'Bearer    '):
            response = self.client.get('/api/categories', headers={'Authorization': header})
            self.assertUnauthenticated(response)

    def test_scheme_is_case_insensitive(self):
        _, token = self.register()
        response = self.client.get('/api/categories', headers={'Authorization': f'bearer {token}'})
        self.assertEqual(response.status_code, 200)

    def test_invalid_token(self):
        self.assertUnauthenticated(self.client.get('/api/categories', headers=self.auth('abc.def.ghi')))

    def test_token_for_removed_user(self):
        user, token = self.register()
        with self.app.app_context():
            db.session.delete(db.session.get(User, user['id']))
            db.session.commit()
        self.assertUnauthenticated(self.client.get('/api/categories', headers=self.auth(token)))

    def test_authentication_does_not_leak_between_requests(self):
        _, token = self.register()
        self.assertEqual(self.client.get('/api/categories', headers=self.auth(token)).status_code, 200)
        self.assertUnauthenticated(self.client.get('/api/categories'))

    def test_no_session_cookie_is_issued(self):
        _, token = self.register()
        response = self.client.get('/api/categories', headers=self.auth(token))
        self.assertNotIn('Set-Cookie', response.headers)

    def test_health_is_public(self):
        response = self.client.get('/api/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'status': 'ok'})

    def test_unknown_route_is_json(self):
        response = self.client.get('/api/nothing-here')
        self.assertEqual(response.status_code, 404)
        self.assertIn('error', response.get_json())
