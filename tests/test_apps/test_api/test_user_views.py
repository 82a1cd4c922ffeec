"""Tests for user endpoints."""

from django.conf import settings

from server.apps.files.logic.user_operations import create_user, get_user
from server.apps.files.models import User


class TestCurrentUser:
    """Tests for GET /api/user."""

    def test_returns_demo_user(self, api):
        """Test the demo tenant is returned in camelCase."""
        response = api('GET', '/api/user')

        assert response.status_code == 200
        body = response.json()
        assert body['id'] == settings.DRIVE_DEMO_USER_ID
        assert body['username'] == 'sarah.johnson'
        assert body['firstName'] == 'Sarah'
        assert body['plan'] == 'pro'
        assert body['storageLimit'] == 5368709120
        assert body['preferences']['theme'] == 'light'

    def test_missing_demo_user(self, api, store):
        """Test 404 when the demo user is not in the store."""
        store.delete(User, settings.DRIVE_DEMO_USER_ID)

        response = api('GET', '/api/user')

        assert response.status_code == 404
        assert response.json() == {'message': 'User not found'}


class TestUpdateUser:
    """Tests for PATCH /api/user/:id."""

    url = f'/api/user/{settings.DRIVE_DEMO_USER_ID}'

    def test_partial_update(self, api, store):
        """Test only the given fields change."""
        response = api('PATCH', self.url, {'jobTitle': 'CTO', 'plan': 'free'})

        assert response.status_code == 200
        body = response.json()
        assert body['jobTitle'] == 'CTO'
        assert body['plan'] == 'free'
        assert body['username'] == 'sarah.johnson'
        assert get_user(store, settings.DRIVE_DEMO_USER_ID).job_title == 'CTO'

    def test_update_preferences(self, api):
        """Test preferences are replaced by the given bag."""
        response = api('PATCH', self.url, {'preferences': {'theme': 'dark'}})

        assert response.status_code == 200
        assert response.json()['preferences'] == {'theme': 'dark'}

    def test_invalid_plan(self, api):
        """Test unknown plan is a 400."""
        response = api('PATCH', self.url, {'plan': 'enterprise'})

        assert response.status_code == 400
        assert 'plan' in response.json()['errors']

    def test_invalid_email(self, api):
        """Test malformed email is a 400."""
        response = api('PATCH', self.url, {'email': 'not-an-email'})

        assert response.status_code == 400
        assert 'email' in response.json()['errors']

    def test_duplicate_email(self, api, store):
        """Test another user's email cannot be taken."""
        create_user(
            store,
            'other',
            'other@example.com',
            'Other',
            'User',
            user_id='other-user',
        )

        response = api('PATCH', self.url, {'email': 'other@example.com'})

        assert response.status_code == 400
        assert response.json()['errors']['email'][0]['code'] == 'unique'

    def test_blank_username(self, api):
        """Test a mandatory field cannot be blanked."""
        response = api('PATCH', self.url, {'username': ''})

        assert response.status_code == 400
        assert 'username' in response.json()['errors']

    def test_unknown_user(self, api):
        """Test unknown id is a 404."""
        response = api('PATCH', '/api/user/missing', {'jobTitle': 'CTO'})

        assert response.status_code == 404
        assert response.json() == {'message': 'User not found'}

    def test_non_string_job_title(self, api):
        """Test profile text fields refuse non-string values."""
        response = api('PATCH', self.url, {'jobTitle': ['CTO']})

        assert response.status_code == 400
        assert response.json()['errors']['jobTitle'][0]['code'] == 'invalid'
