"""Tests for file listing and mutation endpoints."""

from server.apps.files.logic.file_operations import get_file
from server.apps.files.logic.trash_operations import soft_delete_file


def _ids(response):
    return [entry['id'] for entry in response.json()]


class TestListFiles:
    """Tests for GET /api/files."""

    def test_root_listing(self, api):
        """Test missing or null parentId lists the root."""
        response = api('GET', '/api/files')
        null_response = api('GET', '/api/files?parentId=null')

        assert response.status_code == 200
        assert set(_ids(response)) == {
            'folder-1',
            'folder-2',
            'folder-3',
            'folder-4',
            'folder-5',
            'file-6',
            'file-7',
            'file-8',
        }
        assert _ids(null_response) == _ids(response)

    def test_folder_listing(self, api):
        """Test listing a folder returns its children."""
        response = api('GET', '/api/files?parentId=folder-2')

        assert response.status_code == 200
        assert _ids(response) == ['file-1', 'file-3']

    def test_file_json_shape(self, api):
        """Test files are serialized with camelCase keys."""
        response = api('GET', '/api/files?parentId=folder-2')

        entry = response.json()[0]
        assert entry['name'] == 'Q4_Report.pdf'
        assert entry['mimeType'] == 'application/pdf'
        assert entry['parentId'] == 'folder-2'
        assert entry['ownerId'] == 'demo-user-1'
        assert entry['isStarred'] is True
        assert entry['isDeleted'] is False
        assert entry['path'] == '/Financial Reports/Q4_Report.pdf'
        assert 'createdAt' in entry
        assert 'updatedAt' in entry


class TestViews:
    """Tests for recent, starred, shared, trash and search endpoints."""

    def test_recent(self, api):
        """Test recent files come newest first, ten by default."""
        response = api('GET', '/api/files/recent')

        assert response.status_code == 200
        assert len(response.json()) == 10
        assert _ids(response)[0] == 'file-2'

    def test_recent_limit(self, api):
        """Test ?limit= bounds the recent listing."""
        response = api('GET', '/api/files/recent?limit=2')

        assert _ids(response) == ['file-2', 'file-6']

    def test_recent_invalid_limit(self, api):
        """Test a non-positive limit is rejected."""
        response = api('GET', '/api/files/recent?limit=0')

        assert response.status_code == 400
        assert 'limit' in response.json()['errors']

    def test_starred(self, api):
        """Test starred endpoint."""
        response = api('GET', '/api/files/starred')

        assert response.status_code == 200
        assert 'file-1' in _ids(response)

    def test_shared(self, api):
        """Test shared endpoint."""
        response = api('GET', '/api/files/shared')

        assert response.status_code == 200
        assert 'file-7' in _ids(response)

    def test_trash(self, api, store):
        """Test trash endpoint lists soft-deleted files only."""
        soft_delete_file(store, 'file-3')

        response = api('GET', '/api/files/trash')

        assert response.status_code == 200
        assert _ids(response) == ['file-3']

    def test_search(self, api):
        """Test case-insensitive name search."""
        response = api('GET', '/api/files/search?q=REPORT')

        assert response.status_code == 200
        assert set(_ids(response)) == {'folder-2', 'file-1'}

    def test_search_requires_query(self, api):
        """Test search without q is a 400."""
        response = api('GET', '/api/files/search')
        empty_response = api('GET', '/api/files/search?q=')

        assert response.status_code == 400
        assert response.json()['message'] == "Query parameter 'q' is required"
        assert empty_response.status_code == 400


class TestCreate:
    """Tests for POST /api/files and POST /api/folders."""

    def test_create_folder(self, api, store):
        """Test folder creation returns 201 and fixed folder fields."""
        response = api('POST', '/api/folders', {'name': 'Archive'})

        assert response.status_code == 201
        body = response.json()
        assert body['type'] == 'folder'
        assert body['mimeType'] is None
        assert body['size'] == 0
        assert body['path'] == '/Archive'
        assert body['metadata'] == {'fileCount': 0}
        assert get_file(store, body['id']) is not None

    def test_create_folder_in_folder(self, api):
        """Test nested folder path is derived from the parent."""
        response = api(
            'POST',
            '/api/folders',
            {'name': '2024', 'parentId': 'folder-2'},
        )

        assert response.status_code == 201
        assert response.json()['path'] == '/Financial Reports/2024'

    def test_create_folder_requires_name(self, api):
        """Test missing name is a field-level validation error."""
        response = api('POST', '/api/folders', {})

        assert response.status_code == 400
        body = response.json()
        assert body['message'] == 'Invalid folder data'
        assert body['errors']['name'][0]['code'] == 'required'

    def test_create_file(self, api):
        """Test file record creation without bytes."""
        response = api(
            'POST',
            '/api/files',
            {
                'name': 'a.txt',
                'parentId': None,
                'size': 12,
                'mimeType': 'text/plain',
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body['type'] == 'file'
        assert body['size'] == 12
        assert body['parentId'] is None
        assert body['isStarred'] is False

        root = api('GET', '/api/files')
        assert [entry['name'] for entry in root.json()].count('a.txt') == 1

    def test_create_file_invalid_size(self, api):
        """Test negative size is rejected."""
        response = api('POST', '/api/files', {'name': 'a.txt', 'size': -1})

        assert response.status_code == 400
        assert 'size' in response.json()['errors']

    def test_create_file_parent_must_be_folder(self, api):
        """Test parentId pointing at a file or nothing is rejected."""
        file_parent = api(
            'POST',
            '/api/files',
            {'name': 'a.txt', 'parentId': 'file-1'},
        )
        missing_parent = api(
            'POST',
            '/api/files',
            {'name': 'a.txt', 'parentId': 'missing'},
        )

        assert file_parent.status_code == 400
        assert file_parent.json()['errors']['parentId'][0]['code'] == (
            'invalid_parent'
        )
        assert missing_parent.status_code == 400

    def test_create_ignores_flags_and_metadata(self, api):
        """Test new entries start unstarred, unshared, default metadata."""
        response = api(
            'POST',
            '/api/folders',
            {
                'name': 'Archive',
                'isStarred': True,
                'isShared': True,
                'metadata': {'fileCount': 7},
            },
        )

        body = response.json()
        assert response.status_code == 201
        assert body['isStarred'] is False
        assert body['isShared'] is False
        assert body['metadata'] == {'fileCount': 0}

    def test_patch_rejects_nested_metadata(self, api):
        """Test metadata values must be scalars."""
        response = api(
            'PATCH',
            '/api/files/file-1',
            {'metadata': {'tags': ['x']}},
        )

        assert response.status_code == 400
        assert 'metadata' in response.json()['errors']

    def test_create_file_rejects_slash_in_name(self, api):
        """Test names cannot contain a path separator."""
        response = api('POST', '/api/files', {'name': 'a/b.txt'})

        assert response.status_code == 400

    def test_malformed_json(self, client, store):
        """Test a body that is not JSON is a 400."""
        response = client.post(
            '/api/files',
            data='{not json',
            content_type='application/json',
        )

        assert response.status_code == 400
        assert response.json()['message'] == 'Malformed JSON body'

    def test_body_must_be_object(self, api):
        """Test a JSON array body is a 400."""
        response = api('POST', '/api/files', ['a.txt'])

        assert response.status_code == 400


class TestUpdate:
    """Tests for GET and PATCH /api/files/:id."""

    def test_get_file(self, api):
        """Test fetching one file."""
        response = api('GET', '/api/files/file-1')

        assert response.status_code == 200
        assert response.json()['name'] == 'Q4_Report.pdf'

    def test_get_unknown_file(self, api):
        """Test unknown id is a 404."""
        response = api('GET', '/api/files/missing')

        assert response.status_code == 404
        assert response.json() == {'message': 'File not found'}

    def test_patch_star(self, api):
        """Test starring through PATCH shows in the starred view."""
        response = api('PATCH', '/api/files/file-3', {'isStarred': True})

        assert response.status_code == 200
        assert response.json()['isStarred'] is True
        assert 'file-3' in _ids(api('GET', '/api/files/starred'))

    def test_patch_only_given_fields(self, api):
        """Test fields missing from the body are kept."""
        response = api('PATCH', '/api/files/file-1', {'name': 'Q4_Final.pdf'})

        body = response.json()
        assert body['name'] == 'Q4_Final.pdf'
        assert body['isStarred'] is True
        assert body['parentId'] == 'folder-2'
        assert body['path'] == '/Financial Reports/Q4_Report.pdf'

    def test_patch_refreshes_updated_at(self, api):
        """Test PATCH moves updatedAt forward."""
        before = api('GET', '/api/files/file-8').json()

        after = api('PATCH', '/api/files/file-8', {}).json()

        assert after['updatedAt'] > before['updatedAt']

    def test_patch_move_into_descendant(self, api):
        """Test a folder cannot become its own descendant."""
        child = api(
            'POST',
            '/api/folders',
            {'name': 'Sub', 'parentId': 'folder-1'},
        ).json()

        response = api('PATCH', '/api/files/folder-1', {'parentId': child['id']})

        assert response.status_code == 400

    def test_patch_move_to_root(self, api):
        """Test null parentId moves a file to root."""
        response = api('PATCH', '/api/files/file-1', {'parentId': None})

        assert response.status_code == 200
        assert response.json()['parentId'] is None

    def test_patch_unknown_file(self, api):
        """Test PATCH of unknown id is a 404."""
        response = api('PATCH', '/api/files/missing', {'isStarred': True})

        assert response.status_code == 404


class TestDelete:
    """Tests for DELETE /api/files/:id and trash endpoints."""

    def test_soft_delete(self, api):
        """Test DELETE moves the file to trash."""
        response = api('DELETE', '/api/files/file-6')

        assert response.status_code == 200
        assert response.json()['isDeleted'] is True
        assert 'file-6' not in _ids(api('GET', '/api/files'))
        assert _ids(api('GET', '/api/files/trash')) == ['file-6']

    def test_restore(self, api):
        """Test restore endpoint brings a file back."""
        api('DELETE', '/api/files/file-6')

        response = api('POST', '/api/files/file-6/restore')

        assert response.status_code == 200
        assert response.json()['isDeleted'] is False
        assert api('GET', '/api/files/trash').json() == []

    def test_restore_unknown(self, api):
        """Test restore of unknown id is a 404."""
        response = api('POST', '/api/files/missing/restore')

        assert response.status_code == 404

    def test_permanent_delete(self, api, store):
        """Test permanent delete removes the record."""
        response = api('DELETE', '/api/files/file-6?permanent=true')

        assert response.status_code == 200
        assert response.json() == {'message': 'File permanently deleted'}
        assert get_file(store, 'file-6') is None

        again = api('DELETE', '/api/files/file-6?permanent=true')
        assert again.status_code == 404

    def test_delete_unknown(self, api):
        """Test DELETE of unknown id is a 404."""
        response = api('DELETE', '/api/files/missing')

        assert response.status_code == 404

    def test_empty_trash(self, api, store):
        """Test DELETE /api/files/trash removes trashed files."""
        api('DELETE', '/api/files/file-6')
        api('DELETE', '/api/files/file-7')

        response = api('DELETE', '/api/files/trash')

        assert response.status_code == 200
        assert response.json() == {'message': 'Trash emptied', 'count': 2}
        assert get_file(store, 'file-6') is None
        assert get_file(store, 'file-8') is not None


class TestJsonTypes:
    """Tests that wrongly typed JSON values are rejected, not coerced."""

    def test_non_string_name(self, api, store):
        """Test a list name is a 400 and nothing is created."""
        response = api('POST', '/api/files', {'name': ['x', 'y']})

        assert response.status_code == 400
        assert response.json()['errors']['name'][0]['code'] == 'invalid'
        assert len(api('GET', '/api/files').json()) == 8

    def test_numeric_folder_name(self, api):
        """Test a number is not accepted as a folder name."""
        response = api('POST', '/api/folders', {'name': 42})

        assert response.status_code == 400
        assert response.json()['errors']['name'][0]['code'] == 'invalid'

    def test_string_flag(self, api, store):
        """Test a string is not accepted as a boolean flag."""
        response = api('PATCH', '/api/files/file-3', {'isStarred': '0'})

        assert response.status_code == 400
        assert response.json()['errors']['isStarred'][0]['code'] == 'invalid'
        assert not get_file(store, 'file-3').is_starred

    def test_string_size(self, api):
        """Test a numeric string is not accepted as a size."""
        response = api('POST', '/api/files', {'name': 'a.txt', 'size': '12'})

        assert response.status_code == 400
        assert response.json()['errors']['size'][0]['code'] == 'invalid'

    def test_boolean_size(self, api):
        """Test true is not accepted as an integer."""
        response = api('PATCH', '/api/files/file-1', {'size': True})

        assert response.status_code == 400

    def test_numeric_parent(self, api):
        """Test parentId must be a string or null."""
        response = api('PATCH', '/api/files/file-1', {'parentId': 2})

        assert response.status_code == 400
        assert 'parentId' in response.json()['errors']

    def test_null_flag_is_false(self, api):
        """Test null clears a flag."""
        response = api('PATCH', '/api/files/file-1', {'isStarred': None})

        assert response.status_code == 200
        assert response.json()['isStarred'] is False
