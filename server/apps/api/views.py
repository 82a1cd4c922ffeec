"""REST/JSON views for the drive.

Every request acts for the single demo tenant configured by
DRIVE_DEMO_USER_ID; no credentials are examined.
"""

import json
import logging
from http import HTTPStatus
from typing import Any, Final

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from server.apps.api.exceptions import RecordNotFoundError, ValidationFailedError
from server.apps.api.forms import (
    BulkActionForm,
    FileCreateForm,
    FileUpdateForm,
    FolderCreateForm,
    LimitForm,
    ShareCreateForm,
    UserUpdateForm,
)
from server.apps.api.serializers import (
    serialize_activity,
    serialize_file,
    serialize_files,
    serialize_share,
    serialize_user,
)
from server.apps.files.apps import get_record_store
from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.logic.activity_operations import (
    list_user_activities,
    record_activity,
)
from server.apps.files.logic.bulk_operations import BulkAction, bulk_apply
from server.apps.files.logic.file_operations import (
    create_file,
    create_folder,
    get_file,
    update_file,
)
from server.apps.files.logic.query_operations import (
    list_by_parent,
    list_recent,
    list_shared,
    list_starred,
    list_trash,
    search_files,
)
from server.apps.files.logic.share_operations import (
    create_share,
    delete_share,
    get_share,
    list_file_shares,
)
from server.apps.files.logic.trash_operations import (
    empty_trash,
    permanent_delete_file,
    restore_file,
    soft_delete_file,
)
from server.apps.files.logic.user_operations import get_user, update_user
from server.apps.files.models import File

# Query string value meaning "root folder"
_ROOT_PARENT: Final = 'null'

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name='dispatch')
class ApiView(View):
    """Base view: resolves the store and the demo tenant."""

    @property
    def store(self) -> RecordStore:
        """Process-wide record store."""
        return get_record_store()

    @property
    def owner_id(self) -> str:
        """Id of the demo tenant all data is scoped to."""
        return settings.DRIVE_DEMO_USER_ID

    def parse_body(self, request: HttpRequest) -> dict[str, Any]:
        """Decode a JSON object request body.

        An empty body decodes to an empty object.

        Args:
            request: Incoming request.

        Returns:
            Decoded body.

        Raises:
            ValidationFailedError: If the body is not a JSON object.
        """
        if not request.body:
            return {}
        try:
            body = json.loads(request.body)
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise ValidationFailedError('Malformed JSON body') from error
        if not isinstance(body, dict):
            raise ValidationFailedError('Request body must be a JSON object')
        return body

    def get_owned_file(self, file_id: str) -> File:
        """Get one of the tenant's files, trashed ones included.

        Args:
            file_id: File identifier.

        Returns:
            File instance.

        Raises:
            RecordNotFoundError: If missing or owned by someone else.
        """
        file_instance = get_file(self.store, file_id)
        if file_instance is None or file_instance.owner_id != self.owner_id:
            raise RecordNotFoundError('File')
        return file_instance

    def get_limit(self, request: HttpRequest, default: int) -> int:
        """Read the optional ?limit= query parameter.

        Args:
            request: Incoming request.
            default: Limit used when the parameter is absent.

        Returns:
            Positive limit.
        """
        cleaned_data = LimitForm(request.GET).validate()
        return cleaned_data['limit'] or default


def _files_response(files: list[File]) -> JsonResponse:
    return JsonResponse(serialize_files(files), safe=False)


class CurrentUserView(ApiView):
    """GET /api/user."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Return the demo user."""
        user = get_user(self.store, self.owner_id)
        if user is None:
            raise RecordNotFoundError('User')
        return JsonResponse(serialize_user(user))


class UserDetailView(ApiView):
    """PATCH /api/user/:id."""

    def patch(self, request: HttpRequest, user_id: str) -> JsonResponse:
        """Update profile fields present in the body."""
        if get_user(self.store, user_id) is None:
            raise RecordNotFoundError('User')

        form = UserUpdateForm(
            self.parse_body(request),
            store=self.store,
            user_id=user_id,
        )
        form.validate()
        user = update_user(self.store, user_id, **form.changes())
        if user is None:
            raise RecordNotFoundError('User')
        return JsonResponse(serialize_user(user))


class FileListView(ApiView):
    """GET /api/files?parentId= and POST /api/files."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List the children of a folder (root when parentId is null)."""
        parent_id = request.GET.get('parentId') or None
        if parent_id == _ROOT_PARENT:
            parent_id = None
        return _files_response(
            list_by_parent(self.store, parent_id, self.owner_id),
        )

    def post(self, request: HttpRequest) -> JsonResponse:
        """Create a file record; no bytes are uploaded."""
        form = FileCreateForm(
            self.parse_body(request),
            store=self.store,
            owner_id=self.owner_id,
        )
        cleaned_data = form.validate()
        file_instance = create_file(
            self.store,
            self.owner_id,
            cleaned_data['name'],
            parent_id=cleaned_data['parentId'],
            path=cleaned_data['path'],
            mime_type=cleaned_data['mimeType'],
            size=cleaned_data['size'],
            thumbnail=cleaned_data['thumbnail'],
        )
        record_activity(
            self.store,
            self.owner_id,
            'upload',
            file_id=file_instance.id,
            details={'name': file_instance.name, 'size': file_instance.size},
        )
        return JsonResponse(
            serialize_file(file_instance),
            status=HTTPStatus.CREATED,
        )


class FolderCreateView(ApiView):
    """POST /api/folders."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """Create a folder."""
        form = FolderCreateForm(
            self.parse_body(request),
            store=self.store,
            owner_id=self.owner_id,
        )
        cleaned_data = form.validate()
        folder = create_folder(
            self.store,
            self.owner_id,
            cleaned_data['name'],
            parent_id=cleaned_data['parentId'],
            path=cleaned_data['path'],
        )
        record_activity(
            self.store,
            self.owner_id,
            'create_folder',
            file_id=folder.id,
            details={'name': folder.name},
        )
        return JsonResponse(serialize_file(folder), status=HTTPStatus.CREATED)


class RecentFilesView(ApiView):
    """GET /api/files/recent."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List recently updated files."""
        limit = self.get_limit(request, settings.DRIVE_RECENT_LIMIT)
        return _files_response(list_recent(self.store, self.owner_id, limit))


class StarredFilesView(ApiView):
    """GET /api/files/starred."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List starred files."""
        return _files_response(list_starred(self.store, self.owner_id))


class SharedFilesView(ApiView):
    """GET /api/files/shared."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List shared files."""
        return _files_response(list_shared(self.store, self.owner_id))


class TrashView(ApiView):
    """GET and DELETE /api/files/trash."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List trashed files."""
        return _files_response(list_trash(self.store, self.owner_id))

    def delete(self, request: HttpRequest) -> JsonResponse:
        """Permanently delete everything in the trash."""
        count = empty_trash(self.store, self.owner_id)
        record_activity(
            self.store,
            self.owner_id,
            'empty_trash',
            details={'count': count},
        )
        return JsonResponse({'message': 'Trash emptied', 'count': count})


class SearchView(ApiView):
    """GET /api/files/search?q=."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Search file names."""
        query = request.GET.get('q', '')
        if not query:
            raise ValidationFailedError("Query parameter 'q' is required")
        return _files_response(search_files(self.store, self.owner_id, query))


class FileDetailView(ApiView):
    """GET, PATCH and DELETE /api/files/:id."""

    def get(self, request: HttpRequest, file_id: str) -> JsonResponse:
        """Return one file."""
        return JsonResponse(serialize_file(self.get_owned_file(file_id)))

    def patch(self, request: HttpRequest, file_id: str) -> JsonResponse:
        """Update fields present in the body."""
        self.get_owned_file(file_id)
        form = FileUpdateForm(
            self.parse_body(request),
            store=self.store,
            owner_id=self.owner_id,
            file_id=file_id,
        )
        form.validate()
        file_instance = update_file(self.store, file_id, **form.changes())
        if file_instance is None:
            raise RecordNotFoundError('File')
        return JsonResponse(serialize_file(file_instance))

    def delete(self, request: HttpRequest, file_id: str) -> JsonResponse:
        """Move to trash, or remove for good with ?permanent=true."""
        file_instance = self.get_owned_file(file_id)

        if request.GET.get('permanent') == 'true':
            if not permanent_delete_file(self.store, file_id):
                raise RecordNotFoundError('File')
            record_activity(
                self.store,
                self.owner_id,
                'permanent_delete',
                file_id=file_id,
                details={'name': file_instance.name},
            )
            return JsonResponse({'message': 'File permanently deleted'})

        trashed = soft_delete_file(self.store, file_id)
        if trashed is None:
            raise RecordNotFoundError('File')
        record_activity(
            self.store,
            self.owner_id,
            'delete',
            file_id=file_id,
            details={'name': trashed.name},
        )
        return JsonResponse(serialize_file(trashed))


class FileRestoreView(ApiView):
    """POST /api/files/:id/restore."""

    def post(self, request: HttpRequest, file_id: str) -> JsonResponse:
        """Take a file out of the trash."""
        self.get_owned_file(file_id)
        file_instance = restore_file(self.store, file_id)
        if file_instance is None:
            raise RecordNotFoundError('File')
        record_activity(
            self.store,
            self.owner_id,
            'restore',
            file_id=file_id,
            details={'name': file_instance.name},
        )
        return JsonResponse(serialize_file(file_instance))


class BulkActionView(ApiView):
    """POST /api/files/bulk."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """Apply one action to many of the tenant's files.

        Ids of other tenants are dropped like unknown ids.
        """
        form = BulkActionForm(
            self.parse_body(request),
            store=self.store,
            owner_id=self.owner_id,
        )
        cleaned_data = form.validate()
        action = BulkAction(cleaned_data['action'])
        file_ids = [
            file_id
            for file_id in cleaned_data['fileIds']
            if self._is_owned(file_id)
        ]
        results = bulk_apply(
            self.store,
            action,
            file_ids,
            form.target_parent(),  # type: ignore[arg-type]
        )
        record_activity(
            self.store,
            self.owner_id,
            f'bulk_{action}',
            details={
                'requested': len(cleaned_data['fileIds']),
                'applied': len(results),
            },
        )
        return _files_response(results)

    def _is_owned(self, file_id: str) -> bool:
        file_instance = get_file(self.store, file_id)
        return (
            file_instance is not None
            and file_instance.owner_id == self.owner_id
        )


class FileSharesView(ApiView):
    """GET and POST /api/files/:id/shares."""

    def get(self, request: HttpRequest, file_id: str) -> JsonResponse:
        """List shares of a file."""
        self.get_owned_file(file_id)
        shares = list_file_shares(self.store, file_id)
        return JsonResponse(
            [serialize_share(share) for share in shares],
            safe=False,
        )

    def post(self, request: HttpRequest, file_id: str) -> JsonResponse:
        """Share a file."""
        self.get_owned_file(file_id)
        cleaned_data = ShareCreateForm(self.parse_body(request)).validate()
        share = create_share(
            self.store,
            file_id,
            shared_by=self.owner_id,
            shared_with=cleaned_data['sharedWith'],
            permissions=cleaned_data['permissions'],
            expires_at=cleaned_data['expiresAt'],
        )
        record_activity(
            self.store,
            self.owner_id,
            'share',
            file_id=file_id,
            details={'permissions': share.permissions.value},
        )
        return JsonResponse(serialize_share(share), status=HTTPStatus.CREATED)


class ShareDetailView(ApiView):
    """DELETE /api/shares/:id."""

    def delete(self, request: HttpRequest, share_id: str) -> JsonResponse:
        """Remove a share."""
        share = get_share(self.store, share_id)
        if share is None or share.shared_by != self.owner_id:
            raise RecordNotFoundError('Share')
        delete_share(self.store, share_id)
        record_activity(
            self.store,
            self.owner_id,
            'unshare',
            file_id=share.file_id,
        )
        return JsonResponse({'message': 'Share removed'})


class ActivityListView(ApiView):
    """GET /api/activities."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """List the tenant's recent activity, newest first."""
        limit = self.get_limit(request, settings.DRIVE_ACTIVITY_LIMIT)
        activities = list_user_activities(self.store, self.owner_id, limit)
        return JsonResponse(
            [serialize_activity(activity) for activity in activities],
            safe=False,
        )
