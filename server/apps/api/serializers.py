"""Record to JSON serialization for API app.

Wire names are camelCase. Datetimes are left as-is and rendered by
DjangoJSONEncoder inside JsonResponse.
"""

from collections.abc import Iterable
from typing import Any

from server.apps.files.models import Activity, File, Share, User


def serialize_user(user: User) -> dict[str, Any]:
    """Serialize a user.

    Args:
        user: User record.

    Returns:
        JSON-ready dictionary.
    """
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'jobTitle': user.job_title,
        'avatar': user.avatar,
        'plan': user.plan.value,
        'storageUsed': user.storage_used,
        'storageLimit': user.storage_limit,
        'preferences': dict(user.preferences),
        'createdAt': user.created_at,
    }


def serialize_file(file_instance: File) -> dict[str, Any]:
    """Serialize a file or folder.

    Args:
        file_instance: File record.

    Returns:
        JSON-ready dictionary.
    """
    return {
        'id': file_instance.id,
        'name': file_instance.name,
        'type': file_instance.type.value,
        'mimeType': file_instance.mime_type,
        'size': file_instance.size,
        'path': file_instance.path,
        'parentId': file_instance.parent_id,
        'ownerId': file_instance.owner_id,
        'isStarred': file_instance.is_starred,
        'isShared': file_instance.is_shared,
        'isDeleted': file_instance.is_deleted,
        'thumbnail': file_instance.thumbnail,
        'metadata': dict(file_instance.metadata),
        'createdAt': file_instance.created_at,
        'updatedAt': file_instance.updated_at,
    }


def serialize_files(files: Iterable[File]) -> list[dict[str, Any]]:
    """Serialize a sequence of files, keeping order.

    Args:
        files: File records.

    Returns:
        List of JSON-ready dictionaries.
    """
    return [serialize_file(file_instance) for file_instance in files]


def serialize_share(share: Share) -> dict[str, Any]:
    """Serialize a share.

    Args:
        share: Share record.

    Returns:
        JSON-ready dictionary.
    """
    return {
        'id': share.id,
        'fileId': share.file_id,
        'sharedBy': share.shared_by,
        'sharedWith': share.shared_with,
        'permissions': share.permissions.value,
        'expiresAt': share.expires_at,
        'createdAt': share.created_at,
    }


def serialize_activity(activity: Activity) -> dict[str, Any]:
    """Serialize an activity log entry.

    Args:
        activity: Activity record.

    Returns:
        JSON-ready dictionary.
    """
    return {
        'id': activity.id,
        'userId': activity.user_id,
        'fileId': activity.file_id,
        'action': activity.action,
        'details': dict(activity.details),
        'createdAt': activity.created_at,
    }
