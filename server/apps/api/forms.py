"""Request validation for API app.

Forms are bound to decoded JSON bodies. Field names follow the wire
format (camelCase) so field errors point at the keys clients send.
"""

import re
from typing import Any, ClassVar, Final

from django import forms
from django.core.exceptions import ValidationError

from server.apps.api.exceptions import ValidationFailedError
from server.apps.files.infrastructure.metadata import validate_file_name
from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.logic.bulk_operations import UNSET, BulkAction
from server.apps.files.logic.file_operations import get_owned_folder, is_within
from server.apps.files.logic.user_operations import get_user_by_email
from server.apps.files.models import Bag, Plan, SharePermission

_CAMEL_BOUNDARY: Final = re.compile('(?<!^)(?=[A-Z])')
_SCALAR_TYPES: Final = (str, int, float, bool)
_MAX_LIMIT: Final = 1000


def to_snake_case(name: str) -> str:
    """Convert a camelCase wire name to a snake_case attribute name.

    Example: 'isStarred' -> 'is_starred'

    Args:
        name: camelCase name.

    Returns:
        snake_case name.
    """
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def clean_bag(value: Any) -> Bag:
    """Validate an opaque key-value bag.

    Args:
        value: Decoded JSON value.

    Returns:
        Dictionary of scalar values (empty for null).

    Raises:
        ValidationError: If value is not an object of scalars.
    """
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError('Expected a JSON object', code='invalid')
    for key, item in value.items():
        if not isinstance(item, _SCALAR_TYPES):
            raise ValidationError(
                f'Value of "{key}" must be a string, number or boolean',
                code='invalid',
            )
    return dict(value)


class JsonCharField(forms.CharField):
    """CharField that refuses non-string JSON values.

    Plain CharField runs str() on whatever it gets, so a list or a
    number would be accepted as text.
    """

    def to_python(self, value: Any) -> str | None:
        """Check the JSON type before the usual cleaning.

        Args:
            value: Decoded JSON value.

        Returns:
            Cleaned string (or the field's empty value).

        Raises:
            ValidationError: If value is neither a string nor null.
        """
        if value is not None and not isinstance(value, str):
            raise ValidationError('Expected a string', code='invalid')
        return super().to_python(value)


class JsonBooleanField(forms.BooleanField):
    """BooleanField accepting only JSON true, false or null."""

    # CheckboxInput would bool() any string it does not recognize
    widget = forms.HiddenInput

    def to_python(self, value: Any) -> bool:
        """Check the JSON type; null means false.

        Args:
            value: Decoded JSON value.

        Returns:
            Boolean value.

        Raises:
            ValidationError: If value is not a boolean.
        """
        if value is not None and not isinstance(value, bool):
            raise ValidationError('Expected a boolean', code='invalid')
        return bool(value)


class JsonIntegerField(forms.IntegerField):
    """IntegerField accepting only JSON integers or null."""

    def to_python(self, value: Any) -> int | None:
        """Check the JSON type before range validation.

        Args:
            value: Decoded JSON value.

        Returns:
            Integer or None.

        Raises:
            ValidationError: If value is not an integer.
        """
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(
                self.error_messages['invalid'],
                code='invalid',
            )
        return value


class JsonForm(forms.Form):
    """Form bound to a decoded JSON object."""

    error_message: ClassVar[str] = 'Invalid request data'

    def validate(self) -> dict[str, Any]:
        """Validate the form or raise an API error.

        Returns:
            Cleaned data.

        Raises:
            ValidationFailedError: If the form is invalid.
        """
        if not self.is_valid():
            raise ValidationFailedError(
                self.error_message,
                errors=self.errors.get_json_data(),
            )
        return self.cleaned_data

    def changes(self) -> dict[str, Any]:
        """Cleaned values of the keys present in the body.

        Returns:
            Mapping of snake_case attribute names to cleaned values.
        """
        return {
            to_snake_case(name): self.cleaned_data[name]
            for name in self.fields
            if name in self.data
        }

    def provided(self, name: str) -> bool:
        """Whether a key was present in the body.

        Args:
            name: Wire field name.

        Returns:
            True if the client sent the key.
        """
        return name in self.data


class _EntryForm(JsonForm):
    """Common validation of file and folder bodies."""

    def __init__(
        self,
        data: dict[str, Any],
        *,
        store: RecordStore,
        owner_id: str,
    ) -> None:
        """Initialize the form.

        Args:
            data: Decoded JSON body.
            store: Record store used for reference checks.
            owner_id: Owner the parent folder must belong to.
        """
        super().__init__(data)
        self.store = store
        self.owner_id = owner_id

    def clean_parentId(self) -> str | None:  # noqa: N802
        """Check that the parent is one of the owner's folders.

        Returns:
            Parent folder id or None for root.

        Raises:
            ValidationError: If the parent is not an existing folder.
        """
        parent_id = self.cleaned_data.get('parentId')
        if parent_id is None:
            return None
        if get_owned_folder(self.store, parent_id, self.owner_id) is None:
            raise ValidationError(
                'Parent must be an existing folder',
                code='invalid_parent',
            )
        return parent_id

    def clean_name(self) -> str:
        """Validate the entry name when provided.

        Returns:
            Cleaned name.
        """
        name = self.cleaned_data.get('name', '')
        if self.provided('name'):
            validate_file_name(name)
        return name


class FolderCreateForm(_EntryForm):
    """Body of POST /api/folders.

    New entries always start unstarred and unshared with default
    metadata; those keys are ignored if sent.
    """

    error_message = 'Invalid folder data'

    name = JsonCharField()
    parentId = JsonCharField(required=False, empty_value=None)  # noqa: N815
    path = JsonCharField(required=False, empty_value=None)

class FileCreateForm(FolderCreateForm):
    """Body of POST /api/files (metadata only, no bytes)."""

    error_message = 'Invalid file data'

    mimeType = JsonCharField(required=False, empty_value=None)  # noqa: N815
    size = JsonIntegerField(required=False, min_value=0)
    thumbnail = JsonCharField(required=False, empty_value=None)

    def clean_size(self) -> int:
        """Default a missing size to 0.

        Returns:
            Size in bytes.
        """
        return self.cleaned_data.get('size') or 0


class FileUpdateForm(_EntryForm):
    """Body of PATCH /api/files/:id; only keys present are applied."""

    error_message = 'Invalid file data'

    name = JsonCharField(required=False)
    parentId = JsonCharField(required=False, empty_value=None)  # noqa: N815
    path = JsonCharField(required=False)
    mimeType = JsonCharField(required=False, empty_value=None)  # noqa: N815
    size = JsonIntegerField(required=False, min_value=0)
    isStarred = JsonBooleanField(required=False)  # noqa: N815
    isShared = JsonBooleanField(required=False)  # noqa: N815
    isDeleted = JsonBooleanField(required=False)  # noqa: N815
    thumbnail = JsonCharField(required=False, empty_value=None)
    metadata = forms.JSONField(required=False)

    def __init__(
        self,
        data: dict[str, Any],
        *,
        store: RecordStore,
        owner_id: str,
        file_id: str,
    ) -> None:
        """Initialize the form.

        Args:
            data: Decoded JSON body.
            store: Record store used for reference checks.
            owner_id: Owner of the file.
            file_id: File being updated.
        """
        super().__init__(data, store=store, owner_id=owner_id)
        self.file_id = file_id

    def clean_parentId(self) -> str | None:  # noqa: N802
        """Also refuse to move a folder into its own subtree.

        Returns:
            Parent folder id or None for root.

        Raises:
            ValidationError: If the move would create a cycle.
        """
        parent_id = super().clean_parentId()
        if parent_id is not None and is_within(
            self.store,
            parent_id,
            self.file_id,
        ):
            raise ValidationError(
                'Cannot move a folder into itself',
                code='invalid_parent',
            )
        return parent_id

    def clean_size(self) -> int:
        """Default a null size to 0.

        Returns:
            Size in bytes.
        """
        return self.cleaned_data.get('size') or 0

    def clean_path(self) -> str:
        """Refuse a blank path when provided.

        Returns:
            Display path.

        Raises:
            ValidationError: If the path is blank.
        """
        path = self.cleaned_data.get('path', '')
        if self.provided('path') and not path:
            raise ValidationError('Path cannot be empty', code='blank')
        return path

    def clean_metadata(self) -> Bag:
        """Validate the metadata bag.

        Returns:
            Metadata dictionary.
        """
        return clean_bag(self.cleaned_data.get('metadata'))


class UserUpdateForm(JsonForm):
    """Body of PATCH /api/user/:id; only keys present are applied."""

    error_message = 'Invalid user data'

    username = JsonCharField(required=False)
    email = forms.EmailField(required=False)
    firstName = JsonCharField(required=False)  # noqa: N815
    lastName = JsonCharField(required=False)  # noqa: N815
    jobTitle = JsonCharField(required=False, empty_value=None)  # noqa: N815
    avatar = JsonCharField(required=False, empty_value=None)
    plan = forms.ChoiceField(
        required=False,
        choices=[(plan.value, plan.value) for plan in Plan],
    )
    preferences = forms.JSONField(required=False)

    _required_when_present: ClassVar[tuple[str, ...]] = (
        'username',
        'email',
        'firstName',
        'lastName',
        'plan',
    )

    def __init__(
        self,
        data: dict[str, Any],
        *,
        store: RecordStore,
        user_id: str,
    ) -> None:
        """Initialize the form.

        Args:
            data: Decoded JSON body.
            store: Record store used for uniqueness checks.
            user_id: User being updated.
        """
        super().__init__(data)
        self.store = store
        self.user_id = user_id

    def clean_email(self) -> str:
        """Keep email addresses unique across users.

        Returns:
            Email address.

        Raises:
            ValidationError: If another user has the address.
        """
        email = self.cleaned_data.get('email', '')
        owner = get_user_by_email(self.store, email) if email else None
        if owner is not None and owner.id != self.user_id:
            raise ValidationError(
                'Email address is already in use',
                code='unique',
            )
        return email

    def clean_preferences(self) -> Bag:
        """Validate the preferences bag.

        Returns:
            Preferences dictionary.
        """
        return clean_bag(self.cleaned_data.get('preferences'))

    def clean(self) -> dict[str, Any]:
        """Refuse blanking out mandatory profile fields.

        Returns:
            Cleaned data.
        """
        cleaned_data = super().clean()
        for name in self._required_when_present:
            if self.provided(name) and name in cleaned_data and not cleaned_data[name]:
                self.add_error(
                    name,
                    ValidationError('This field cannot be empty', code='blank'),
                )
        return cleaned_data

    def changes(self) -> dict[str, Any]:
        """Cleaned values with the plan converted to its enum.

        Returns:
            Mapping of snake_case attribute names to cleaned values.
        """
        changes = super().changes()
        if 'plan' in changes:
            changes['plan'] = Plan(changes['plan'])
        return changes


class BulkActionForm(JsonForm):
    """Body of POST /api/files/bulk."""

    error_message = 'Invalid bulk operation data'

    action = forms.ChoiceField(
        choices=[(action.value, action.value) for action in BulkAction],
    )
    fileIds = forms.JSONField(required=False)  # noqa: N815
    targetParentId = JsonCharField(  # noqa: N815
        required=False,
        empty_value=None,
    )

    def __init__(
        self,
        data: dict[str, Any],
        *,
        store: RecordStore,
        owner_id: str,
    ) -> None:
        """Initialize the form.

        Args:
            data: Decoded JSON body.
            store: Record store used for reference checks.
            owner_id: Owner the target folder must belong to.
        """
        super().__init__(data)
        self.store = store
        self.owner_id = owner_id

    def clean_fileIds(self) -> list[str]:  # noqa: N802
        """Require a list of id strings.

        Returns:
            File ids in request order.

        Raises:
            ValidationError: If the value is not a list of strings.
        """
        # JSONField cleans an empty list to None, so read the raw value
        file_ids = self.data.get('fileIds')
        if file_ids is None:
            raise ValidationError('This field is required.', code='required')
        if not isinstance(file_ids, list) or not all(
            isinstance(file_id, str) for file_id in file_ids
        ):
            raise ValidationError(
                'Expected a list of file ids',
                code='invalid',
            )
        return file_ids

    def clean_targetParentId(self) -> str | None:  # noqa: N802
        """Check that a move target is one of the owner's folders.

        Other actions ignore the target, so it is not checked for them.

        Returns:
            Target folder id or None for root.

        Raises:
            ValidationError: If the target is not an existing folder.
        """
        target_id = self.cleaned_data.get('targetParentId')
        if target_id is None or self.cleaned_data.get('action') != BulkAction.MOVE:
            return target_id
        if get_owned_folder(self.store, target_id, self.owner_id) is None:
            raise ValidationError(
                'Target must be an existing folder',
                code='invalid_parent',
            )
        return target_id

    def target_parent(self) -> str | None | object:
        """Move target, or UNSET when the body has no targetParentId.

        Returns:
            Target folder id, None for root, or UNSET.
        """
        if not self.provided('targetParentId'):
            return UNSET
        return self.cleaned_data['targetParentId']


class ShareCreateForm(JsonForm):
    """Body of POST /api/files/:id/shares."""

    error_message = 'Invalid share data'

    sharedWith = JsonCharField(required=False, empty_value=None)  # noqa: N815
    permissions = forms.ChoiceField(
        required=False,
        choices=[
            (permission.value, permission.value)
            for permission in SharePermission
        ],
    )
    expiresAt = forms.DateTimeField(required=False)  # noqa: N815

    def clean_permissions(self) -> SharePermission:
        """Default to read access.

        Returns:
            Permission level.
        """
        return SharePermission(
            self.cleaned_data.get('permissions') or SharePermission.READ,
        )


class LimitForm(JsonForm):
    """Optional ?limit= query parameter of list endpoints."""

    error_message = 'Invalid limit'

    limit = forms.IntegerField(required=False, min_value=1, max_value=_MAX_LIMIT)
