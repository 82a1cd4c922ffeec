"""URL routes for API app.

Fixed file routes (recent, starred, ...) come before the <file_id>
routes so their names are never taken for ids.
"""

from django.urls import path

from server.apps.api import views

app_name = 'api'

urlpatterns = [
    path('user', views.CurrentUserView.as_view(), name='current-user'),
    path('user/<str:user_id>', views.UserDetailView.as_view(), name='user-detail'),
    path('folders', views.FolderCreateView.as_view(), name='folder-create'),
    path('files', views.FileListView.as_view(), name='file-list'),
    path('files/recent', views.RecentFilesView.as_view(), name='files-recent'),
    path('files/starred', views.StarredFilesView.as_view(), name='files-starred'),
    path('files/shared', views.SharedFilesView.as_view(), name='files-shared'),
    path('files/trash', views.TrashView.as_view(), name='files-trash'),
    path('files/search', views.SearchView.as_view(), name='files-search'),
    path('files/bulk', views.BulkActionView.as_view(), name='files-bulk'),
    path('files/<str:file_id>', views.FileDetailView.as_view(), name='file-detail'),
    path(
        'files/<str:file_id>/restore',
        views.FileRestoreView.as_view(),
        name='file-restore',
    ),
    path(
        'files/<str:file_id>/shares',
        views.FileSharesView.as_view(),
        name='file-shares',
    ),
    path(
        'shares/<str:share_id>',
        views.ShareDetailView.as_view(),
        name='share-detail',
    ),
    path('activities', views.ActivityListView.as_view(), name='activity-list'),
]
