from __future__ import annotations

import logging

from studyhub.models.media import MediaKind, MediaUpload
from studyhub.models.notification import Notification, NotificationMedia
from studyhub.repositories.base import NotificationRepository
from studyhub.services.errors import InvalidMediaError, NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

CATEGORY = "notifications"
MEDIA_KINDS = {
    NotificationMedia.THUMBNAIL: MediaKind.IMAGE,
    NotificationMedia.VIDEO: MediaKind.VIDEO,
}


def _media_type(value: str | None) -> NotificationMedia:
    try:
        return NotificationMedia(value)
    except ValueError:
        raise InvalidMediaError('Media type must be either "thumbnail" or "video"') from None


class NotificationService:
    """Notifications carry one media file, either a thumbnail image or a video.

    Switching between the two replaces the previous representation: the new
    file is stored and persisted first, then the old one is deleted.
    """

    def __init__(self, notification_repo: NotificationRepository, media: MediaLifecycle) -> None:
        self.notification_repo = notification_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Notification:
        notification = self.notification_repo.get_by_uuid(uuid)
        if notification is None:
            raise RecordNotFoundError("Notification not found")
        if notification.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this notification")
        return notification

    def create_notification(
        self,
        user_id: int,
        title: str,
        description: str,
        media_type: str | None,
        media: MediaUpload | None,
    ) -> Notification:
        if not title or not description:
            raise ValueError("Title and description are required")
        kind = _media_type(media_type)
        if media is None:
            raise InvalidMediaError("Media file (thumbnail or video) is required")

        with self.media.staged(media, CATEGORY, MEDIA_KINDS[kind]) as reference:
            notification = self.notification_repo.create(
                Notification(
                    title=title,
                    description=description,
                    thumbnail=reference if kind == NotificationMedia.THUMBNAIL else None,
                    video=reference if kind == NotificationMedia.VIDEO else None,
                    created_by=user_id,
                )
            )
        logger.info("Notification created: uuid=%s media=%s", notification.uuid, kind.value)
        return notification

    def get_notification(self, uuid: str) -> Notification:
        notification = self.notification_repo.get_by_uuid(uuid)
        if notification is None:
            raise RecordNotFoundError("Notification not found")
        return notification

    def list_notifications(self) -> list[Notification]:
        return self.notification_repo.list_all()

    def update_notification(
        self,
        uuid: str,
        user_id: int,
        title: str | None = None,
        description: str | None = None,
        media_type: str | None = None,
        media: MediaUpload | None = None,
    ) -> Notification:
        notification = self._get_owned(uuid, user_id)
        changes: dict = {}
        if title:
            changes["title"] = title
        if description:
            changes["description"] = description

        kind = _media_type(media_type) if media is not None else None
        old_media = notification.media
        with self.media.staged(media, CATEGORY, MEDIA_KINDS[kind] if kind else MediaKind.IMAGE) as reference:
            if reference is not None:
                changes["thumbnail"] = reference if kind == NotificationMedia.THUMBNAIL else None
                changes["video"] = reference if kind == NotificationMedia.VIDEO else None
            candidate = Notification.model_validate({**notification.model_dump(), **changes})
            updated = self.notification_repo.update(candidate)

        if reference is not None:
            self.media.discard(old_media)
        logger.info("Notification updated: uuid=%s fields=%s", uuid, sorted(changes))
        return updated

    def delete_notification(self, uuid: str, user_id: int) -> None:
        notification = self._get_owned(uuid, user_id)
        self.notification_repo.delete(notification.id)
        self.media.discard(notification.thumbnail, notification.video)
        logger.info("Notification deleted: uuid=%s", uuid)
