from datetime import timedelta

import pytest

from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import ForbiddenException, NotificationNotFoundException
from prompt_driver.data.database import utcnow
from prompt_driver.models.database_models.notification import Notification, NotificationType
from prompt_driver.models.notification_models import NotificationSettingsRequest
from prompt_driver.models.prompt_models import PromptCreateRequest
from prompt_driver.services import follow_services, notification_services, prompt_services

FIRST_PAGE = PageParams(page=0, size=20)


async def test_own_actions_do_not_notify(db_session, make_user, make_prompt):
    author = await make_user("author")
    prompt = await make_prompt(author)

    await prompt_services.toggle_like(db_session, prompt.id, author)

    assert await notification_services.get_unread_count(db_session, author.id) == 0


async def test_like_notifies_only_on_like(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    prompt = await make_prompt(author, title="Translate legal text")

    liked = await prompt_services.toggle_like(db_session, prompt.id, alice)
    unliked = await prompt_services.toggle_like(db_session, prompt.id, alice)

    assert (liked.liked, liked.like_count) == (True, 1)
    assert (unliked.liked, unliked.like_count) == (False, 0)
    page = await notification_services.get_user_notifications(db_session, author.id, FIRST_PAGE)
    assert page.total_elements == 1
    assert page.content[0].message == "alice liked your prompt: Translate legal text"
    assert page.content[0].sender.nickname == "alice"


async def test_new_public_prompt_fans_out_to_followers(db_session, make_user):
    author = await make_user("author")
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_services.follow_user(db_session, alice, author.id)
    await follow_services.follow_user(db_session, bob, author.id)
    await notification_services.update_settings(
        db_session,
        bob.id,
        NotificationSettingsRequest(
            new_prompt_from_followed=False,
            user_followed=True,
            prompt_liked=True,
            prompt_rated=True,
            prompt_bookmarked=True,
            system_announcements=True,
        ),
    )
    request = PromptCreateRequest(
        title="Plan a sprint",
        description="Breaks a goal into sprint tasks",
        content="Split the following goal into tasks that fit a two week sprint.",
        category="productivity",
    )

    await prompt_services.create_prompt(db_session, request, author)

    alice_page = await notification_services.get_user_notifications(
        db_session, alice.id, FIRST_PAGE, notification_type=NotificationType.NEW_PROMPT_FROM_FOLLOWED
    )
    assert alice_page.total_elements == 1
    assert alice_page.content[0].title == "New prompt from author"
    assert alice_page.content[0].message == "author published a new prompt: Plan a sprint"
    assert await notification_services.get_unread_count(db_session, bob.id) == 0


async def test_private_prompt_does_not_notify(db_session, make_user):
    author = await make_user("author")
    alice = await make_user("alice")
    await follow_services.follow_user(db_session, alice, author.id)
    request = PromptCreateRequest(
        title="Secret drafts",
        description="Only for the author to see",
        content="This prompt is private and nobody else should hear about it.",
        category="writing",
        is_public=False,
    )

    await prompt_services.create_prompt(db_session, request, author)

    assert await notification_services.get_unread_count(db_session, alice.id) == 0


async def test_mark_as_read_checks_recipient(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_services.follow_user(db_session, alice, bob.id)
    page = await notification_services.get_user_notifications(db_session, bob.id, FIRST_PAGE)
    notification_id = page.content[0].id

    with pytest.raises(ForbiddenException):
        await notification_services.mark_as_read(db_session, alice.id, notification_id)
    with pytest.raises(NotificationNotFoundException):
        await notification_services.mark_as_read(db_session, bob.id, 9999)

    await notification_services.mark_as_read(db_session, bob.id, notification_id)
    page = await notification_services.get_user_notifications(db_session, bob.id, FIRST_PAGE)
    assert page.content[0].is_read is True
    assert page.content[0].read_at is not None


async def test_mark_all_as_read_returns_count(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    await follow_services.follow_user(db_session, bob, alice.id)
    await follow_services.follow_user(db_session, carol, alice.id)

    assert await notification_services.mark_all_as_read(db_session, alice.id) == 2
    assert await notification_services.get_unread_count(db_session, alice.id) == 0
    assert await notification_services.mark_all_as_read(db_session, alice.id) == 0


async def test_delete_notification(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_services.follow_user(db_session, alice, bob.id)
    page = await notification_services.get_user_notifications(db_session, bob.id, FIRST_PAGE)

    with pytest.raises(ForbiddenException):
        await notification_services.delete_notification(db_session, alice.id, page.content[0].id)

    await notification_services.delete_notification(db_session, bob.id, page.content[0].id)
    assert await notification_services.get_unread_count(db_session, bob.id) == 0


async def test_settings_are_created_with_everything_enabled(db_session, make_user):
    alice = await make_user("alice")

    user_settings = await notification_services.get_settings(db_session, alice.id)

    assert user_settings.new_prompt_from_followed is True
    assert user_settings.system_announcements is True


async def test_cleanup_removes_expired_notifications(db_session, make_user):
    alice = await make_user("alice")
    now = utcnow()
    db_session.add_all([
        Notification(recipient_id=alice.id, type=NotificationType.SYSTEM_ANNOUNCEMENT, title="old read",
                     message="m", is_read=True, read_at=now, created_at=now - timedelta(days=31)),
        Notification(recipient_id=alice.id, type=NotificationType.SYSTEM_ANNOUNCEMENT, title="recent read",
                     message="m", is_read=True, read_at=now, created_at=now - timedelta(days=5)),
        Notification(recipient_id=alice.id, type=NotificationType.SYSTEM_ANNOUNCEMENT, title="old unread",
                     message="m", is_read=False, read_at=None, created_at=now - timedelta(days=91)),
        Notification(recipient_id=alice.id, type=NotificationType.SYSTEM_ANNOUNCEMENT, title="unread",
                     message="m", is_read=False, read_at=None, created_at=now - timedelta(days=45)),
    ])
    await db_session.commit()

    assert await notification_services.cleanup_old_notifications(db_session) == 2

    page = await notification_services.get_user_notifications(db_session, alice.id, FIRST_PAGE)
    assert sorted(item.title for item in page.content) == ["recent read", "unread"]
