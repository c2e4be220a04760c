import pytest

from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import (
    AlreadyFollowingException,
    NotFollowingException,
    SelfFollowNotAllowedException,
    UserNotFoundException,
)
from prompt_driver.models.database_models.notification import NotificationType
from prompt_driver.services import follow_services
from prompt_driver.services.database import follow_database_services, notification_database_services

FIRST_PAGE = PageParams(page=0, size=20)


async def test_follow_updates_counts_and_notifies(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")

    await follow_services.follow_user(db_session, alice, bob.id)

    await db_session.refresh(alice)
    await db_session.refresh(bob)
    assert alice.following_count == 1
    assert bob.follower_count == 1

    notifications, _ = await notification_database_services.list_user_notifications(db_session, bob.id, 0, 10)
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.USER_FOLLOWED
    assert notifications[0].message == "alice started following you"
    assert notifications[0].sender_id == alice.id


async def test_unfollow_restores_counts(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_services.follow_user(db_session, alice, bob.id)

    await follow_services.unfollow_user(db_session, alice, bob.id)

    await db_session.refresh(alice)
    await db_session.refresh(bob)
    assert alice.following_count == 0
    assert bob.follower_count == 0
    status = await follow_services.get_follow_status(db_session, alice, bob.id)
    assert status.is_following is False


async def test_follow_rules(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")

    with pytest.raises(SelfFollowNotAllowedException):
        await follow_services.follow_user(db_session, alice, alice.id)
    with pytest.raises(UserNotFoundException):
        await follow_services.follow_user(db_session, alice, 9999)
    with pytest.raises(NotFollowingException):
        await follow_services.unfollow_user(db_session, alice, bob.id)

    await follow_services.follow_user(db_session, alice, bob.id)
    with pytest.raises(AlreadyFollowingException):
        await follow_services.follow_user(db_session, alice, bob.id)


async def test_follow_status_is_directional(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_services.follow_user(db_session, bob, alice.id)

    status = await follow_services.get_follow_status(db_session, alice, bob.id)
    assert status.is_following is False
    assert status.is_followed_by is True


async def test_follower_list_marks_who_the_viewer_follows(db_session, make_user, make_prompt):
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    await make_prompt(bob)
    await make_prompt(bob, is_public=False)
    await follow_services.follow_user(db_session, bob, alice.id)
    await follow_services.follow_user(db_session, carol, alice.id)
    await follow_services.follow_user(db_session, alice, bob.id)

    page = await follow_services.get_followers(db_session, alice.id, FIRST_PAGE, viewer=alice)

    assert page.total_elements == 2
    entries = {entry.nickname: entry for entry in page.content}
    assert entries["bob"].is_following is True
    assert entries["bob"].prompt_count == 1
    assert entries["carol"].is_following is False
    assert entries["carol"].prompt_count == 0

    following = await follow_services.get_following(db_session, alice.id, FIRST_PAGE)
    assert [entry.nickname for entry in following.content] == ["bob"]


async def test_feed_shows_public_prompts_of_followed_users(db_session, make_user, make_prompt):
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    older = await make_prompt(bob, title="Older public prompt")
    newer = await make_prompt(bob, title="Newer public prompt")
    await make_prompt(bob, title="Private prompt", is_public=False)
    await make_prompt(carol, title="Not followed")
    await follow_services.follow_user(db_session, alice, bob.id)

    feed = await follow_services.get_user_feed(db_session, alice, FIRST_PAGE)

    assert [item.id for item in feed.content] == [newer.id, older.id]


async def test_concurrent_duplicate_follow_is_rejected_by_constraint(db_session, make_user, monkeypatch):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await follow_services.follow_user(db_session, alice, bob.id)

    async def no_existing_follow(db, follower_id, following_id):
        return None

    monkeypatch.setattr(follow_database_services, "get_follow", no_existing_follow)
    with pytest.raises(AlreadyFollowingException):
        await follow_services.follow_user(db_session, alice, bob.id)

    await db_session.refresh(alice)
    await db_session.refresh(bob)
    assert alice.following_count == 1
    assert bob.follower_count == 1
