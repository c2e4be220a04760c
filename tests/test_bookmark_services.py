import pytest

from prompt_driver.core.config import settings
from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import (
    BookmarkFolderLimitExceededException,
    BookmarkFolderNotFoundException,
    BookmarkNotFoundException,
    FolderNameAlreadyExistsException,
    ForbiddenException,
    SelfBookmarkNotAllowedException,
    ValidationException,
)
from prompt_driver.models.bookmark_models import BookmarkFolderRequest
from prompt_driver.services import bookmark_services, prompt_services
from prompt_driver.services.database import bookmark_database_services

FIRST_PAGE = PageParams(page=0, size=20)


async def test_toggle_bookmark_adds_then_removes(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    prompt = await make_prompt(author)

    added = await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    assert added.bookmarked is True
    assert added.bookmark_count == 1
    assert await bookmark_services.is_bookmarked(db_session, prompt.id, alice) is True

    removed = await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    assert removed.bookmarked is False
    assert removed.bookmark_count == 0
    assert await bookmark_services.is_bookmarked(db_session, prompt.id, alice) is False

    again = await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    assert (again.bookmarked, again.bookmark_count) == (True, 1)
    assert await bookmark_services.is_bookmarked(db_session, prompt.id, alice) is True


async def test_author_cannot_bookmark_own_prompt(db_session, make_user, make_prompt):
    author = await make_user("author")
    prompt = await make_prompt(author)

    with pytest.raises(SelfBookmarkNotAllowedException):
        await bookmark_services.toggle_bookmark(db_session, prompt.id, author)


async def test_folder_limit(db_session, make_user):
    alice = await make_user("alice")
    for index in range(settings.MAX_BOOKMARK_FOLDERS):
        await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name=f"Folder {index}"))

    with pytest.raises(BookmarkFolderLimitExceededException):
        await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="One too many"))


async def test_duplicate_folder_name(db_session, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Writing"))

    with pytest.raises(FolderNameAlreadyExistsException):
        await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Writing"))

    # Folder names only need to be unique per user
    folder = await bookmark_services.create_folder(db_session, bob, BookmarkFolderRequest(name="Writing"))
    assert folder.name == "Writing"


async def test_rename_folder_checks_other_folders_only(db_session, make_user):
    alice = await make_user("alice")
    work = await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Work"))
    await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Personal"))

    renamed = await bookmark_services.update_folder(
        db_session, alice, work.id, BookmarkFolderRequest(name="Work", description="Day job")
    )
    assert renamed.description == "Day job"

    with pytest.raises(FolderNameAlreadyExistsException):
        await bookmark_services.update_folder(db_session, alice, work.id, BookmarkFolderRequest(name="Personal"))


async def test_move_bookmark_recounts_folders(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    prompt = await make_prompt(author)
    await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    bookmark = await bookmark_database_services.get_bookmark(db_session, alice.id, prompt.id)
    first = await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="First"))
    second = await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Second"))

    moved = await bookmark_services.move_bookmark(db_session, alice, bookmark.id, first.id)
    assert moved.folder_id == first.id

    moved = await bookmark_services.move_bookmark(db_session, alice, bookmark.id, second.id)
    assert moved.folder_id == second.id

    first_folder = await bookmark_database_services.get_user_folder(db_session, alice.id, first.id)
    second_folder = await bookmark_database_services.get_user_folder(db_session, alice.id, second.id)
    await db_session.refresh(first_folder)
    await db_session.refresh(second_folder)
    assert first_folder.bookmark_count == 0
    assert second_folder.bookmark_count == 1

    moved = await bookmark_services.move_bookmark(db_session, alice, bookmark.id, None)
    assert moved.folder_id is None


async def test_move_requires_own_bookmark_and_folder(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    bob = await make_user("bob")
    prompt = await make_prompt(author)
    await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    bookmark = await bookmark_database_services.get_bookmark(db_session, alice.id, prompt.id)
    bobs_folder = await bookmark_services.create_folder(db_session, bob, BookmarkFolderRequest(name="Bob's"))

    with pytest.raises(BookmarkFolderNotFoundException):
        await bookmark_services.move_bookmark(db_session, alice, bookmark.id, bobs_folder.id)
    with pytest.raises(BookmarkNotFoundException):
        await bookmark_services.move_bookmark(db_session, bob, bookmark.id, bobs_folder.id)


async def test_deleting_folder_keeps_bookmarks(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    prompt = await make_prompt(author)
    await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    bookmark = await bookmark_database_services.get_bookmark(db_session, alice.id, prompt.id)
    folder = await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Temporary"))
    await bookmark_services.move_bookmark(db_session, alice, bookmark.id, folder.id)

    await bookmark_services.delete_folder(db_session, alice, folder.id)

    await db_session.refresh(bookmark)
    assert bookmark.folder_id is None
    page = await bookmark_services.get_user_bookmarks(db_session, alice, FIRST_PAGE)
    assert page.total_elements == 1
    assert await bookmark_services.get_user_folders(db_session, alice) == []


async def test_bookmark_list_filters_by_folder_and_search(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    sql_prompt = await make_prompt(author, title="Write SQL queries")
    poem_prompt = await make_prompt(author, title="Write a haiku")
    await bookmark_services.toggle_bookmark(db_session, sql_prompt.id, alice)
    await bookmark_services.toggle_bookmark(db_session, poem_prompt.id, alice)
    folder = await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Poetry"))
    poem_bookmark = await bookmark_database_services.get_bookmark(db_session, alice.id, poem_prompt.id)
    await bookmark_services.move_bookmark(db_session, alice, poem_bookmark.id, folder.id)

    in_folder = await bookmark_services.get_user_bookmarks(db_session, alice, FIRST_PAGE, folder_id=folder.id)
    assert [item.prompt.id for item in in_folder.content] == [poem_prompt.id]
    assert in_folder.content[0].folder.name == "Poetry"

    searched = await bookmark_services.get_user_bookmarks(db_session, alice, FIRST_PAGE, search="sql")
    assert [item.prompt.id for item in searched.content] == [sql_prompt.id]


async def test_deleting_prompt_recounts_folders(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    prompt = await make_prompt(author)
    await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    bookmark = await bookmark_database_services.get_bookmark(db_session, alice.id, prompt.id)
    folder = await bookmark_services.create_folder(db_session, alice, BookmarkFolderRequest(name="Keepers"))
    await bookmark_services.move_bookmark(db_session, alice, bookmark.id, folder.id)

    await prompt_services.delete_prompt(db_session, prompt.id, author)

    folder_row = await bookmark_database_services.get_user_folder(db_session, alice.id, folder.id)
    await db_session.refresh(folder_row)
    assert folder_row.bookmark_count == 0


async def test_popular_bookmarked_prompts(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    bob = await make_user("bob")
    quiet = await make_prompt(author, title="Quiet prompt")
    popular = await make_prompt(author, title="Popular prompt")
    hidden = await make_prompt(author, title="Hidden prompt")
    await bookmark_services.toggle_bookmark(db_session, quiet.id, alice)
    await bookmark_services.toggle_bookmark(db_session, popular.id, alice)
    await bookmark_services.toggle_bookmark(db_session, popular.id, bob)
    await bookmark_services.toggle_bookmark(db_session, hidden.id, bob)
    hidden.is_public = False
    await db_session.commit()

    page = await bookmark_services.get_popular_bookmarked_prompts(db_session, FIRST_PAGE, "week")
    assert [item.id for item in page.content] == [popular.id, quiet.id]
    assert page.total_elements == 2

    with pytest.raises(ValidationException):
        await bookmark_services.get_popular_bookmarked_prompts(db_session, FIRST_PAGE, "decade")


async def test_private_prompt_can_be_unbookmarked_but_not_bookmarked(db_session, make_user, make_prompt):
    author = await make_user("author")
    alice = await make_user("alice")
    bob = await make_user("bob")
    prompt = await make_prompt(author)
    await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    prompt.is_public = False
    await db_session.commit()

    with pytest.raises(ForbiddenException):
        await bookmark_services.toggle_bookmark(db_session, prompt.id, bob)

    removed = await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)
    assert (removed.bookmarked, removed.bookmark_count) == (False, 0)


async def test_concurrent_duplicate_bookmark_reports_bookmarked(db_session, make_user, make_prompt, monkeypatch):
    author = await make_user("author")
    alice = await make_user("alice")
    prompt = await make_prompt(author)
    await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)

    async def no_existing_bookmark(db, user_id, prompt_id):
        return None

    monkeypatch.setattr(bookmark_database_services, "get_bookmark", no_existing_bookmark)
    result = await bookmark_services.toggle_bookmark(db_session, prompt.id, alice)

    assert (result.bookmarked, result.bookmark_count) == (True, 1)
