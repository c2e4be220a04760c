from prompt_driver.core.dependencies import PageParams
from prompt_driver.services import prompt_services
from prompt_driver.services.database import prompt_database_services

FIRST_PAGE = PageParams(page=0, size=20)


async def test_search_treats_wildcards_literally(db_session, make_user, make_prompt):
    author = await make_user("author")
    coverage = await make_prompt(author, title="Reach 100% coverage")
    await make_prompt(author, title="Write 1000 words")
    snake = await make_prompt(author, title="Rename to snake_case")
    await make_prompt(author, title="Rename to snakeXcase")

    percent = await prompt_services.get_prompts(db_session, FIRST_PAGE, search="100%")
    underscore = await prompt_services.get_prompts(db_session, FIRST_PAGE, search="snake_case")

    assert [item.id for item in percent.content] == [coverage.id]
    assert [item.id for item in underscore.content] == [snake.id]


async def test_concurrent_duplicate_like_reports_liked(db_session, make_user, make_prompt, monkeypatch):
    author = await make_user("author")
    alice = await make_user("alice")
    prompt = await make_prompt(author)
    await prompt_services.toggle_like(db_session, prompt.id, alice)

    async def no_existing_like(db, user_id, prompt_id):
        return None

    monkeypatch.setattr(prompt_database_services, "get_like", no_existing_like)
    result = await prompt_services.toggle_like(db_session, prompt.id, alice)

    assert (result.liked, result.like_count) == (True, 1)
