import asyncio
import logging

import pytest

from ran_bot.errors import PostNotFound, UpstreamFetchError
from ran_bot.memory.cache.slug import normalize_slug
from ran_bot.memory.cache.store import PostStore


@pytest.mark.asyncio
async def test_refresh_keys_posts_by_normalized_slug(fetcher):
    store = PostStore(fetcher)
    assert store.last_updated is None

    assert await store.refresh() is True

    posts = store.snapshot()
    assert {p.key for p in posts} == {"first-post", "second-post"}
    assert all(p.key == normalize_slug(p.slug) for p in posts)
    assert "Second Post!" in store
    assert store.get("second-post").slug == "Second Post!"
    assert store.last_updated is not None
    assert len(store) == 2


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_collection(fetcher, caplog):
    store = PostStore(fetcher)
    await store.refresh()
    stamp = store.last_updated

    fetcher.posts = []
    fetcher.error = UpstreamFetchError("boom")
    with caplog.at_level(logging.ERROR):
        assert await store.refresh() is False

    assert len(store) == 2
    assert store.last_updated == stamp
    assert "boom" in caplog.text


@pytest.mark.asyncio
async def test_unexpected_fetch_error_is_logged_not_raised(fetcher, caplog):
    store = PostStore(fetcher)
    await store.refresh()

    fetcher.error = AttributeError("'str' object has no attribute 'get'")
    with caplog.at_level(logging.ERROR):
        assert await store.refresh() is False

    assert len(store) == 2
    assert "Unexpected error refreshing posts cache" in caplog.text
    assert not store.refreshing


@pytest.mark.asyncio
async def test_refresh_replaces_wholesale(make_fetcher, post_factory):
    fetcher = make_fetcher([post_factory("old-one"), post_factory("kept")])
    store = PostStore(fetcher)
    await store.refresh()

    fetcher.posts = [post_factory("kept"), post_factory("new-one")]
    await store.refresh()

    assert {p.key for p in store.snapshot()} == {"kept", "new-one"}


@pytest.mark.asyncio
async def test_refresh_wipes_overrides_by_default(fetcher):
    store = PostStore(fetcher)
    await store.refresh()
    store.set_visibility("first-post", False)
    store.set_pinned("second-post")

    await store.refresh()

    assert store.get("first-post").visible is True
    assert store.get("second-post").is_pinned is False


@pytest.mark.asyncio
async def test_preserve_overrides_carries_flags_across_refresh(fetcher, post_factory):
    store = PostStore(fetcher, preserve_overrides=True)
    await store.refresh()
    store.set_visibility("first-post", False)
    store.set_pinned("second-post")

    fetcher.posts.append(post_factory("third"))
    await store.refresh()

    assert store.get("first-post").visible is False
    assert store.get("second-post").is_pinned is True
    assert store.get("third").visible is True


@pytest.mark.asyncio
async def test_readers_never_see_a_mixed_generation(make_fetcher, post_factory):
    old = [post_factory(f"old-{i}") for i in range(20)]
    new = [post_factory(f"new-{i}") for i in range(25)]
    fetcher = make_fetcher(old)
    store = PostStore(fetcher)
    await store.refresh()

    old_keys = {p.key for p in old}
    new_keys = {p.key for p in new}
    fetcher.posts = new
    fetcher.gate = asyncio.Event()
    observed = []

    async def reader():
        while True:
            observed.append({p.key for p in store.snapshot()})
            if observed[-1] == new_keys:
                return
            await asyncio.sleep(0)

    async def release_later():
        for _ in range(5):
            await asyncio.sleep(0)
        fetcher.gate.set()

    await asyncio.gather(store.refresh(), reader(), release_later())

    assert observed[0] == old_keys
    assert all(keys in (old_keys, new_keys) for keys in observed)


@pytest.mark.asyncio
async def test_concurrent_refreshes_coalesce(fetcher):
    fetcher.gate = asyncio.Event()
    store = PostStore(fetcher)

    first = asyncio.create_task(store.refresh())
    await fetcher.started.wait()
    assert store.refreshing is True
    second = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)

    fetcher.gate.set()
    assert await asyncio.gather(first, second) == [True, True]
    assert fetcher.calls == 1
    assert store.refreshing is False

    await store.refresh()
    assert fetcher.calls == 2


@pytest.mark.asyncio
async def test_cancelled_caller_does_not_abort_refresh(fetcher):
    fetcher.gate = asyncio.Event()
    store = PostStore(fetcher)

    caller = asyncio.create_task(store.refresh())
    await fetcher.started.wait()
    caller.cancel()
    with pytest.raises(asyncio.CancelledError):
        await caller

    fetcher.gate.set()
    for _ in range(5):
        await asyncio.sleep(0)
    assert len(store) == 2


@pytest.mark.asyncio
async def test_flag_set_during_inflight_refresh_is_lost(fetcher):
    # Known hazard of full-replace refreshes: the rebuilt collection wins.
    store = PostStore(fetcher)
    await store.refresh()

    fetcher.gate = asyncio.Event()
    pending = asyncio.create_task(store.refresh())
    await fetcher.started.wait()
    store.set_visibility("first-post", False)
    assert store.get("first-post").visible is False

    fetcher.gate.set()
    await pending

    assert store.get("first-post").visible is True


@pytest.mark.asyncio
async def test_set_visibility_mutates_live_entry(fetcher):
    store = PostStore(fetcher)
    await store.refresh()

    store.set_visibility("First Post", False)
    assert store.get("first-post").visible is False
    store.set_visibility("first-post", True)
    assert store.get("first-post").visible is True


@pytest.mark.asyncio
async def test_overrides_on_unknown_slug_raise_not_found(fetcher):
    store = PostStore(fetcher)
    await store.refresh()

    with pytest.raises(PostNotFound):
        store.set_visibility("missing", False)
    with pytest.raises(PostNotFound):
        store.set_pinned("missing")
    with pytest.raises(PostNotFound):
        store.get("missing")


@pytest.mark.asyncio
async def test_snapshot_returns_copies(fetcher):
    store = PostStore(fetcher)
    await store.refresh()

    for post in store.snapshot():
        post.visible = False

    assert all(p.visible for p in store.snapshot())


@pytest.mark.asyncio
async def test_unusable_and_duplicate_slugs(make_fetcher, post_factory):
    fetcher = make_fetcher(
        [
            post_factory("???", id="blank"),
            post_factory("Dup Slug", id="first"),
            post_factory("dup-slug", id="second"),
        ]
    )
    store = PostStore(fetcher)
    await store.refresh()

    assert len(store) == 1
    assert store.get("dup-slug").id == "second"


def test_refresh_interval_must_be_positive(fetcher):
    store = PostStore(fetcher, refresh_interval=5)
    assert store.refresh_interval == 5.0

    with pytest.raises(ValueError):
        store.refresh_interval = 0
