"""Unit tests for the media library service."""

import pytest

from src.shared.domain.post import Post
from src.shared.exceptions import PostNotFoundError
from src.shared.media_library import MediaLibrary
from tests.test_const import IMAGE_MIME, MAY_2024, TEST_AUTHOR, TEST_FILENAME, TEST_PARENT, TEST_TITLE, TEST_URL


@pytest.fixture
def plain_library(repository, object_cache, mock_dispatcher):
    """Library whose hooks go to a mock dispatcher."""
    return MediaLibrary(repository, object_cache, mock_dispatcher)


class TestMediaLibraryWrites:
    """Every write path cleans the post cache and fires the hook."""

    @pytest.mark.asyncio
    async def test_create_fires_clean_post_cache(self, plain_library, mock_dispatcher):
        post = await plain_library.create_attachment(TEST_TITLE, IMAGE_MIME, url=TEST_URL)

        assert post.post_type == "attachment"
        mock_dispatcher.notify_clean_post_cache.assert_awaited_once_with(post.id, post)

    @pytest.mark.asyncio
    async def test_update_fires_clean_post_cache(self, plain_library, mock_dispatcher):
        post = await plain_library.create_attachment(TEST_TITLE, IMAGE_MIME)

        updated = await plain_library.update_attachment(post.id, {"post_title": "Renamed"})

        assert updated.post_title == "Renamed"
        assert mock_dispatcher.notify_clean_post_cache.await_count == 2

    @pytest.mark.asyncio
    async def test_delete_fires_clean_post_cache_with_deleted_post(self, plain_library, mock_dispatcher):
        post = await plain_library.create_attachment(TEST_TITLE, IMAGE_MIME)

        deleted = await plain_library.delete_attachment(post.id)

        assert deleted.id == post.id
        mock_dispatcher.notify_clean_post_cache.assert_awaited_with(post.id, deleted)
        with pytest.raises(PostNotFoundError):
            plain_library.get_attachment(post.id)

    @pytest.mark.asyncio
    async def test_set_meta_fires_clean_post_cache(self, plain_library, mock_dispatcher):
        post = await plain_library.create_attachment(TEST_TITLE, IMAGE_MIME)

        await plain_library.set_attachment_meta(post.id, "alt", "Orange sky")

        assert mock_dispatcher.notify_clean_post_cache.await_count == 2
        assert plain_library.get_attachment_meta(post.id) == {"alt": "Orange sky"}

    @pytest.mark.asyncio
    async def test_writes_evict_cached_post(self, plain_library, object_cache):
        post = await plain_library.create_attachment(TEST_TITLE, IMAGE_MIME)
        plain_library.get_attachment(post.id)
        assert object_cache.get(str(post.id), "posts") is not None

        await plain_library.update_attachment(post.id, {"post_title": "Renamed"})

        assert object_cache.get(str(post.id), "posts") is None
        assert plain_library.get_attachment(post.id).post_title == "Renamed"

    @pytest.mark.asyncio
    async def test_writes_to_unknown_ids_raise(self, plain_library, mock_dispatcher):
        with pytest.raises(PostNotFoundError):
            await plain_library.update_attachment(999, {"post_title": "x"})
        with pytest.raises(PostNotFoundError):
            await plain_library.delete_attachment(999)
        with pytest.raises(PostNotFoundError):
            await plain_library.set_attachment_meta(999, "alt", "x")
        mock_dispatcher.notify_clean_post_cache.assert_not_awaited()


class TestMediaLibraryReads:
    """Test attachment reads and shaping."""

    @pytest.mark.asyncio
    async def test_get_attachment_rejects_other_post_types(self, plain_library, repository):
        post_id = repository.insert_post(Post(id=0, post_type="post", post_title="Blog"))

        with pytest.raises(PostNotFoundError):
            plain_library.get_attachment(post_id)

    @pytest.mark.asyncio
    async def test_prepare_attachment_for_js(self, plain_library):
        post = await plain_library.create_attachment(
            TEST_TITLE, IMAGE_MIME, url=TEST_URL, parent=TEST_PARENT, author=TEST_AUTHOR, post_date=MAY_2024
        )
        await plain_library.set_attachment_meta(post.id, "alt", "Orange sky")

        shaped = plain_library.prepare_attachment_for_js(plain_library.get_attachment(post.id))

        assert shaped["id"] == post.id
        assert shaped["title"] == TEST_TITLE
        assert shaped["filename"] == TEST_FILENAME
        assert shaped["url"] == TEST_URL
        assert shaped["mime"] == IMAGE_MIME
        assert shaped["type"] == "image"
        assert shaped["subtype"] == "jpeg"
        assert shaped["uploadedTo"] == TEST_PARENT
        assert shaped["author"] == TEST_AUTHOR
        assert shaped["date"] == MAY_2024.isoformat()
        assert shaped["meta"] == {"alt": "Orange sky"}
