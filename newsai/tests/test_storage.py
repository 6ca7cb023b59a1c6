"""
Storage contract tests, run against both SQLite and the in-memory double.
"""

from datetime import datetime, timezone

import pytest

from newsai.database import Database, MemoryStorage, NewArticle
from newsai.exceptions import DuplicateUsernameError


@pytest.fixture(params=["sqlite", "memory"])
def storage(request, temp_db_path):
    if request.param == "sqlite":
        return Database(temp_db_path)
    return MemoryStorage()


def make_article(title="Story", category="tech", day=1, **overrides) -> NewArticle:
    fields = dict(
        title=title,
        content=f"{title} content",
        summary=f"{title} summary",
        source="Wire",
        category=category,
        original_url=f"https://news.example.com/{title.lower().replace(' ', '-')}",
        published_at=datetime(2024, 5, day, 12, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return NewArticle(**fields)


class TestArticles:
    def test_create_and_get(self, storage):
        created = storage.create_article(make_article("Launch", image_url="https://img/1.jpg"))

        fetched = storage.get_article(created.id)
        assert fetched.title == "Launch"
        assert fetched.image_url == "https://img/1.jpg"
        assert fetched.published_at == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)
        assert fetched.created_at.tzinfo is not None
        assert fetched.read_time == 3
        assert fetched.is_breaking is False

    def test_get_missing(self, storage):
        assert storage.get_article("nope") is None

    def test_newest_published_first(self, storage):
        for day in (2, 5, 1):
            storage.create_article(make_article(f"Day {day}", day=day))

        titles = [a.title for a in storage.get_articles()]
        assert titles == ["Day 5", "Day 2", "Day 1"]

    def test_category_filters(self, storage):
        storage.create_article(make_article("Vote", category="politics"))
        storage.create_article(make_article("Chip", category="tech"))
        storage.create_article(make_article("Quake", category="tech", is_breaking=True))

        assert [a.title for a in storage.get_articles(category="politics")] == ["Vote"]
        assert len(storage.get_articles(category="all")) == 3
        assert len(storage.get_articles(category=None)) == 3
        assert [a.title for a in storage.get_articles(category="breaking")] == ["Quake"]
        assert [a.title for a in storage.get_breaking_news()] == ["Quake"]

    def test_limit_and_offset(self, storage):
        for day in range(1, 6):
            storage.create_article(make_article(f"Day {day}", day=day))

        page = storage.get_articles(limit=2, offset=1)
        assert [a.title for a in page] == ["Day 4", "Day 3"]

    def test_hidden_excluded_unless_requested(self, storage):
        hidden = storage.create_article(make_article("Hidden", is_breaking=True))
        storage.create_article(make_article("Shown"))

        assert storage.hide_article(hidden.id) is True
        assert [a.title for a in storage.get_articles()] == ["Shown"]
        assert storage.get_breaking_news() == []
        assert len(storage.get_articles(include_hidden=True)) == 2
        # Direct lookup still finds it
        assert storage.get_article(hidden.id).is_hidden is True

    def test_hide_missing(self, storage):
        assert storage.hide_article("nope") is False

    def test_update_ignores_unknown_fields(self, storage):
        created = storage.create_article(make_article())

        updated = storage.update_article(created.id, summary="New summary", id="hijack")
        assert updated.id == created.id
        assert updated.summary == "New summary"
        assert storage.update_article("nope", summary="x") is None

    def test_delete_cascades_to_links(self, storage):
        article = storage.create_article(make_article())
        storage.save_article("u1", article.id)
        storage.add_to_reading_history("u1", article.id)

        assert storage.delete_article(article.id) is True
        assert storage.get_article(article.id) is None
        assert storage.is_article_saved("u1", article.id) is False
        assert storage.get_reading_history("u1") == []
        assert storage.delete_article(article.id) is False


class TestSavedArticles:
    def test_save_list_unsave(self, storage):
        first = storage.create_article(make_article("First"))
        second = storage.create_article(make_article("Second"))

        link = storage.save_article("u1", first.id)
        assert link.user_id == "u1"
        assert link.article_id == first.id
        storage.save_article("u1", second.id)

        saved = storage.get_saved_articles("u1")
        assert [a.title for a, _ in saved] == ["Second", "First"]
        assert all(saved_at.tzinfo is not None for _, saved_at in saved)
        assert storage.is_article_saved("u1", first.id) is True
        assert storage.get_saved_articles("u2") == []

        assert storage.unsave_article("u1", first.id) is True
        assert storage.unsave_article("u1", first.id) is False
        assert [a.title for a, _ in storage.get_saved_articles("u1")] == ["Second"]

    def test_hidden_articles_not_listed(self, storage):
        article = storage.create_article(make_article())
        storage.save_article("u1", article.id)
        storage.hide_article(article.id)

        assert storage.get_saved_articles("u1") == []
        assert storage.is_article_saved("u1", article.id) is True


class TestReadingHistory:
    def test_reread_moves_to_top_without_duplicate(self, storage):
        first = storage.create_article(make_article("First"))
        second = storage.create_article(make_article("Second"))

        original = storage.add_to_reading_history("u1", first.id)
        storage.add_to_reading_history("u1", second.id)
        touched = storage.add_to_reading_history("u1", first.id)

        assert touched.id == original.id
        assert touched.read_at >= original.read_at
        history = storage.get_reading_history("u1")
        assert [a.title for a, _ in history] == ["First", "Second"]

    def test_limit(self, storage):
        for day in range(1, 4):
            article = storage.create_article(make_article(f"Day {day}", day=day))
            storage.add_to_reading_history("u1", article.id)

        assert len(storage.get_reading_history("u1", limit=2)) == 2

    def test_clear_only_affects_user(self, storage):
        article = storage.create_article(make_article())
        storage.add_to_reading_history("u1", article.id)
        storage.add_to_reading_history("u2", article.id)

        assert storage.clear_reading_history("u1") is True
        assert storage.clear_reading_history("u1") is False
        assert storage.get_reading_history("u1") == []
        assert len(storage.get_reading_history("u2")) == 1


class TestUsers:
    def test_create_and_lookup(self, storage):
        user = storage.create_user("reader", "hashed")

        assert user.is_admin is False
        assert user.notification_preferences == {
            "pushNotifications": True,
            "breakingNews": True,
            "emailUpdates": False,
        }
        assert storage.get_user(user.id).username == "reader"
        assert storage.get_user_by_username("reader").id == user.id
        assert storage.get_user_by_username("nobody") is None

    def test_duplicate_username(self, storage):
        storage.create_user("reader", "hashed")
        with pytest.raises(DuplicateUsernameError):
            storage.create_user("reader", "other")

    def test_ensure_admin_user(self, storage):
        admin = storage.ensure_admin_user("admin-user", "admin", "hashed")
        again = storage.ensure_admin_user("admin-user", "admin", "hashed")

        assert admin.id == again.id == "admin-user"
        assert storage.get_user("admin-user").is_admin is True

    def test_update_preferences_fills_defaults(self, storage):
        user = storage.create_user("reader", "hashed")

        updated = storage.update_notification_preferences(user.id, {"emailUpdates": True})
        assert updated.notification_preferences == {
            "pushNotifications": True,
            "breakingNews": True,
            "emailUpdates": True,
        }
        assert storage.get_user(user.id).notification_preferences["emailUpdates"] is True
        assert storage.update_notification_preferences("nope", {}) is None

    def test_set_push_subscription(self, storage):
        user = storage.create_user("reader", "hashed")
        payload = {"endpoint": "https://push.example/1", "keys": {"p256dh": "k", "auth": "a"}}

        storage.set_push_subscription(user.id, payload)
        assert storage.get_user(user.id).push_subscription == payload


class TestPushSubscriptions:
    def test_resubscribe_replaces_same_endpoint(self, storage):
        storage.save_push_subscription("u1", "https://push.example/1", "k1", "a1")
        storage.save_push_subscription("u1", "https://push.example/1", "k2", "a2")
        storage.save_push_subscription("u1", "https://push.example/2", "k3", "a3")

        subscriptions = storage.get_push_subscriptions("u1")
        assert len(subscriptions) == 2
        replaced = next(s for s in subscriptions if s.endpoint == "https://push.example/1")
        assert replaced.p256dh == "k2"

    def test_filter_and_delete(self, storage):
        storage.save_push_subscription("u1", "https://push.example/1", "k", "a")
        storage.save_push_subscription("u2", "https://push.example/2", "k", "a")

        assert len(storage.get_push_subscriptions()) == 2
        assert storage.delete_push_subscription("u1", "https://push.example/1") is True
        assert storage.delete_push_subscription("u1", "https://push.example/1") is False
        assert [s.user_id for s in storage.get_push_subscriptions()] == ["u2"]


class TestAdBanners:
    def test_active_by_position(self, storage):
        top = storage.create_ad_banner("Top", "https://img/t", "https://go/t", "top")
        storage.create_ad_banner("Bottom", "https://img/b", "https://go/b", "bottom")
        storage.create_ad_banner("Off", "https://img/o", "https://go/o", "top", is_active=False)

        assert [ad.title for ad in storage.get_ad_banners("top")] == ["Top"]
        assert len(storage.get_ad_banners()) == 2
        assert storage.get_ad_banner(top.id).position == "top"

    def test_update_and_delete(self, storage):
        ad = storage.create_ad_banner("Top", "https://img/t", "https://go/t", "top")

        updated = storage.update_ad_banner(ad.id, title="Renamed", is_active=False)
        assert updated.title == "Renamed"
        assert updated.click_url == "https://go/t"
        assert storage.get_ad_banners() == []

        assert storage.update_ad_banner("nope", title="x") is None
        assert storage.delete_ad_banner(ad.id) is True
        assert storage.get_ad_banner(ad.id) is None
        assert storage.delete_ad_banner(ad.id) is False


class TestSessions:
    def test_live_session(self, storage):
        created = storage.create_session("sid-1", "u1", max_age=3600)

        session = storage.get_session("sid-1")
        assert session.user_id == "u1"
        assert session.expires_at > created.created_at

    def test_expired_session_is_absent(self, storage):
        storage.create_session("sid-1", "u1", max_age=-1)
        assert storage.get_session("sid-1") is None

    def test_delete_session(self, storage):
        storage.create_session("sid-1", "u1", max_age=3600)
        assert storage.delete_session("sid-1") is True
        assert storage.get_session("sid-1") is None
        assert storage.delete_session("sid-1") is False

    def test_purge_expired(self, storage):
        storage.create_session("old", "u1", max_age=-1)
        storage.create_session("live", "u1", max_age=3600)

        assert storage.purge_expired_sessions() == 1
        assert storage.purge_expired_sessions() == 0
        assert storage.get_session("live") is not None
