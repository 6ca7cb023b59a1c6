"""
Tests for the public ad banner route.
"""

from newsai.config import state


def _create(title, position, is_active=True):
    return state.db.create_ad_banner(
        title=title,
        image_url=f"https://ads.example.com/{title}.png",
        click_url="https://shop.example.com",
        position=position,
        is_active=is_active,
    )


class TestListAds:
    """Tests for GET /api/ads."""

    def test_position_filter_returns_active_only(self, client):
        """position=top returns only active top banners."""
        _create("top-live", "top")
        _create("top-paused", "top", is_active=False)
        _create("bottom-live", "bottom")

        ads = client.get("/api/ads?position=top").json()
        assert [ad["title"] for ad in ads] == ["top-live"]
        assert all(ad["position"] == "top" and ad["isActive"] for ad in ads)

    def test_without_position(self, client):
        _create("top-live", "top")
        _create("middle-live", "middle")
        _create("middle-paused", "middle", is_active=False)

        titles = {ad["title"] for ad in client.get("/api/ads").json()}
        assert titles == {"top-live", "middle-live"}

    def test_invalid_position(self, client):
        assert client.get("/api/ads?position=sidebar").status_code == 400
