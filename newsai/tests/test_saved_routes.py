"""
Tests for saved article routes.
"""

from newsai.config import state


class TestSaveArticle:
    """Tests for POST /api/saved endpoint."""

    def test_save_article(self, client, seeded_articles):
        article = seeded_articles[0]
        response = client.post("/api/saved", json={"userId": "u1", "articleId": article.id})
        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == "u1"
        assert data["articleId"] == article.id
        assert "savedAt" in data

    def test_save_twice_conflicts(self, client, seeded_articles):
        """The second save is a 409 and only one row exists."""
        body = {"userId": "u1", "articleId": seeded_articles[0].id}
        assert client.post("/api/saved", json=body).status_code == 201

        response = client.post("/api/saved", json=body)
        assert response.status_code == 409
        assert len(state.db.get_saved_articles("u1")) == 1

    def test_save_missing_article(self, client):
        response = client.post("/api/saved", json={"userId": "u1", "articleId": "nope"})
        assert response.status_code == 404

    def test_save_missing_fields(self, client):
        response = client.post("/api/saved", json={"userId": "u1"})
        assert response.status_code == 400

    def test_save_accepts_snake_case(self, client, seeded_articles):
        response = client.post(
            "/api/saved", json={"user_id": "u1", "article_id": seeded_articles[0].id}
        )
        assert response.status_code == 201


class TestListSaved:
    """Tests for GET /api/saved endpoint."""

    def test_requires_user_id(self, client):
        response = client.get("/api/saved")
        assert response.status_code == 400

    def test_lists_newest_saved_first(self, client, seeded_articles):
        for article in seeded_articles[:3]:
            client.post("/api/saved", json={"userId": "u1", "articleId": article.id})

        saved = client.get("/api/saved?userId=u1").json()
        assert [a["id"] for a in saved] == [a.id for a in reversed(seeded_articles[:3])]
        assert all("savedAt" in a for a in saved)

    def test_scoped_to_user(self, client, seeded_articles):
        client.post("/api/saved", json={"userId": "u1", "articleId": seeded_articles[0].id})
        assert client.get("/api/saved?userId=u2").json() == []

    def test_hidden_article_excluded(self, client, seeded_articles):
        article = seeded_articles[0]
        client.post("/api/saved", json={"userId": "u1", "articleId": article.id})
        state.db.hide_article(article.id)

        assert client.get("/api/saved?userId=u1").json() == []


class TestUnsave:
    """Tests for DELETE /api/saved/{article_id} endpoint."""

    def test_unsave(self, client, seeded_articles):
        article = seeded_articles[0]
        client.post("/api/saved", json={"userId": "u1", "articleId": article.id})

        response = client.delete(f"/api/saved/{article.id}?userId=u1")
        assert response.status_code == 200
        assert client.get("/api/saved?userId=u1").json() == []

    def test_unsave_not_saved(self, client, seeded_articles):
        response = client.delete(f"/api/saved/{seeded_articles[0].id}?userId=u1")
        assert response.status_code == 404

    def test_unsave_requires_user_id(self, client, seeded_articles):
        response = client.delete(f"/api/saved/{seeded_articles[0].id}")
        assert response.status_code == 400
