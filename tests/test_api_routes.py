from conftest import make_doc


def test_list_articles_returns_published_cards(client, seed):
    seed(
        make_doc("Panen Raya", days_ago=1),
        make_doc("Posyandu Balita", category="Kesehatan", days_ago=0),
        make_doc("Masih Draft", status="draft"),
    )
    resp = client.get("/api/articles")
    assert resp.status_code == 200

    body = resp.get_json()
    assert body["status"] == 200
    assert [a["title"] for a in body["data"]] == ["Posyandu Balita", "Panen Raya"]
    assert {"id", "excerpt", "read_time", "category_icon"} <= set(body["data"][0])


def test_list_articles_filters(client, seed):
    seed(
        make_doc("Panen Raya"),
        make_doc("Posyandu Balita", category="Kesehatan"),
    )
    body = client.get("/api/articles?category=Kesehatan").get_json()
    assert [a["title"] for a in body["data"]] == ["Posyandu Balita"]

    body = client.get("/api/articles?q=posyandu").get_json()
    assert [a["title"] for a in body["data"]] == ["Posyandu Balita"]


def test_article_detail_increments_views(client, seed, app_store):
    (article_id,) = seed(make_doc("Panen Raya", views=4))

    body = client.get(f"/api/articles/{article_id}").get_json()
    assert body["data"]["views"] == 5
    assert body["data"]["body"].startswith("<p>")
    assert app_store.get("articles", article_id)["views"] == 5


def test_article_detail_hides_drafts(client, seed):
    (article_id,) = seed(make_doc("Masih Draft", status="draft"))
    resp = client.get(f"/api/articles/{article_id}")
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Artikel tidak ditemukan"


def test_article_detail_missing(client):
    assert client.get("/api/articles/tidak-ada").status_code == 404


def test_popular_articles(client, seed):
    seed(make_doc("A", views=5), make_doc("B", views=20), make_doc("C", views=1))
    body = client.get("/api/articles/popular").get_json()
    assert [a["views"] for a in body["data"]] == [20, 5, 1]

    body = client.get("/api/articles/popular?limit=1").get_json()
    assert [a["title"] for a in body["data"]] == ["B"]


def test_related_articles(client, seed):
    current, other, _ = seed(
        make_doc("Sekarang", category="Pertanian"),
        make_doc("Teman", category="Pertanian"),
        make_doc("Lain", category="Budaya"),
    )
    body = client.get(f"/api/articles/{current}/related").get_json()
    assert [a["id"] for a in body["data"]] == [other]


def test_categories_with_counts(client, seed):
    seed(make_doc("A", category="Pertanian"), make_doc("B", category="Pertanian"))
    body = client.get("/api/categories").get_json()
    counts = {c["name"]: c["count"] for c in body["data"]}
    assert counts["Pertanian"] == 2
    assert counts["Sosial"] == 0


def test_unknown_api_path_returns_json(client):
    resp = client.get("/api/tidak-ada")
    assert resp.status_code == 404
    assert resp.get_json()["status"] == 404


def test_related_hides_drafts(client, seed):
    draft, _ = seed(make_doc("Masih Draft", status="draft"), make_doc("Panen Raya"))
    assert client.get(f"/api/articles/{draft}/related").status_code == 404
