from __future__ import annotations

from datetime import datetime, timezone

from fastapi.testclient import TestClient

from artisanconnect.app import app
from artisanconnect.moderation.activities import get_activities
from artisanconnect.ranking.models import SearchRequest
from artisanconnect.ranking.scoring import rating_score
from artisanconnect.ranking.search import search_vendors, top_rated_vendors
from artisanconnect.vendors.models import ReviewRequest
from artisanconnect.vendors.reviews import submit_review
from helpers import login_user

client = TestClient(app)

AS_OF = datetime(2026, 10, 19, tzinfo=timezone.utc)


# ── search_vendors ───────────────────────────────────────────────────────


def test_search_without_constraints_returns_all_active():
    response = search_vendors(SearchRequest(), as_of=AS_OF)
    assert response.total_candidates == 9
    ids = [r.vendor.id for r in response.results]
    assert "v008" not in ids
    scores = [r.score for r in response.results]
    assert scores == sorted(scores, reverse=True)


def test_search_ranks_name_match_above_description_match():
    response = search_vendors(SearchRequest(keyword="kitchen"), as_of=AS_OF)
    assert [r.vendor.id for r in response.results] == ["v001", "v005"]


def test_search_by_category():
    response = search_vendors(SearchRequest(category="Catering & events"), as_of=AS_OF)
    assert {r.vendor.id for r in response.results} == {"v001", "v006"}


def test_search_respects_limit():
    response = search_vendors(SearchRequest(limit=3), as_of=AS_OF)
    assert len(response.results) == 3
    assert response.total_candidates == 9


def test_search_records_activity():
    search_vendors(SearchRequest(keyword="lagos"), as_of=AS_OF)
    searches = get_activities("search")
    assert len(searches) == 1
    assert searches[0]["keyword"] == "lagos"
    assert searches[0]["total_candidates"] == 6


def test_top_rated_vendors():
    top = top_rated_vendors()
    ratings = [rating_score(v) for v in top]
    assert len(top) == 6
    assert ratings == sorted(ratings, reverse=True)
    assert [v.id for v in top][:4] == ["v007", "v009", "v001", "v003"]
    assert "v008" not in [v.id for v in top]


def test_top_rated_uses_review_aggregate():
    for _ in range(2):
        submit_review("v009", ReviewRequest(rating=1), "user")
    assert "v009" not in [v.id for v in top_rated_vendors(limit=5)]


# ── HTTP ─────────────────────────────────────────────────────────────────


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata_lists_categories():
    resp = client.get("/metadata")
    assert "Catering & events" in resp.json()["categories"]


def test_vendors_requires_login():
    c = TestClient(app)
    assert c.get("/vendors").status_code == 401


def test_vendors_keyword_matches_address():
    login_user(client)
    resp = client.get("/vendors", params={"keyword": "LAGOS"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_candidates"] == 6
    for item in body["results"]:
        vendor = item["vendor"]
        text = " ".join(
            (vendor.get(k) or "") for k in ("businessName", "description", "address")
        ).lower()
        assert "lagos" in text


def test_vendors_category_and_keyword():
    login_user(client)
    resp = client.get("/vendors", params={"category": "Catering & events", "keyword": "jollof"})
    body = resp.json()
    assert [item["vendor"]["id"] for item in body["results"]] == ["v006"]


def test_vendors_empty_result():
    login_user(client)
    resp = client.get("/vendors", params={"keyword": "Nonexistent12345"})
    assert resp.status_code == 200
    assert resp.json() == {"results": [], "total_candidates": 0}


def test_vendors_never_returns_blacklisted():
    login_user(client)
    resp = client.get("/vendors", params={"keyword": "golden needle"})
    assert resp.json()["total_candidates"] == 0


def test_vendors_score_ordering():
    login_user(client)
    body = client.get("/vendors").json()
    scores = [item["score"] for item in body["results"]]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= s <= 1.0 for s in scores)


def test_vendors_validation_rejects_bad_limit():
    login_user(client)
    assert client.get("/vendors", params={"limit": 0}).status_code == 422


def test_vendor_detail():
    login_user(client)
    resp = client.get("/vendors/v001")
    assert resp.status_code == 200
    assert resp.json()["businessName"] == "Adeola Kitchens"


def test_vendor_detail_hides_blacklisted():
    login_user(client)
    assert client.get("/vendors/v008").status_code == 404
    assert client.get("/vendors/unknown").status_code == 404


def test_top_vendors_is_public():
    c = TestClient(app)
    resp = c.get("/vendors/top", params={"limit": 3})
    assert resp.status_code == 200
    assert [v["id"] for v in resp.json()] == ["v007", "v009", "v001"]
