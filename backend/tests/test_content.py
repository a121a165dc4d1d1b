"""Website content endpoint tests: branches, blog, testimonials, SEO, FAQs, contact."""

import pytest
from httpx import AsyncClient

BRANCH = {
    "name": "Dubai HQ",
    "address": "Warehouse 12, Al Qusais",
    "city": "Dubai",
    "country": "UAE",
    "phone": "+97140000000",
    "email": "dubai@fastcfs.com",
    "is_main_office": True,
}

POST = {
    "title": "Shipping to Europe",
    "slug": "shipping-to-europe",
    "content": "<p>How it works</p>",
    "is_published": True,
}


@pytest.mark.api
@pytest.mark.asyncio
class TestBranches:

    async def test_public_list_shows_active_only(
        self, client: AsyncClient, auth_headers: dict
    ):
        await client.post("/api/admin/branches", json=BRANCH, headers=auth_headers)
        await client.post(
            "/api/admin/branches",
            json={**BRANCH, "name": "Closed Office", "is_active": False},
            headers=auth_headers,
        )

        public = await client.get("/api/branches")
        admin = await client.get("/api/admin/branches", headers=auth_headers)

        assert public.status_code == 200
        assert [b["name"] for b in public.json()["branches"]] == ["Dubai HQ"]
        assert public.json()["total"] == 1
        assert admin.json()["total"] == 2

    async def test_incharge_defaults_to_unknown(
        self, client: AsyncClient, auth_headers: dict
    ):
        response = await client.post("/api/admin/branches", json=BRANCH, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["incharge"] == "Unknown"

    async def test_update_and_delete(self, client: AsyncClient, auth_headers: dict):
        created = await client.post("/api/admin/branches", json=BRANCH, headers=auth_headers)
        branch_id = created.json()["id"]

        updated = await client.put(
            f"/api/admin/branches/{branch_id}",
            json={"city": "Sharjah"},
            headers=auth_headers,
        )
        deleted = await client.delete(f"/api/admin/branches/{branch_id}", headers=auth_headers)
        missing = await client.delete(f"/api/admin/branches/{branch_id}", headers=auth_headers)

        assert updated.json()["city"] == "Sharjah"
        assert updated.json()["name"] == "Dubai HQ"
        assert deleted.status_code == 204
        assert missing.status_code == 404

    async def test_null_clears_location_only(self, client: AsyncClient, auth_headers: dict):
        created = await client.post(
            "/api/admin/branches",
            json={**BRANCH, "location": "https://maps.example/dxb"},
            headers=auth_headers,
        )

        updated = await client.put(
            f"/api/admin/branches/{created.json()['id']}",
            json={"location": None, "city": None},
            headers=auth_headers,
        )

        assert updated.status_code == 200
        assert updated.json()["location"] is None
        assert updated.json()["city"] == "Dubai"

    async def test_admin_routes_need_auth(self, client: AsyncClient):
        response = await client.post("/api/admin/branches", json=BRANCH)

        assert response.status_code == 401


@pytest.mark.api
@pytest.mark.asyncio
class TestBlog:

    async def test_drafts_are_hidden_publicly(self, client: AsyncClient, auth_headers: dict):
        await client.post("/api/admin/blog", json=POST, headers=auth_headers)
        await client.post(
            "/api/admin/blog",
            json={**POST, "slug": "draft-post", "is_published": False},
            headers=auth_headers,
        )

        listed = await client.get("/api/blog")
        draft = await client.get("/api/blog/draft-post")
        published = await client.get("/api/blog/shipping-to-europe")

        assert [p["slug"] for p in listed.json()["posts"]] == ["shipping-to-europe"]
        assert draft.status_code == 404
        assert published.status_code == 200
        assert published.json()["category"] == "General"

    async def test_author_is_current_user(
        self, client: AsyncClient, auth_headers: dict, admin_user
    ):
        response = await client.post("/api/admin/blog", json=POST, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["author_id"] == admin_user.id

    async def test_duplicate_slug_conflicts(self, client: AsyncClient, auth_headers: dict):
        await client.post("/api/admin/blog", json=POST, headers=auth_headers)

        response = await client.post("/api/admin/blog", json=POST, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    async def test_update_unpublishes(self, client: AsyncClient, auth_headers: dict):
        created = await client.post("/api/admin/blog", json=POST, headers=auth_headers)
        post_id = created.json()["id"]

        response = await client.put(
            f"/api/admin/blog/{post_id}",
            json={"is_published": False},
            headers=auth_headers,
        )
        public = await client.get("/api/blog/shipping-to-europe")

        assert response.status_code == 200
        assert public.status_code == 404

    async def test_null_clears_excerpt_but_not_title(
        self, client: AsyncClient, auth_headers: dict
    ):
        created = await client.post(
            "/api/admin/blog",
            json={**POST, "excerpt": "Short version", "cover_image": "/img/eu.jpg"},
            headers=auth_headers,
        )

        response = await client.put(
            f"/api/admin/blog/{created.json()['id']}",
            json={"excerpt": None, "cover_image": None, "title": None},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["excerpt"] is None
        assert response.json()["cover_image"] is None
        assert response.json()["title"] == "Shipping to Europe"

    async def test_invalid_slug_rejected(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/admin/blog", json={**POST, "slug": "Not A Slug"}, headers=auth_headers
        )

        assert response.status_code == 422


@pytest.mark.api
@pytest.mark.asyncio
class TestTestimonials:

    async def test_public_submission_is_never_approved(
        self, client: AsyncClient, auth_headers: dict
    ):
        submitted = await client.post(
            "/api/testimonials",
            json={"customer_name": "Omar", "content": "Fast and reliable", "is_approved": True},
        )

        assert submitted.status_code == 201
        assert submitted.json()["is_approved"] is False
        assert submitted.json()["rating"] == 5
        assert (await client.get("/api/testimonials")).json() == []

        approved = await client.put(
            f"/api/admin/testimonials/{submitted.json()['id']}/approve",
            headers=auth_headers,
        )

        assert approved.json()["is_approved"] is True
        assert len((await client.get("/api/testimonials")).json()) == 1

    async def test_rating_out_of_range(self, client: AsyncClient):
        response = await client.post(
            "/api/testimonials",
            json={"customer_name": "Omar", "content": "Great", "rating": 6},
        )

        assert response.status_code == 422

    async def test_reject_deletes(self, client: AsyncClient, auth_headers: dict):
        submitted = await client.post(
            "/api/testimonials", json={"customer_name": "Omar", "content": "Spam"}
        )

        response = await client.delete(
            f"/api/admin/testimonials/{submitted.json()['id']}", headers=auth_headers
        )
        remaining = await client.get("/api/admin/testimonials", headers=auth_headers)

        assert response.status_code == 204
        assert remaining.json() == []


@pytest.mark.api
@pytest.mark.asyncio
class TestSeo:

    async def test_upsert_by_page(self, client: AsyncClient, auth_headers: dict):
        body = {"page": "home", "title": "FastCFS", "description": "Cargo services"}

        first = await client.put("/api/admin/seo", json=body, headers=auth_headers)
        second = await client.put(
            "/api/admin/seo", json={**body, "title": "FastCFS Logistics"}, headers=auth_headers
        )
        public = await client.get("/api/seo/home")

        assert first.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert public.json()["title"] == "FastCFS Logistics"

    async def test_unset_page_is_not_found(self, client: AsyncClient):
        response = await client.get("/api/seo/nowhere")

        assert response.status_code == 404


@pytest.mark.api
@pytest.mark.asyncio
class TestFaqs:

    async def test_public_shows_active_only(self, client: AsyncClient, auth_headers: dict):
        await client.post(
            "/api/admin/faqs",
            json={"question": "How do I track?", "answer": "Use your number."},
            headers=auth_headers,
        )
        hidden = await client.post(
            "/api/admin/faqs",
            json={"question": "Old?", "answer": "Yes.", "is_active": False},
            headers=auth_headers,
        )

        public = await client.get("/api/faqs")
        inactive = await client.get(
            "/api/admin/faqs", params={"is_active": "false"}, headers=auth_headers
        )

        assert [f["question"] for f in public.json()] == ["How do I track?"]
        assert [f["id"] for f in inactive.json()] == [hidden.json()["id"]]

    async def test_update_and_delete(self, client: AsyncClient, auth_headers: dict):
        created = await client.post(
            "/api/admin/faqs",
            json={"question": "Q?", "answer": "A."},
            headers=auth_headers,
        )
        faq_id = created.json()["id"]

        updated = await client.put(
            f"/api/admin/faqs/{faq_id}", json={"answer": "B."}, headers=auth_headers
        )
        deleted = await client.delete(f"/api/admin/faqs/{faq_id}", headers=auth_headers)

        assert updated.json()["answer"] == "B."
        assert deleted.status_code == 204


@pytest.mark.api
@pytest.mark.asyncio
class TestContact:

    async def test_submit_list_and_mark_read(self, client: AsyncClient, auth_headers: dict):
        submitted = await client.post(
            "/api/contact",
            json={
                "name": "Sara",
                "email": "sara@example.com",
                "subject": "Quote",
                "message": "Need a quote for 2 pallets",
            },
        )

        listed = await client.get("/api/admin/contact", headers=auth_headers)
        marked = await client.put(
            f"/api/admin/contact/{submitted.json()['id']}/read", headers=auth_headers
        )

        assert submitted.status_code == 201
        assert submitted.json()["is_read"] is False
        assert listed.json()["total"] == 1
        assert listed.json()["submissions"][0]["subject"] == "Quote"
        assert marked.json()["is_read"] is True

    async def test_invalid_email_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/contact",
            json={"name": "Sara", "email": "nope", "subject": "Hi", "message": "Hello"},
        )

        assert response.status_code == 422

    async def test_listing_requires_admin(self, client: AsyncClient):
        response = await client.get("/api/admin/contact")

        assert response.status_code == 401
