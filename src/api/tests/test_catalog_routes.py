"""Tests for book and author catalog routes."""

import unittest

from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import (
    get_author_repo,
    get_book_repo,
    get_session_store,
    get_user_repo,
)
from api.security import SESSION_COOKIE_NAME
from adapter.fake.author_repository import FakeAuthorRepository
from adapter.fake.book_repository import FakeBookRepository
from adapter.fake.session_store import FakeSessionStore
from adapter.fake.user_repository import FakeUserRepository
from domain.model.user import ProviderEmail, ProviderProfile
from services.auth_service import reconcile
from services.session_service import establish_session


BOOK = {
    "title": "The Left Hand of Darkness",
    "author": "Ursula Le Guin",
    "isbn": "978-0-441-47812-5",
    "published_date": "1969-03-01",
    "genre": "Science Fiction",
    "pages": 304,
    "publisher": "Ace Books",
}

AUTHOR = {
    "first_name": "Ursula",
    "last_name": "Le Guin",
    "email": "ursula@example.com",
    "birth_date": "1929-10-21",
    "nationality": "American",
    "website": "https://www.ursulakleguin.com",
}


class CatalogRouteTestCase(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.sessions = FakeSessionStore()
        self.books = FakeBookRepository()
        self.authors = FakeAuthorRepository()

        app.dependency_overrides[get_user_repo] = lambda: self.users
        app.dependency_overrides[get_session_store] = lambda: self.sessions
        app.dependency_overrides[get_book_repo] = lambda: self.books
        app.dependency_overrides[get_author_repo] = lambda: self.authors

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def authenticate(self):
        user = reconcile(ProviderProfile(
            id='g-librarian',
            emails=[ProviderEmail('librarian@example.com', verified=True)],
            given_name='Libby',
            family_name='Rarian',
        ), self.users)
        self.client.cookies.set(SESSION_COOKIE_NAME, establish_session(user, self.sessions))
        return user


class TestBookRoutes(CatalogRouteTestCase):

    def test_list_is_public(self):
        response = self.client.get("/api/books")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "count": 0, "data": []})

    def test_create_requires_authentication(self):
        response = self.client.post("/api/books", json=BOOK)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["loginUrl"], "/auth/google")
        self.assertEqual(self.books.store, {})

    def test_update_and_delete_require_authentication(self):
        self.assertEqual(self.client.put("/api/books/x", json=BOOK).status_code, 401)
        self.assertEqual(self.client.delete("/api/books/x").status_code, 401)

    def test_crud_flow(self):
        self.authenticate()

        created = self.client.post("/api/books", json=BOOK)
        self.assertEqual(created.status_code, 201)
        book_id = created.json()["data"]["id"]
        self.assertEqual(created.json()["message"], "Book created successfully")

        fetched = self.client.get(f"/api/books/{book_id}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["data"]["published_date"], "1969-03-01")

        updated = self.client.put(f"/api/books/{book_id}", json={**BOOK, "pages": 320})
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["data"]["pages"], 320)

        self.assertEqual(self.client.get("/api/books").json()["count"], 1)

        deleted = self.client.delete(f"/api/books/{book_id}")
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(self.client.get(f"/api/books/{book_id}").status_code, 404)

    def test_missing_fields_report_every_error(self):
        self.authenticate()

        response = self.client.post("/api/books", json={"title": "Untitled"})

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"], "Validation failed")
        self.assertIn("Author is required", body["details"])
        self.assertIn("Pages must be a positive number", body["details"])

    def test_malformed_body_is_400(self):
        self.authenticate()

        response = self.client.post("/api/books", json={**BOOK, "published_date": "not-a-date"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Validation failed")

    def test_duplicate_isbn_is_409(self):
        self.authenticate()
        self.client.post("/api/books", json=BOOK)

        response = self.client.post("/api/books", json=BOOK)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"], "Book with this ISBN already exists")

    def test_unknown_book_is_404(self):
        response = self.client.get("/api/books/missing")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "error": "Book not found"})

    def test_inactive_user_can_still_mutate(self):
        user = self.authenticate()
        self.users.update(user.id, {'is_active': False})

        self.assertEqual(self.client.post("/api/books", json=BOOK).status_code, 201)


class TestAuthorRoutes(CatalogRouteTestCase):

    def test_create_requires_authentication(self):
        self.assertEqual(self.client.post("/api/authors", json=AUTHOR).status_code, 401)

    def test_create_and_list(self):
        self.authenticate()

        created = self.client.post("/api/authors", json=AUTHOR)

        self.assertEqual(created.status_code, 201)
        listing = self.client.get("/api/authors").json()
        self.assertEqual(listing["count"], 1)
        self.assertEqual(listing["data"][0]["email"], "ursula@example.com")

    def test_invalid_email_and_website(self):
        self.authenticate()

        response = self.client.post(
            "/api/authors", json={**AUTHOR, "email": "nope", "website": "not a url"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid email format", response.json()["details"])
        self.assertIn("Invalid website URL format", response.json()["details"])

    def test_delete_blocked_while_books_reference_author(self):
        self.authenticate()
        author_id = self.client.post("/api/authors", json=AUTHOR).json()["data"]["id"]
        self.client.post("/api/books", json=BOOK)

        response = self.client.delete(f"/api/authors/{author_id}")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(len(self.authors.store), 1)

    def test_delete_without_books(self):
        self.authenticate()
        author_id = self.client.post("/api/authors", json=AUTHOR).json()["data"]["id"]

        response = self.client.delete(f"/api/authors/{author_id}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.authors.store, {})


class TestFallbackRoutes(CatalogRouteTestCase):

    def test_unknown_route_envelope(self):
        response = self.client.get("/no/such/route")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {
            "error": "Route not found",
            "message": "The route /no/such/route does not exist",
        })

    def test_root_lists_entry_points(self):
        data = self.client.get("/").json()

        self.assertEqual(data["authentication"]["login"], "/auth/google")
        self.assertEqual(data["endpoints"]["books"], "/api/books")


if __name__ == '__main__':
    unittest.main()
