"""
Unit tests for the route handlers, driven through the application router.
"""

import pytest

from httpconnector.app import create_router
from httpconnector.handlers import SESSION_COOKIE, USER, StaticAssetIOError, StaticContentLoader
from httpconnector.http.request import parse_request
from httpconnector.http.status_codes import HTTPStatus
from httpconnector.session import Session, SessionManager, SessionNotFound
from httpconnector.users import InMemoryUserRepository, User, UserRepository


class RecordingUserRepository(InMemoryUserRepository):
    """Repository that remembers every save() call."""

    def __init__(self):
        self.saved = []
        super().__init__(seed_demo_user=False)

    def save(self, user: User) -> User:
        self.saved.append(user)
        return super().save(user)


class TestDefaultPage:

    def test_root(self, router, get_request):
        response = router.handle(parse_request(get_request("/")))

        assert response.to_bytes() == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/html;charset=utf-8\r\n"
            b"Content-Length: 12\r\n"
            b"\r\n"
            b"Hello world!"
        )


class TestLogin:

    def test_post_success(self, router, sessions, form_request):
        response = router.handle(parse_request(
            form_request("/login", "account=gugu&password=password")))

        assert response.status == HTTPStatus.FOUND
        assert response.location == "/index.html"
        name, _, session_id = response.headers["Set-Cookie"].partition("=")
        assert name == SESSION_COOKIE
        assert session_id in sessions
        assert sessions.find_session(session_id).get_attribute(USER).account == "gugu"

    def test_post_wrong_password(self, router, sessions, form_request):
        response = router.handle(parse_request(
            form_request("/login", "account=gugu&password=wrong")))

        assert response.status == HTTPStatus.FOUND
        assert response.location == "/401.html"
        assert "Set-Cookie" not in response.headers
        assert len(sessions) == 0

    def test_unknown_account_looks_like_wrong_password(self, router, form_request):
        unknown = router.handle(parse_request(
            form_request("/login", "account=nobody&password=password")))
        wrong = router.handle(parse_request(
            form_request("/login", "account=gugu&password=wrong")))

        assert unknown.to_bytes() == wrong.to_bytes()

    def test_post_missing_fields(self, router, form_request):
        response = router.handle(parse_request(form_request("/login", "")))

        assert response.location == "/401.html"

    def test_get_with_query(self, router, sessions, sample_get_request):
        response = router.handle(parse_request(sample_get_request))

        assert response.location == "/index.html"
        assert "Set-Cookie" in response.headers
        assert len(sessions) == 1

    def test_get_with_bad_query(self, router, get_request):
        response = router.handle(parse_request(
            get_request("/login?account=gugu&password=nope")))

        assert response.location == "/401.html"

    def test_get_without_query_serves_page(self, router, get_request):
        response = router.handle(parse_request(get_request("/login")))

        assert response.status == HTTPStatus.OK
        assert response.body == b"<h1>login</h1>"

    def test_session_replay(self, router, sessions, form_request, get_request):
        first = router.handle(parse_request(
            form_request("/login", "account=gugu&password=password")))
        cookie = first.headers["Set-Cookie"]
        session_id = cookie.partition("=")[2]

        replay = router.handle(parse_request(get_request("/login", cookie=cookie)))

        assert replay.location == "/index.html"
        assert replay.headers["Set-Cookie"] == f"{SESSION_COOKIE}={session_id}"
        assert len(sessions) == 1

    def test_unknown_session_falls_through(self, router, sessions, get_request):
        response = router.handle(parse_request(
            get_request("/login", cookie=f"{SESSION_COOKIE}=stale")))

        assert response.status == HTTPStatus.OK
        assert response.body == b"<h1>login</h1>"
        with pytest.raises(SessionNotFound):
            sessions.find_session("stale")

    def test_fixed_session_id(self, static_dir, form_request):
        sessions = SessionManager()
        router = create_router(
            InMemoryUserRepository(), sessions, StaticContentLoader(static_dir),
            id_generator=lambda: "fixed-id",
        )

        response = router.handle(parse_request(
            form_request("/login", "account=gugu&password=password")))

        assert response.to_bytes() == (
            b"HTTP/1.1 302 Found\r\n"
            b"Location: /index.html\r\n"
            b"Set-Cookie: JSESSIONID=fixed-id\r\n"
            b"\r\n"
        )
        assert isinstance(sessions.find_session("fixed-id"), Session)

    def test_credential_check_is_idempotent(self, router, users, form_request):
        before = users.find_by_account("gugu")

        for _ in range(3):
            failure = router.handle(parse_request(
                form_request("/login", "account=gugu&password=wrong")))
            success = router.handle(parse_request(
                form_request("/login", "account=gugu&password=password")))

            assert failure.location == "/401.html"
            assert "Set-Cookie" not in failure.headers
            assert success.location == "/index.html"
            assert success.headers["Set-Cookie"].startswith(f"{SESSION_COOKIE}=")

        assert users.find_by_account("gugu") == before
        assert len(users) == 1


class TestRegister:

    def test_get_serves_page(self, router, get_request):
        response = router.handle(parse_request(get_request("/register")))

        assert response.status == HTTPStatus.OK
        assert response.body == b"<h1>register</h1>"

    def test_post_saves_user(self, static_dir, sessions, form_request):
        users = RecordingUserRepository()
        router = create_router(users, sessions, StaticContentLoader(static_dir))

        response = router.handle(parse_request(
            form_request("/register", "account=tomcat&password=secret&email=cat@example.com")))

        assert response.status == HTTPStatus.FOUND
        assert response.location == "/index.html"
        assert "Set-Cookie" not in response.headers
        assert users.saved == [User(account="tomcat", password="secret", email="cat@example.com")]
        assert len(sessions) == 0

    def test_registered_user_can_log_in(self, router, form_request):
        router.handle(parse_request(
            form_request("/register", "account=tomcat&password=secret&email=cat@example.com")))

        response = router.handle(parse_request(
            form_request("/login", "account=tomcat&password=secret")))

        assert response.location == "/index.html"


class TestStaticFallback:

    def test_asset(self, router, get_request):
        response = router.handle(parse_request(get_request("/css/styles.css")))

        assert response.status == HTTPStatus.OK
        assert response.headers["Content-Type"] == "text/css;charset=utf-8"
        assert response.headers["Content-Length"] == str(len(b"body { margin: 0; }"))

    def test_missing_asset_raises(self, router, get_request):
        with pytest.raises(StaticAssetIOError):
            router.handle(parse_request(get_request("/nope.html")))

    def test_null_byte_path_raises_asset_error(self, router):
        request = parse_request(b"GET /a\x00b HTTP/1.1\r\nHost: x\r\n\r\n")

        with pytest.raises(StaticAssetIOError):
            router.handle(request)

    def test_known_path_wrong_method(self, router, form_request):
        response = router.handle(parse_request(form_request("/", "a=1")))

        assert response.status == HTTPStatus.METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "GET"


class TestUserRepository:

    def test_demo_user_seeded(self):
        user = InMemoryUserRepository().find_by_account("gugu")

        assert user.check_password("password")
        assert user.email == "hkkang@woowahan.com"
        assert user.id == 1

    def test_unseeded(self):
        assert len(InMemoryUserRepository(seed_demo_user=False)) == 0

    def test_save_assigns_id(self):
        users = InMemoryUserRepository()
        saved = users.save(User(account="tomcat", password="secret"))

        assert saved.id == 2
        assert users.find_by_account("tomcat") == saved

    def test_password_not_in_repr(self):
        assert "hunter2" not in repr(User(account="a", password="hunter2"))

    def test_find_none(self):
        assert InMemoryUserRepository().find_by_account(None) is None

    def test_is_abstract(self):
        with pytest.raises(TypeError):
            UserRepository()
