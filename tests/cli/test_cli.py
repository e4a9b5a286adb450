import json
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner
from pytest_httpx import HTTPXMock

from edunex._cli import cli

BASE_URL = "http://testserver/api"


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestHelp:
    def test_lists_commands(self, runner: CliRunner):
        result = runner.invoke(cli, ["courses", "--help"])

        assert result.exit_code == 0, result.output
        assert "enrolled" in result.output


class TestLogin:
    def test_login_writes_token_to_dotenv(
        self, runner: CliRunner, httpx_mock: HTTPXMock, workdir: Path
    ):
        httpx_mock.add_response(
            url=f"{BASE_URL}/auth/login",
            method="POST",
            json={
                "accessToken": "cli-token",
                "tokenType": "Bearer",
                "expiresIn": 900,
                "user": {"email": "student@example.com"},
            },
        )

        result = runner.invoke(
            cli,
            [
                "login",
                "--base-url",
                BASE_URL,
                "-u",
                "student@example.com",
                "-p",
                "s3cret",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Signed in as student@example.com." in result.output
        assert "EDUNEX_ACCESS_TOKEN=cli-token" in (workdir / ".env").read_text()

    def test_login_failure_exits_non_zero(
        self, runner: CliRunner, httpx_mock: HTTPXMock, workdir: Path
    ):
        httpx_mock.add_response(
            url=f"{BASE_URL}/auth/login",
            method="POST",
            status_code=401,
            json={"message": "Bad credentials"},
        )

        result = runner.invoke(
            cli,
            ["login", "--base-url", BASE_URL, "-u", "a@example.com", "-p", "x"],
        )

        assert result.exit_code == 1
        assert "Bad credentials" in result.output
        assert not (workdir / ".env").exists()


class TestLogout:
    def test_logout_removes_token(
        self, runner: CliRunner, httpx_mock: HTTPXMock, workdir: Path
    ):
        (workdir / ".env").write_text("EDUNEX_ACCESS_TOKEN=cli-token\nOTHER=1\n")
        httpx_mock.add_response(url=f"{BASE_URL}/auth/logout", method="POST")

        result = runner.invoke(cli, ["logout", "--base-url", BASE_URL])

        assert result.exit_code == 0, result.output
        assert "Signed out." in result.output
        assert (workdir / ".env").read_text() == "OTHER=1\n"

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert sent_request.headers["Authorization"] == "Bearer cli-token"


class TestCourses:
    def test_search_prints_json(
        self, runner: CliRunner, httpx_mock: HTTPXMock, workdir: Path
    ):
        httpx_mock.add_response(
            url=f"{BASE_URL}/courses/search?query=python&status=PUBLISHED",
            json=[{"id": 1, "title": "Python Basics"}],
        )

        result = runner.invoke(
            cli,
            [
                "courses",
                "search",
                "python",
                "--status",
                "published",
                "--base-url",
                BASE_URL,
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"id": 1, "title": "Python Basics", "modules": []}
        ]

    def test_expired_session_asks_to_sign_in_again(
        self, runner: CliRunner, httpx_mock: HTTPXMock, workdir: Path
    ):
        (workdir / ".env").write_text("EDUNEX_ACCESS_TOKEN=stale\n")
        httpx_mock.add_response(url=f"{BASE_URL}/courses/enrolled", status_code=401)
        httpx_mock.add_response(
            url=f"{BASE_URL}/auth/refresh", method="POST", status_code=401
        )

        result = runner.invoke(cli, ["courses", "enrolled", "--base-url", BASE_URL])

        assert result.exit_code == 1
        assert "edunex login" in result.output
        assert "EDUNEX_ACCESS_TOKEN" not in (workdir / ".env").read_text()

    def test_refresh_uses_cookie_saved_at_login(
        self, runner: CliRunner, httpx_mock: HTTPXMock, workdir: Path
    ):
        httpx_mock.add_response(
            url=f"{BASE_URL}/auth/login",
            method="POST",
            headers={"Set-Cookie": "refreshToken=r1; Path=/; HttpOnly"},
            json={"accessToken": "cli-token", "tokenType": "Bearer"},
        )

        result = runner.invoke(
            cli,
            ["login", "--base-url", BASE_URL, "-u", "a@example.com", "-p", "x"],
        )

        assert result.exit_code == 0, result.output
        contents = (workdir / ".env").read_text()
        assert "EDUNEX_SESSION_COOKIE=refreshToken=r1" in contents

        def enrolled(request: httpx.Request) -> httpx.Response:
            if request.headers["Authorization"] == "Bearer fresh-token":
                return httpx.Response(200, json=[])
            return httpx.Response(401)

        def refresh(request: httpx.Request) -> httpx.Response:
            assert "refreshToken=r1" in request.headers.get("Cookie", "")
            return httpx.Response(
                200, json={"accessToken": "fresh-token", "tokenType": "Bearer"}
            )

        httpx_mock.add_callback(
            enrolled, url=f"{BASE_URL}/courses/enrolled", is_reusable=True
        )
        httpx_mock.add_callback(
            refresh, url=f"{BASE_URL}/auth/refresh", method="POST"
        )

        result = runner.invoke(cli, ["courses", "enrolled", "--base-url", BASE_URL])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == []
        assert "EDUNEX_ACCESS_TOKEN=fresh-token" in (workdir / ".env").read_text()
