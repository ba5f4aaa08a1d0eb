"""Tests for navigation and the one-shot wait-policy downgrade."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError

from conftest import FakePage, LONG_TEXT, doc_page
from docharvest.scraper.errors import BrowserLaunchError, NavigationTimeoutError
from docharvest.scraper.navigator import check_wait_policy, navigate, warm_up

URL = "https://docs.example.com/en/114/topic"


class TestNavigate:
    def test_primary_policy_succeeds(self) -> None:
        page = FakePage(routes={URL: doc_page(LONG_TEXT)})
        response = navigate(page, URL)

        assert response.status == 200
        assert page.calls == [(URL, "load")]
        assert page.url == URL

    def test_timeout_downgrades_to_domcontentloaded(self, capsys) -> None:
        page = FakePage(routes={URL: doc_page(LONG_TEXT)}, timeouts={URL: {"load"}})
        response = navigate(page, URL)

        assert response.status == 200
        assert page.calls == [(URL, "load"), (URL, "domcontentloaded")]
        assert "retrying with 'domcontentloaded'" in capsys.readouterr().out

    def test_second_timeout_raises_navigation_timeout(self) -> None:
        page = FakePage(
            routes={URL: doc_page(LONG_TEXT)},
            timeouts={URL: {"load", "domcontentloaded"}},
        )
        with pytest.raises(NavigationTimeoutError) as info:
            navigate(page, URL, timeout=5)

        assert len(page.calls) == 2
        assert "timed out after 5s" in str(info.value)
        assert info.value.policies == ("load", "domcontentloaded")

    def test_relaxed_primary_is_not_retried(self) -> None:
        page = FakePage(routes={URL: doc_page(LONG_TEXT)}, timeouts={URL: {"domcontentloaded"}})
        with pytest.raises(NavigationTimeoutError):
            navigate(page, URL, wait_until="domcontentloaded")

        assert page.calls == [(URL, "domcontentloaded")]

    def test_commit_primary_is_not_downgraded_to_stricter_policy(self) -> None:
        page = FakePage(routes={URL: doc_page(LONG_TEXT)}, timeouts={URL: {"commit"}})
        with pytest.raises(NavigationTimeoutError) as info:
            navigate(page, URL, wait_until="commit")

        assert page.calls == [(URL, "commit")]
        assert info.value.policies == ("commit",)

    def test_networkidle_primary_downgrades(self) -> None:
        page = FakePage(routes={URL: doc_page(LONG_TEXT)}, timeouts={URL: {"networkidle"}})
        navigate(page, URL, wait_until="networkidle")

        assert page.calls == [(URL, "networkidle"), (URL, "domcontentloaded")]

    def test_non_timeout_error_propagates_without_retry(self) -> None:
        page = FakePage(errors={URL: PlaywrightError("net::ERR_NAME_NOT_RESOLVED")})
        with pytest.raises(PlaywrightError, match="ERR_NAME_NOT_RESOLVED"):
            navigate(page, URL)

        assert page.calls == [(URL, "load")]

    def test_timeout_is_passed_in_milliseconds(self) -> None:
        page = MagicMock()
        page.goto.return_value.status = 200
        navigate(page, URL, wait_until="networkidle", timeout=12.5)

        page.goto.assert_called_once_with(URL, wait_until="networkidle", timeout=12500)

    def test_http_error_status_is_a_warning_only(self, capsys) -> None:
        page = FakePage(routes={URL: doc_page(LONG_TEXT)}, statuses={URL: 404})
        response = navigate(page, URL)

        assert response.status == 404
        assert "Warning: HTTP 404" in capsys.readouterr().out

    def test_unknown_policy_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown wait policy"):
            navigate(FakePage(), URL, wait_until="eventually")


class TestWarmUp:
    def test_loads_blank_page(self) -> None:
        page = FakePage()
        warm_up(page)
        assert page.calls == [("about:blank", None)]

    def test_failure_is_a_session_failure(self) -> None:
        page = MagicMock()
        page.goto.side_effect = PlaywrightError("Target closed")
        with pytest.raises(BrowserLaunchError, match="warm-up failed"):
            warm_up(page)


def test_check_wait_policy_accepts_known_policies() -> None:
    for policy in ("load", "domcontentloaded", "networkidle", "commit"):
        assert check_wait_policy(policy) == policy
