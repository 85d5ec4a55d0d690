"""
Tests for the navigation policy decision table.
"""

import pytest

from lobby.domain.models import NavigationDecision, NavigationRequest
from lobby.services.navigation_policy import NavigationPolicy, host_is_trusted

TRUSTED = "thelobby.ai"


@pytest.fixture
def policy():
    return NavigationPolicy(TRUSTED)


class TestTrustedHosts:
    """Trusted domain and its subdomains always stay in-view."""

    @pytest.mark.parametrize("url", [
        "https://thelobby.ai/lobby/Urgent",
        "https://app.thelobby.ai/settings",
        "https://a.b.thelobby.ai/",
        "https://THELOBBY.AI/caps",
    ])
    @pytest.mark.parametrize("is_main_frame", [True, False])
    def test_trusted_host_is_allowed(self, policy, url, is_main_frame):
        request = NavigationRequest(url=url, is_main_frame=is_main_frame)
        assert policy.decide(request) == NavigationDecision.ALLOW

    def test_lookalike_domain_is_not_trusted(self):
        assert not host_is_trusted("evilthelobby.ai", TRUSTED)
        assert not host_is_trusted("thelobby.ai.evil.com", TRUSTED)

    def test_trailing_dot_is_ignored(self):
        assert host_is_trusted("thelobby.ai.", TRUSTED)


class TestUntrustedHosts:

    @pytest.mark.parametrize("url", [
        "https://example.com/",
        "https://github.com/login/oauth",
        "http://news.ycombinator.com/item?id=1",
    ])
    def test_top_level_navigation_opens_externally(self, policy, url):
        request = NavigationRequest(url=url, is_main_frame=True)
        assert policy.decide(request) == NavigationDecision.OPEN_EXTERNALLY

    @pytest.mark.parametrize("url", [
        "https://js.stripe.com/v3/",
        "https://accounts.google.com/o/oauth2/iframe",
        "https://ads.example.net/frame.html",
    ])
    def test_sub_frame_navigation_is_allowed(self, policy, url):
        request = NavigationRequest(url=url, is_main_frame=False)
        assert policy.decide(request) == NavigationDecision.ALLOW


class TestSpecialCases:

    @pytest.mark.parametrize("url", ["about:blank", "data:text/html,hi", "blob:null/1234"])
    def test_hostless_urls_stay_in_view(self, policy, url):
        request = NavigationRequest(url=url, is_main_frame=True)
        assert policy.decide(request) == NavigationDecision.ALLOW

    @pytest.mark.parametrize("url", ["https://thelobby.ai/docs", "https://example.com/"])
    def test_new_window_requests_always_open_externally(self, policy, url):
        request = NavigationRequest(url=url, is_main_frame=True, opens_new_window=True)
        assert policy.decide(request) == NavigationDecision.OPEN_EXTERNALLY
