"""
Navigation Policy - Decides where a navigation from the embedded view goes.

| trusted host | top-level frame | decision        |
|--------------|-----------------|-----------------|
| yes          | any             | ALLOW           |
| no           | yes             | OPEN_EXTERNALLY |
| no           | no              | ALLOW           |

New-window requests (target=_blank, window.open) always open externally.
Sub-frame loads from other hosts stay in-view so embedded payment and
sign-in widgets keep working.
"""

import logging
from urllib.parse import urlsplit

from lobby.domain.models import NavigationDecision, NavigationRequest

logger = logging.getLogger(__name__)


def host_is_trusted(host: str, trusted_domain: str) -> bool:
    """True if ``host`` is ``trusted_domain`` or one of its subdomains."""
    host = host.lower().rstrip(".")
    domain = trusted_domain.lower().rstrip(".")
    return host == domain or host.endswith("." + domain)


class NavigationPolicy:
    """
    Stateless classifier for navigation requests.
    """

    def __init__(self, trusted_domain: str):
        self.trusted_domain = trusted_domain

    def decide(self, request: NavigationRequest) -> NavigationDecision:
        host = urlsplit(request.url).hostname

        if request.opens_new_window:
            decision = NavigationDecision.OPEN_EXTERNALLY
        elif not host:
            # about:blank, data:, blob: documents have no host to judge
            decision = NavigationDecision.ALLOW
        elif host_is_trusted(host, self.trusted_domain):
            decision = NavigationDecision.ALLOW
        elif request.is_main_frame:
            decision = NavigationDecision.OPEN_EXTERNALLY
        else:
            decision = NavigationDecision.ALLOW

        logger.debug(
            "Navigation %s main_frame=%s new_window=%s -> %s",
            request.url, request.is_main_frame, request.opens_new_window, decision.value
        )
        return decision
