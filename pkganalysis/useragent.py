"""urllib handlers and openers that set a fixed User-Agent header."""

import urllib.request

__all__ = [
    "UserAgentHandler",
    "default_user_agent",
    "default_user_agent_opener",
    "user_agent_opener",
]

_DEFAULT_USER_AGENT_FMT = "package-analysis (github.com/ossf/package-analysis{})"


class UserAgentHandler(urllib.request.BaseHandler):
    """Replace the User-Agent header of every HTTP(S) request."""

    # Run before the standard HTTP handlers add their default User-Agent.
    handler_order = 400

    def __init__(self, user_agent):
        self.user_agent = user_agent

    def http_request(self, request):
        request.remove_header("User-agent")
        request.add_header("User-Agent", self.user_agent)
        return request

    def https_request(self, request):
        return self.http_request(request)


def default_user_agent(extra=""):
    """Return the default User-Agent, with optional extra information appended."""
    if extra:
        extra = ", " + extra
    return _DEFAULT_USER_AGENT_FMT.format(extra)


def user_agent_opener(user_agent, *args):
    """Build an opener that sends user_agent; further handlers are passed on."""
    return urllib.request.build_opener(UserAgentHandler(user_agent), *args)


def default_user_agent_opener(extra="", *args):
    """Build an opener that sends the default User-Agent."""
    return user_agent_opener(default_user_agent(extra), *args)