# -*- coding: utf-8
"""SASL authenticators

Only the bearer-token mechanism used by Gmail and friends is provided:

>>> XOAUTH2Authenticator(Credential("a@b.com", "tok123")).initial_response()
'dXNlcj1hQGIuY29tAWF1dGg9QmVhcmVyIHRvazEyMwEB'
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006

import base64
import json
import logging

__revision__ = '$Id$'

log = logging.getLogger(__name__)


class Credential:
    """Username and an OAuth2 access token obtained by somebody else"""

    __slots__ = ("username", "access_token")

    def __init__(self, username, access_token):
        object.__setattr__(self, "username", username)
        object.__setattr__(self, "access_token", access_token)

    def __setattr__(self, name, value):
        raise AttributeError("Credential is read-only")

    def __repr__(self):
        # never leak the token into logs
        return "<xoimap.Credential %s>" % self.username

    def __eq__(self, other):
        return (isinstance(other, Credential) and
                self.username == other.username and
                self.access_token == other.access_token)

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None


def encode_xoauth2(username, access_token):
    """Build the base64-encoded XOAUTH2 initial client response"""
    raw = "user=%s\x01auth=Bearer %s\x01\x01" % (username, access_token)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class Authenticator:
    """Helper for authentications.

Derived subclasses should override the _chat() method.
"""

    def __todo(self, *args):
        raise NotImplementedError()

    mechanism = None

    def __repr__(self):
        return "<xoimap.Authenticator %s>" % self.mechanism

    def chat(self, challenge):
        """Do the chat :)

Expects the decoded payload of server's continuation request, returns data to
send back (str, sent as-is followed by CRLF)."""
        return self._chat(challenge)

    def initial_response(self):
        """Data sent along with the AUTHENTICATE command itself (SASL-IR)"""
        return self._initial_response()

    _chat = __todo
    _initial_response = __todo


class XOAUTH2Authenticator(Authenticator):
    """Implements the XOAUTH2 SASL mechanism"""

    mechanism = 'XOAUTH2'

    def __init__(self, credential):
        self.username = credential.username
        self._credential = credential

    def _initial_response(self):
        if self._credential is None:
            raise ValueError("the initial response has been sent already")
        blob = encode_xoauth2(self._credential.username,
                              self._credential.access_token)
        # the token isn't needed anymore
        self._credential = None
        return blob

    def _chat(self, challenge):
        # The only challenge XOAUTH2 servers send is a JSON error report.
        # An empty response makes the server finish with a tagged NO.
        try:
            report = json.loads(challenge)
        except ValueError:
            report = challenge
        log.warning("XOAUTH2 rejected for %s: %s", self.username,
                    report)
        return ""
