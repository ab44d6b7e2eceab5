# -*- coding: utf-8
"""IMAP4rev1 client library, the XOAUTH2 flavour

Just enough of RFC 3501 to authenticate by an OAuth2 bearer token, send the
basic commands, match server responses with them and decode envelopes.

References: IMAP4rev1 - RFC3501, encoded words - RFC2047, XOAUTH2 - Google's
"OAuth 2.0 Mechanism" documentation
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

__version__ = "0.1"
__revision__ = "$Id$"
__all__ = ["IMAPConnection", "open_connection", "IMAPRouter",
    "IMAPPendingCommand", "IMAPEnvelope", "IMAPCommand", "Credential",
    "Authenticator", "XOAUTH2Authenticator", "encode_xoauth2", "serialize",
    "decode_envelope", "decode_envelopes", "decode_imap_string",
    "log_traffic", "IMAPError", "UnknownCommandError", "DisconnectedError",
    "NotConnectedError", "ParseError"]

from ..exceptions import (IMAPError, UnknownCommandError, DisconnectedError,
                          NotConnectedError, ParseError)
from .authenticators import (Credential, Authenticator, XOAUTH2Authenticator,
                             encode_xoauth2)
from . import IMAPCommand
from .IMAPCommand import serialize
from .IMAPRouter import IMAPRouter, IMAPPendingCommand
from .IMAPEnvelope import IMAPEnvelope, decode_envelope, decode_envelopes
from .encoded_words import decode_imap_string
from .traffic import log_traffic
from .IMAPConnection import IMAPConnection, open_connection
