# -*- coding: utf-8
"""Minimal IMAP client authenticating by an OAuth2 bearer token"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

__version__ = "0.1"
__revision__ = "$Id$"

__all__ = ["streams", "imap", "IMAPConnection", "open_connection",
           "Credential"]

from .imap import IMAPConnection, open_connection, Credential
