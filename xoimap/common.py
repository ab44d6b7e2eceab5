# -*- coding: utf-8
"""Defaults shared by the streams and the IMAP layer"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

__revision__ = "$Id$"

# default timeout in seconds
default_timeout = 30

default_host = "imap.gmail.com"
# implicit TLS, RFC 8314
default_port = 993

# how many octets to ask the stream for at once
read_size = 4096

CRLF = "\r\n"
