#!/usr/bin/python3
# -*- coding: utf-8
"""Show the latest messages of a mailbox

The access token comes from whoever did the OAuth2 dance for us, typically
through the IMAP_ACCESS_TOKEN environment variable.
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import logging
import os
import sys
from optparse import OptionParser

from . import __version__
from .common import default_host, default_port, default_timeout
from .imap import Credential, IMAPConnection, decode_envelopes
from .imap.IMAPConnection import CLOSED
from .imap.IMAPResponse import completion_status, exists_count

__revision__ = "$Id$"

log = logging.getLogger("xoimap")


def make_parser():
    opt = OptionParser(usage="%prog [options]", version="%prog " + __version__)
    env = os.environ
    opt.add_option("--host", default=env.get("IMAP_HOST", default_host),
                   help="IMAP server (default: %default)")
    opt.add_option("--port", type="int",
                   default=int(env.get("IMAP_PORT", default_port)),
                   help="port of the implicit TLS service (default: %default)")
    opt.add_option("-u", "--user", default=env.get("IMAP_USERNAME"),
                   help="account name, $IMAP_USERNAME by default")
    opt.add_option("-t", "--token", default=env.get("IMAP_ACCESS_TOKEN"),
                   help="OAuth2 access token, $IMAP_ACCESS_TOKEN by default")
    opt.add_option("-m", "--mailbox", default=env.get("IMAP_MAILBOX", "INBOX"),
                   help="mailbox to look at (default: %default)")
    opt.add_option("-n", "--count", type="int", default=3,
                   help="how many messages before the last one to show "
                        "(default: %default)")
    opt.add_option("--timeout", type="float", default=default_timeout,
                   help="socket timeout in seconds (default: %default)")
    opt.add_option("--insecure", action="store_true", default=False,
                   help="don't verify server's certificate")
    opt.add_option("-d", "--debug", action="store_true", default=False,
                   help="log the protocol chatter")
    return opt


def _check(body, tag, what):
    status = completion_status(body, tag)
    if status != 'OK':
        log.error("%s failed: %s", what, status)
        return False
    return True


def show_latest(connection, mailbox, count, out=None):
    """SELECT the mailbox and print envelopes of its last messages

    Returns the process exit code.
    """
    if out is None:
        out = sys.stdout
    tag = connection.auth_tag
    if not _check(connection.wait(tag), tag, "AUTHENTICATE"):
        return 1

    tag = connection.cmd_select(mailbox)
    body = connection.wait(tag)
    if not _check(body, tag, "SELECT"):
        return 1
    total = exists_count(body)
    if not total:
        out.write("%s is empty\n" % mailbox)
        return 0

    start = max(1, total - count)
    tag = connection.cmd_fetch("%d:*" % start, ("FLAGS", "ENVELOPE"))
    body = connection.wait(tag)
    if not _check(body, tag, "FETCH"):
        return 1
    out.write("\nLast messages:\n----------------\n")
    for line in decode_envelopes(body):
        out.write(line + "\n")
    return 0


def main(argv=None):
    opt = make_parser()
    (options, args) = opt.parse_args(argv)
    if args:
        opt.error("unexpected arguments: %s" % " ".join(args))
    if not options.user or not options.token:
        opt.error("both the user name and the access token are required")

    if options.debug:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    connection = IMAPConnection(options.host, options.port,
                                Credential(options.user, options.token),
                                stream_args=(options.timeout,
                                             not options.insecure))
    if not connection.open():
        return 1
    try:
        status = show_latest(connection, options.mailbox, options.count)
        if connection.state != CLOSED:
            connection.wait(connection.logout())
    finally:
        connection.close()
    return status


if __name__ == "__main__":
    sys.exit(main())
