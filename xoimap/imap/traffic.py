# -*- coding: utf-8
"""Reporting of the protocol traffic

A traffic observer is any callable accepting (tag, direction, text). It sees
every command we send and, once a command completes, every non-empty line of
its response. Lines of untagged data are reported with the UNTAGGED direction
so that a presentation layer can tell them apart.
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import logging

__revision__ = '$Id$'

OUTGOING = '>'
INCOMING = '<'
UNTAGGED = '*'

log = logging.getLogger("xoimap.traffic")


def direction_of(line):
    """INCOMING or UNTAGGED, depending on how the server line looks like"""
    if line.startswith('*'):
        return UNTAGGED
    return INCOMING


def log_traffic(tag, direction, text):
    """Default observer, sends everything to the xoimap.traffic logger

    The direction is attached to the record, formatters may use it.
    """
    if direction == OUTGOING:
        arrow = '→'
    else:
        arrow = '←'
    log.info("%s %s %s", tag, arrow, text.strip(),
             extra={"direction": direction})
