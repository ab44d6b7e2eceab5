# -*- coding: utf-8
"""Helpers picking data out of an accumulated command response

All of them take the text a completion callback receives, ie. server lines
separated by "\\n", the tagged completion being the last one.
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import re

from ..exceptions import ParseError
from .IMAPEnvelope import tokenize

__revision__ = '$Id$'

# RFC3501, section 7.1 - Server Responses - Status Responses
_resp_status_tagged = ('OK', 'NO', 'BAD')

_re_exists = re.compile(r'^\* (\d+) EXISTS', re.IGNORECASE | re.MULTILINE)
_re_search = re.compile(r'^\* SEARCH ?(.*)$', re.IGNORECASE | re.MULTILINE)
_re_capability = re.compile(r'^\* CAPABILITY (.*)$',
                            re.IGNORECASE | re.MULTILINE)
_re_capability_code = re.compile(r'\[CAPABILITY ([^\]]*)\]', re.IGNORECASE)
_re_list = re.compile(r'^\* LIST (.*)$', re.IGNORECASE | re.MULTILINE)


def _lines(body):
    if not body:
        return []
    return body.split('\n')


def completion_status(body, tag):
    """OK, NO or BAD from the tagged line of the response, None if missing"""
    prefix = tag + ' '
    for line in _lines(body):
        if line.startswith(prefix):
            kind = line[len(prefix):].split(' ', 1)[0].upper()
            if kind in _resp_status_tagged:
                return kind
            return None
    return None


def exists_count(body):
    """Number of messages from the "* N EXISTS" response, 0 if there's none"""
    match = _re_exists.search(body or '')
    if match:
        return int(match.group(1))
    return 0


def search_results(body):
    """Message numbers from all "* SEARCH" responses"""
    buf = []
    for match in _re_search.finditer(body or ''):
        for item in match.group(1).split():
            try:
                buf.append(int(item))
            except ValueError:
                raise ParseError(match.group(0))
    return tuple(buf)


def capabilities(body):
    """Capabilities announced by the server, upper-cased

    Both the CAPABILITY response and the CAPABILITY response code are
    recognized.
    """
    buf = []
    sources = [match.group(1) for match in _re_capability.finditer(body or '')]
    sources += [match.group(1) for match in
                _re_capability_code.finditer(body or '')]
    for source in sources:
        for item in source.split():
            item = item.upper()
            if item not in buf:
                buf.append(item)
    return tuple(buf)


def list_mailboxes(body):
    """(flags, delimiter, name) for each "* LIST" response

    A NIL delimiter is returned as None.
    """
    buf = []
    for match in _re_list.finditer(body or ''):
        line = match.group(1)
        if not line.startswith('('):
            # start of attributes is missplaced or missing
            raise ParseError(line)
        (items, _rest) = tokenize(line + ')')
        if len(items) != 3 or not isinstance(items[0], list):
            raise ParseError(line)
        (flags, delimiter, name) = items
        if not name:
            raise ParseError(line)
        buf.append((tuple(flags), delimiter, name))
    return tuple(buf)
