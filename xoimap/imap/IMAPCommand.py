# -*- coding: utf-8
"""Commands we are able to send and their wire form

A command is either one of the bare keywords (CAPABILITY, NOOP, LOGOUT) or an
instance of one of the named tuples below. They are immutable; the sequences
of items, flags and search criteria are stored as tuples.
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

from collections import namedtuple

from ..exceptions import UnknownCommandError

__revision__ = '$Id$'

CAPABILITY = 'CAPABILITY'
NOOP = 'NOOP'
LOGOUT = 'LOGOUT'

_keywords = (CAPABILITY, NOOP, LOGOUT)


class Select(namedtuple('Select', 'mailbox')):
    """SELECT a mailbox read-write"""
    __slots__ = ()
    keyword = 'SELECT'


class Examine(namedtuple('Examine', 'mailbox')):
    """EXAMINE a mailbox (read-only SELECT)"""
    __slots__ = ()
    keyword = 'EXAMINE'


class Authenticate(namedtuple('Authenticate', 'mechanism token')):
    """AUTHENTICATE with an initial response"""
    __slots__ = ()
    keyword = 'AUTHENTICATE'


class Fetch(namedtuple('Fetch', 'sequence items')):
    """FETCH data items of messages in a sequence set"""
    __slots__ = ()
    keyword = 'FETCH'

    def __new__(cls, sequence, items):
        return super(Fetch, cls).__new__(cls, sequence, tuple(items))


class Store(namedtuple('Store', 'sequence flags')):
    """Add flags to messages in a sequence set"""
    __slots__ = ()
    keyword = 'STORE'

    def __new__(cls, sequence, flags):
        return super(Store, cls).__new__(cls, sequence, tuple(flags))


class Search(namedtuple('Search', 'criteria')):
    """SEARCH for messages"""
    __slots__ = ()
    keyword = 'SEARCH'

    def __new__(cls, criteria):
        return super(Search, cls).__new__(cls, tuple(criteria))


class List(namedtuple('List', 'reference mailbox')):
    """LIST mailboxes matching a pattern"""
    __slots__ = ()
    keyword = 'LIST'


def _sequence_to_str(sequence):
    """Returns the string representation of a sequence"""
    if isinstance(sequence, bool):
        raise UnknownCommandError("not a sequence set: %r" % (sequence,))
    if isinstance(sequence, str):
        return sequence
    elif isinstance(sequence, int):
        return str(sequence)
    else:
        raise UnknownCommandError("not a sequence set: %r" % (sequence,))


def serialize(command):
    """Return the wire form of command, without tag and CRLF

    Raises UnknownCommandError for anything that isn't a known command.
    """
    if isinstance(command, str):
        if command in _keywords:
            return command
        raise UnknownCommandError("unknown command: %r" % command)

    if isinstance(command, (Select, Examine)):
        return '%s "%s"' % (command.keyword, command.mailbox)
    elif isinstance(command, Authenticate):
        return 'AUTHENTICATE %s %s' % (command.mechanism, command.token)
    elif isinstance(command, Fetch):
        return 'FETCH %s (%s)' % (_sequence_to_str(command.sequence),
                                  ' '.join(command.items))
    elif isinstance(command, Store):
        return 'STORE %s +FLAGS (%s)' % (_sequence_to_str(command.sequence),
                                         ' '.join(command.flags))
    elif isinstance(command, Search):
        return 'SEARCH ' + ' '.join(command.criteria)
    elif isinstance(command, List):
        return 'LIST "%s" "%s"' % (command.reference, command.mailbox)
    else:
        raise UnknownCommandError("unknown command: %r" % (command,))
