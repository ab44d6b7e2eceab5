# -*- coding: utf-8
"""Container for the RFC822 envelope and its decoder

The ENVELOPE of RFC 3501 is a parenthesized list:

    (date subject from sender reply-to to cc bcc in-reply-to message-id)

where the address lists are lists of (name adl mailbox host) groups. We are
interested in the date, the subject and the first address of the first
address list, which is the From unless the server sent NIL there.
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import logging
import re

from ..exceptions import ParseError
from .encoded_words import decode_imap_string

__revision__ = '$Id$'

log = logging.getLogger(__name__)

_re_envelope = re.compile(r'ENVELOPE \(', re.IGNORECASE)
_re_literal = re.compile(r'{(\d+)}\r?\n')

_atom_end = ' ()"\r\n\t'

NO_DATE = 'No Date'
NO_SUBJECT = 'No Subject'
UNKNOWN_NAME = 'Unknown'
UNKNOWN_EMAIL = 'unknown@email'


class _Unbalanced(ParseError):
    """The group isn't closed yet, more data are needed"""
    pass


class IMAPEnvelope:
    """Container for the interesting part of an envelope"""

    def __init__(self, date=NO_DATE, subject=NO_SUBJECT, from_name=UNKNOWN_NAME,
                 from_email=UNKNOWN_EMAIL):
        self.date = date
        self.subject = subject
        self.from_name = from_name
        self.from_email = from_email

    def __repr__(self):
        return ('<xoimap.IMAPEnvelope: Date: %s, Subj: "%s", From: %s <%s>>' %
                (self.date, self.subject, self.from_name, self.from_email))

    def __eq__(self, other):
        return (isinstance(other, IMAPEnvelope) and
                self.date == other.date and self.subject == other.subject and
                self.from_name == other.from_name and
                self.from_email == other.from_email)

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None

    def summary(self):
        """One line for humans"""
        return 'From: %s <%s> - Subject: %s' % (self.from_name,
                                                self.from_email, self.subject)


def _extract_quoted(string, pos):
    """Read a quoted string starting at string[pos], which is the '"'

    Returns (text, position after the closing quote).
    """
    buf = []
    escaping = False
    pos += 1
    size = len(string)
    while pos < size:
        char = string[pos]
        if escaping:
            if char not in ('\\', '"'):
                # RFC 3501 allows escaping of these two only; keep the rest
                buf.append('\\')
            buf.append(char)
            escaping = False
        elif char == '"':
            return (''.join(buf), pos + 1)
        elif char == '\\':
            escaping = True
        else:
            buf.append(char)
        pos += 1
    # unterminated quoted string
    raise _Unbalanced(string)


def _extract_literal(string, pos):
    """Read a {size} literal starting at string[pos]

    The size counts octets of the UTF-8 encoded data. Line terminators were
    normalized to "\\n" when the lines were collected, so a "\\n" inside the
    literal stands for the two octets of CRLF.
    """
    match = _re_literal.match(string, pos)
    if not match:
        if '\n' in string[pos:]:
            raise ParseError("malformed literal: %s" % string[pos:])
        # the literal's data are on the next line
        raise _Unbalanced(string)
    start = match.end()
    size = int(match.group(1))
    end = start
    octets = 0
    while octets < size:
        if end >= len(string):
            raise _Unbalanced(string)
        if string[end] == '\n':
            octets += 2
        else:
            octets += len(string[end].encode('utf-8', 'replace'))
        end += 1
    return (string[start:end], end)


def tokenize(string):
    """Split the inside of a parenthesized group into items

    string begins right after the opening parenthesis. Quoted strings and
    literals become str, NIL becomes None, other atoms are kept as str and
    nested groups become lists. Returns (items, rest of the string after the
    closing parenthesis). Raises ParseError if the group doesn't end within
    string.
    """
    stack = [[]]
    pos = 0
    size = len(string)
    while pos < size:
        char = string[pos]
        if char in ' \r\n\t':
            pos += 1
        elif char == '(':
            stack.append([])
            pos += 1
        elif char == ')':
            group = stack.pop()
            pos += 1
            if not stack:
                return (group, string[pos:])
            stack[-1].append(group)
        elif char == '"':
            (item, pos) = _extract_quoted(string, pos)
            stack[-1].append(item)
        elif char == '{':
            (item, pos) = _extract_literal(string, pos)
            stack[-1].append(item)
        else:
            end = pos
            while end < size and string[end] not in _atom_end:
                end += 1
            atom = string[pos:end]
            if atom.upper() == 'NIL':
                stack[-1].append(None)
            else:
                stack[-1].append(atom)
            pos = end
    raise _Unbalanced(string)


def _find_sender(items):
    """First address of the first non-empty address list"""
    for item in items:
        if isinstance(item, list) and item and isinstance(item[0], list):
            return item[0]
    return None


def envelope_from_items(items):
    """Build an IMAPEnvelope out of the tokenized ENVELOPE"""
    envelope = IMAPEnvelope()
    if len(items) > 0 and isinstance(items[0], str):
        envelope.date = items[0]
    if len(items) > 1 and isinstance(items[1], str):
        envelope.subject = decode_imap_string(items[1])

    address = _find_sender(items)
    if address is not None:
        if len(address) != 4:
            raise ParseError("address should have four fields: %r" % address)
        (name, _adl, mailbox, host) = address
        if isinstance(name, str) and name:
            envelope.from_name = decode_imap_string(name)
        if mailbox and host:
            envelope.from_email = '%s@%s' % (mailbox, host)
        elif mailbox:
            envelope.from_email = mailbox
    return envelope


def decode_envelope(text):
    """Decode the first ENVELOPE found in text

    Returns None when there's no ENVELOPE, raises ParseError when it's
    incomplete or malformed.
    """
    match = _re_envelope.search(text)
    if not match:
        return None
    (items, _rest) = tokenize(text[match.end():])
    return envelope_from_items(items)


def decode_envelopes(body):
    """Render every ENVELOPE of a FETCH response as a line of text

    body is the accumulated response, lines separated by "\\n". An envelope
    that isn't complete on its own line takes as many of the following lines
    as it needs. A message that can't be decoded is rendered as an error
    message and the rest of them is processed anyway.
    """
    if not body:
        return []
    lines = body.split('\n')
    result = []
    pos = 0
    while pos < len(lines):
        line = lines[pos]
        pos += 1
        if not _re_envelope.search(line):
            continue
        data = line
        try:
            while True:
                try:
                    envelope = decode_envelope(data)
                    break
                except _Unbalanced:
                    if pos >= len(lines):
                        raise ParseError("ENVELOPE isn't terminated")
                    data += '\n' + lines[pos]
                    pos += 1
            result.append(envelope.summary())
        except Exception as exc:
            log.warning("can't decode envelope in %r: %s", line, exc)
            result.append('Error parsing message: %s' % exc)
    return result
