# -*- coding: utf-8
"""Decoding of RFC 2047 encoded words found in ENVELOPE strings"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import base64
import logging
import re

__revision__ = '$Id$'

log = logging.getLogger(__name__)

_re_q_marker = re.compile(r'=\?[^?]*\?Q\?', re.IGNORECASE)
_re_b_word = re.compile(r'=\?([^?]*)\?B\?(.*?)\?=', re.IGNORECASE)
_re_hex = re.compile(r'=([0-9A-F]{2})', re.IGNORECASE)
# whitespace between two adjacent encoded words isn't part of the text
_re_between_words = re.compile(r'\?=\s+=\?')

_smart_quotes = (
    (re.compile('=E2=80=9C', re.IGNORECASE), '“'),
    (re.compile('=E2=80=9D', re.IGNORECASE), '”'),
)


def _decode_q(text):
    """The "Q" encoding.

    Escapes are mapped octet by octet to characters of the same value, so
    multi-octet UTF-8 sequences end up as their Latin-1 reading. The only
    exception are the typographic double quotes which are common enough in
    subjects to deserve their own treatment.
    """
    text = _re_q_marker.sub('', text).replace('?=', '')
    for (pattern, quote) in _smart_quotes:
        text = pattern.sub(quote, text)
    text = text.replace('_', ' ')
    return _re_hex.sub(lambda match: chr(int(match.group(1), 16)), text)


def _decode_b_word(match):
    charset = match.group(1) or 'utf-8'
    payload = match.group(2)
    payload += '=' * (-len(payload) % 4)
    return base64.b64decode(payload).decode(charset)


def decode_imap_string(text):
    """Decode a string that might be an RFC 2047 encoded word

    Anything not starting with "=?" is returned unchanged, and so is
    everything we fail to decode.
    """
    if not text.startswith('=?'):
        return text

    words = _re_between_words.sub('?==?', text)
    marker = words.upper()
    try:
        if '?Q?' in marker:
            return _decode_q(words)
        if '?B?' in marker:
            return _re_b_word.sub(_decode_b_word, words)
    except (ValueError, LookupError) as exc:
        # binascii.Error and UnicodeDecodeError are ValueErrors too
        log.warning("can't decode %r: %s", text, exc)
    return text
