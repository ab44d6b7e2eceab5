# -*- coding: utf-8
"""Unit tests for xoimap.imap.IMAPCommand"""

import unittest

from xoimap.exceptions import UnknownCommandError
from xoimap.imap import IMAPCommand
from xoimap.imap.IMAPCommand import serialize

__revision__ = '$Id$'


class SerializeTest(unittest.TestCase):
    """Test for xoimap.imap.IMAPCommand.serialize()"""

    def test_keywords(self):
        """Bare commands are sent as they are"""
        self.assertEqual(serialize(IMAPCommand.CAPABILITY), 'CAPABILITY')
        self.assertEqual(serialize(IMAPCommand.NOOP), 'NOOP')
        self.assertEqual(serialize(IMAPCommand.LOGOUT), 'LOGOUT')

    def test_select(self):
        self.assertEqual(serialize(IMAPCommand.Select('INBOX')),
                         'SELECT "INBOX"')
        self.assertEqual(serialize(IMAPCommand.Examine('Sent Items')),
                         'EXAMINE "Sent Items"')

    def test_authenticate(self):
        self.assertEqual(serialize(IMAPCommand.Authenticate('XOAUTH2', 'blob')),
                         'AUTHENTICATE XOAUTH2 blob')

    def test_fetch(self):
        self.assertEqual(
            serialize(IMAPCommand.Fetch('5:*', ('FLAGS', 'ENVELOPE'))),
            'FETCH 5:* (FLAGS ENVELOPE)')
        self.assertEqual(serialize(IMAPCommand.Fetch(7, ['UID'])),
                         'FETCH 7 (UID)')

    def test_store(self):
        self.assertEqual(serialize(IMAPCommand.Store(1, ['\\Seen'])),
                         'STORE 1 +FLAGS (\\Seen)')
        self.assertEqual(
            serialize(IMAPCommand.Store('1:3', ('\\Seen', '\\Flagged'))),
            'STORE 1:3 +FLAGS (\\Seen \\Flagged)')

    def test_search(self):
        self.assertEqual(serialize(IMAPCommand.Search(['UNSEEN', 'FROM', 'x'])),
                         'SEARCH UNSEEN FROM x')

    def test_list(self):
        self.assertEqual(serialize(IMAPCommand.List('', '*')), 'LIST "" "*"')
        self.assertEqual(serialize(IMAPCommand.List('r', 'm')), 'LIST "r" "m"')

    def test_unknown(self):
        """Anything we don't know how to send is refused"""
        self.assertRaises(UnknownCommandError, serialize, 'IDLE')
        self.assertRaises(UnknownCommandError, serialize, 'noop')
        self.assertRaises(UnknownCommandError, serialize, ('SELECT', 'INBOX'))
        self.assertRaises(UnknownCommandError, serialize, None)

    def test_unknown_is_type_error(self):
        self.assertRaises(TypeError, serialize, 42)

    def test_bad_sequence(self):
        self.assertRaises(UnknownCommandError, serialize,
                          IMAPCommand.Fetch(None, ['FLAGS']))
        self.assertRaises(UnknownCommandError, serialize,
                          IMAPCommand.Store(True, ['\\Seen']))


class CommandTest(unittest.TestCase):
    """Commands are immutable values"""

    def test_tuples(self):
        fetch = IMAPCommand.Fetch('1', ['FLAGS'])
        self.assertEqual(fetch.items, ('FLAGS',))
        self.assertEqual(IMAPCommand.Store(1, ['\\Seen']).flags, ('\\Seen',))
        self.assertEqual(IMAPCommand.Search(['ALL']).criteria, ('ALL',))

    def test_immutable(self):
        select = IMAPCommand.Select('INBOX')
        self.assertRaises(AttributeError, setattr, select, 'mailbox', 'x')
        self.assertRaises(AttributeError, setattr, select, 'foo', 'x')

    def test_equality(self):
        self.assertEqual(IMAPCommand.Fetch(1, ['FLAGS']),
                         IMAPCommand.Fetch(1, ('FLAGS',)))
        self.assertNotEqual(IMAPCommand.Fetch(1, ['FLAGS']),
                            IMAPCommand.Fetch(2, ['FLAGS']))


if __name__ == '__main__':
    unittest.main()
