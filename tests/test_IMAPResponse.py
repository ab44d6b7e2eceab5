# -*- coding: utf-8
"""Unit tests for xoimap.imap.IMAPResponse"""

import unittest

from xoimap.exceptions import ParseError
from xoimap.imap.IMAPResponse import (capabilities, completion_status,
                                      exists_count, list_mailboxes,
                                      search_results)

__revision__ = '$Id$'

SELECT = ('* FLAGS (\\Answered \\Flagged \\Draft \\Deleted \\Seen)\n'
          '* OK [PERMANENTFLAGS (\\Answered \\Seen \\*)] Flags permitted.\n'
          '* OK [UIDVALIDITY 3] UIDs valid.\n'
          '* 172 EXISTS\n'
          '* 0 RECENT\n'
          'a1b2c3d4 OK [READ-WRITE] INBOX selected. (Success)\n')


class CompletionStatusTest(unittest.TestCase):
    """Test for xoimap.imap.IMAPResponse.completion_status()"""

    def test_kinds(self):
        self.assertEqual(completion_status(SELECT, 'a1b2c3d4'), 'OK')
        self.assertEqual(completion_status('a1b2c3d4 no nope\n', 'a1b2c3d4'),
                         'NO')
        self.assertEqual(completion_status('* BAD x\na1b2c3d4 BAD syntax\n',
                                           'a1b2c3d4'), 'BAD')

    def test_missing(self):
        self.assertIsNone(completion_status(None, 'a1b2c3d4'))
        self.assertIsNone(completion_status(SELECT, 'ffffffff'))
        self.assertIsNone(completion_status('a1b2c3d4 BYE\n', 'a1b2c3d4'))


class ExistsCountTest(unittest.TestCase):
    """Test for xoimap.imap.IMAPResponse.exists_count()"""

    def test_exists(self):
        self.assertEqual(exists_count(SELECT), 172)

    def test_missing(self):
        self.assertEqual(exists_count('a1b2c3d4 OK done\n'), 0)
        self.assertEqual(exists_count(None), 0)


class SearchResultsTest(unittest.TestCase):
    """Test for xoimap.imap.IMAPResponse.search_results()"""

    def test_results(self):
        self.assertEqual(search_results('* SEARCH 2 84 882\na1b2c3d4 OK\n'),
                         (2, 84, 882))
        self.assertEqual(search_results('* SEARCH\na1b2c3d4 OK\n'), ())
        self.assertEqual(search_results('* SEARCH 1\n* SEARCH 5\n'), (1, 5))

    def test_garbage(self):
        self.assertRaises(ParseError, search_results, '* SEARCH 1 x\n')


class CapabilitiesTest(unittest.TestCase):
    """Test for xoimap.imap.IMAPResponse.capabilities()"""

    def test_response(self):
        self.assertEqual(
            capabilities('* CAPABILITY IMAP4rev1 auth=XOAUTH2 IDLE\n'
                         'a1b2c3d4 OK Success\n'),
            ('IMAP4REV1', 'AUTH=XOAUTH2', 'IDLE'))

    def test_response_code(self):
        self.assertEqual(
            capabilities('a1b2c3d4 OK [CAPABILITY IMAP4rev1 IDLE] authenticated\n'),
            ('IMAP4REV1', 'IDLE'))

    def test_duplicates(self):
        self.assertEqual(
            capabilities('* CAPABILITY IMAP4rev1 IDLE\n'
                         'a1b2c3d4 OK [CAPABILITY IMAP4rev1 NAMESPACE] done\n'),
            ('IMAP4REV1', 'IDLE', 'NAMESPACE'))


class ListMailboxesTest(unittest.TestCase):
    """Test for xoimap.imap.IMAPResponse.list_mailboxes()"""

    def test_list(self):
        body = ('* LIST (\\HasNoChildren) "/" "INBOX"\n'
                '* LIST (\\HasChildren \\Noselect) "/" "[Gmail]"\n'
                '* LIST () NIL foo\n'
                'a1b2c3d4 OK Success\n')
        self.assertEqual(list_mailboxes(body), (
            (('\\HasNoChildren',), '/', 'INBOX'),
            (('\\HasChildren', '\\Noselect'), '/', '[Gmail]'),
            ((), None, 'foo')))

    def test_malformed(self):
        self.assertRaises(ParseError, list_mailboxes, '* LIST "/" "INBOX"\n')
        self.assertRaises(ParseError, list_mailboxes, '* LIST () "/"\n')
        self.assertRaises(ParseError, list_mailboxes, '* LIST () "/" ""\n')


if __name__ == '__main__':
    unittest.main()
