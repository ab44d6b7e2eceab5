# -*- coding: utf-8
"""Unit tests for xoimap.imap.IMAPRouter"""

import logging
import unittest

from xoimap.imap.IMAPRouter import IMAPRouter
from xoimap.imap.traffic import INCOMING, UNTAGGED

__revision__ = '$Id$'


class IMAPRouterTest(unittest.TestCase):
    """Test for xoimap.imap.IMAPRouter.dispatch()"""

    def setUp(self):
        logging.disable(logging.CRITICAL)
        self.events = []
        self.untagged = []
        self.responses = []
        self.router = IMAPRouter(
            lambda *args: self.events.append(args),
            self.untagged.append,
            lambda tag, body: self.responses.append((tag, body)))

    def tearDown(self):
        logging.disable(logging.NOTSET)

    def test_tagged_completion(self):
        """A tagged line completes the command exactly once"""
        bodies = []
        self.router.register('abcd1234', 'NOOP', bodies.append)
        self.router.dispatch('abcd1234 OK done')
        self.assertEqual(bodies, ['abcd1234 OK done\n'])
        self.assertTrue(self.router.get('abcd1234').completed)
        self.assertEqual(self.responses, [('abcd1234', 'abcd1234 OK done\n')])

        self.router.dispatch('abcd1234 OK again')
        self.assertEqual(bodies, ['abcd1234 OK done\n'])
        self.assertEqual(len(self.responses), 1)

    def test_untagged_before_completion(self):
        """Untagged data end up in front of the tagged line"""
        bodies = []
        self.router.register('0badcafe', 'SELECT "INBOX"', bodies.append)
        self.router.dispatch('* 3 EXISTS')
        self.router.dispatch('* OK [UIDVALIDITY 1] UIDs valid')
        self.assertEqual(bodies, [])
        self.router.dispatch('0badcafe OK [READ-WRITE] SELECT completed')
        self.assertEqual(bodies, ['* 3 EXISTS\n* OK [UIDVALIDITY 1] UIDs valid\n'
                                  '0badcafe OK [READ-WRITE] SELECT completed\n'])
        self.assertEqual(self.untagged,
                         ['* 3 EXISTS', '* OK [UIDVALIDITY 1] UIDs valid'])

    def test_newest_gets_untagged(self):
        """Untagged data go to the most recent command still in flight"""
        first = []
        second = []
        self.router.register('11111111', 'NOOP', first.append)
        self.router.register('22222222', 'CAPABILITY', second.append)
        self.router.dispatch('* CAPABILITY IMAP4rev1')
        self.router.dispatch('22222222 OK done')
        self.router.dispatch('* 4 EXISTS')
        self.router.dispatch('11111111 OK done')
        self.assertEqual(second, ['* CAPABILITY IMAP4rev1\n22222222 OK done\n'])
        self.assertEqual(first, ['* 4 EXISTS\n11111111 OK done\n'])

    def test_continuation(self):
        """Lines which aren't untagged are attributed the same way"""
        bodies = []
        self.router.register('deadbeef', 'AUTHENTICATE', bodies.append)
        self.router.dispatch('+ eyJzdGF0dXMiOiI0MDEifQ==')
        self.router.dispatch('deadbeef NO [AUTHENTICATIONFAILED] Invalid')
        self.assertEqual(bodies, ['+ eyJzdGF0dXMiOiI0MDEifQ==\n'
                                  'deadbeef NO [AUTHENTICATIONFAILED] Invalid\n'])
        self.assertEqual(self.untagged, [])

    def test_unknown_tag(self):
        """Responses to commands we haven't sent are reported and dropped"""
        self.router.dispatch('ffffffff OK what')
        self.assertEqual(len(self.router), 0)
        self.assertEqual(self.responses, [('ffffffff', 'ffffffff OK what\n')])
        self.assertEqual(self.events, [('ffffffff', INCOMING,
                                        'ffffffff OK what')])

    def test_nobody_waiting(self):
        """Untagged data with no command in flight"""
        self.router.dispatch('* OK Gimap ready')
        self.assertEqual(self.untagged, ['* OK Gimap ready'])
        self.assertEqual(self.events, [(None, UNTAGGED, '* OK Gimap ready')])

    def test_not_a_tag(self):
        """Only eight lowercase hex digits make a tag"""
        bodies = []
        self.router.register('abcd1234', 'NOOP', bodies.append)
        self.router.dispatch('ABCD1234 OK done')
        self.router.dispatch('A001 OK done')
        self.assertEqual(bodies, [])
        self.router.dispatch('abcd1234 OK done')
        self.assertEqual(bodies, ['ABCD1234 OK done\nA001 OK done\n'
                                  'abcd1234 OK done\n'])

    def test_empty_line(self):
        self.router.register('abcd1234', 'NOOP')
        self.router.dispatch('')
        self.assertIsNone(self.router.get('abcd1234').body)
        self.assertEqual(self.events, [])

    def test_observer(self):
        """Every non-empty line is reported once the command completes"""
        self.router.register('abcd1234', 'FETCH')
        self.router.dispatch('* 1 FETCH (FLAGS (\\Seen))')
        self.assertEqual(self.events, [])
        self.router.dispatch('abcd1234 OK FETCH completed')
        self.assertEqual(self.events, [
            ('abcd1234', UNTAGGED, '* 1 FETCH (FLAGS (\\Seen))'),
            ('abcd1234', INCOMING, 'abcd1234 OK FETCH completed')])

    def test_duplicate_tag(self):
        self.router.register('abcd1234')
        self.assertRaises(ValueError, self.router.register, 'abcd1234')

    def test_pending(self):
        self.router.register('11111111')
        self.router.register('22222222')
        self.assertEqual(self.router.pending(), ('11111111', '22222222'))
        self.assertEqual(self.router.current().tag, '22222222')
        self.router.dispatch('22222222 OK done')
        self.assertEqual(self.router.pending(), ('11111111',))
        self.assertEqual(self.router.current().tag, '11111111')
        self.router.forget('22222222')
        self.assertNotIn('22222222', self.router)
        self.assertIn('11111111', self.router)


if __name__ == '__main__':
    unittest.main()
