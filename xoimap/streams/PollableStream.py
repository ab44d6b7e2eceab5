# -*- coding: utf-8
"""A template for streams that support the poll() syscall"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import select
from .Stream import Stream

__revision__ = "$Id$"

class PollableStream(Stream):
    """_has_data() helper for those streams that can use poll() for _has_data()

Subclasses have to register their descriptor in self._r_poll and may override
_pending() to report data that are already buffered above the descriptor.
"""
    def _pending(self):
        return False

    def _has_data(self, timeout):
        if self._pending():
            return True
        if timeout is None or timeout < -0.000001:
            poll_timeout = None
        else:
            poll_timeout = timeout * 1000
        polled = self._r_poll.poll(poll_timeout)
        if len(polled):
            result = polled[0][1]
            if result & select.POLLIN:
                if result & select.POLLHUP:
                    # closed connection, data still available
                    self.okay = False
                return True
            elif result & (select.POLLHUP | select.POLLERR):
                # connection is closed
                self.okay = False
                # let the reader find out about the EOF
                return True
            else:
                return False
        else:
            return False
