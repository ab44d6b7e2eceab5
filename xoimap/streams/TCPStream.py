# -*- coding: utf-8
"""Streamed TCP/IP connection"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import logging
import socket
import select
from .PollableStream import PollableStream
from ..common import default_timeout
from ..exceptions import DisconnectedError

__revision__ = "$Id$"

log = logging.getLogger(__name__)

class TCPStream(PollableStream):
    """Streamed TCP/IP connection"""

    def __init__(self, host, port, timeout=default_timeout):
        self.host = host
        self.port = port
        try:
            self._sock = socket.create_connection((host, port), timeout)
        except OSError as exc:
            raise DisconnectedError("can't connect to %s:%s: %s" %
                                    (host, port, exc))
        log.debug("connected to %s:%s", host, port)
        self._r_poll = select.poll()
        self._r_poll.register(self._sock.fileno(),
                              select.POLLIN | select.POLLHUP | select.POLLERR)
        self.timeout = timeout
        self.okay = True

    def _close(self):
        return self._sock.close()

    def _flush(self):
        # sendall() doesn't buffer anything
        pass

    def _read(self, size):
        try:
            return self._sock.recv(size)
        except OSError as exc:
            self.okay = False
            raise DisconnectedError(str(exc))

    def _write(self, data):
        try:
            return self._sock.sendall(data)
        except OSError as exc:
            self.okay = False
            raise DisconnectedError(str(exc))
