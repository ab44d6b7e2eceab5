# -*- coding: utf-8
"""A generic Stream template"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

__revision__ = "$Id$"

from ..common import default_timeout, read_size

class Stream:
    """Stream object.

Stream is a special object that supports several file-object-like methods like
close(), flush(), read() and write(). As a bonus :), there is a has_data()
function that checks if you can read from the stream without blocking.

Streams talk in bytes. read() returns whatever is available, up to size
octets; an empty result means the other side has closed the connection.

This class is just a template for other classes. They should override
_close(), _flush(), _has_data(), _read() and _write() with their own
implementation. These names start with underscore to prevent the need to
redefine docstrings.
"""
    okay = False

    def __todo(self, *args):
        """Default handler for methods that aren't implemented"""
        raise NotImplementedError("streams.Stream doesn't support this method")

    def close(self):
        """Close the stream; no I/O is possible afterwards"""
        self.okay = False
        return self._close()

    def flush(self):
        """Push buffered outgoing data to the peer"""
        return self._flush()

    def has_data(self, timeout=default_timeout):
        """Check if we can read from socket without blocking

Timeout is an optional parameter specifying the maximum time to wait for the
result. If None, there's no timeout - the function will block until there is
something to read. If timeout is zero, the function will return immediately.
Positive floating point value is number of seconds to wait.
"""
        return self._has_data(timeout)

    def read(self, size=read_size):
        """Read at most size octets"""
        return self._read(size)

    def write(self, data):
        """Write all of data (bytes)"""
        return self._write(data)

    _close = __todo
    _flush = __todo
    _has_data = __todo
    _read = __todo
    _write = __todo
