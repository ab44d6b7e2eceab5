# -*- coding: utf-8
"""Connection to an IMAP server

An IMAPConnection owns one stream and everything that is tied to it. It
authenticates by XOAUTH2 as soon as the stream is up, sends commands and
hands server output over to an IMAPRouter which matches it with the commands.

Nothing happens behind your back: there's no worker thread, data are read and
callbacks invoked only from within loop(), run() and wait().

* How to use:

>>> conn = IMAPConnection("imap.gmail.com", 993,
...                       Credential("user@gmail.com", access_token))
>>> conn.subscribe("ready", lambda: conn.cmd_select("INBOX", on_select))
>>> conn.open()
>>> conn.run()

* Lifecycle

Connecting -> AuthSent -> Ready -> Closed. Ready is announced right after the
AUTHENTICATE command has been written; it doesn't mean that the server has
accepted the token. Look at the AUTHENTICATE response (auth_tag) for that.
Closed is terminal. Commands still pending at that point never complete.
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import base64
import logging
import secrets

from ..common import CRLF, default_timeout, read_size
from ..exceptions import DisconnectedError, NotConnectedError
from ..streams import OpenSSLStream
from . import IMAPCommand
from .authenticators import XOAUTH2Authenticator
from .IMAPResponse import completion_status
from .IMAPRouter import IMAPRouter
from .traffic import OUTGOING, log_traffic

__revision__ = '$Id$'

log = logging.getLogger(__name__)

CONNECTING = 'Connecting'
AUTH_SENT = 'AuthSent'
READY = 'Ready'
CLOSED = 'Closed'

# ready() untagged(line) response(tag, body) error(exception) close()
EVENTS = ('ready', 'untagged', 'response', 'error', 'close')


class IMAPConnection:
    """Connection to an IMAP server authenticated by an OAuth2 token"""

    def __init__(self, host, port, credential, stream_type=OpenSSLStream,
                 stream_args=(), observer=log_traffic):
        """IMAPConnection constructor

        host, port -- where to connect to
        credential -- xoimap.Credential with the username and access token
        stream_type -- class of the stream to create, called as
                       stream_type(host, port, *stream_args)
        observer -- traffic observer, see xoimap.imap.traffic; None disables
                    the reporting
        """
        self.host = host
        self.port = port
        self.state = CONNECTING
        self.observer = observer
        self.auth_tag = None
        self.username = credential.username
        self._credential = credential
        self._authenticator = None
        self._stream_type = stream_type
        self._stream_args = tuple(stream_args)
        self._stream = None
        self._buffer = b''
        self._listeners = dict((event, []) for event in EVENTS)
        self.router = IMAPRouter(observer, self._on_untagged,
                                 self._on_response)

    def __repr__(self):
        return "<xoimap.IMAPConnection %s:%s %s, %d pending>" % (
            self.host, self.port, self.state, len(self.router.pending()))

    # listeners

    def subscribe(self, event, callback):
        """Call callback whenever event happens"""
        if event not in self._listeners:
            raise ValueError("unknown event: %s" % event)
        self._listeners[event].append(callback)

    def unsubscribe(self, event, callback):
        """Undo subscribe()"""
        if event not in self._listeners:
            raise ValueError("unknown event: %s" % event)
        self._listeners[event].remove(callback)

    def _emit(self, event, *args):
        for callback in list(self._listeners[event]):
            callback(*args)

    def _on_untagged(self, line):
        self._emit('untagged', line)

    def _on_response(self, tag, body):
        if tag == self.auth_tag and self._authenticator is not None:
            self._authenticator = None
            status = completion_status(body, tag)
            if status == 'OK':
                log.info("authenticated as %s", self.username)
            else:
                log.warning("authentication as %s failed: %s",
                            self.username, status)
        self._emit('response', tag, body)

    # lifecycle

    def open(self):
        """Connect, send AUTHENTICATE and announce readiness

        Returns True on success. A failure is reported through the "error" and
        "close" events and leaves the connection Closed.
        """
        if self.state != CONNECTING:
            raise DisconnectedError("connection can't be opened twice")
        try:
            self._stream = self._stream_type(self.host, self.port,
                                             *self._stream_args)
        except DisconnectedError as exc:
            self._fail(exc)
            return False

        self.state = AUTH_SENT
        self._authenticator = XOAUTH2Authenticator(self._credential)
        self._credential = None
        command = IMAPCommand.Authenticate(
            self._authenticator.mechanism,
            self._authenticator.initial_response())
        try:
            self.auth_tag = self.send_command(command)
        except DisconnectedError:
            return False
        self.state = READY
        self._emit('ready')
        return True

    def close(self):
        """Drop the connection without saying goodbye"""
        if self.state == CLOSED:
            return
        self.state = CLOSED
        if self._stream is not None:
            self._stream.close()
        pending = self.router.pending()
        if pending:
            log.info("abandoning %d pending command(s): %s", len(pending),
                     ' '.join(pending))
        self._emit('close')

    def _fail(self, exc):
        """The connection is gone, for whatever reason"""
        if self.state == CLOSED:
            return
        if exc is None:
            log.warning("%s:%s closed the connection", self.host, self.port)
        else:
            log.error("connection to %s:%s failed: %s", self.host, self.port,
                      exc)
            self._emit('error', exc)
        self.close()

    # sending

    def _make_tag(self):
        """Create a fresh tag, eight lowercase hex digits"""
        while True:
            tag = secrets.token_hex(4)
            if tag not in self.router:
                return tag

    def _write(self, data, shown=None):
        """Write data to server, shown replaces data in the debug log"""
        if shown is None:
            shown = data.rstrip(CRLF)
        log.debug("> %s", shown)
        try:
            self._stream.write(data.encode('utf-8'))
            self._stream.flush()
        except DisconnectedError as exc:
            self._fail(exc)
            raise

    def send_command(self, command, callback=None):
        """Send a command, return its tag

        command -- one of the commands from xoimap.imap.IMAPCommand
        callback -- called with the accumulated response once the tagged
                    completion arrives
        """
        if self._stream is None:
            raise NotConnectedError("connection not initialized")
        if self.state == CLOSED:
            raise DisconnectedError("connection is closed")
        text = IMAPCommand.serialize(command)
        tag = self._make_tag()
        if isinstance(command, IMAPCommand.Authenticate):
            # the token doesn't belong to any log
            shown = 'AUTHENTICATE %s ****' % command.mechanism
        else:
            shown = text
        self.router.register(tag, shown, callback)
        self._write('%s %s%s' % (tag, text, CRLF),
                    '%s %s' % (tag, shown))
        if self.observer is not None:
            self.observer(tag, OUTGOING, shown)
        return tag

    def cmd_capability(self, callback=None):
        """Send a CAPABILITY command"""
        return self.send_command(IMAPCommand.CAPABILITY, callback)

    def cmd_noop(self, callback=None):
        """Send a NOOP command"""
        return self.send_command(IMAPCommand.NOOP, callback)

    def cmd_logout(self, callback=None):
        """Send a LOGOUT command"""
        # we don't touch self.state here, the server will hang up on us
        return self.send_command(IMAPCommand.LOGOUT, callback)

    logout = cmd_logout

    def cmd_select(self, mailbox, callback=None):
        """Select a mailbox"""
        return self.send_command(IMAPCommand.Select(mailbox), callback)

    def cmd_examine(self, mailbox, callback=None):
        """Examine a mailbox"""
        return self.send_command(IMAPCommand.Examine(mailbox), callback)

    def cmd_fetch(self, sequence, items, callback=None):
        """Perform a FETCH command"""
        return self.send_command(IMAPCommand.Fetch(sequence, items), callback)

    def cmd_store(self, sequence, flags, callback=None):
        """Add flags to messages"""
        return self.send_command(IMAPCommand.Store(sequence, flags), callback)

    def cmd_search(self, criteria, callback=None):
        """Perform a SEARCH for messages"""
        return self.send_command(IMAPCommand.Search(criteria), callback)

    def cmd_list(self, reference, mailbox, callback=None):
        """Send a LIST command"""
        return self.send_command(IMAPCommand.List(reference, mailbox),
                                 callback)

    # receiving

    def loop(self, timeout=default_timeout):
        """Wait up to timeout seconds for data and process them

        Returns False once the connection is closed.
        """
        if self._stream is None:
            raise NotConnectedError("connection not initialized")
        if self.state == CLOSED:
            return False
        try:
            if not self._stream.has_data(timeout):
                return True
            data = self._stream.read(read_size)
        except DisconnectedError as exc:
            self._fail(exc)
            return False
        if not data:
            # EOF
            self._fail(None)
            return False
        self.feed(data)
        return self.state != CLOSED

    def run(self):
        """Process server output until the connection is closed"""
        while self.loop():
            pass

    def wait(self, tag):
        """Process server output until the command tag completes

        Returns the response or None when the connection got closed first.
        """
        pending = self.router.get(tag)
        if pending is None:
            raise KeyError(tag)
        while not pending.completed:
            if not self.loop():
                break
        if pending.completed:
            return pending.body
        return None

    def feed(self, data):
        """Process raw octets as if they were read from the stream"""
        self._buffer += data
        while self.state != CLOSED:
            pos = self._buffer.find(b'\r\n')
            if pos == -1:
                # incomplete line, the rest comes with the next read
                break
            line = self._buffer[:pos].decode('utf-8', 'replace')
            self._buffer = self._buffer[pos + 2:]
            self._handle_line(line)

    def _handle_line(self, line):
        log.debug("< %s", line)
        self.router.dispatch(line)
        if (line.startswith('+') and self._authenticator is not None
                and self.auth_tag in self.router.pending()):
            self._continue_authentication(line[1:].strip())

    def _continue_authentication(self, challenge):
        """Answer a continuation request sent during AUTHENTICATE"""
        try:
            decoded = base64.b64decode(challenge).decode('utf-8', 'replace')
        except ValueError:
            decoded = challenge
        try:
            self._write(self._authenticator.chat(decoded) + CRLF)
        except DisconnectedError:
            # already reported through the error and close events
            pass


def open_connection(host, port, credential, listeners=None, **kwargs):
    """Create an IMAPConnection, subscribe listeners and open it

    listeners -- mapping of event name to a callback
    The remaining arguments are passed to IMAPConnection.
    """
    connection = IMAPConnection(host, port, credential, **kwargs)
    for (event, callback) in (listeners or {}).items():
        connection.subscribe(event, callback)
    connection.open()
    return connection
