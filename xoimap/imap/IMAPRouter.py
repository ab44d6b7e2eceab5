# -*- coding: utf-8
"""Routing of server lines to the commands that asked for them

Every line coming from the server is one of:

* tagged -- starts with the eight lowercase hex digits of a tag we've issued,
  followed by a space. It is appended to that command's response and completes
  the command.
* untagged -- starts with "*". It is appended to the response of the most
  recently issued command that hasn't completed yet.
* anything else (continuation requests, the rest of a literal) -- treated the
  same way as the untagged data.

The attribution of untagged data is a heuristic. IMAP doesn't tie untagged
responses to any command; when several commands are in flight, their untagged
data simply go to the newest one. Callers who care have to wait for a command
to complete before they send the next one.
"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import logging
import re
from collections import OrderedDict

from .traffic import direction_of

__revision__ = '$Id$'

log = logging.getLogger(__name__)

_re_tagged = re.compile(r'^([0-9a-f]{8}) ')


class IMAPPendingCommand:
    """A command waiting for its tagged completion

    body is None until the first line for this command arrives; afterwards
    it's the text of all lines seen so far, each terminated by "\\n".
    """

    def __init__(self, tag, command=None, callback=None):
        self.tag = tag
        self.command = command
        self.callback = callback
        self.body = None
        self.completed = False

    def __repr__(self):
        if self.completed:
            state = "completed"
        else:
            state = "pending"
        return "<xoimap.IMAPPendingCommand %s %s: %r>" % (self.tag, state,
                                                         self.command)

    def append(self, line):
        if self.body is None:
            self.body = ''
        self.body += line + '\n'


class IMAPRouter:
    """Demultiplexer of server lines

    observer -- traffic observer, see xoimap.imap.traffic
    on_untagged -- called with every untagged line
    on_response -- called with (tag, body) whenever a tagged line arrives
    """

    def __init__(self, observer=None, on_untagged=None, on_response=None):
        self._commands = OrderedDict()
        self.observer = observer
        self.on_untagged = on_untagged
        self.on_response = on_response

    def __contains__(self, tag):
        return tag in self._commands

    def __len__(self):
        return len(self._commands)

    def register(self, tag, command=None, callback=None):
        """Start tracking a command we've just sent"""
        if tag in self._commands:
            raise ValueError("tag %s is already in use" % tag)
        pending = IMAPPendingCommand(tag, command, callback)
        self._commands[tag] = pending
        return pending

    def get(self, tag):
        """Return the IMAPPendingCommand for tag or None"""
        return self._commands.get(tag)

    def forget(self, tag):
        """Stop tracking a command, returns its IMAPPendingCommand"""
        return self._commands.pop(tag)

    def current(self):
        """The most recently issued command that hasn't completed yet"""
        for pending in reversed(self._commands.values()):
            if not pending.completed:
                return pending
        return None

    def pending(self):
        """Tags of commands which are still waiting for completion"""
        return tuple(tag for (tag, pending) in self._commands.items()
                     if not pending.completed)

    def dispatch(self, line):
        """Process one line of server's output, without the CRLF"""
        if not line:
            return
        match = _re_tagged.match(line)
        if match:
            self._dispatch_tagged(match.group(1), line)
        else:
            if line.startswith('*'):
                log.debug("untagged: %s", line)
            else:
                log.debug("continuation: %s", line)
            self._dispatch_current(line)
            if line.startswith('*') and self.on_untagged is not None:
                self.on_untagged(line)

    def _report(self, tag, line):
        if self.observer is not None:
            self.observer(tag, direction_of(line), line)

    def _dispatch_tagged(self, tag, line):
        pending = self._commands.get(tag)
        if pending is None:
            log.warning("response for an unknown tag: %s", line)
            self._report(tag, line)
            if self.on_response is not None:
                self.on_response(tag, line + '\n')
            return

        pending.append(line)
        if pending.completed:
            # one-shot completion, this shouldn't really happen
            log.warning("%s has already completed, ignoring %s", tag, line)
            self._report(tag, line)
            return

        pending.completed = True
        for item in pending.body.split('\n'):
            if item.strip():
                self._report(tag, item)
        if pending.callback is not None:
            pending.callback(pending.body)
        if self.on_response is not None:
            self.on_response(tag, pending.body)

    def _dispatch_current(self, line):
        pending = self.current()
        if pending is None:
            # nobody is waiting for data now
            self._report(None, line)
        else:
            pending.append(line)
