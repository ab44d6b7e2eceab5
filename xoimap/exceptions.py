# -*- coding: utf-8
"""Common exceptions for xoimap"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

__revision__ = '$Id$'

class IMAPError(Exception):
    """Base class for everything raised by xoimap"""
    pass

class UnknownCommandError(IMAPError, TypeError):
    """Command isn't one of the supported variants.

    This is a programming error; such a command is never sent.
    """
    pass

class DisconnectedError(IMAPError):
    """Disconnected from server"""
    pass

class NotConnectedError(DisconnectedError):
    """The transport hasn't been opened yet"""
    pass

class ParseError(IMAPError, ValueError):
    """Unable to parse server's response"""
    pass
