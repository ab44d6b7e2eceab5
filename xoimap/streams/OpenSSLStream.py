# -*- coding: utf-8
"""OpenSSL-based stream"""

# Copyright (c) Jan Kundrát <jkt@flaska.net>, 2006 - 2007

import ipaddress
import logging
import socket
from OpenSSL import SSL
from service_identity import CertificateError, VerificationError
from service_identity.pyopenssl import verify_hostname, verify_ip_address
from .TCPStream import TCPStream
from ..common import default_timeout
from ..exceptions import DisconnectedError

__revision__ = "$Id$"

log = logging.getLogger(__name__)

class OpenSSLStream(TCPStream):
    """TLS from the very first octet (the "imaps" way of doing things)

The handshake is performed by the constructor, so an OpenSSLStream that was
created successfully is ready to carry IMAP traffic. Failures are reported as
DisconnectedError.
"""

    def __init__(self, host, port, timeout=default_timeout, verify=True):
        TCPStream.__init__(self, host, port, timeout)
        # pyOpenSSL wants a blocking socket, readiness is checked by poll()
        self._sock.settimeout(None)
        self._ssl_context = SSL.Context(SSL.TLS_CLIENT_METHOD)
        self._ssl_context.set_min_proto_version(SSL.TLS1_2_VERSION)
        if verify:
            self._ssl_context.set_default_verify_paths()
            self._ssl_context.set_verify(SSL.VERIFY_PEER, self._verify)
        self._ssl_connection = SSL.Connection(self._ssl_context, self._sock)
        self._ssl_connection.set_tlsext_host_name(host.encode("idna"))
        self._ssl_connection.set_connect_state()
        try:
            self._ssl_connection.do_handshake()
        except (SSL.Error, OSError) as exc:
            self.okay = False
            self._sock.close()
            raise DisconnectedError("TLS handshake with %s:%s failed: %s" %
                                    (host, port, exc))
        if verify:
            self._check_identity(host)
        log.debug("TLS established with %s:%s (%s)", host, port,
                  self._ssl_connection.get_protocol_version_name())

    def _check_identity(self, host):
        """Make sure that the certificate was issued for host"""
        try:
            try:
                address = ipaddress.ip_address(host)
            except ValueError:
                verify_hostname(self._ssl_connection, host)
            else:
                verify_ip_address(self._ssl_connection, str(address))
        except (VerificationError, CertificateError) as exc:
            self.okay = False
            self._sock.close()
            raise DisconnectedError("certificate of %s doesn't match: %s" %
                                    (host, exc))

    @staticmethod
    def _verify(connection, certificate, errnum, depth, ok):
        if not ok:
            log.error("certificate verification failed at depth %d: %s",
                      depth, certificate.get_subject())
        return ok

    def _close(self):
        try:
            self._ssl_connection.shutdown()
        except (SSL.Error, OSError) as exc:
            # the peer might have gone away already
            log.debug("TLS shutdown: %s", exc)
        try:
            self._ssl_connection.sock_shutdown(socket.SHUT_RDWR)
        except OSError as exc:
            log.debug("socket shutdown: %s", exc)
        return self._sock.close()

    def _pending(self):
        return self._ssl_connection.pending() > 0

    def _read(self, size):
        while True:
            try:
                return self._ssl_connection.recv(size)
            except SSL.WantReadError:
                # only a part of a TLS record has arrived
                self._r_poll.poll(None if self.timeout is None
                                  else self.timeout * 1000)
            except SSL.ZeroReturnError:
                # clean TLS close
                return b""
            except SSL.SysCallError as exc:
                self.okay = False
                if exc.args and exc.args[0] == -1:
                    # unexpected EOF
                    return b""
                raise DisconnectedError(str(exc))
            except SSL.Error as exc:
                self.okay = False
                raise DisconnectedError(str(exc))

    def _write(self, data):
        try:
            return self._ssl_connection.sendall(data)
        except (SSL.Error, OSError) as exc:
            self.okay = False
            raise DisconnectedError(str(exc))
