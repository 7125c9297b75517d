# -*- coding: utf-8 -*-
import socket

from twisted.internet import defer, tcp
from twisted.internet.error import CannotListenError
from twisted.logger import Logger
from twisted.python import failure

from echoserver import constants, errors


class EchoConnection(tcp.Server):
    # 每次最多读取 READ_SIZE 字节
    bufferSize = constants.READ_SIZE


class ListeningPort(tcp.Port):
    """
    A TCP port that accepts one connection per readiness event and treats
    every accept failure as the end of the listening socket.
    """
    transport = EchoConnection

    def __init__(self, listener, port, factory, backlog=constants.LISTEN_BACKLOG,
                 interface='', reactor=None):
        super().__init__(port, factory, backlog=backlog, interface=interface, reactor=reactor)
        self.listener = listener

    def doRead(self):
        try:
            skt, addr = self.socket.accept()
        except BlockingIOError:
            # 没有待处理的连接
            return
        except ConnectionAbortedError:
            # 对端在 accept 之前放弃了连接
            return
        except OSError as e:
            self.loseConnection(failure.Failure(errors.AcceptError(f'accept failed: {e}')))
            return

        if len(addr) == 4:
            # IPv6, 保留 scope ID
            host = socket.getnameinfo(addr, socket.NI_NUMERICHOST | socket.NI_NUMERICSERV)
            addr = tuple([host[0]] + list(addr[1:]))

        protocol = self.factory.buildProtocol(self._buildAddr(addr))
        if protocol is None:
            skt.close()
            return

        s = self.sessionno
        self.sessionno = s + 1
        transport = self.transport(skt, protocol, addr, self, s, self.reactor)
        protocol.makeConnection(transport)

    def connectionLost(self, reason):
        try:
            super().connectionLost(reason)
        finally:
            self.listener.port_closed(reason)


class Listener(object):
    """
    Owns the listening socket and admits new connections.

    Each accepted connection gets its own protocol from C{factory}; the
    listener never waits on them.
    """
    log = Logger()

    def __init__(self, reactor, factory, port=constants.LISTEN_PORT,
                 interface=constants.LISTEN_INTERFACE):
        self.reactor = reactor
        self.factory = factory
        self.port = port
        self.interface = interface
        self.listening_port = None

        self._closing = False
        self._shutdown_trigger = None
        self._loop = defer.Deferred()

    def bind(self):
        """
        Open the listening endpoint.

        @raise BindError: if the address is malformed, already in use or
            otherwise unavailable.
        @return: the listening port.
        """
        port = ListeningPort(self, self.port, self.factory,
                             interface=self.interface, reactor=self.reactor)
        try:
            port.startListening()
        except CannotListenError as e:
            raise errors.BindError(f'cannot listen on {self.interface}:{self.port}: {e.socketError}') from e

        self.listening_port = port
        self._shutdown_trigger = self.reactor.addSystemEventTrigger('before', 'shutdown', self._on_shutdown)
        self.log.info('Listening on {address}', address=port.getHost())
        return port

    def accept_loop(self):
        """
        @return: a Deferred that fires with C{None} once the listener is
            closed, or fails with L{AcceptError} if accepting fails.
        """
        return self._loop

    def close(self):
        if self.listening_port is None or self._closing or self.listening_port.disconnecting:
            return defer.succeed(None)

        self._closing = True
        self._remove_shutdown_trigger()
        return defer.maybeDeferred(self.listening_port.stopListening)

    def port_closed(self, reason):
        self.listening_port = None
        self._remove_shutdown_trigger()

        if self._closing:
            self.log.info('Stopped listening on {interface}:{port}', interface=self.interface, port=self.port)
            self._loop.callback(None)
            return

        if reason.check(errors.AcceptError):
            error = reason.value
        else:
            error = errors.AcceptError(reason.getErrorMessage())

        self._loop.errback(failure.Failure(error))

    def _on_shutdown(self):
        # 进程退出, 不等待正在处理的连接
        self._shutdown_trigger = None
        return self.close()

    def _remove_shutdown_trigger(self):
        if self._shutdown_trigger is not None:
            self.reactor.removeSystemEventTrigger(self._shutdown_trigger)
            self._shutdown_trigger = None
