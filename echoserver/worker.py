# -*- coding: utf-8 -*-
from twisted.internet import error, protocol
from twisted.internet.interfaces import IHalfCloseableProtocol
from twisted.logger import Logger
from zope.interface import implementer

from echoserver import errors


@implementer(IHalfCloseableProtocol)
class EchoWorker(protocol.Protocol):
    """
    Mirrors a single connection's input back to itself.

    The transport reads at most L{echoserver.constants.READ_SIZE} bytes at a
    time, so every C{dataReceived} call is one read and is answered by exactly
    one write of the same bytes.
    """
    STATE_READING = 0x01
    STATE_WRITING = 0x02
    STATE_CLOSED = 0x03
    log = Logger()

    def __init__(self):
        self.peer_address = None
        self._state = None
        self.set_state(self.STATE_READING)

    def connectionMade(self):
        self.peer_address = self.transport.getPeer()
        self.factory.num_protocols += 1

        # 写缓冲区满时暂停读取, 写完后恢复读取
        self.transport.registerProducer(self.transport, True)

        self.log.debug('Connection made {address}', address=self.peer_address)

    def dataReceived(self, data):
        if not self.is_state(self.STATE_READING):
            return

        self.set_state(self.STATE_WRITING)
        self.write(data)

        if self.is_state(self.STATE_WRITING):
            self.set_state(self.STATE_READING)

    def readConnectionLost(self):
        # 对端关闭了发送方向 (end-of-stream)
        self.release()

    def writeConnectionLost(self):
        self.release()

    def connectionLost(self, reason):
        if self.is_state(self.STATE_CLOSED):
            return

        self.set_state(self.STATE_CLOSED)
        if self.factory.num_protocols > 0:
            self.factory.num_protocols -= 1

        if reason.check(error.ConnectionDone):
            self.log.debug('Connection lost {address}', address=self.peer_address)
        else:
            self.log.info('Connection lost {address}: {error!r}',
                          address=self.peer_address,
                          error=errors.ConnectionIOError(reason.getErrorMessage()))

    def release(self):
        if self.is_state(self.STATE_CLOSED) or self.transport is None:
            return

        self.transport.loseConnection()

    def write(self, data):
        self.transport.write(data)

    def is_state(self, state):
        return self._state == state

    def set_state(self, state):
        self._state = state


class EchoFactory(protocol.Factory):
    protocol = EchoWorker

    def __init__(self):
        self.num_protocols = 0
