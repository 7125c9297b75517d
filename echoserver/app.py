from twisted.application import service
from twisted.logger import ILogObserver, Logger
from twisted.python.logfile import DailyLogFile

from echoserver import constants, errors
from echoserver.listener import Listener
from echoserver.logger import textFileLogObserver
from echoserver.worker import EchoFactory
from settings import BASE_DIR

log = Logger()


class EchoService(service.Service):
    def __init__(self, reactor, port=constants.LISTEN_PORT, interface=constants.LISTEN_INTERFACE):
        self.reactor = reactor
        self.factory = EchoFactory()
        self.listener = Listener(reactor, self.factory, port=port, interface=interface)

    def startService(self):
        # BindError 直接抛出, twistd 会终止; 服务保持未运行状态
        self.listener.bind()
        super().startService()
        self.listener.accept_loop().addErrback(self.on_accept_error)

    def stopService(self):
        super().stopService()
        return self.listener.close()

    def on_accept_error(self, failure):
        failure.trap(errors.AcceptError)
        log.failure('Accept loop failed', failure=failure)
        if self.reactor.running:
            self.reactor.stop()


def get_application(reactor):
    logfile = DailyLogFile(constants.LOG_FILE, BASE_DIR)

    application = service.Application('echoserver')
    application.setComponent(ILogObserver, textFileLogObserver(logfile))

    EchoService(reactor).setServiceParent(application)

    return application


def run(reactor, port=constants.LISTEN_PORT, interface=constants.LISTEN_INTERFACE):
    """
    Bind, run the accept loop until the reactor stops and return the
    process exit status.
    """
    listener = Listener(reactor, EchoFactory(), port=port, interface=interface)

    try:
        listener.bind()
    except errors.BindError:
        log.failure('Unable to start echo server')
        return 1

    status = []

    def on_accept_error(failure):
        failure.trap(errors.AcceptError)
        log.critical('Accept loop failed: {error}', error=failure.value)
        status.append(1)
        if reactor.running:
            reactor.stop()

    listener.accept_loop().addErrback(on_accept_error)
    reactor.run()

    return status[0] if status else 0
