import platform

# ListeningPort 基于 tcp.Port, 需要 IReactorFDSet; Windows 使用默认的 select reactor
if platform.system() == 'Linux':
    from twisted.internet import epollreactor

    epollreactor.install()

import sys

from twisted.internet import reactor
from twisted.logger import globalLogBeginner

from echoserver.app import run
from echoserver.logger import textFileLogObserver


def main():
    # 诊断信息输出到 stderr
    globalLogBeginner.beginLoggingTo([textFileLogObserver(sys.stderr)])

    sys.exit(run(reactor))


if __name__ == "__main__":
    main()
