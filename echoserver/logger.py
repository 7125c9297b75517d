from twisted.logger import (FileLogObserver, FilteringLogObserver, LogLevel,
                            LogLevelFilterPredicate, formatEventAsClassicLogText,
                            formatTime, timeFormatRFC3339)

from config import ConfigManager

config = ConfigManager()

# echoserver.* 使用配置级别, 其余命名空间 (twisted 内部) 只输出 warn 以上
NAMESPACE = 'echoserver'
DEFAULT_LEVEL = LogLevel.warn


def textFileLogObserver(outFile, timeFormat=timeFormatRFC3339, level=None):
    predicate = LogLevelFilterPredicate(defaultLogLevel=DEFAULT_LEVEL)
    predicate.setLogLevelForNamespace(NAMESPACE, config.getLogLevel() if level is None else level)

    def formatEvent(event):
        return formatEventAsClassicLogText(
            event, formatTime=lambda e: formatTime(e, timeFormat)
        )

    return FilteringLogObserver(FileLogObserver(outFile, formatEvent), [predicate])
