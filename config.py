import os
import configparser

from twisted.logger import InvalidLogLevelError, LogLevel

from settings import BASE_DIR


class ConfigManager(object):
    _config = {}

    #    -get(section,option)      得到section中option的值，返回为string类型
    #    -getint(section,option)   得到section中option的值，返回为int类型
    #    只有日志相关的配置, 监听地址是固定的
    def __init__(self, default='default.conf'):
        self.default = self.get_config(os.path.join(BASE_DIR, default))

    @classmethod
    def load_config(cls, filepath):
        parser = configparser.ConfigParser()
        parser.read(filepath)
        cls._config.update({filepath: parser})
        return parser

    @classmethod
    def get_config(cls, filename):
        parser = cls._config.get(filename)

        if not parser:
            parser = cls.load_config(filename)

        return parser

    def getLogLevel(self):
        name = self.default.get('default', 'loglevel', fallback='info')
        try:
            return LogLevel.levelWithName(name.strip().lower())
        except InvalidLogLevelError:
            return LogLevel.info
