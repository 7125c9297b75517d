# python -m twisted.trial tests.test_logger
import io
import os

from twisted.logger import Logger, LogLevel
from twisted.trial import unittest

from config import ConfigManager
from echoserver.logger import textFileLogObserver


class ConfigManagerTestCase(unittest.TestCase):

    def _write(self, content):
        path = os.path.abspath(self.mktemp())
        with open(path, 'w') as fp:
            fp.write(content)
        return path

    def test_loglevel(self):
        path = self._write('[default]\nloglevel = warn\n')
        self.assertEqual(ConfigManager(path).getLogLevel(), LogLevel.warn)

    def test_missing_file_fallback(self):
        self.assertEqual(ConfigManager(os.path.abspath(self.mktemp())).getLogLevel(), LogLevel.info)

    def test_unknown_level_fallback(self):
        path = self._write('[default]\nloglevel = chatty\n')
        self.assertEqual(ConfigManager(path).getLogLevel(), LogLevel.info)


class TextFileLogObserverTestCase(unittest.TestCase):

    def test_drops_events_below_level(self):
        out = io.StringIO()
        log = Logger(namespace='echoserver.listener', observer=textFileLogObserver(out, level=LogLevel.warn))

        log.info('Connection made {address}', address='127.0.0.1')
        log.error('Accept loop failed')

        output = out.getvalue()
        self.assertNotIn('Connection made', output)
        self.assertIn('Accept loop failed', output)

    def test_formats_fields(self):
        out = io.StringIO()
        log = Logger(namespace='echoserver.worker', observer=textFileLogObserver(out, level=LogLevel.debug))

        log.debug('Connection lost {address}', address='127.0.0.1:4202')

        self.assertIn('Connection lost 127.0.0.1:4202', out.getvalue())

    def test_other_namespaces_only_warn(self):
        out = io.StringIO()
        observer = textFileLogObserver(out, level=LogLevel.debug)
        ours = Logger(namespace='echoserver.worker', observer=observer)
        theirs = Logger(namespace='twisted.internet.tcp', observer=observer)

        ours.info('Connection made {address}', address='::1')
        theirs.info('Port starting')
        theirs.warn('Port trouble')

        output = out.getvalue()
        self.assertIn('Connection made ::1', output)
        self.assertNotIn('Port starting', output)
        self.assertIn('Port trouble', output)
