# -*- coding: utf-8 -*-


class EchoServerError(Exception):
    pass


class BindError(EchoServerError):
    """
    The listening endpoint could not be established (address in use,
    permission denied, malformed address).
    """


class AcceptError(EchoServerError):
    """
    The listening socket failed to produce a new connection.
    """


class ConnectionIOError(EchoServerError):
    """
    A read or write on an established connection failed.
    """
