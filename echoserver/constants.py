# -*- coding: utf-8 -*-

# 固定监听地址, 所有网卡 (IPv6 socket, 双栈同时接受 IPv4)
LISTEN_INTERFACE = '::'
LISTEN_PORT = 4202
LISTEN_BACKLOG = 50

# 每次从连接读取的最大字节数
READ_SIZE = 1024

LOG_FILE = 'echoserver.log'
