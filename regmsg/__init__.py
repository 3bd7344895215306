"""regmsg - command-line client for the regmsgd display management daemon.

Encodes a display command (modes, outputs, rotation, screenshots...) into a
single request line and exchanges it with the daemon over a ZeroMQ
request/reply socket.
"""
