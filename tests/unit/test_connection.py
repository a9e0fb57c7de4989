"""
Unit tests for Connection, over a local socket pair.
"""

import socket
import threading
import time

import pytest

from minihttp.core.connection import Connection, ConnectionState


@pytest.fixture
def socket_pair():
    server_side, client_side = socket.socketpair()
    yield server_side, client_side
    server_side.close()
    client_side.close()


def keep_sending(sock: socket.socket, chunk: bytes, interval: float, stop: threading.Event):
    """Write chunks to sock until stopped or the other end goes away."""
    while not stop.is_set():
        try:
            sock.sendall(chunk)
        except OSError:
            return
        if interval:
            time.sleep(interval)


class TestConnection:
    """Tests for reading and closing a client connection."""

    def test_single_read(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(socket=server_side, address=("127.0.0.1", 0), buffer_size=8)

        client_side.sendall(b"GET / HTTP/1.1\r\n\r\n")

        assert conn.read_request() == b"GET / HT"
        assert conn.state == ConnectionState.PROCESSING

    def test_peer_closed_before_sending(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(socket=server_side, address=("127.0.0.1", 0))

        client_side.shutdown(socket.SHUT_WR)

        assert conn.read_request() is None

    def test_close_is_idempotent(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(socket=server_side, address=("127.0.0.1", 0))

        conn.close()
        conn.close()

        assert conn.state == ConnectionState.CLOSED
        assert client_side.recv(1024) == b""

    def test_close_stops_draining_a_trickling_client(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(socket=server_side, address=("127.0.0.1", 0))

        stop = threading.Event()
        sender = threading.Thread(
            target=keep_sending,
            args=(client_side, b"x", 0.05, stop),
            daemon=True,
        )
        sender.start()

        try:
            started = time.monotonic()
            conn.close()
            elapsed = time.monotonic() - started
        finally:
            stop.set()
            sender.join(timeout=5.0)

        assert conn.state == ConnectionState.CLOSED
        assert elapsed < conn.DRAIN_TIMEOUT + 1.0

    def test_close_stops_draining_after_byte_limit(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(socket=server_side, address=("127.0.0.1", 0))
        # Only the byte limit can end the drain here
        conn.DRAIN_TIMEOUT = 30.0

        stop = threading.Event()
        sender = threading.Thread(
            target=keep_sending,
            args=(client_side, b"x" * 1024, 0, stop),
            daemon=True,
        )
        sender.start()

        try:
            started = time.monotonic()
            conn.close()
            elapsed = time.monotonic() - started
        finally:
            stop.set()
            sender.join(timeout=5.0)

        assert conn.state == ConnectionState.CLOSED
        assert elapsed < 10.0
