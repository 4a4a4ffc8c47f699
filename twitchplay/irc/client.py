"""Socket-level chat client: connect, authenticate, send and poll."""

from __future__ import annotations

import logging
import select
import socket
import threading
from collections.abc import Callable

from pydantic import ValidationError

from ..config import Credentials
from ..constants import (
    CONNECT_TIMEOUT_SECONDS,
    IRC_HOST,
    IRC_PORT,
    KEEPALIVE_REPLY,
    LINE_TERMINATOR,
    RECEIVE_BUFFER_SIZE,
    RECV_CHUNK_SIZE,
)
from ..errors import ErrorCode, Result
from ..logs import logger
from ..utils import schedule_if_awaitable
from .framer import LineFramer
from .models import ConnectionState, ParsedMessage
from .parser import parse_lines
from .timer import AsyncioPollTimer, PollTimer

MessageCallback = Callable[[str, str], object]


def _redact(line: str) -> str:
    return "PASS ***" if line.startswith("PASS ") else line


class TwitchIRCClient:
    """Single-connection chat client driven by a periodic ``poll()``.

    Usage::

        client = TwitchIRCClient()
        client.set_user_info(token, username, channel)
        client.subscribe(lambda content, sender: ...)
        client.connect()
        client.authenticate()

    ``connect()`` arms the poll timer; every tick reads whatever the server
    sent, answers keep-alives and broadcasts each chat line to subscribers.
    """

    def __init__(
        self,
        host: str = IRC_HOST,
        port: int = IRC_PORT,
        *,
        receive_buffer_size: int = RECEIVE_BUFFER_SIZE,
        connect_timeout: float = CONNECT_TIMEOUT_SECONDS,
        timer: PollTimer | None = None,
        filter_users_only: bool = False,
    ) -> None:
        self.host = host
        self.port = port
        self.receive_buffer_size = receive_buffer_size
        self.connect_timeout = connect_timeout
        self.filter_users_only = filter_users_only

        self.sock: socket.socket | None = None
        self.state = ConnectionState.DISCONNECTED
        self._credentials: Credentials | None = None
        self._subscribers: list[MessageCallback] = []
        self._framer = LineFramer(max_pending=receive_buffer_size)
        self._timer: PollTimer = timer if timer is not None else AsyncioPollTimer()
        # Poll-triggered replies and application sends share the socket
        self._lock = threading.RLock()
        self._peer_closed = False

    # ------------------------------------------------------------------ setup
    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    @property
    def username(self) -> str | None:
        return self._credentials.username if self._credentials else None

    @property
    def channel(self) -> str | None:
        return self._credentials.channel if self._credentials else None

    @property
    def is_connected(self) -> bool:
        return self.sock is not None and self.state is not ConnectionState.DISCONNECTED

    def set_user_info(
        self, token: str, username: str, channel: str | None = None
    ) -> Result:
        """Store the credentials used by the next ``authenticate()``.

        Values are normalised before use: the token gets an ``oauth:`` prefix
        when missing, the username is lower-cased and the channel is
        lower-cased without its leading ``#``. ``PASS``/``NICK``/``JOIN`` send
        the normalised values.
        """
        try:
            credentials = Credentials(token=token, username=username, channel=channel)
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            logger.log_event(
                "irc", "user_info_invalid", level=logging.ERROR, error=fields
            )
            return Result.failure(
                ErrorCode.INVALID_USER_INFO, f"Invalid user info: {fields}"
            )
        self._credentials = credentials
        logger.log_event(
            "irc",
            "user_info_set",
            level=logging.DEBUG,
            user=credentials.username,
            channel=credentials.channel,
        )
        return Result.success("User info set")

    def subscribe(self, callback: MessageCallback) -> None:
        """Add a "message received" subscriber, called with ``(content, sender)``."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: MessageCallback) -> bool:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return False
        return True

    # ------------------------------------------------------------ connection
    def connect(self) -> Result:
        """Open the TCP connection and arm the poll timer. Does not authenticate."""
        with self._lock:
            if self.sock is not None:
                logger.log_event("irc", "replacing_socket", level=logging.DEBUG)
                self._timer.cancel()
                self._release_socket()

            try:
                addresses = socket.getaddrinfo(
                    self.host, self.port, type=socket.SOCK_STREAM
                )
            except (OSError, UnicodeError) as e:
                return self._resolve_failed(str(e))
            if not addresses:
                return self._resolve_failed("no address returned")
            family, socktype, proto, _, sockaddr = addresses[0]

            try:
                sock = socket.socket(family, socktype, proto)
            except OSError as e:
                logger.log_event(
                    "irc", "socket_create_failed", level=logging.ERROR, error=str(e)
                )
                return Result.failure(
                    ErrorCode.SOCKET_CREATION_FAILED, "Could not create socket!"
                )

            self._configure_socket(sock)
            try:
                if self.connect_timeout > 0:
                    sock.settimeout(self.connect_timeout)
                sock.connect(sockaddr)
                sock.settimeout(None)
            except OSError as e:
                sock.close()
                logger.log_event(
                    "irc",
                    "connect_failed",
                    level=logging.ERROR,
                    host=self.host,
                    port=self.port,
                    error=str(e),
                )
                return Result.failure(
                    ErrorCode.CONNECT_FAILED, "Connection to Twitch IRC failed!"
                )

            self.sock = sock
            self.state = ConnectionState.CONNECTED
            self._framer.reset()
            self._peer_closed = False

        logger.log_event("irc", "connected", host=self.host, port=self.port)
        self._timer.start(self.poll)
        return Result.success(f"Connected to {self.host}:{self.port}")

    def _resolve_failed(self, error: str) -> Result:
        logger.log_event(
            "irc", "resolve_failed", level=logging.ERROR, host=self.host, error=error
        )
        return Result.failure(
            ErrorCode.HOST_RESOLUTION_FAILED, "Could not resolve hostname!"
        )

    def _configure_socket(self, sock: socket.socket) -> None:
        try:
            sock.setsockopt(
                socket.SOL_SOCKET, socket.SO_RCVBUF, self.receive_buffer_size
            )
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError as e:
            # The OS may clamp or refuse the hint; the connection still works
            logger.log_event(
                "irc",
                "socket_options_failed",
                level=logging.DEBUG,
                error=str(e),
            )

    def authenticate(self) -> Result:
        """Send PASS, NICK and (when a channel is set) JOIN.

        Success means the lines were written; the server's welcome or login
        failure notice is not awaited, so bad credentials still report ok.
        """
        if not self.is_connected:
            logger.log_event("irc", "auth_not_connected", level=logging.ERROR)
            return Result.failure(
                ErrorCode.NOT_CONNECTED,
                "Connection is not initialized. Call 'connect' before authenticating",
            )
        credentials = self._credentials
        if credentials is None:
            logger.log_event("irc", "auth_missing_user_info", level=logging.ERROR)
            return Result.failure(
                ErrorCode.USER_INFO_MISSING, "Can't authenticate. Setup user info first"
            )

        pass_ok = self.send(f"PASS {credentials.token}")
        nick_ok = self.send(f"NICK {credentials.username}")
        join_ok = True
        if credentials.channel:
            join_ok = self.send(f"JOIN #{credentials.channel}")

        if not (pass_ok and nick_ok and join_ok):
            logger.log_event(
                "irc",
                "auth_send_failed",
                level=logging.ERROR,
                user=credentials.username,
                pass_ok=pass_ok,
                nick_ok=nick_ok,
                join_ok=join_ok,
            )
            return Result.failure(
                ErrorCode.SEND_FAILED, "Failed to send authentication message"
            )

        self.state = ConnectionState.AUTHENTICATED
        logger.log_event(
            "irc", "auth_sent", user=credentials.username, channel=credentials.channel
        )
        return Result.success("Authentication sent")

    # -------------------------------------------------------------- messages
    def send(self, text: str, channel: str | None = None) -> bool:
        """Write one line; with ``channel`` it is wrapped as a PRIVMSG."""
        with self._lock:
            sock = self.sock
            if sock is None or not self.is_connected:
                logger.log_event("irc", "send_skipped", level=logging.DEBUG)
                return False
            if channel:
                text = f"PRIVMSG #{channel.lstrip('#')} :{text}"
            payload = f"{text}{LINE_TERMINATOR}".encode("utf-8")
            try:
                sock.sendall(payload)
            except OSError as e:
                logger.log_event(
                    "irc",
                    "send_failed",
                    level=logging.ERROR,
                    user=self.username,
                    error=str(e),
                )
                return False
        logger.log_event(
            "irc", "sent", level=logging.DEBUG, user=self.username, line=_redact(text)
        )
        return True

    def say(self, text: str) -> bool:
        """Send chat text to the configured channel."""
        channel = self.channel
        if not channel:
            logger.log_event("irc", "say_no_channel", level=logging.WARNING)
            return False
        return self.send(text, channel)

    def poll(self) -> None:
        """Read pending bytes, answer keep-alives and broadcast chat lines."""
        with self._lock:
            sock = self.sock
            if sock is None:
                return
            try:
                readable, _, _ = select.select([sock], [], [], 0)
                if not readable:
                    return
                data = sock.recv(RECV_CHUNK_SIZE)
            except (OSError, ValueError) as e:
                logger.log_event(
                    "irc", "recv_error", level=logging.DEBUG, error=str(e)
                )
                return
            if not data:
                if not self._peer_closed:
                    self._peer_closed = True
                    logger.log_event(
                        "irc", "peer_closed", level=logging.WARNING, user=self.username
                    )
                return
            lines = self._framer.feed(data)

        logger.log_event("irc", "received", level=logging.DEBUG, size=len(data))
        for line in lines:
            logger.log_event("irc", "raw", level=logging.DEBUG, raw=line)
        messages = parse_lines(
            lines,
            filter_users_only=self.filter_users_only,
            on_keepalive=self._reply_keepalive,
        )
        for message in messages:
            self._broadcast(message)

    def _reply_keepalive(self) -> None:
        self.send(KEEPALIVE_REPLY)
        logger.log_event("irc", "ping", level=logging.DEBUG, user=self.username)

    def _broadcast(self, message: ParsedMessage) -> None:
        logger.log_event(
            "irc",
            "message",
            level=logging.DEBUG,
            user=self.username,
            channel=self.channel,
            sender=message.sender or "server",
            content=message.content,
        )
        for callback in list(self._subscribers):
            try:
                result = callback(message.content, message.sender)
            except Exception as e:  # noqa: BLE001
                self._log_subscriber_error(e)
                continue
            if not schedule_if_awaitable(result, on_error=self._log_subscriber_error):
                logger.log_event(
                    "irc",
                    "subscriber_not_awaited",
                    level=logging.WARNING,
                    user=self.username,
                    subscriber=getattr(callback, "__name__", repr(callback)),
                )

    def _log_subscriber_error(self, error: BaseException) -> None:
        logger.log_event(
            "irc",
            "subscriber_error",
            level=logging.ERROR,
            user=self.username,
            error=str(error),
            error_type=type(error).__name__,
        )

    # -------------------------------------------------------------- teardown
    def _release_socket(self) -> None:
        sock, self.sock = self.sock, None
        self.state = ConnectionState.DISCONNECTED
        self._framer.reset()
        if sock is None:
            return
        try:
            sock.close()
        except OSError as e:
            logger.log_event("irc", "close_error", level=logging.DEBUG, error=str(e))

    def close(self) -> None:
        """Cancel polling and release the socket. Safe to call repeatedly."""
        self._timer.cancel()
        with self._lock:
            had_socket = self.sock is not None
            self._release_socket()
        if had_socket:
            logger.log_event("irc", "disconnected", user=self.username)

    def __enter__(self) -> TwitchIRCClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        sock = getattr(self, "sock", None)
        if sock is not None:
            sock.close()
