"""
End-to-end tests for TwitchPlayClient: raw socket bytes to command handlers
"""

from unittest.mock import Mock, patch

import pytest

from twitchplay.errors import ErrorCode
from twitchplay.irc.models import ConnectionState
from twitchplay.play import TwitchPlayClient


class FakeTimer:
    active = False

    def start(self, callback):
        return True

    def cancel(self):
        pass


@pytest.fixture
def mock_socket():
    return Mock()


@pytest.fixture
def client(mock_socket):
    play = TwitchPlayClient(timer=FakeTimer())
    play.sock = mock_socket
    play.state = ConnectionState.AUTHENTICATED
    return play


def feed(client, mock_socket, data: bytes) -> None:
    mock_socket.recv.return_value = data
    with patch(
        "twitchplay.irc.client.select.select", return_value=([mock_socket], [], [])
    ):
        client.poll()


class TestTwitchPlayClient:
    def test_greet_dispatch_end_to_end(self, client, mock_socket):
        handler = Mock()
        client.register_command("greet", handler)

        feed(client, mock_socket, b":bob!bob@x PRIVMSG #c :!greet#alice,bob#\n")

        handler.assert_called_once_with("greet", ["alice", "bob"], "bob")

    def test_message_subscribers_still_notified(self, client, mock_socket):
        subscriber = Mock()
        client.subscribe(subscriber)
        feed(client, mock_socket, b":bob!bob@x PRIVMSG #c :!wave!\r\n")
        subscriber.assert_called_once_with("!wave!", "bob")

    def test_ping_answered_and_commands_still_dispatched(self, client, mock_socket):
        handler = Mock()
        client.register_command("jump", handler)

        feed(
            client,
            mock_socket,
            b"PING :tmi.twitch.tv\r\n:ann!ann@x PRIVMSG #c :!jump! #high#\r\n",
        )

        mock_socket.sendall.assert_called_once_with(b"PONG :tmi.twitch.tv\n")
        handler.assert_called_once_with("jump", ["high"], "ann")

    def test_reregistration_routes_to_latest(self, client, mock_socket):
        old, new = Mock(), Mock()
        client.register_command("jump", old)
        result = client.register_command("jump", new)
        assert "overwrote" in result.message

        feed(client, mock_socket, b":ann!ann@x PRIVMSG #c :!jump!\r\n")

        old.assert_not_called()
        new.assert_called_once_with("jump", [], "ann")

    def test_unregister(self, client, mock_socket):
        handler = Mock()
        client.register_command("jump", handler)
        assert client.unregister_command("jump").ok
        assert client.unregister_command("jump").error is ErrorCode.NOT_REGISTERED

        feed(client, mock_socket, b":ann!ann@x PRIVMSG #c :!jump!\r\n")
        handler.assert_not_called()

    def test_encapsulation_chars(self, client, mock_socket):
        handler = Mock()
        client.register_command("fire", handler)
        assert client.setup_encapsulation_chars("$", "|").ok
        assert client.command_char == "$"
        assert client.options_char == "|"

        feed(client, mock_socket, b":ann!ann@x PRIVMSG #c :$fire$ |a,b|\r\n")
        feed(client, mock_socket, b":ann!ann@x PRIVMSG #c :!fire! #a#\r\n")

        handler.assert_called_once_with("fire", ["a", "b"], "ann")

    def test_encapsulation_chars_rejects_empty(self, client):
        result = client.setup_encapsulation_chars("", "#")
        assert result.error is ErrorCode.INVALID_ENCAPSULATION
        assert client.command_char == "!"

    def test_server_lines_dispatch_with_empty_sender(self, client, mock_socket):
        handler = Mock()
        client.register_command("welcome", handler)
        feed(client, mock_socket, b":tmi.twitch.tv 001 bot :hello !welcome!\r\n")
        handler.assert_called_once_with("welcome", [], "")

    def test_fresh_client_has_empty_table(self):
        assert len(TwitchPlayClient(timer=FakeTimer()).dispatcher) == 0
