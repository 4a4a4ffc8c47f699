"""
Tests for twitchplay.commands.dispatcher
"""

import asyncio
from unittest.mock import Mock

import pytest

from twitchplay.commands.dispatcher import CommandDispatcher
from twitchplay.commands.extractor import CommandExtractor
from twitchplay.errors import ErrorCode


class TestRegistration:
    @pytest.fixture
    def dispatcher(self):
        return CommandDispatcher()

    def test_new_table_is_empty(self, dispatcher):
        assert len(dispatcher) == 0
        assert dispatcher.names() == []

    def test_register(self, dispatcher):
        result = dispatcher.register("jump", Mock())
        assert result.ok
        assert result.message == "jump command registered"
        assert "jump" in dispatcher

    def test_register_empty_name(self, dispatcher):
        result = dispatcher.register("", Mock())
        assert not result
        assert result.error is ErrorCode.INVALID_COMMAND_NAME
        assert len(dispatcher) == 0

    def test_reregister_overwrites_in_place(self, dispatcher):
        first, second = Mock(), Mock()
        dispatcher.register("jump", first)
        record = dispatcher.get("jump")

        result = dispatcher.register("jump", second)

        assert result.ok
        assert "overwrote a previous registration" in result.message
        assert dispatcher.get("jump") is record
        assert record.handler is second
        assert len(dispatcher) == 1

    def test_only_latest_handler_fires(self, dispatcher):
        first, second = Mock(), Mock()
        dispatcher.register("jump", first)
        dispatcher.register("jump", second)

        dispatcher.on_message_received("!jump!", "alice")

        first.assert_not_called()
        second.assert_called_once_with("jump", [], "alice")

    def test_unregister(self, dispatcher):
        dispatcher.register("jump", Mock())
        result = dispatcher.unregister("jump")
        assert result.ok
        assert result.message == "jump unregistered"
        assert "jump" not in dispatcher

    def test_unregister_unknown(self, dispatcher):
        dispatcher.register("jump", Mock())
        result = dispatcher.unregister("duck")
        assert not result.ok
        assert result.error is ErrorCode.NOT_REGISTERED
        assert dispatcher.names() == ["jump"]

    def test_unregister_empty_name(self, dispatcher):
        result = dispatcher.unregister("")
        assert result.error is ErrorCode.INVALID_COMMAND_NAME

    def test_names_are_case_sensitive(self, dispatcher):
        handler = Mock()
        dispatcher.register("Jump", handler)
        dispatcher.on_message_received("!jump!", "alice")
        handler.assert_not_called()
        dispatcher.on_message_received("!Jump!", "alice")
        handler.assert_called_once()


class TestDispatch:
    @pytest.fixture
    def dispatcher(self):
        return CommandDispatcher(CommandExtractor())

    def test_dispatch_with_options(self, dispatcher):
        handler = Mock()
        dispatcher.register("greet", handler)
        dispatcher.on_message_received("!greet#alice,bob#", "bob")
        handler.assert_called_once_with("greet", ["alice", "bob"], "bob")

    def test_no_command_no_dispatch(self, dispatcher):
        handler = Mock()
        dispatcher.register("greet", handler)
        dispatcher.on_message_received("just chatting", "bob")
        dispatcher.on_message_received("abc!greet", "bob")
        handler.assert_not_called()

    def test_unclosed_option_span_no_dispatch(self, dispatcher):
        handler = Mock()
        dispatcher.register("greet", handler)
        dispatcher.register("nice", handler)
        dispatcher.on_message_received("!greet#alice", "bob")
        dispatcher.on_message_received("wow!nice#", "bob")
        handler.assert_not_called()

    def test_unregistered_command_ignored(self, dispatcher):
        handler = Mock()
        dispatcher.register("greet", handler)
        dispatcher.on_message_received("!wave!", "bob")
        handler.assert_not_called()

    def test_unbound_slot_is_silent(self, dispatcher):
        result = dispatcher.register("idle", None)
        assert result.ok
        dispatcher.on_message_received("!idle!", "bob")

    def test_handler_error_not_propagated(self, dispatcher):
        dispatcher.register("boom", Mock(side_effect=RuntimeError("boom")))
        dispatcher.on_message_received("!boom!", "bob")

    def test_async_handler_without_loop_is_dropped(self, dispatcher):
        calls = []

        async def handler(command, options, sender):
            calls.append(command)

        dispatcher.register("later", handler)
        dispatcher.on_message_received("!later!", "bob")
        assert calls == []

    @pytest.mark.asyncio
    async def test_async_handler_scheduled_on_running_loop(self, dispatcher):
        done = asyncio.Event()
        calls = []

        async def handler(command, options, sender):
            calls.append((command, options, sender))
            done.set()

        dispatcher.register("later", handler)
        dispatcher.on_message_received("!later! #x#", "bob")
        await asyncio.wait_for(done.wait(), timeout=1.0)
        assert calls == [("later", ["x"], "bob")]

    def test_custom_extractor_markers(self):
        handler = Mock()
        dispatcher = CommandDispatcher(CommandExtractor("[", "|"))
        dispatcher.register("go", handler)
        dispatcher.on_message_received("[go[ |left|", "carol")
        handler.assert_called_once_with("go", ["left"], "carol")
