"""
Tests for the interactive runner: event reading, one agent turn, the loop.
"""

import asyncio
from types import SimpleNamespace

import main


def _event(*parts):
    return SimpleNamespace(content=SimpleNamespace(parts=list(parts)))


def _text(text):
    return SimpleNamespace(text=text, function_call=None)


def _tool(name):
    return SimpleNamespace(text=None, function_call=SimpleNamespace(name=name))


class FakeRunner:
    """Replays canned events for every turn and records what was asked."""

    def __init__(self, events=(), **kwargs):
        self.events = list(events)
        self.kwargs = kwargs
        self.messages = []

    async def run_async(self, user_id, session_id, new_message):
        self.messages.append((user_id, session_id, new_message.parts[0].text))
        for event in self.events:
            yield event


def test_read_event_collects_tool_calls_and_last_text():
    event = _event(_tool("list_workflows"), _text("first"), _tool("get_workflow"), _text("second"))

    assert main.read_event(event) == (["list_workflows", "get_workflow"], "second")


def test_read_event_without_content():
    assert main.read_event(SimpleNamespace(content=None)) == ([], None)
    assert main.read_event(_event()) == ([], None)


def test_ask_returns_last_text_and_reports_tools():
    runner = FakeRunner([
        _event(_tool("list_workflows")),
        _event(_text("Checking...")),
        _event(_text("You have 2 active workflows.")),
    ])
    seen = []

    answer = asyncio.run(main.ask(runner, "s1", "list my active workflows", on_tool_call=seen.append))

    assert answer == "You have 2 active workflows."
    assert seen == ["list_workflows"]
    assert runner.messages == [(main.USER_ID, "s1", "list my active workflows")]


def test_ask_without_text_reports_no_answer():
    runner = FakeRunner([_event(_tool("get_executions"))])

    assert asyncio.run(main.ask(runner, "s1", "anything")) == main.NO_ANSWER


def test_run_agent_loop_skips_blank_and_stops_on_exit_word(monkeypatch, capsys):
    runners = []

    def make_runner(**kwargs):
        runner = FakeRunner([_event(_tool("list_workflows"), _text("Done."))], **kwargs)
        runners.append(runner)
        return runner

    class FakeSessions:
        async def create_session(self, app_name, user_id):
            return SimpleNamespace(id="session-1")

    monkeypatch.setattr(main, "create_agent", lambda: "agent")
    monkeypatch.setattr(main, "Runner", make_runner)
    monkeypatch.setattr(main, "InMemorySessionService", FakeSessions)
    lines = iter(["", "list workflows", "quit", "never read"])

    asyncio.run(main.run_agent(read_line=lambda prompt: next(lines)))

    out = capsys.readouterr().out
    assert runners[0].kwargs["agent"] == "agent"
    assert runners[0].kwargs["app_name"] == main.APP_NAME
    assert runners[0].messages == [(main.USER_ID, "session-1", "list workflows")]
    assert "[tool] list_workflows" in out
    assert "agent> Done." in out
    assert next(lines) == "never read"


def test_run_agent_loop_ends_on_eof(monkeypatch):
    runners = []
    monkeypatch.setattr(main, "create_agent", lambda: "agent")
    monkeypatch.setattr(main, "Runner", lambda **kwargs: runners.append(FakeRunner(**kwargs)) or runners[-1])

    class FakeSessions:
        async def create_session(self, app_name, user_id):
            return SimpleNamespace(id="session-1")

    monkeypatch.setattr(main, "InMemorySessionService", FakeSessions)

    def read_line(prompt):
        raise EOFError

    asyncio.run(main.run_agent(read_line=read_line))

    assert runners[0].messages == []
