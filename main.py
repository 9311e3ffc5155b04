# =============================================================================
# main.py  —  Entry Point for the n8n Workflow Assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
#   Needs N8N_API_KEY (and usually N8N_URL) for the tool server, plus the
#   key for the LLM provider (OPENROUTER_API_KEY with the default model).
#   Both can live in a .env file.
#
# WHAT HAPPENS:
#   1. Creates the Google ADK agent (agent/workflow_agent.py)
#   2. ADK starts the MCP tool server (tools/mcp_server.py) as a subprocess
#   3. Each line you type becomes one agent turn (ask())
#   4. Tool calls are echoed as the event stream reports them
#   5. The last text the agent produced is printed as its answer
#
# The tool server itself is started with `python -m tools.mcp_server`;
# this script is only needed to talk to it in plain language.
# =============================================================================

import asyncio
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.workflow_agent import create_agent

APP_NAME = "n8n_workflow_assistant"
USER_ID = "local_user"
EXIT_WORDS = ("quit", "exit", "q")
NO_ANSWER = "(no response: the agent may have hit an error, check the tool server log)"


def read_event(event: Any) -> tuple[list[str], Optional[str]]:
    """Split one ADK event into (tool names called, last text part)."""
    content = getattr(event, "content", None)
    parts = getattr(content, "parts", None) or []

    tool_calls: list[str] = []
    text = None
    for part in parts:
        call = getattr(part, "function_call", None)
        if call:
            tool_calls.append(call.name)
        if getattr(part, "text", None):
            text = part.text
    return tool_calls, text


async def ask(
    runner: Any,
    session_id: str,
    question: str,
    on_tool_call: Optional[Callable[[str], None]] = None,
) -> str:
    """Run one agent turn and return its final answer text."""
    message = types.Content(role="user", parts=[types.Part(text=question)])
    answer = ""
    async for event in runner.run_async(user_id=USER_ID, session_id=session_id, new_message=message):
        tool_calls, text = read_event(event)
        if on_tool_call:
            for name in tool_calls:
                on_tool_call(name)
        if text:
            answer = text
    return answer or NO_ANSWER


async def run_agent(read_line: Callable[[str], str] = input) -> None:
    """Interactive loop: one agent turn per line until EOF or an exit word."""
    print("n8n workflow assistant (Google ADK + LiteLlm + FastMCP)")
    session_service = InMemorySessionService()
    runner = Runner(agent=create_agent(), app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)
    print("Ready. Type 'quit' to exit.")

    while True:
        try:
            question = read_line("\nyou> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if question.lower() in EXIT_WORDS:
            break
        if not question:
            continue

        answer = await ask(runner, session.id, question, on_tool_call=lambda name: print(f"  [tool] {name}"))
        print(f"\nagent> {answer}")


def main() -> None:
    # LiteLlm reads its provider key from the environment, and the tool
    # subprocess inherits N8N_URL / N8N_API_KEY.
    load_dotenv()
    asyncio.run(run_agent())


if __name__ == "__main__":
    main()
