"""
Tests for the example assistant client configuration.
"""

import sys
from datetime import date

from agent.prompt import get_workflow_assistant_prompt
from agent.workflow_agent import SERVER_MODULE, create_agent, project_root, server_parameters


def test_prompt_mentions_today_and_tools():
    prompt = get_workflow_assistant_prompt()

    assert date.today().isoformat() in prompt
    for tool in ("get_workflow", "list_workflows", "update_workflow", "delete_workflow", "get_executions"):
        assert tool in prompt


def test_prompt_connection_example_has_single_braces():
    assert '{"Start": {"main":' in get_workflow_assistant_prompt()


def test_server_launched_as_module_with_environment(monkeypatch):
    monkeypatch.setenv("N8N_API_KEY", "from-env")

    params = server_parameters()

    assert params.command == sys.executable
    assert params.args == ["-m", SERVER_MODULE]
    assert str(params.cwd) == project_root()
    assert params.env["N8N_API_KEY"] == "from-env"


def test_create_agent_uses_model_override():
    agent = create_agent(model="openrouter/openai/gpt-4o-mini")

    assert agent.name == "n8n_workflow_assistant"
    assert agent.model.model == "openrouter/openai/gpt-4o-mini"
    assert "n8n workflow assistant" in agent.instruction
