import pytest

from agentic_board.agents import BackendAgent, FrontendAgent, UIUXAgent
from agentic_board.core.board import Blackboard, MessageBoard
from agentic_board.core.engine import Engine
from agentic_board.core.pacing import NoPacing
from agentic_board.core.state import MessageCategory, USER_AUTHOR
from agentic_board.tools.generator import ScriptedGenerator


def pytest_addoption(parser):
    parser.addoption(
        "--run-llm",
        action="store_true",
        default=False,
        help="Run tests marked with 'uses_llm'",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-llm"):
        skip_llm = pytest.mark.skip(reason="need --run-llm option to run")
        for item in items:
            if "uses_llm" in item.keywords:
                item.add_marker(skip_llm)


def role_echo(system_prompt: str, user_prompt: str) -> str:
    """Scripted response naming the agent, so tests can tell outputs apart."""
    agent_line = next(line for line in system_prompt.splitlines() if line.startswith("You are the"))
    return f"  \n{agent_line}\n\nDetails for: {user_prompt.splitlines()[0]}\n"


@pytest.fixture
def generator():
    return ScriptedGenerator(role_echo, fragment_size=7)


@pytest.fixture
def board():
    return MessageBoard()


@pytest.fixture
def blackboard():
    return Blackboard()


@pytest.fixture
def post(board, blackboard):
    """Append to the board and index, the way the Engine does."""
    def _post(author, category, content="content"):
        message = board.append(author, category, content)
        blackboard.update(message)
        return message
    return _post


@pytest.fixture
def feature(post):
    return post(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "Build a weekly active users dashboard")


@pytest.fixture
def make_engine(generator):
    """Engine factory with zero pacing and the default three agents."""
    def _make(budget=3, max_cycles=20, idle_threshold=3, gen=None, **kwargs):
        gen = gen or generator
        agents = kwargs.pop("agents", None) or [
            UIUXAgent(gen, iteration_budget=budget),
            FrontendAgent(gen, iteration_budget=budget),
            BackendAgent(gen, iteration_budget=budget),
        ]
        return Engine(
            agents=agents,
            max_global_cycles=max_cycles,
            idle_threshold=idle_threshold,
            pacing=kwargs.pop("pacing", NoPacing()),
            **kwargs,
        )
    return _make
