import json

import pytest

from portfolio_site.config import Workspace


@pytest.fixture
def ws(tmp_path):
    return Workspace(root=tmp_path)


@pytest.fixture
def answers(monkeypatch):
    """Script the answers typed at input() prompts; running out behaves like Ctrl-D."""
    def feed(*values):
        it = iter(values)

        def fake_input(prompt=""):
            try:
                return next(it)
            except StopIteration:
                raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)
    return feed


@pytest.fixture
def helper_calls(monkeypatch):
    """Record helper-script invocations instead of running them."""
    calls = []

    def fake_run(cmd, check=False, **kwargs):
        calls.append([str(c) for c in cmd])

    monkeypatch.setattr("portfolio_site.media.subprocess.run", fake_run)
    return calls


def write_projects(ws, projects):
    ws.projects_path.parent.mkdir(parents=True, exist_ok=True)
    ws.projects_path.write_text(json.dumps(projects), encoding="utf-8")


def read_projects(ws):
    return json.loads(ws.projects_path.read_text(encoding="utf-8"))
