"""Shell fixtures — scripted answers for rich prompts and a captured console."""

import io

import pytest
from rich.console import Console
from rich.prompt import IntPrompt, Prompt


class ScriptedPrompts:
    """Feeds queued answers to IntPrompt.ask / Prompt.ask; EOF when exhausted."""

    def __init__(self):
        self.answers: list = []
        self.questions: list[str] = []

    def ask(self, prompt, *args, **kwargs):
        self.questions.append(str(prompt))
        if not self.answers:
            raise EOFError()
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


@pytest.fixture
def prompts(monkeypatch):
    scripted = ScriptedPrompts()
    monkeypatch.setattr(IntPrompt, "ask", scripted.ask)
    monkeypatch.setattr(Prompt, "ask", scripted.ask)
    return scripted


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)
